from aiogram.fsm.state import State, StatesGroup


class TeachObject(StatesGroup):
    waiting_object = State()
    waiting_question = State()
    waiting_side = State()
