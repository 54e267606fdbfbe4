from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from ..keyboards import MEMORY_BUTTON, RESET_BUTTON, main_menu_keyboard, reset_confirm_keyboard
from ..services.game import get_game_service
from ..texts import RESET_CONFIRM_TEXT, RESET_DONE_TEXT, RESET_KEPT_TEXT, memory_text


router = Router(name="memory")


@router.message(Command("memory"))
@router.message(F.text == MEMORY_BUTTON)
async def memory_handler(message: Message) -> None:
    stats = get_game_service().stats()
    await message.answer(
        memory_text(stats.questions, stats.guesses, stats.depth),
        reply_markup=main_menu_keyboard(),
    )


@router.message(Command("reset"))
@router.message(F.text == RESET_BUTTON)
async def reset_handler(message: Message) -> None:
    await message.answer(RESET_CONFIRM_TEXT, reply_markup=reset_confirm_keyboard())


@router.callback_query(F.data == "memory:reset:ask")
async def reset_ask_callback(callback: CallbackQuery) -> None:
    await callback.message.answer(RESET_CONFIRM_TEXT, reply_markup=reset_confirm_keyboard())
    await callback.answer()


@router.callback_query(F.data == "memory:reset:yes")
async def reset_confirm_callback(callback: CallbackQuery, state: FSMContext) -> None:
    await state.clear()
    await get_game_service().reset_memory(callback.from_user.id)
    await callback.message.answer(RESET_DONE_TEXT, reply_markup=main_menu_keyboard())
    await callback.answer()


@router.callback_query(F.data == "memory:reset:no")
async def reset_keep_callback(callback: CallbackQuery) -> None:
    await callback.message.answer(RESET_KEPT_TEXT, reply_markup=main_menu_keyboard())
    await callback.answer()
