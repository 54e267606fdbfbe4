from __future__ import annotations

from typing import Tuple

from aiogram import F, Router, html
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, InlineKeyboardMarkup, Message

from ..errors import InvalidState
from ..keyboards import PLAY_BUTTON, answer_keyboard, cancel_keyboard, guess_keyboard, play_again_keyboard
from ..services.game import get_game_service
from ..session import Prompt
from ..states import TeachObject
from ..texts import CORRECT_TEXT, LOST_TEXT, NOTHING_TO_LEARN_TEXT, ROUND_EXPIRED_TEXT, guess_text


router = Router(name="play")


def _prompt_reply(prompt: Prompt) -> Tuple[str, InlineKeyboardMarkup]:
    if prompt.kind == "question":
        return html.quote(prompt.text), answer_keyboard()
    return guess_text(html.quote(prompt.text)), guess_keyboard()


async def _start_round(message: Message, user_id: int, state: FSMContext) -> None:
    await state.clear()
    prompt = get_game_service().start_round(user_id)
    text, markup = _prompt_reply(prompt)
    await message.answer(text, reply_markup=markup)


@router.message(Command("play"))
@router.message(F.text == PLAY_BUTTON)
async def play_handler(message: Message, state: FSMContext) -> None:
    await _start_round(message, message.from_user.id, state)


@router.callback_query(F.data == "round:start")
async def play_again_callback(callback: CallbackQuery, state: FSMContext) -> None:
    await _start_round(callback.message, callback.from_user.id, state)
    await callback.answer()


@router.callback_query(F.data.in_({"round:yes", "round:no"}))
async def answer_callback(callback: CallbackQuery) -> None:
    value = callback.data.split(":", 1)[1]
    try:
        prompt = get_game_service().answer(callback.from_user.id, value)
    except InvalidState:
        await callback.answer(ROUND_EXPIRED_TEXT, show_alert=True)
        return
    text, markup = _prompt_reply(prompt)
    await callback.message.answer(text, reply_markup=markup)
    await callback.answer()


@router.callback_query(F.data == "guess:right")
async def guess_right_callback(callback: CallbackQuery) -> None:
    try:
        get_game_service().confirm_correct(callback.from_user.id)
    except InvalidState:
        await callback.answer(ROUND_EXPIRED_TEXT, show_alert=True)
        return
    await callback.message.answer(CORRECT_TEXT, reply_markup=play_again_keyboard())
    await callback.answer()


@router.callback_query(F.data == "guess:wrong")
async def guess_wrong_callback(callback: CallbackQuery, state: FSMContext) -> None:
    engine = get_game_service().session(callback.from_user.id)
    try:
        prompt = engine.current_prompt()
    except InvalidState:
        await callback.answer(ROUND_EXPIRED_TEXT, show_alert=True)
        return
    if prompt.kind != "guess":
        await callback.answer(ROUND_EXPIRED_TEXT, show_alert=True)
        return
    if not engine.can_learn:
        await callback.message.answer(NOTHING_TO_LEARN_TEXT, reply_markup=play_again_keyboard())
        await callback.answer()
        return
    await state.set_state(TeachObject.waiting_object)
    await state.update_data(guess=prompt.text)
    await callback.message.answer(LOST_TEXT, reply_markup=cancel_keyboard())
    await callback.answer()
