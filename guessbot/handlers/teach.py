from __future__ import annotations

import logging
from typing import Optional

from aiogram import F, Router, html
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from ..errors import InvalidState, ValidationError
from ..keyboards import cancel_keyboard, main_menu_keyboard, play_again_keyboard, teach_side_keyboard
from ..services.game import get_game_service
from ..states import TeachObject
from ..texts import (
    ASK_QUESTION_TEXT,
    ASK_SIDE_TEXT,
    LEARNED_TEXT,
    LOST_TEXT,
    ROUND_EXPIRED_TEXT,
    TEACH_CANCELLED_TEXT,
)


router = Router(name="teach")
log = logging.getLogger("guessbot.handlers.teach")
CANCEL_KEYWORDS = {"cancel", "stop", "/cancel"}
MAX_TEXT_LENGTH = 120


def _is_cancel(text: Optional[str]) -> bool:
    return bool(text) and text.strip().lower() in CANCEL_KEYWORDS


def _clean(text: Optional[str]) -> str:
    return (text or "").strip()


async def _cancel_teaching(message: Message, state: FSMContext) -> None:
    await state.clear()
    await message.answer(TEACH_CANCELLED_TEXT, reply_markup=main_menu_keyboard())


@router.callback_query(F.data == "teach:cancel")
async def cancel_callback(callback: CallbackQuery, state: FSMContext) -> None:
    await _cancel_teaching(callback.message, state)
    await callback.answer()


@router.message(TeachObject.waiting_object)
async def object_handler(message: Message, state: FSMContext) -> None:
    if _is_cancel(message.text):
        await _cancel_teaching(message, state)
        return
    object_name = _clean(message.text)
    if not object_name:
        await message.answer("Say it with words, please. What were you thinking of?")
        return
    if len(object_name) > MAX_TEXT_LENGTH:
        await message.answer(f"Too long. Keep it under {MAX_TEXT_LENGTH} characters.")
        return
    data = await state.update_data(object_name=object_name)
    await state.set_state(TeachObject.waiting_question)
    await message.answer(
        ASK_QUESTION_TEXT.format(
            object_name=html.quote(object_name),
            guess=html.quote(data.get("guess", "my guess")),
        ),
        reply_markup=cancel_keyboard(),
    )


@router.message(TeachObject.waiting_question)
async def question_handler(message: Message, state: FSMContext) -> None:
    if _is_cancel(message.text):
        await _cancel_teaching(message, state)
        return
    question = _clean(message.text)
    if not question:
        await message.answer("I need an actual question. Try again.")
        return
    if len(question) > MAX_TEXT_LENGTH:
        await message.answer(f"Too long. Keep it under {MAX_TEXT_LENGTH} characters.")
        return
    data = await state.update_data(question=question)
    await state.set_state(TeachObject.waiting_side)
    await message.answer(
        ASK_SIDE_TEXT.format(
            object_name=html.quote(data["object_name"]),
            question=html.quote(question),
        ),
        reply_markup=teach_side_keyboard(),
    )


@router.callback_query(TeachObject.waiting_side, F.data.in_({"teach:yes", "teach:no"}))
async def side_callback(callback: CallbackQuery, state: FSMContext) -> None:
    side = callback.data.split(":", 1)[1]
    data = await state.get_data()
    try:
        await get_game_service().teach(
            callback.from_user.id,
            data.get("question", ""),
            side,
            data.get("object_name", ""),
        )
    except ValidationError as exc:
        log.info("Rejected lesson from %s: %s", callback.from_user.id, exc)
        await state.set_state(TeachObject.waiting_object)
        await callback.message.answer(f"{html.quote(str(exc))}.\n\n{LOST_TEXT}", reply_markup=cancel_keyboard())
        await callback.answer()
        return
    except InvalidState:
        await state.clear()
        await callback.message.answer(ROUND_EXPIRED_TEXT, reply_markup=main_menu_keyboard())
        await callback.answer()
        return
    await state.clear()
    await callback.message.answer(LEARNED_TEXT, reply_markup=play_again_keyboard())
    await callback.answer()
