from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import CallbackQuery, Message

from ..keyboards import HELP_BUTTON, invite_keyboard, main_menu_keyboard
from ..texts import HELP_TEXT, INVITE_TEXT, LATER_TEXT, WELCOME_TEXT


router = Router(name="start")


@router.message(CommandStart())
async def start_handler(message: Message) -> None:
    await message.answer(WELCOME_TEXT, reply_markup=main_menu_keyboard())
    await message.answer(INVITE_TEXT, reply_markup=invite_keyboard())


@router.message(Command("help"))
@router.message(F.text == HELP_BUTTON)
async def help_handler(message: Message) -> None:
    await message.answer(HELP_TEXT, reply_markup=main_menu_keyboard())


@router.callback_query(F.data == "common:later")
async def later_handler(callback: CallbackQuery) -> None:
    await callback.message.answer(LATER_TEXT, reply_markup=main_menu_keyboard())
    await callback.answer()
