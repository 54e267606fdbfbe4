from __future__ import annotations

from aiogram.types import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
)

PLAY_BUTTON = "🎮 Play"
MEMORY_BUTTON = "🧠 Memory"
RESET_BUTTON = "♻️ Reset memory"
HELP_BUTTON = "ℹ️ Help"


def main_menu_keyboard() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[
            [
                KeyboardButton(text=PLAY_BUTTON),
                KeyboardButton(text=MEMORY_BUTTON),
            ],
            [
                KeyboardButton(text=RESET_BUTTON),
                KeyboardButton(text=HELP_BUTTON),
            ],
        ],
        resize_keyboard=True,
        input_field_placeholder="Choose an action",
    )


def answer_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(text="Yes", callback_data="round:yes"),
                InlineKeyboardButton(text="No", callback_data="round:no"),
            ]
        ]
    )


def guess_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(text="Yes, you got it!", callback_data="guess:right"),
                InlineKeyboardButton(text="No, you lose.", callback_data="guess:wrong"),
            ]
        ]
    )


def play_again_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [InlineKeyboardButton(text="Play Again", callback_data="round:start")],
            [InlineKeyboardButton(text="Start Over (Reset Memory)", callback_data="memory:reset:ask")],
        ]
    )


def teach_side_keyboard() -> InlineKeyboardMarkup:
    return with_cancel(
        InlineKeyboardMarkup(
            inline_keyboard=[
                [
                    InlineKeyboardButton(text="Yes", callback_data="teach:yes"),
                    InlineKeyboardButton(text="No", callback_data="teach:no"),
                ]
            ]
        )
    )


def cancel_keyboard(cancel_cb: str = "teach:cancel") -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[[InlineKeyboardButton(text="✖️ Cancel", callback_data=cancel_cb)]]
    )


def with_cancel(markup: InlineKeyboardMarkup, cancel_cb: str = "teach:cancel") -> InlineKeyboardMarkup:
    rows = [list(row) for row in markup.inline_keyboard]
    rows.extend(cancel_keyboard(cancel_cb).inline_keyboard)
    return InlineKeyboardMarkup(inline_keyboard=rows)


def reset_confirm_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(text="♻️ Forget everything", callback_data="memory:reset:yes"),
                InlineKeyboardButton(text="⬅️ Keep it", callback_data="memory:reset:no"),
            ]
        ]
    )


def invite_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(text="Yes", callback_data="round:start"),
                InlineKeyboardButton(text="No", callback_data="common:later"),
            ]
        ]
    )
