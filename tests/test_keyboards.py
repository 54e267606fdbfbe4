from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from guessbot.handlers.play import _prompt_reply
from guessbot.handlers.teach import _is_cancel
from guessbot.keyboards import (
    answer_keyboard,
    guess_keyboard,
    main_menu_keyboard,
    play_again_keyboard,
    teach_side_keyboard,
    with_cancel,
)
from guessbot.session import Prompt
from guessbot.texts import memory_text


def callbacks(markup: InlineKeyboardMarkup) -> list:
    return [btn.callback_data for row in markup.inline_keyboard for btn in row]


def test_main_menu_has_game_actions():
    texts = [btn.text for row in main_menu_keyboard().keyboard for btn in row]
    assert texts == ["🎮 Play", "🧠 Memory", "♻️ Reset memory", "ℹ️ Help"]


def test_answer_and_guess_keyboards_callbacks():
    assert callbacks(answer_keyboard()) == ["round:yes", "round:no"]
    assert callbacks(guess_keyboard()) == ["guess:right", "guess:wrong"]
    assert callbacks(play_again_keyboard()) == ["round:start", "memory:reset:ask"]


def test_with_cancel_appends_row():
    base = InlineKeyboardMarkup(inline_keyboard=[[InlineKeyboardButton(text="A", callback_data="a")]])
    markup = with_cancel(base)
    assert len(markup.inline_keyboard) == 2
    assert markup.inline_keyboard[-1][0].text == "✖️ Cancel"
    assert callbacks(markup) == ["a", "teach:cancel"]


def test_teach_side_keyboard_offers_cancel():
    assert callbacks(teach_side_keyboard()) == ["teach:yes", "teach:no", "teach:cancel"]


def test_prompt_reply_for_question_and_guess():
    text, markup = _prompt_reply(Prompt(kind="question", text="Does it meow?"))
    assert text == "Does it meow?"
    assert callbacks(markup) == ["round:yes", "round:no"]

    text, markup = _prompt_reply(Prompt(kind="guess", text="a <b>cat</b>"))
    assert text == "Is it... a &lt;b&gt;cat&lt;/b&gt;?"
    assert callbacks(markup) == ["guess:right", "guess:wrong"]


def test_is_cancel_matches_keywords():
    assert _is_cancel("Cancel")
    assert _is_cancel(" stop ")
    assert not _is_cancel("a cat")
    assert not _is_cancel(None)


def test_memory_text_lists_counts():
    text = memory_text(3, 4, 2)
    assert "Questions: 3" in text
    assert "Things I can guess: 4" in text
    assert "Longest chain of questions: 2" in text
