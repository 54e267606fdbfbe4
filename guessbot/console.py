"""Play the guessing game in a terminal."""

from __future__ import annotations

import logging

from .errors import GameError, ValidationError
from .session import SessionEngine, SessionEvent
from .texts import CORRECT_TEXT, INVITE_TEXT, LATER_TEXT, LEARNED_TEXT, guess_text
from .tree import TreeStore


EXIT_COMMANDS = {"exit", "quit", "/exit"}
RESET_COMMANDS = {"/reset", "reset memory"}


def print_banner(print_fn=print):
    print_fn("=== Guessing game ===")
    print_fn("Answer with 'y' or 'n'. Type '/reset' between rounds to wipe my memory, 'exit' to quit.")


def prompt_yes_no(text, input_fn=input, print_fn=print):
    reply = input_fn(f"{text} (y/n): ").lower().strip()
    while reply not in {"y", "n", "yes", "no"}:
        print_fn("Please type 'y' or 'n'.")
        reply = input_fn(f"{text} (y/n): ").lower().strip()
    return "yes" if reply.startswith("y") else "no"


def prompt_text(label, input_fn=input):
    return input_fn(f"{label}: ").strip()


def teach_interactively(engine: SessionEngine, input_fn=input, print_fn=print):
    guess = engine.current_prompt().text
    print_fn("Hmph. You got me. Help me learn.")
    while True:
        object_name = prompt_text("What were you thinking of", input_fn)
        question = prompt_text(f"A yes/no question that tells {object_name or 'it'} apart from {guess}", input_fn)
        side = prompt_yes_no(f"For {object_name or 'it'}, is the answer yes", input_fn, print_fn)
        try:
            engine.teach(question, side, object_name)
        except ValidationError as exc:
            print_fn(f"Please fill out all fields to teach me! ({exc})")
            continue
        print_fn(LEARNED_TEXT)
        return


def play_round(engine: SessionEngine, input_fn=input, print_fn=print):
    prompt = engine.start_round()
    while prompt.kind == "question":
        prompt = engine.answer(prompt_yes_no(prompt.text, input_fn, print_fn))
    if prompt_yes_no(guess_text(prompt.text), input_fn, print_fn) == "yes":
        engine.confirm_correct()
        print_fn(CORRECT_TEXT)
        return
    if not engine.can_learn:
        print_fn("I did not ask anything yet, so there is nothing to learn.")
        return
    teach_interactively(engine, input_fn, print_fn)


def run(engine=None, input_fn=input, print_fn=print):
    engine = engine or SessionEngine(TreeStore())
    print_banner(print_fn)
    if prompt_yes_no(INVITE_TEXT, input_fn, print_fn) == "no":
        print_fn(LATER_TEXT)
        return engine
    while True:
        try:
            play_round(engine, input_fn, print_fn)
        except GameError as exc:
            print_fn(f"Something went wrong: {exc}")
        command = input_fn("\nPress Enter to play again: ").strip().lower()
        if command in EXIT_COMMANDS:
            return engine
        if command in RESET_COMMANDS:
            engine.reset_memory()
            print_fn("Memory wiped. I only know the basics now.")


def _log_event(event: SessionEvent) -> None:
    logging.getLogger("guessbot.console").debug("%s (%s)", event.kind, event.state.value)


def main():
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    engine = SessionEngine(TreeStore(), listener=_log_event)
    try:
        run(engine)
    except (KeyboardInterrupt, EOFError):
        print()


if __name__ == "__main__":
    main()
