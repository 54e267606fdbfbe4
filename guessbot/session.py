from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Literal, Optional

from .errors import InvalidState, ValidationError
from .tree import Branch, GuessNode, Node, QuestionNode, TreeStore, ensure_branch, opposite


log = logging.getLogger("guessbot.session")


class RoundState(str, Enum):
    IDLE = "idle"
    AWAITING_ANSWER = "awaiting_answer"
    AWAITING_GUESS_CONFIRMATION = "awaiting_guess_confirmation"
    CORRECT = "correct"
    LEARNED = "learned"


@dataclass(frozen=True)
class Prompt:
    kind: Literal["question", "guess"]
    text: str


@dataclass(frozen=True)
class SessionEvent:
    """Notification for presentation layers: ``prompt``, ``round_ended`` or ``reset``."""

    kind: Literal["prompt", "round_ended", "reset"]
    state: RoundState
    prompt: Optional[Prompt] = None


SessionListener = Callable[[SessionEvent], None]


def prompt_for(node: Node) -> Prompt:
    if isinstance(node, QuestionNode):
        return Prompt(kind="question", text=node.question)
    return Prompt(kind="guess", text=node.guess)


class SessionEngine:
    """
    One player's walk through the shared tree.

    The engine holds only the position of the current round. The tree itself
    lives in the ``TreeStore`` and outlives every round; the only mutation the
    engine performs is ``teach``, through ``TreeStore.replace_child``.
    """

    def __init__(self, store: TreeStore, listener: Optional[SessionListener] = None):
        self.store = store
        self.listener = listener
        self.state = RoundState.IDLE
        self.current_node: Optional[Node] = None
        self.parent_node: Optional[QuestionNode] = None
        self.last_answer: Optional[Branch] = None
        self._generation = store.generation

    def _emit(self, kind: str, prompt: Optional[Prompt] = None) -> None:
        if self.listener is not None:
            self.listener(SessionEvent(kind=kind, state=self.state, prompt=prompt))

    def _require(self, *states: RoundState) -> None:
        if self.state not in states:
            expected = ", ".join(s.value for s in states)
            raise InvalidState(f"Expected state {expected}, session is {self.state.value}")
        if self._generation != self.store.generation:
            raise InvalidState("Knowledge was reset during this round; start a new one")

    def _clear_position(self) -> None:
        self.current_node = None
        self.parent_node = None
        self.last_answer = None

    def _arrive(self) -> None:
        if isinstance(self.current_node, GuessNode):
            self.state = RoundState.AWAITING_GUESS_CONFIRMATION
        else:
            self.state = RoundState.AWAITING_ANSWER
        self._emit("prompt", prompt_for(self.current_node))

    def start_round(self) -> Prompt:
        self._generation = self.store.generation
        self.current_node = self.store.get_root()
        self.parent_node = None
        self.last_answer = None
        self._arrive()
        return prompt_for(self.current_node)

    def current_prompt(self) -> Prompt:
        self._require(RoundState.AWAITING_ANSWER, RoundState.AWAITING_GUESS_CONFIRMATION)
        return prompt_for(self.current_node)

    def answer(self, value: str) -> Prompt:
        self._require(RoundState.AWAITING_ANSWER)
        branch = ensure_branch(value)
        node = self.current_node
        assert isinstance(node, QuestionNode)
        self.parent_node = node
        self.last_answer = branch
        self.current_node = node.child(branch)
        log.debug("Answered %s to %r", branch, node.question)
        self._arrive()
        return prompt_for(self.current_node)

    def confirm_correct(self) -> None:
        self._require(RoundState.AWAITING_GUESS_CONFIRMATION)
        log.info("Guessed %r correctly", getattr(self.current_node, "guess", None))
        self.state = RoundState.CORRECT
        self._clear_position()
        self._emit("round_ended")

    def teach(self, question: str, answer_for_new_object: str, object_name: str) -> QuestionNode:
        """
        Replace the wrong guess with a question that tells it apart from
        ``object_name``.

        ``answer_for_new_object`` is the answer to ``question`` for the new
        object; the previous guess goes under the opposite branch. Returns the
        spliced question node.
        """

        self._require(RoundState.AWAITING_GUESS_CONFIRMATION)
        if self.parent_node is None or self.last_answer is None:
            raise InvalidState("Cannot learn before any question was asked")
        question = (question or "").strip()
        object_name = (object_name or "").strip()
        if not question:
            raise ValidationError("The new question must not be empty")
        if not object_name:
            raise ValidationError("The name of the object must not be empty")
        branch = ensure_branch(answer_for_new_object)

        old_guess = self.current_node
        new_object = GuessNode(guess=object_name)
        if branch == "yes":
            new_question = QuestionNode(question=question, yes=new_object, no=old_guess)
        else:
            new_question = QuestionNode(question=question, yes=old_guess, no=new_object)
        self.store.replace_child(self.parent_node, self.last_answer, new_question)

        log.info(
            "Learned %r: %s -> %r, %s -> %r",
            question,
            branch,
            object_name,
            opposite(branch),
            getattr(old_guess, "guess", None),
        )
        self.state = RoundState.LEARNED
        self._clear_position()
        self._emit("round_ended")
        return new_question

    def reset_memory(self) -> None:
        self.store.reset()
        self._generation = self.store.generation
        self.state = RoundState.IDLE
        self._clear_position()
        self._emit("reset")

    @property
    def can_learn(self) -> bool:
        return (
            self.state is RoundState.AWAITING_GUESS_CONFIRMATION
            and self.parent_node is not None
            and self._generation == self.store.generation
        )
