from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Literal, Mapping, Union

from .errors import TreeIntegrityError, ValidationError


log = logging.getLogger("guessbot.tree")

Branch = Literal["yes", "no"]
BRANCHES = ("yes", "no")

INITIAL_TREE: Dict[str, Any] = {
    "question": "Is it an animal?",
    "yes": {
        "question": "Does it meow?",
        "yes": {"guess": "a cat"},
        "no": {"guess": "a dog"},
    },
    "no": {
        "question": "Can you eat it?",
        "yes": {"guess": "a carrot"},
        "no": {"guess": "a rock"},
    },
}


@dataclass
class GuessNode:
    """Leaf of the tree: the object the game will name."""

    guess: str


@dataclass
class QuestionNode:
    """A yes/no question with exactly one subtree per answer."""

    question: str
    yes: Node
    no: Node

    def child(self, branch: Branch) -> Node:
        return self.yes if ensure_branch(branch) == "yes" else self.no


Node = Union[QuestionNode, GuessNode]


@dataclass(frozen=True)
class TreeStats:
    questions: int
    guesses: int
    depth: int


def ensure_branch(value: Any) -> Branch:
    if value not in BRANCHES:
        raise ValidationError(f"Answer must be 'yes' or 'no', got {value!r}")
    return value


def opposite(branch: Branch) -> Branch:
    return "no" if ensure_branch(branch) == "yes" else "yes"


def _text(raw: Any, field_name: str) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise TreeIntegrityError(f"'{field_name}' must be a non-empty string")
    return raw.strip()


def build_tree(data: Mapping[str, Any]) -> Node:
    """
    Build a fresh node tree from the nested-mapping form.

    Question mappings carry ``question``, ``yes`` and ``no``; guess mappings
    carry only ``guess``. Anything else raises ``TreeIntegrityError``.
    """

    if not isinstance(data, Mapping):
        raise TreeIntegrityError(f"Tree node must be a mapping, got {type(data).__name__}")
    has_question = "question" in data
    has_guess = "guess" in data
    if has_question == has_guess:
        raise TreeIntegrityError("Tree node must have exactly one of 'question' or 'guess'")
    if has_guess:
        return GuessNode(guess=_text(data["guess"], "guess"))
    if "yes" not in data or "no" not in data:
        raise TreeIntegrityError(f"Question {data['question']!r} needs both 'yes' and 'no' branches")
    return QuestionNode(
        question=_text(data["question"], "question"),
        yes=build_tree(data["yes"]),
        no=build_tree(data["no"]),
    )


def tree_to_dict(node: Node) -> Dict[str, Any]:
    if isinstance(node, GuessNode):
        return {"guess": node.guess}
    return {
        "question": node.question,
        "yes": tree_to_dict(node.yes),
        "no": tree_to_dict(node.no),
    }


def iter_nodes(node: Node) -> Iterator[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, QuestionNode):
            stack.append(current.no)
            stack.append(current.yes)


def tree_depth(node: Node) -> int:
    """Number of questions on the longest root-to-leaf path."""

    deepest = 0
    stack = [(node, 0)]
    while stack:
        current, level = stack.pop()
        if isinstance(current, QuestionNode):
            stack.append((current.yes, level + 1))
            stack.append((current.no, level + 1))
        else:
            deepest = max(deepest, level)
    return deepest


def check_strict_tree(node: Node) -> None:
    """Reject shared sub-nodes and cycles; each node object may appear once."""

    seen = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if not isinstance(current, (QuestionNode, GuessNode)):
            raise TreeIntegrityError(f"Unexpected node type {type(current).__name__}")
        if id(current) in seen:
            raise TreeIntegrityError("Tree contains a shared node or a cycle")
        seen.add(id(current))
        if isinstance(current, QuestionNode):
            stack.append(current.yes)
            stack.append(current.no)


class TreeStore:
    """Owns the live decision tree and the template it is reset to."""

    def __init__(self, initial: Union[Node, Mapping[str, Any], None] = None):
        if initial is None:
            initial = INITIAL_TREE
        if isinstance(initial, Mapping):
            template = build_tree(initial)
        else:
            check_strict_tree(initial)
            template = copy.deepcopy(initial)
        self._initial: Node = template
        self._live: Node = copy.deepcopy(template)
        self._generation = 0

    @property
    def root(self) -> Node:
        return self._live

    def get_root(self) -> Node:
        return self._live

    @property
    def initial(self) -> Node:
        return copy.deepcopy(self._initial)

    @property
    def generation(self) -> int:
        return self._generation

    def reset(self) -> None:
        self._live = copy.deepcopy(self._initial)
        self._generation += 1
        log.info("Knowledge reset to the initial tree (generation %s)", self._generation)

    def load(self, root: Union[Node, Mapping[str, Any]]) -> None:
        """Replace the live tree wholesale, e.g. with a persisted snapshot."""

        if isinstance(root, Mapping):
            node = build_tree(root)
        else:
            check_strict_tree(root)
            node = root
        self._live = node
        self._generation += 1

    def contains(self, node: Node) -> bool:
        return any(candidate is node for candidate in iter_nodes(self._live))

    def replace_child(self, parent: QuestionNode, branch: Branch, new_node: Node) -> None:
        branch = ensure_branch(branch)
        if not isinstance(parent, QuestionNode):
            raise TreeIntegrityError("Only question nodes have children to replace")
        if not self.contains(parent):
            raise TreeIntegrityError("Parent node is not part of the live tree")
        check_strict_tree(new_node)
        # the displaced subtree may be re-attached below the new node
        displaced = {id(node) for node in iter_nodes(parent.child(branch))}
        remaining = {id(node) for node in iter_nodes(self._live)} - displaced
        if any(id(node) in remaining for node in iter_nodes(new_node)):
            raise TreeIntegrityError("New subtree shares nodes with the live tree")
        setattr(parent, branch, new_node)
        log.info("Spliced new node under %r (%s branch)", parent.question, branch)

    def depth(self) -> int:
        return tree_depth(self._live)

    def stats(self) -> TreeStats:
        questions = guesses = 0
        for node in iter_nodes(self._live):
            if isinstance(node, QuestionNode):
                questions += 1
            else:
                guesses += 1
        return TreeStats(questions=questions, guesses=guesses, depth=self.depth())

    def snapshot(self) -> Dict[str, Any]:
        return tree_to_dict(self._live)
