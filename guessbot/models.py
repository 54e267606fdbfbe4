from __future__ import annotations

from datetime import datetime
from typing import TypedDict, Union


class GuessDocument(TypedDict):
    guess: str


class QuestionDocument(TypedDict):
    question: str
    yes: "NodeDocument"
    no: "NodeDocument"


NodeDocument = Union[QuestionDocument, GuessDocument]


class KnowledgeDocument(TypedDict, total=False):
    _id: str
    tree: NodeDocument
    revision: int
    questions: int
    guesses: int
    updated_at: datetime
