from __future__ import annotations

import logging
from typing import Any, Optional

from pymongo import ReturnDocument

from ..errors import TreeIntegrityError
from ..models import KnowledgeDocument
from ..tree import Node, TreeStore, build_tree
from ..utils.dates import utcnow


log = logging.getLogger("guessbot.knowledge")
LIVE_TREE_ID = "live"


class KnowledgeRepository:
    """Stores the live tree as a single MongoDB document."""

    def __init__(self, collection: Any):
        self.collection = collection

    async def load(self) -> Optional[Node]:
        doc: Optional[KnowledgeDocument] = await self.collection.find_one({"_id": LIVE_TREE_ID})
        if not doc or "tree" not in doc:
            return None
        try:
            return build_tree(doc["tree"])
        except TreeIntegrityError:
            log.exception("Stored knowledge is malformed; keeping the initial tree")
            return None

    async def save(self, store: TreeStore) -> int:
        stats = store.stats()
        doc = await self.collection.find_one_and_update(
            {"_id": LIVE_TREE_ID},
            {
                "$set": {
                    "tree": store.snapshot(),
                    "questions": stats.questions,
                    "guesses": stats.guesses,
                    "updated_at": utcnow(),
                },
                "$inc": {"revision": 1},
            },
            projection={"revision": True},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        revision = int(doc["revision"])
        log.info("Knowledge saved (revision %s, %s guesses)", revision, stats.guesses)
        return revision

    async def clear(self) -> None:
        await self.collection.delete_one({"_id": LIVE_TREE_ID})
        log.info("Stored knowledge cleared")
