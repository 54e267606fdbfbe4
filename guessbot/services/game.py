from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from functools import lru_cache
from typing import Dict, Optional

from ..config import get_settings
from ..session import Prompt, SessionEngine
from ..tree import TreeStats, TreeStore
from ..utils.dates import is_idle, utcnow
from .knowledge import KnowledgeRepository


log = logging.getLogger("guessbot.game")


class GameService:
    """
    Per-user sessions over one shared tree.

    Every user gets an isolated ``SessionEngine``. Tree mutations and the
    persistence write that follows are serialized behind a single lock.
    """

    def __init__(
        self,
        store: Optional[TreeStore] = None,
        knowledge: Optional[KnowledgeRepository] = None,
        idle_seconds: int = 1800,
    ):
        self.store = store or TreeStore()
        self.knowledge = knowledge
        self.idle_seconds = idle_seconds
        self._sessions: Dict[int, SessionEngine] = {}
        self._last_seen: Dict[int, datetime] = {}
        self._lock = asyncio.Lock()

    def session(self, user_id: int) -> SessionEngine:
        engine = self._sessions.get(user_id)
        if engine is None:
            engine = SessionEngine(self.store)
            self._sessions[user_id] = engine
        self._last_seen[user_id] = utcnow()
        return engine

    def has_session(self, user_id: int) -> bool:
        return user_id in self._sessions

    def start_round(self, user_id: int) -> Prompt:
        return self.session(user_id).start_round()

    def answer(self, user_id: int, value: str) -> Prompt:
        return self.session(user_id).answer(value)

    def confirm_correct(self, user_id: int) -> None:
        self.session(user_id).confirm_correct()

    async def teach(self, user_id: int, question: str, answer_for_new_object: str, object_name: str) -> None:
        engine = self.session(user_id)
        async with self._lock:
            engine.teach(question, answer_for_new_object, object_name)
            if self.knowledge is None:
                return
            try:
                await self.knowledge.save(self.store)
            except Exception:
                log.exception("Failed to persist lesson from user %s; keeping it in memory", user_id)

    async def reset_memory(self, user_id: int) -> None:
        async with self._lock:
            self.session(user_id).reset_memory()
            if self.knowledge is not None:
                await self.knowledge.clear()
        log.info("User %s reset the shared knowledge", user_id)

    async def restore(self) -> bool:
        if self.knowledge is None:
            return False
        async with self._lock:
            root = await self.knowledge.load()
            if root is None:
                return False
            self.store.load(root)
        log.info("Restored knowledge with %s guesses", self.store.stats().guesses)
        return True

    def evict_idle(self, now: Optional[datetime] = None) -> int:
        now = now or utcnow()
        stale = [
            user_id
            for user_id, last_seen in self._last_seen.items()
            if is_idle(last_seen, now, self.idle_seconds)
        ]
        for user_id in stale:
            self._sessions.pop(user_id, None)
            self._last_seen.pop(user_id, None)
        if stale:
            log.info("Evicted %s idle sessions", len(stale))
        return len(stale)

    def stats(self) -> TreeStats:
        return self.store.stats()


@lru_cache
def get_game_service() -> GameService:
    settings = get_settings()
    knowledge = None
    if settings.persistence_enabled:
        from ..db import knowledge_collection

        knowledge = KnowledgeRepository(knowledge_collection())
    return GameService(knowledge=knowledge, idle_seconds=settings.session_idle_seconds)
