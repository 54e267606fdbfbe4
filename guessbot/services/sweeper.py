from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..config import get_settings
from .game import GameService


log = logging.getLogger("guessbot.sweeper")
settings = get_settings()


class SessionSweeper:
    def __init__(self, service: GameService, interval_seconds: Optional[int] = None):
        self.service = service
        self.interval_seconds = interval_seconds or settings.session_sweep_seconds
        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None

    def start(self) -> None:
        if self._task and not self._task.done():
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._runner())
        log.info("Session sweeper started")

    async def stop(self) -> None:
        if not self._task:
            return
        if self._stop_event:
            self._stop_event.set()
        try:
            await self._task
        finally:
            self._task = None
            self._stop_event = None
            log.info("Session sweeper stopped")

    async def _runner(self) -> None:
        assert self._stop_event is not None
        while not self._stop_event.is_set():
            try:
                await self.tick()
            except asyncio.CancelledError:
                raise
            except Exception:
                log.exception("Session sweep failed")
            try:
                await asyncio.wait_for(
                    self._stop_event.wait(),
                    timeout=max(10, self.interval_seconds),
                )
            except asyncio.TimeoutError:
                continue

    async def tick(self) -> int:
        return self.service.evict_idle()
