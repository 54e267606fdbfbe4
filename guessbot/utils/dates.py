from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def seconds_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds()


def is_idle(last_seen: datetime, now: datetime, timeout_seconds: int) -> bool:
    return seconds_between(last_seen, now) > timeout_seconds
