import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv


load_dotenv()


@dataclass(slots=True)
class Settings:
    """Container for environment-driven configuration with sane defaults."""

    bot_token: str | None = field(default_factory=lambda: os.getenv("BOT_TOKEN"))
    mongo_uri: str | None = field(default_factory=lambda: os.getenv("MONGO_URI"))
    mongo_db: str = field(default_factory=lambda: os.getenv("MONGO_DB", "guessbot"))
    webhook_base: str | None = field(default_factory=lambda: os.getenv("WEBHOOK_BASE"))
    cron_secret: str | None = field(default_factory=lambda: os.getenv("CRON_SECRET"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    session_idle_seconds: int = field(
        default_factory=lambda: int(os.getenv("SESSION_IDLE_SECONDS", "1800"))
    )
    session_sweep_seconds: int = field(
        default_factory=lambda: int(os.getenv("SESSION_SWEEP_SECONDS", "300"))
    )

    @property
    def persistence_enabled(self) -> bool:
        return bool(self.mongo_uri)


def require(value: str | None, key: str) -> str:
    if not value:
        raise RuntimeError(f"{key} environment variable is required")
    return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
