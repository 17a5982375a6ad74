"""Runtime settings sourced from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 500


@dataclass(frozen=True)
class Settings:
    database_url: Optional[str]
    sql_echo: bool
    default_page_size: int
    max_page_size: int


def _normalize_bool(value: str | None, default: bool = False) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _positive_int(value: str | None, default: int) -> int:
    """Return a positive integer from an environment-style value or the default."""
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings for the current process."""
    max_page_size = _positive_int(os.getenv("TRANSLATABLE_MAX_PAGE_SIZE"), MAX_PAGE_SIZE)
    default_page_size = _positive_int(os.getenv("TRANSLATABLE_DEFAULT_PAGE_SIZE"), DEFAULT_PAGE_SIZE)
    return Settings(
        database_url=os.getenv("TRANSLATABLE_DATABASE_URL") or os.getenv("DATABASE_URL"),
        sql_echo=_normalize_bool(os.getenv("TRANSLATABLE_SQL_ECHO")),
        default_page_size=min(default_page_size, max_page_size),
        max_page_size=max_page_size,
    )


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
