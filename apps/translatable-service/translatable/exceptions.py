"""
Errors raised by the translatable services and repositories.

Database errors are not wrapped: SQLAlchemy exceptions propagate unchanged
once the surrounding unit of work has rolled back.
"""

from __future__ import annotations

from typing import Any, Optional


class TranslatableError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(TranslatableError, LookupError):
    """Raised when a keyed operation matched no row."""


class InvalidArgumentError(TranslatableError, ValueError):
    """Raised when an argument cannot be acted upon (e.g. a locale with no rows)."""


__all__ = [
    "TranslatableError",
    "NotFoundError",
    "InvalidArgumentError",
]
