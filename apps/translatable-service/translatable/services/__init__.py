"""
Service base classes wrapping the translatable repositories.
"""

from .base import BaseService
from .translatable_service import TranslatableService
from .translation_service import NamedTranslationService, TranslationService

__all__ = [
    "BaseService",
    "TranslatableService",
    "TranslationService",
    "NamedTranslationService",
]
