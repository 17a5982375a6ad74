"""
Generic repositories for translatable entities and their translations.

Repositories answer "how do I get or store this data"; the services in
``translatable.services`` add guard checks and transaction boundaries.
"""

from .base import BaseRepository
from .translatables import TranslatableRepository
from .translations import NamedTranslationRepository, TranslationRepository

__all__ = [
    "BaseRepository",
    "TranslatableRepository",
    "TranslationRepository",
    "NamedTranslationRepository",
]
