"""
Generic persistence scaffolding for translatable entities.

An owning entity (``Translatable``) holds zero or more locale-specific
``Translation`` rows. This package provides the structural contracts, the
SQLAlchemy mapping mixins, generic repositories and service base classes
for any concrete entity pair.
"""

from translatable.db.models import (
    NamedTranslation,
    Translatable,
    TranslatableMixin,
    Translation,
    TranslationMixin,
)
from translatable.db.repositories import (
    BaseRepository,
    NamedTranslationRepository,
    TranslatableRepository,
    TranslationRepository,
)
from translatable.db.schemas import Page, PageRequest
from translatable.db.transaction import transactional, unit_of_work
from translatable.exceptions import InvalidArgumentError, NotFoundError, TranslatableError
from translatable.services import NamedTranslationService, TranslatableService, TranslationService

__version__ = "0.1.1"

__all__ = [
    "Translatable",
    "Translation",
    "NamedTranslation",
    "TranslatableMixin",
    "TranslationMixin",
    "BaseRepository",
    "TranslatableRepository",
    "TranslationRepository",
    "NamedTranslationRepository",
    "TranslatableService",
    "TranslationService",
    "NamedTranslationService",
    "Page",
    "PageRequest",
    "unit_of_work",
    "transactional",
    "TranslatableError",
    "NotFoundError",
    "InvalidArgumentError",
]
