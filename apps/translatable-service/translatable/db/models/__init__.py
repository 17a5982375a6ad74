"""
Declarative base, mapping mixins and structural contracts.

Concrete entity pairs live in the consuming application; this package only
exposes the shared pieces they are built from.
"""

from .base import Base
from .interfaces import NamedTranslation, Translatable, Translation
from .mixins import LOCALE_LENGTH, TranslatableMixin, TranslationMixin, owner_locale_constraint

__all__ = [
    # base
    "Base",
    # contracts
    "Translatable",
    "Translation",
    "NamedTranslation",
    # mixins
    "TranslatableMixin",
    "TranslationMixin",
    "LOCALE_LENGTH",
    "owner_locale_constraint",
]
