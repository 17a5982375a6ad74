"""
Structural contracts for translatable entities and their translations.

Concrete ORM classes satisfy these protocols by exposing the named mapped
attributes; no inheritance is required. The repositories only rely on what
is declared here.
"""
from __future__ import annotations

from typing import Any, Protocol, Sequence, TypeVar, runtime_checkable

IdT = TypeVar("IdT")
OwnerT = TypeVar("OwnerT")
TranslationT = TypeVar("TranslationT")


@runtime_checkable
class Translation(Protocol[IdT, OwnerT]):
    """One locale-specific variant belonging to exactly one owner."""

    id: IdT
    owner_id: Any
    owner: OwnerT
    locale: str


@runtime_checkable
class NamedTranslation(Translation[IdT, OwnerT], Protocol[IdT, OwnerT]):
    """A translation that carries a localized ``name``."""

    name: str


@runtime_checkable
class Translatable(Protocol[IdT, TranslationT]):
    """An owning entity holding a collection of translations."""

    id: IdT
    translations: Sequence[TranslationT]
