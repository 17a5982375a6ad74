"""
Translation repository.

Locale- and owner-scoped queries over any mapped class satisfying the
``Translation`` contract (``id``, ``owner_id``, ``owner``, ``locale``).
"""
from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from translatable.db.repositories.base import BaseRepository, IdT
from translatable.db.schemas import Page, PageRequest

TranslationT = TypeVar("TranslationT")
OwnerT = TypeVar("OwnerT")

_REQUIRED_ATTRIBUTES = ("id", "owner_id", "owner", "locale")


class TranslationRepository(BaseRepository[TranslationT, IdT], Generic[TranslationT, IdT, OwnerT]):

    def _check_model(self) -> None:
        missing = [name for name in _REQUIRED_ATTRIBUTES if not hasattr(self.model, name)]
        if missing:
            raise TypeError(f"{self.model.__name__} is not a translation model; missing {', '.join(missing)}")

    def _by_owner(self, owner_id):
        return self._query().filter(self.model.owner_id == owner_id)

    def _by_owner_and_locale(self, owner_id, locale: str):
        return self._by_owner(owner_id).filter(self.model.locale == locale)

    def exists_by_locale(self, locale: str) -> bool:
        query = self._query().filter(self.model.locale == locale)
        return self._exists(query)

    def exists_by_owner_id(self, owner_id) -> bool:
        return self._exists(self._by_owner(owner_id))

    def exists_by_owner_id_and_locale(self, owner_id, locale: str) -> bool:
        return self._exists(self._by_owner_and_locale(owner_id, locale))

    def find_by_owner_id(self, owner_id) -> List[TranslationT]:
        return self._by_owner(owner_id).order_by(*self._primary_key_order()).all()

    def paginate_by_owner_id(self, owner_id, page_request: PageRequest) -> Page[TranslationT]:
        return self._paginate(self._by_owner(owner_id), page_request)

    def find_by_owner_id_and_locale(self, owner_id, locale: str) -> Optional[TranslationT]:
        """Return the owner's translation for ``locale`` or ``None``.

        Raises ``sqlalchemy.exc.MultipleResultsFound`` when the table holds
        more than one row for the pair, i.e. the one-per-locale invariant is
        broken.
        """
        return self._by_owner_and_locale(owner_id, locale).one_or_none()

    def delete_by_locale(self, locale: str) -> int:
        return self._query().filter(self.model.locale == locale).delete(synchronize_session="fetch")

    def delete_by_owner_id_and_locale(self, owner_id, locale: str) -> int:
        return self._by_owner_and_locale(owner_id, locale).delete(synchronize_session="fetch")


class NamedTranslationRepository(TranslationRepository[TranslationT, IdT, OwnerT]):
    """Translation repository for models that also map a ``name`` column."""

    def _check_model(self) -> None:
        super()._check_model()
        if not hasattr(self.model, "name"):
            raise TypeError(f"{self.model.__name__} has no 'name' attribute to query by")

    def find_by_name_and_locale(self, name: str, locale: str) -> List[TranslationT]:
        return (
            self._query()
            .filter(self.model.name == name, self.model.locale == locale)
            .order_by(*self._primary_key_order())
            .all()
        )
