"""
Translatable (owner) repository.

The translation model is discovered from the owner's ``translations``
relationship, so one implementation serves every concrete entity pair.
Locale filters are expressed as EXISTS subqueries: an owner with several
matching translations is returned once.
"""
from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from sqlalchemy.orm import RelationshipProperty

from translatable.db.repositories.base import BaseRepository, IdT
from translatable.db.schemas import Page, PageRequest

ModelT = TypeVar("ModelT")
TranslationT = TypeVar("TranslationT")


class TranslatableRepository(BaseRepository[ModelT, IdT], Generic[ModelT, IdT, TranslationT]):

    def _check_model(self) -> None:
        super()._check_model()
        if "translations" not in self._mapper.relationships:
            raise TypeError(f"{self.model.__name__} must map a 'translations' relationship")
        relationship: RelationshipProperty = self._mapper.relationships["translations"]
        self.translation_model = relationship.mapper.class_
        if not hasattr(self.translation_model, "owner_id") or not hasattr(self.translation_model, "locale"):
            raise TypeError(
                f"{self.translation_model.__name__} must map 'owner_id' and 'locale' to back {self.model.__name__}"
            )

    def _has_locale(self, locale: str):
        return self.model.translations.any(self.translation_model.locale == locale)

    def _by_locale(self, locale: str):
        return self._query().filter(self._has_locale(locale))

    def _by_id_and_locale(self, entity_id, locale: str):
        return self._by_locale(locale).filter(self.model.id == entity_id)

    def _translations_of(self, entity_id):
        return self.db.query(self.translation_model).filter(self.translation_model.owner_id == entity_id)

    def exists_by_locale(self, locale: str) -> bool:
        return self._exists(self._by_locale(locale))

    def exists_by_id_and_locale(self, entity_id: IdT, locale: str) -> bool:
        return self._exists(self._by_id_and_locale(entity_id, locale))

    def find_by_id_and_locale(self, entity_id: IdT, locale: str) -> Optional[ModelT]:
        return self._by_id_and_locale(entity_id, locale).one_or_none()

    def find_all_by_locale(self, locale: str) -> List[ModelT]:
        return self._by_locale(locale).order_by(*self._primary_key_order()).all()

    def paginate_all_by_locale(self, locale: str, page_request: PageRequest) -> Page[ModelT]:
        return self._paginate(self._by_locale(locale), page_request)

    def find_translations_by_id(self, entity_id: IdT) -> List[TranslationT]:
        return self._translations_of(entity_id).order_by(*self._primary_key_order(self.translation_model)).all()

    def paginate_translations_by_id(self, entity_id: IdT, page_request: PageRequest) -> Page[TranslationT]:
        return self._paginate(self._translations_of(entity_id), page_request, self.translation_model)

    def _delete_owners(self, owner_ids: list) -> int:
        if not owner_ids:
            return 0
        self.db.query(self.translation_model).filter(
            self.translation_model.owner_id.in_(owner_ids)
        ).delete(synchronize_session="fetch")
        return self._query().filter(self.model.id.in_(owner_ids)).delete(synchronize_session="fetch")

    def delete_by_locale(self, locale: str) -> int:
        """Delete every owner having a translation in ``locale``.

        This removes the owners themselves together with all of their
        translations in every locale, not only the ``locale`` rows.
        """
        owner_ids = [row[0] for row in self.db.query(self.model.id).filter(self._has_locale(locale)).all()]
        return self._delete_owners(owner_ids)

    def delete_by_id_and_locale(self, entity_id: IdT, locale: str) -> int:
        """Delete the owner (and its translations) only if it has a ``locale`` translation."""
        if not self.exists_by_id_and_locale(entity_id, locale):
            return 0
        return self._delete_owners([entity_id])
