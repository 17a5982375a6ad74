"""
Translatable service: locale-scoped access to owning entities.

Deletes here remove owners, not just translation rows, and by default
report a zero count instead of raising when nothing matched.
"""
import logging
from typing import Generic, List, Optional, TypeVar

from translatable.db.repositories import TranslatableRepository
from translatable.db.schemas import Page, PageRequest
from translatable.db.transaction import transactional
from translatable.services.base import BaseService

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
TranslationT = TypeVar("TranslationT")


class TranslatableService(BaseService[TranslatableRepository], Generic[ModelT, TranslationT]):
    """Service base class for a concrete translatable model."""

    raise_on_missing = False

    def exists_by_id_and_locale(self, entity_id, locale: str) -> bool:
        return self.repository.exists_by_id_and_locale(entity_id, locale)

    def find_by_id_and_locale(self, entity_id, locale: str) -> Optional[ModelT]:
        return self.repository.find_by_id_and_locale(entity_id, locale)

    def find_all_by_locale(self, locale: str) -> List[ModelT]:
        return self.repository.find_all_by_locale(locale)

    def paginate_all_by_locale(self, locale: str, page_request: PageRequest) -> Page[ModelT]:
        return self.repository.paginate_all_by_locale(locale, page_request)

    def find_translations_by_id(self, entity_id) -> List[TranslationT]:
        return self.repository.find_translations_by_id(entity_id)

    def paginate_translations_by_id(self, entity_id, page_request: PageRequest) -> Page[TranslationT]:
        return self.repository.paginate_translations_by_id(entity_id, page_request)

    @transactional
    def delete_by_locale(self, locale: str) -> int:
        """Delete every owner that has a translation in ``locale``.

        The owners are removed together with all of their translations.
        Returns the number of owners deleted.
        """
        if self.raise_on_missing:
            self._require_locale_match(self.repository.exists_by_locale(locale), locale)
        deleted = self.repository.delete_by_locale(locale)
        logger.info("Deleted %s %s row(s) having locale %s", deleted, self.entity_name, locale)
        return deleted

    @transactional
    def delete_by_id_and_locale(self, entity_id, locale: str) -> int:
        """Delete the owner ``entity_id`` if it has a translation in ``locale``; returns 0 or 1."""
        if self.raise_on_missing:
            self._require_keyed_match(self.repository.exists_by_id_and_locale(entity_id, locale), id=entity_id, locale=locale)
        deleted = self.repository.delete_by_id_and_locale(entity_id, locale)
        logger.info("Deleted %s %s row(s) for id %s and locale %s", deleted, self.entity_name, entity_id, locale)
        return deleted
