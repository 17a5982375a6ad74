"""
Translation service: owner- and locale-scoped access to translation rows.

Deletes are guarded: removing a single owner+locale translation that does
not exist raises ``NotFoundError``; removing a locale that has no rows
raises ``InvalidArgumentError``. Guard and delete share one unit of work.
"""
import logging
from typing import Generic, List, Optional, TypeVar

from translatable.db.repositories import NamedTranslationRepository, TranslationRepository
from translatable.db.schemas import Page, PageRequest
from translatable.db.transaction import transactional
from translatable.services.base import BaseService

logger = logging.getLogger(__name__)

TranslationT = TypeVar("TranslationT")


class TranslationService(BaseService[TranslationRepository], Generic[TranslationT]):
    """Service base class for a concrete translation model."""

    raise_on_missing = True

    def exists_by_locale(self, locale: str) -> bool:
        return self.repository.exists_by_locale(locale)

    def exists_by_owner_id(self, owner_id) -> bool:
        return self.repository.exists_by_owner_id(owner_id)

    def exists_by_owner_id_and_locale(self, owner_id, locale: str) -> bool:
        return self.repository.exists_by_owner_id_and_locale(owner_id, locale)

    def find_by_owner_id(self, owner_id) -> List[TranslationT]:
        return self.repository.find_by_owner_id(owner_id)

    def paginate_by_owner_id(self, owner_id, page_request: PageRequest) -> Page[TranslationT]:
        return self.repository.paginate_by_owner_id(owner_id, page_request)

    def find_by_owner_id_and_locale(self, owner_id, locale: str) -> Optional[TranslationT]:
        return self.repository.find_by_owner_id_and_locale(owner_id, locale)

    @transactional
    def delete_by_owner_id_and_locale(self, owner_id, locale: str) -> int:
        """Delete the owner's translation for ``locale``.

        Raises ``NotFoundError`` when no such translation exists (unless
        ``raise_on_missing`` is off, in which case ``0`` is returned).
        """
        existing = self.repository.find_by_owner_id_and_locale(owner_id, locale)
        self._require_keyed_match(existing is not None, owner_id=owner_id, locale=locale)
        deleted = self.repository.delete_by_owner_id_and_locale(owner_id, locale)
        logger.info("Deleted %s %s row(s) for owner %s and locale %s", deleted, self.entity_name, owner_id, locale)
        return deleted

    @transactional
    def delete_by_locale(self, locale: str) -> int:
        """Delete every translation in ``locale``, across all owners.

        Raises ``InvalidArgumentError`` when the locale has no rows (unless
        ``raise_on_missing`` is off, in which case ``0`` is returned).
        """
        self._require_locale_match(self.exists_by_locale(locale), locale)
        deleted = self.repository.delete_by_locale(locale)
        logger.info("Deleted %s %s row(s) for locale %s", deleted, self.entity_name, locale)
        return deleted


class NamedTranslationService(TranslationService[TranslationT]):
    """Translation service for models with a localized ``name`` column."""

    def __init__(self, repository: NamedTranslationRepository, **kwargs):
        if not isinstance(repository, NamedTranslationRepository):
            raise TypeError("NamedTranslationService requires a NamedTranslationRepository")
        super().__init__(repository, **kwargs)

    def find_by_name_and_locale(self, name: str, locale: str) -> List[TranslationT]:
        return self.repository.find_by_name_and_locale(name, locale)
