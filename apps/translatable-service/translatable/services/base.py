"""
Shared plumbing for the translatable/translation services.

Both services follow one missing-row contract controlled by
``raise_on_missing``: when set, a keyed delete that matches nothing raises
``NotFoundError`` and a locale-wide delete that matches nothing raises
``InvalidArgumentError``; when unset, the delete simply reports ``0``.
"""
from __future__ import annotations

import logging
from typing import Any, Generic, Optional, TypeVar

from translatable.db.transaction import transactional
from translatable.exceptions import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)

RepositoryT = TypeVar("RepositoryT")


class BaseService(Generic[RepositoryT]):
    raise_on_missing: bool = False

    def __init__(self, repository: RepositoryT, *, raise_on_missing: Optional[bool] = None):
        self.repository = repository
        self.db = repository.db
        if raise_on_missing is not None:
            self.raise_on_missing = raise_on_missing

    @property
    def entity_name(self) -> str:
        return self.repository.model.__name__

    def _require_keyed_match(self, found: bool, **key: Any) -> None:
        if found or not self.raise_on_missing:
            return
        described = " and ".join(f"{name} {value}" for name, value in key.items())
        logger.warning("%s lookup for %s matched nothing", self.entity_name, described)
        raise NotFoundError(f"{self.entity_name} for {described} not found", dict(key))

    def _require_locale_match(self, found: bool, locale: str) -> None:
        if found or not self.raise_on_missing:
            return
        logger.warning("No %s rows found for locale %s", self.entity_name, locale)
        raise InvalidArgumentError(f"No {self.entity_name} found for locale {locale}", {"locale": locale})

    @transactional
    def save(self, entity):
        return self.repository.save(entity)
