"""
Declarative mixins for concrete translatable/translation models.

A concrete pair looks like::

    class Category(TranslatableMixin, Base):
        __tablename__ = "categories"
        id = Column(Uuid, primary_key=True, default=uuid.uuid4)
        translations = relationship(
            "CategoryTranslation", back_populates="owner", cascade="all, delete-orphan"
        )

    class CategoryTranslation(TranslationMixin, Base):
        __tablename__ = "category_translations"
        id = Column(Uuid, primary_key=True, default=uuid.uuid4)
        owner_id = Column(ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
        owner = relationship("Category", back_populates="translations")
        name = Column(String(255), nullable=False)

The concrete class owns the identifier type, the foreign key and the
payload columns; the mixins only add what every translation shares.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import Column, String, UniqueConstraint
from sqlalchemy.orm import declared_attr

LOCALE_LENGTH = 16


def owner_locale_constraint(tablename: str) -> UniqueConstraint:
    """The one-row-per-locale constraint for a translation table."""
    return UniqueConstraint("owner_id", "locale", name=f"uq_{tablename}_owner_locale")


class TranslationMixin:
    """Adds the ``locale`` column and the one-row-per-locale constraint.

    Set ``__unique_locale_per_owner__ = False`` on the concrete class to skip
    the ``(owner_id, locale)`` unique constraint.

    A concrete class that declares its own ``__table_args__`` replaces the
    mixin's, constraint included; merge it back in explicitly::

        __table_args__ = (
            owner_locale_constraint("article_translations"),
            Index("ix_article_translations_name", "name"),
        )
    """

    __unique_locale_per_owner__ = True

    locale = Column(String(LOCALE_LENGTH), nullable=False, index=True)

    @declared_attr.directive
    def __table_args__(cls):
        if not cls.__unique_locale_per_owner__:
            return ()
        return (owner_locale_constraint(cls.__tablename__),)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r} owner_id={self.owner_id!r} locale={self.locale!r}>"


class TranslatableMixin:
    """Read helpers over an already loaded ``translations`` collection."""

    def get_translation(self, locale: str) -> Optional["TranslationMixin"]:
        for translation in self.translations:
            if translation.locale == locale:
                return translation
        return None

    @property
    def translation_locales(self) -> List[str]:
        return sorted({t.locale for t in self.translations})
