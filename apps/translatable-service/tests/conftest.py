import os

# Unit tests always run against in-memory SQLite, whatever the shell exports.
os.environ["TRANSLATABLE_DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

import pytest
from sqlalchemy.orm import Session

from translatable.db import database
from translatable.db.models import Base
from translatable.utils.settings import refresh_settings_cache
from tests.fixtures.catalog import Category, CategoryTranslation, Tag, TagTranslation

refresh_settings_cache()


@pytest.fixture(scope="session")
def engine():
    """Create all tables once per test session."""
    database.reset_engine()
    eng = database.get_engine()
    database.create_schema(eng)
    yield eng
    database.drop_schema(eng)
    database.reset_engine()


@pytest.fixture
def db_session(engine):
    """Empty every table, then hand out a fresh session."""
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())
    session = database.get_session_factory()()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def category_factory(db_session: Session):
    def _create(slug: str = "category", translations: dict | None = None):
        category = Category(slug=slug)
        for locale, name in (translations or {}).items():
            category.translations.append(CategoryTranslation(locale=locale, name=name))
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category
    return _create


@pytest.fixture
def tag_factory(db_session: Session):
    def _create(locales: list[str] | None = None):
        tag = Tag()
        for locale in locales or []:
            tag.translations.append(TagTranslation(locale=locale, label=f"label-{locale}"))
        db_session.add(tag)
        db_session.commit()
        db_session.refresh(tag)
        return tag
    return _create
