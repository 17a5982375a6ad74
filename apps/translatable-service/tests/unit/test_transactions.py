from unittest.mock import patch

import pytest

from translatable.db.transaction import caller_owns_transaction, transactional, unit_of_work, unit_of_work_depth
from translatable.exceptions import InvalidArgumentError
from tests.fixtures.catalog import Category, CategoryRepository, CategoryTranslation, category_services


def _slugs(db):
    return sorted(slug for (slug,) in db.query(Category.slug).all())


def test_outermost_scope_commits(db_session):
    with unit_of_work(db_session) as db:
        db.add(Category(slug="books"))

    db_session.rollback()
    assert _slugs(db_session) == ["books"]


def test_exception_rolls_back_and_propagates(db_session):
    with pytest.raises(KeyError):
        with unit_of_work(db_session):
            db_session.add(Category(slug="books"))
            db_session.flush()
            raise KeyError("boom")

    assert _slugs(db_session) == []
    assert unit_of_work_depth(db_session) == 0


def test_nested_scopes_join_the_outer_one(db_session):
    with pytest.raises(RuntimeError):
        with unit_of_work(db_session):
            with unit_of_work(db_session):
                assert unit_of_work_depth(db_session) == 2
                db_session.add(Category(slug="inner"))
            db_session.add(Category(slug="outer"))
            raise RuntimeError("abort")

    assert _slugs(db_session) == []


def test_composed_service_calls_roll_back_together(db_session, category_factory):
    owners, translations = category_services(db_session)
    category_factory("books", {"en": "Books", "tr": "Kitaplar"})
    category_factory("music", {"en": "Music"})

    with pytest.raises(RuntimeError):
        with unit_of_work(db_session):
            translations.delete_by_locale("tr")
            owners.delete_by_locale("en")
            raise RuntimeError("abort")

    assert _slugs(db_session) == ["books", "music"]
    assert translations.exists_by_locale("tr") is True


def test_transactional_decorator_uses_self_db(db_session):
    class Registrar:
        def __init__(self, db):
            self.db = db
            self.repository = CategoryRepository(db)

        @transactional
        def register(self, slug):
            return self.repository.save(Category(slug=slug))

    saved = Registrar(db_session).register("books")

    assert saved.id is not None
    db_session.rollback()
    assert _slugs(db_session) == ["books"]
    assert Registrar.register.__name__ == "register"


def test_interrupt_rolls_back_before_depth_resets(db_session):
    with pytest.raises(KeyboardInterrupt):
        with unit_of_work(db_session):
            db_session.add(Category(slug="books"))
            db_session.flush()
            raise KeyboardInterrupt

    with unit_of_work(db_session):
        pass

    assert _slugs(db_session) == []


def test_caller_owns_transaction(db_session):
    assert caller_owns_transaction(db_session) is False

    db_session.query(Category).count()
    assert caller_owns_transaction(db_session) is False
    db_session.rollback()

    with db_session.begin():
        assert caller_owns_transaction(db_session) is True


def test_service_call_never_commits_callers_transaction(db_session, category_factory):
    _, translations = category_services(db_session)
    books_id = category_factory("books").id
    db_session.commit()

    with pytest.raises(RuntimeError):
        with db_session.begin():
            db_session.add(Category(slug="caller-work"))
            translations.save(CategoryTranslation(owner_id=books_id, locale="en", name="Books"))
            raise RuntimeError("abort")

    assert _slugs(db_session) == ["books"]
    assert translations.exists_by_locale("en") is False


def test_service_call_commits_with_callers_transaction(db_session, category_factory):
    _, translations = category_services(db_session)
    books_id = category_factory("books").id
    db_session.commit()

    with db_session.begin():
        db_session.add(Category(slug="caller-work"))
        translations.save(CategoryTranslation(owner_id=books_id, locale="en", name="Books"))

    db_session.expunge_all()
    assert _slugs(db_session) == ["books", "caller-work"]
    assert translations.exists_by_locale("en") is True


def test_guard_failure_keeps_callers_flushed_work(db_session, category_factory):
    _, translations = category_services(db_session)
    category_factory("books", {"en": "Books"})
    db_session.add(Category(slug="pending"))
    db_session.flush()

    with pytest.raises(InvalidArgumentError):
        translations.delete_by_locale("xx")

    assert _slugs(db_session) == ["books", "pending"]
    db_session.commit()
    db_session.expunge_all()
    assert _slugs(db_session) == ["books", "pending"]


def test_failed_service_call_discards_only_its_own_changes(db_session, category_factory):
    _, translations = category_services(db_session)
    category_factory("books", {"en": "Books"})
    db_session.commit()
    delete = translations.repository.delete_by_locale

    def delete_then_fail(locale):
        delete(locale)
        raise RuntimeError("connection lost")

    with db_session.begin():
        db_session.add(Category(slug="caller-work"))
        with patch.object(translations.repository, "delete_by_locale", side_effect=delete_then_fail):
            with pytest.raises(RuntimeError):
                translations.delete_by_locale("en")

    assert _slugs(db_session) == ["books", "caller-work"]
    assert translations.exists_by_locale("en") is True
