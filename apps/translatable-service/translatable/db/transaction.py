"""
Explicit transaction scopes for service methods.

``unit_of_work`` commits when the outermost scope on a session exits
cleanly and rolls back when it exits with an exception. Scopes opened while
another one is active on the same session join it, so composed service
calls commit or roll back together.

A scope opened inside a transaction the caller began explicitly
(``session.begin()`` / ``session.begin_nested()``) joins that transaction
and never commits it. Whenever a transaction is already open, the scope's
own work runs in a SAVEPOINT so a failure only discards that work and
leaves the caller's flushed changes in place.
"""
from __future__ import annotations

import functools
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from sqlalchemy.orm import Session, SessionTransactionOrigin

logger = logging.getLogger(__name__)

_DEPTH_KEY = "translatable.unit_of_work_depth"

F = TypeVar("F", bound=Callable)


def unit_of_work_depth(db: Session) -> int:
    """Number of ``unit_of_work`` scopes currently open on ``db``."""
    return db.info.get(_DEPTH_KEY, 0)


def caller_owns_transaction(db: Session) -> bool:
    """True when the session's transaction was begun explicitly by the caller."""
    transaction = db.get_transaction()
    if transaction is None:
        return False
    return transaction.origin is not SessionTransactionOrigin.AUTOBEGIN or db.in_nested_transaction()


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    depth = unit_of_work_depth(db)
    db.info[_DEPTH_KEY] = depth + 1
    try:
        if depth:
            yield db
            return

        joined = caller_owns_transaction(db)
        savepoint = db.begin_nested() if db.in_transaction() else None
        try:
            yield db
            if savepoint is not None:
                savepoint.commit()
        except BaseException:
            logger.debug("Rolling back unit of work on %r", db)
            if savepoint is not None:
                savepoint.rollback()
            else:
                db.rollback()
            raise

        if not joined:
            try:
                db.commit()
            except BaseException:
                db.rollback()
                raise
    finally:
        db.info[_DEPTH_KEY] = depth


def transactional(method: F) -> F:
    """Run a service method inside ``unit_of_work(self.db)``."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with unit_of_work(self.db):
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]
