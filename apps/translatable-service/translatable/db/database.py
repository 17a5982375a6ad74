"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a test
fallback (SQLite in-memory) and exposes a session dependency generator.
The engine is created lazily so importing the package never needs a
configured database.
"""
import logging
import os
import sys
from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from translatable.utils.settings import get_settings

logger = logging.getLogger(__name__)

SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"

_POSTGRES_PARTS = ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB")


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while an individual test is running,
    so collection-time imports also look for the pytest package in
    ``sys.modules``. ``PYTEST_RUNNING=1`` forces the answer.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


def get_database_url() -> str:
    """Resolve the database URL.

    An explicit ``TRANSLATABLE_DATABASE_URL``/``DATABASE_URL`` wins. Otherwise
    the URL is assembled from the ``POSTGRES_*`` variables, all of which must
    be set. Under pytest, a missing configuration falls back to in-memory
    SQLite instead of raising.
    """
    url = get_settings().database_url
    if url:
        return url

    values = {name: os.getenv(name) for name in _POSTGRES_PARTS}
    missing = [name for name, value in values.items() if not value]
    if not missing:
        return "postgresql://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}".format(**values)

    if _is_pytest_runtime():
        return SQLITE_MEMORY_URL
    raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")


def _engine_kwargs(url: str) -> dict:
    kwargs = {"echo": get_settings().sql_echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            # Single shared connection so the schema survives across sessions
            kwargs["poolclass"] = StaticPool
    return kwargs


def _enable_sqlite_transactions(engine: Engine) -> None:
    """Let SQLAlchemy emit BEGIN itself so SAVEPOINTs nest inside a real transaction.

    pysqlite otherwise defers BEGIN until the first DML statement, which makes
    a leading SAVEPOINT open (and its RELEASE commit) the whole transaction.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


@lru_cache(maxsize=None)
def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use."""
    url = get_database_url()
    engine = create_engine(url, **_engine_kwargs(url))
    if engine.dialect.name == "sqlite":
        _enable_sqlite_transactions(engine)
    logger.info("Database engine created for dialect %s", engine.dialect.name)
    return engine


@lru_cache(maxsize=None)
def get_session_factory() -> sessionmaker:
    """Return the session factory bound to :func:`get_engine`."""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def reset_engine() -> None:
    """Dispose the cached engine and session factory (useful for tests)."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_engine.cache_clear()
    get_session_factory.cache_clear()


def get_db():
    """Dependency to get a database session."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def create_schema(bind=None) -> None:
    """Create every table registered on the package's declarative base."""
    from translatable.db.models import Base

    Base.metadata.create_all(bind=bind or get_engine())


def drop_schema(bind=None) -> None:
    """Drop every table registered on the package's declarative base."""
    from translatable.db.models import Base

    Base.metadata.drop_all(bind=bind or get_engine())
