import os
import shutil
import subprocess

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from testcontainers.postgres import PostgresContainer

from translatable.db.models import Base


def _require_docker():
    if os.getenv("SKIP_DOCKER_TESTS") == "1":
        pytest.skip("SKIP_DOCKER_TESTS=1")
    if not shutil.which("docker"):
        pytest.skip("Docker CLI is not available; skipping e2e tests that require containers")
    try:
        proc = subprocess.run(["docker", "info"], capture_output=True, text=True, timeout=5)
    except (OSError, subprocess.TimeoutExpired):
        pytest.skip("Docker daemon is not available; skipping e2e tests that require containers")
    if proc.returncode != 0:
        pytest.skip("Docker daemon is not available; skipping e2e tests that require containers")


@pytest.fixture(scope="session")
def pg_url():
    """Session-wide Postgres test container."""
    _require_docker()

    image = os.getenv("TEST_POSTGRES_IMAGE", "postgres:16-alpine")
    with PostgresContainer(image, driver="psycopg2") as pg:
        yield pg.get_connection_url()


@pytest.fixture(scope="session")
def pg_engine(pg_url):
    engine = create_engine(pg_url)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def pg_session(pg_engine):
    """Empty every table, then hand out a session on the container database."""
    with pg_engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())
    session = sessionmaker(bind=pg_engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()
