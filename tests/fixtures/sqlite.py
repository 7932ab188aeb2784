"""sqlite-specific fixtures"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from alembic import command
from sqlalchemy.engine import URL

from tally import config
from tally.adapters.db.engine import make_engine
from tally.adapters.db.metadata import metadata

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


@pytest.fixture
def sqlite_engine_memory() -> Iterator[Engine]:
    """In-memory SQLite engine with the order tables created from metadata.

    Uses `make_engine()` so SQLite PRAGMAs (foreign keys) are applied. No
    Alembic migrations are run here.

    Yields:
        Engine: SQLAlchemy engine bound to an in-memory DB.
    """
    test_engine = make_engine("sqlite+pysqlite:///:memory:")
    metadata.create_all(test_engine)
    yield test_engine
    metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def sqlite_url_file(tmp_path: Path) -> str:
    """URL of a fresh, un-migrated SQLite file under the test's temp dir."""
    return str(URL.create("sqlite+pysqlite", database=str(tmp_path / "tally.db")))


@pytest.fixture
def sqlite_engine_file(sqlite_url_file: str) -> Iterator[Engine]:
    """File-backed SQLite engine migrated via Alembic (per test).

    A temp *file* (not :memory:) is used so the schema created by
    `alembic upgrade head` persists across connections.

    Yields:
        Engine: SQLAlchemy engine pointing at a temp file DB.
    """
    command.upgrade(config.build_alembic_config(sqlite_url_file), "head")
    test_engine = make_engine(sqlite_url_file)
    try:
        yield test_engine
    finally:
        test_engine.dispose()
