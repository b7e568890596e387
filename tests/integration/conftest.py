import os
import uuid
from collections.abc import Generator
from datetime import datetime, timezone
from typing import Any

import psycopg
import pytest

from app.config.settings import Settings
from app.database.connection import close_pool, get_connection, init_pool
from app.database.schema import ensure_schema
from app.ingestion.hasher import compute_fingerprint
from app.ingestion.models import ScannedFile


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "pdfscan_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        ensure_schema()
    except Exception as e:
        close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[int], None, None]:
    """Collects document ids to delete; results go with them via cascade."""
    cleanup: list[int] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        conn.execute("DELETE FROM documents WHERE id = ANY(%s)", (cleanup,))
        conn.commit()


@pytest.fixture
def scanned_file() -> ScannedFile:
    """A candidate with unique content so runs never collide on fingerprint."""
    content = f"%PDF-1.4 integration {uuid.uuid4()}".encode()
    now = datetime.now(timezone.utc)
    return ScannedFile(
        file_name="integration.pdf",
        file_path="/tmp/integration.pdf",
        content=content,
        file_size=len(content),
        fingerprint=compute_fingerprint(content),
        created_at=now,
        modified_at=now,
    )
