"""
Pytest configuration for the produce ledger.

Provides fixtures for:
- In-memory stores (empty and seeded)
- Dispatcher and sample record construction
- PostgreSQL connectivity for integration tests
"""

from __future__ import annotations

import os
from typing import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from produce_ledger.config import Settings, get_settings
from produce_ledger.dispatcher import Dispatcher
from produce_ledger.domain.models import ProduceRecord
from produce_ledger.infrastructure.postgres_store import PostgresStore
from produce_ledger.infrastructure.store import InMemoryStore
from produce_ledger.operations import seed_initial_data

TEST_TABLE = "world_state_test"


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """
    Drop the cached Settings around each test so env overrides take effect.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def seeded_store(store: InMemoryStore) -> InMemoryStore:
    seed_initial_data(store)
    return store


@pytest.fixture
def dispatcher() -> Dispatcher:
    return Dispatcher()


@pytest.fixture
def wheat_record() -> ProduceRecord:
    return ProduceRecord(
        product="Wheat",
        weight="800.00",
        organic="true",
        location="10.0,20.0",
        timestamp="2020-01-01T00:00:00Z",
        holder="Alice",
    )


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        store_backend="postgres",
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "produce_ledger"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            conn.execute("SELECT 1;").fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_pool(test_dsn: str, db_connection_available: bool) -> Generator[ConnectionPool, None, None]:
    """
    Session-scoped connection pool for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    pool = ConnectionPool(conninfo=test_dsn, min_size=1, max_size=4, open=True)
    try:
        yield pool
    finally:
        pool.close()


@pytest.fixture
def pg_store(db_pool: ConnectionPool) -> Generator[PostgresStore, None, None]:
    """
    PostgresStore over a dedicated table, emptied before and dropped after each test.
    """
    pg = PostgresStore(pool=db_pool, schema="public", table=TEST_TABLE)
    pg.ensure_schema()
    with db_pool.connection() as conn:
        conn.execute(f"TRUNCATE TABLE public.{TEST_TABLE};")
    yield pg
    with db_pool.connection() as conn:
        conn.execute(f"DROP TABLE IF EXISTS public.{TEST_TABLE};")
