"""
Infrastructure package for the produce ledger.

Centralizes the key-value store contract and its backends (in-memory and
PostgreSQL). Keep this layer focused on I/O and resource management, decoupled
from record operations and command dispatch.
"""

from __future__ import annotations

from typing import Optional

from produce_ledger.config import Settings, get_settings
from produce_ledger.infrastructure.store import InMemoryStore, KeyValueStore


def build_store(settings: Optional[Settings] = None) -> KeyValueStore:
    """
    Instantiate the backend selected by `settings.store_backend`.
    """
    settings = settings or get_settings()
    if settings.store_backend == "postgres":
        from produce_ledger.infrastructure.postgres_store import PostgresStore

        return PostgresStore(schema=settings.db_schema)
    return InMemoryStore()


__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "build_store",
]
