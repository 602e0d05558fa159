"""
PostgreSQL-backed ledger store.

Ledger state lives in a single two-column table. The key column uses the "C"
collation so that range scans follow bytewise lexicographic order, the same
order the in-memory backend uses.
"""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

import psycopg
from psycopg import sql
from psycopg_pool import ConnectionPool

from produce_ledger.config import get_settings
from produce_ledger.domain.errors import StoreReadError, StoreWriteError
from produce_ledger.infrastructure.db_factory import get_sync_pool
from produce_ledger.infrastructure.store import KeyValueStore
from produce_ledger.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_TABLE = "world_state"


def create_ledger_table(conn: psycopg.Connection, schema: str, table: str = DEFAULT_TABLE) -> None:
    """
    Create `<schema>.<table>` if missing. The caller owns commit/rollback.
    """
    conn.execute(
        sql.SQL(
            'CREATE TABLE IF NOT EXISTS {} (key TEXT COLLATE "C" PRIMARY KEY, value BYTEA NOT NULL)'
        ).format(sql.Identifier(schema, table))
    )
    log.info("Ledger table ready", extra={"schema": schema, "table": table})


class PostgresStore(KeyValueStore):
    """
    Key-value store over a psycopg ConnectionPool.

    Every call borrows one pooled connection for the duration of that call;
    the pool commits on clean exit and rolls back on error.
    """

    def __init__(
        self,
        pool: Optional[ConnectionPool] = None,
        schema: Optional[str] = None,
        table: str = DEFAULT_TABLE,
        scan_batch_size: int = 500,
    ) -> None:
        self._pool = pool
        self.schema = schema or get_settings().db_schema
        self.table = table
        self.scan_batch_size = scan_batch_size
        self._ident = sql.Identifier(self.schema, self.table)

    def _get_pool(self) -> ConnectionPool:
        if self._pool is None:
            self._pool = get_sync_pool()
        return self._pool

    def ensure_schema(self) -> None:
        """Create the state table through the pool if it does not exist yet."""
        try:
            with self._get_pool().connection() as conn:
                create_ledger_table(conn, self.schema, self.table)
        except psycopg.Error as exc:
            raise StoreWriteError(f"Failed to create ledger table {self.schema}.{self.table}: {exc}") from exc

    def get(self, key: str) -> Optional[bytes]:
        statement = sql.SQL("SELECT value FROM {} WHERE key = %s").format(self._ident)
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(statement, (key,)).fetchone()
        except psycopg.Error as exc:
            raise StoreReadError(f"Failed to read key {key}: {exc}") from exc
        return bytes(row[0]) if row else None

    def put(self, key: str, value: bytes) -> None:
        statement = sql.SQL(
            "INSERT INTO {} (key, value) VALUES (%s, %s) "
            "ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value"
        ).format(self._ident)
        try:
            with self._get_pool().connection() as conn:
                conn.execute(statement, (key, value))
        except psycopg.Error as exc:
            raise StoreWriteError(f"Failed to write key {key}: {exc}") from exc

    def put_if_absent(self, key: str, value: bytes) -> bool:
        statement = sql.SQL(
            "INSERT INTO {} (key, value) VALUES (%s, %s) ON CONFLICT (key) DO NOTHING"
        ).format(self._ident)
        try:
            with self._get_pool().connection() as conn:
                cur = conn.execute(statement, (key, value))
                inserted = cur.rowcount == 1
        except psycopg.Error as exc:
            raise StoreWriteError(f"Failed to insert key {key}: {exc}") from exc
        return inserted

    def range_scan(self, start_key: str, end_key: str) -> Iterator[Tuple[str, bytes]]:
        statement = sql.SQL(
            "SELECT key, value FROM {} WHERE key >= %s AND key < %s ORDER BY key"
        ).format(self._ident)
        try:
            with self._get_pool().connection() as conn:
                # Named cursor keeps the scan server-side and streams in batches.
                with conn.cursor(name="ledger_range_scan") as cur:
                    cur.execute(statement, (start_key, end_key))
                    while True:
                        batch = cur.fetchmany(self.scan_batch_size)
                        if not batch:
                            break
                        for key, value in batch:
                            yield key, bytes(value)
        except psycopg.Error as exc:
            raise StoreReadError(f"Range scan [{start_key}, {end_key}) failed: {exc}") from exc


__all__ = ["PostgresStore", "DEFAULT_TABLE", "create_ledger_table"]
