"""
Record operations for the produce ledger.

Each operation takes the store handle as its first argument, validates its
inputs, and either returns a payload or raises a `LedgerError` subclass.
Nothing here retries or recovers; a failed operation leaves the store exactly
as the last successful put left it.

Usage:
    from produce_ledger.infrastructure import InMemoryStore
    from produce_ledger.operations import seed_initial_data, read_record

    store = InMemoryStore()
    seed_initial_data(store)
    read_record(store, "1")
"""

from __future__ import annotations

import json
import re
from typing import List, Tuple

from produce_ledger.domain.codec import decode, encode
from produce_ledger.domain.errors import DuplicateKey, InvalidKey, NotFound
from produce_ledger.domain.models import ProduceRecord
from produce_ledger.domain.seed import seed_entries
from produce_ledger.infrastructure.store import KeyValueStore
from produce_ledger.utils.logging import get_logger

log = get_logger(__name__)

# Lexicographic bounds of the full-ledger scan. "10" sorts before "2" and keys
# at or past "999" (e.g. "9999") are never visited.
SCAN_START_KEY = "0"
SCAN_END_KEY = "999"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def validate_key(key: str) -> int:
    """
    Return the integer value of a ledger key or raise `InvalidKey`.

    Accepts an optional sign followed by decimal digits within the signed
    64-bit range; whitespace, underscores and other digit forms are rejected.
    """
    if not _INT_PATTERN.fullmatch(key):
        raise InvalidKey(key)
    value = int(key)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise InvalidKey(key)
    return value


def create_record(store: KeyValueStore, key: str, record: ProduceRecord) -> None:
    """
    Persist a new record under `key`.

    Raises
    ------
    InvalidKey
        If the key is not a well-formed integer.
    DuplicateKey
        If the key already holds a record, including one written by a
        concurrent create between the existence check and the insert.
    InvalidField
        If weight or organic do not convert to their native types.
    StoreWriteError
        If the underlying insert fails.
    """
    validate_key(key)
    if store.get(key) is not None:
        raise DuplicateKey(key)
    record.validate_typed_fields()
    if not store.put_if_absent(key, encode(record)):
        raise DuplicateKey(key)
    log.info("Produce recorded", extra={"key": key, "product": record.product, "holder": record.holder})


def read_record(store: KeyValueStore, key: str) -> bytes:
    """Return the raw serialized record stored under `key`."""
    value = store.get(key)
    if value is None:
        raise NotFound(key)
    return value


def _scan(store: KeyValueStore, start_key: str, end_key: str) -> List[Tuple[str, bytes]]:
    # Materialized before use so a failure mid-scan yields no partial result.
    entries = list(store.range_scan(start_key, end_key))
    log.debug(
        "Range scan complete",
        extra={"start_key": start_key, "end_key": end_key, "entries": len(entries)},
    )
    return entries


def read_all_records(
    store: KeyValueStore,
    start_key: str = SCAN_START_KEY,
    end_key: str = SCAN_END_KEY,
) -> bytes:
    """
    Return every record in [start_key, end_key) as one JSON array.

    Each element is `{"Key": <key>, "Record": <stored JSON>}`; the stored bytes
    are embedded as-is rather than re-serialized.
    """
    members = [
        b'{"Key":' + json.dumps(key).encode("utf-8") + b',"Record":' + value + b"}"
        for key, value in _scan(store, start_key, end_key)
    ]
    return b"[" + b",".join(members) + b"]"


def list_records(
    store: KeyValueStore,
    start_key: str = SCAN_START_KEY,
    end_key: str = SCAN_END_KEY,
) -> List[Tuple[str, ProduceRecord]]:
    """Decoded variant of `read_all_records` for in-process callers."""
    return [(key, decode(value)) for key, value in _scan(store, start_key, end_key)]


def transfer_holder(store: KeyValueStore, key: str, new_holder: str) -> None:
    """
    Hand the record under `key` to `new_holder`, leaving every other field as is.

    Transferring to the current holder is allowed and rewrites the same bytes.
    """
    current = decode(read_record(store, key))
    store.put(key, encode(current.with_holder(new_holder)))
    log.info(
        "Produce holder changed",
        extra={"key": key, "previous_holder": current.holder, "holder": new_holder},
    )


def seed_initial_data(store: KeyValueStore) -> None:
    """Write the sample records under "1".."5", overwriting whatever is there."""
    for key, record in seed_entries():
        store.put(key, encode(record))
        log.info("Added to the ledger", extra={"key": key, "product": record.product})


__all__ = [
    "SCAN_START_KEY",
    "SCAN_END_KEY",
    "validate_key",
    "create_record",
    "read_record",
    "read_all_records",
    "list_records",
    "transfer_holder",
    "seed_initial_data",
]
