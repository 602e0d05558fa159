"""
Domain package for the produce ledger.

Exports the record model, its byte codec, the seed data and the error
taxonomy. Keep this package free of store and transport concerns.
"""

from produce_ledger.domain.codec import decode, encode
from produce_ledger.domain.errors import (
    DecodeError,
    DuplicateKey,
    InvalidArgumentCount,
    InvalidField,
    InvalidKey,
    LedgerError,
    NotFound,
    StoreError,
    StoreReadError,
    StoreWriteError,
    UnknownCommand,
)
from produce_ledger.domain.models import ProduceRecord
from produce_ledger.domain.seed import SEED_RECORDS, seed_entries

__all__ = [
    "ProduceRecord",
    "encode",
    "decode",
    "SEED_RECORDS",
    "seed_entries",
    "LedgerError",
    "InvalidArgumentCount",
    "InvalidKey",
    "InvalidField",
    "DuplicateKey",
    "NotFound",
    "DecodeError",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
    "UnknownCommand",
]
