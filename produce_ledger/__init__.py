"""
Produce Ledger - provenance records for physical goods on an ordered key-value store.

This package provides the record lifecycle for produce custody tracking:

- Creating records under integer keys with uniqueness enforcement
- Point lookups and full-range enumeration
- Custody (holder) transfers
- Seeding a fixed set of sample records

Commands arrive as a name plus positional string arguments and are routed by a
`Dispatcher` to record operations running against a pluggable store backend
(in-memory or PostgreSQL).
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "Apache-2.0"

# Public API exports
from produce_ledger.commands import available_commands, parse_command
from produce_ledger.config import Settings, get_settings
from produce_ledger.dispatcher import Dispatcher, Response
from produce_ledger.domain import LedgerError, ProduceRecord, decode, encode
from produce_ledger.infrastructure import InMemoryStore, KeyValueStore, build_store
from produce_ledger.operations import (
    create_record,
    list_records,
    read_all_records,
    read_record,
    seed_initial_data,
    transfer_holder,
)
from produce_ledger.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Dispatch
    "Dispatcher",
    "Response",
    "available_commands",
    "parse_command",
    # Domain
    "ProduceRecord",
    "LedgerError",
    "encode",
    "decode",
    # Stores
    "KeyValueStore",
    "InMemoryStore",
    "build_store",
    # Operations
    "create_record",
    "read_record",
    "read_all_records",
    "list_records",
    "transfer_holder",
    "seed_initial_data",
    # Logging
    "configure_logging",
    "get_logger",
]
