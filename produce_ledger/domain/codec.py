"""
Byte codec for produce records.

Records are persisted as compact UTF-8 JSON objects whose keys follow the
declaration order of `ProduceRecord`, so equal records always encode to equal
bytes.
"""

from __future__ import annotations

from pydantic import ValidationError

from produce_ledger.domain.errors import DecodeError
from produce_ledger.domain.models import ProduceRecord


def encode(record: ProduceRecord) -> bytes:
    return record.model_dump_json().encode("utf-8")


def decode(data: bytes) -> ProduceRecord:
    """
    Parse stored bytes into a `ProduceRecord`.

    Missing fields fall back to empty strings and unknown fields are dropped.
    Anything that is not a JSON object of string fields raises `DecodeError`.
    """
    try:
        return ProduceRecord.model_validate_json(data)
    except ValidationError as exc:
        raise DecodeError(f"Stored produce record is malformed: {exc.error_count()} error(s)") from exc


__all__ = ["encode", "decode"]
