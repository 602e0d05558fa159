"""
Sample records written by the `initLedger` command.

Keys are assigned sequentially from "1" in list order.
"""

from __future__ import annotations

from typing import List, Tuple

from produce_ledger.domain.models import ProduceRecord

SEED_RECORDS: Tuple[ProduceRecord, ...] = (
    ProduceRecord(
        product="Chicken",
        weight="1400.00",
        organic="true",
        location="67.0006, -70.5476",
        timestamp="Fri Jun 22 2018 11:02:01 GMT+0530 (India Standard Time)",
        holder="Sakya",
    ),
    ProduceRecord(
        product="Beef",
        weight="1000.00",
        organic="false",
        location="91.2395, -49.4594",
        timestamp="Fri Jan 11 2019 12:01:01 GMT+0800 (Singapore Standard Time)",
        holder="Ilya",
    ),
    ProduceRecord(
        product="Pork",
        weight="1200.00",
        organic="false",
        location="58.0148, 59.01391",
        timestamp="Fri Jan 11 2019 12:05:21 GMT+0800 (Singapore Standard Time)",
        holder="Dan",
    ),
    ProduceRecord(
        product="Salmon",
        weight="1500.00",
        organic="true",
        location="-45.0945, 0.7949",
        timestamp="Wed Mar 13 2019 10:05:01 GMT+0800 (Singapore Standard Time)",
        holder="George",
    ),
    ProduceRecord(
        product="Salmon",
        weight="2400.00",
        organic="true",
        location="-107.6043, 19.5003",
        timestamp="Fri Mar 15 2019 20:00:01 GMT+0800 (Singapore Standard Time)",
        holder="John",
    ),
)


def seed_entries() -> List[Tuple[str, ProduceRecord]]:
    """Pair each seed record with its ledger key ("1", "2", ...)."""
    return [(str(index), record) for index, record in enumerate(SEED_RECORDS, start=1)]


__all__ = ["SEED_RECORDS", "seed_entries"]
