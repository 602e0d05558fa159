"""
Ordered key-value store contract and the in-memory backend.

Record operations only ever talk to a `KeyValueStore`: point get, point put,
insert-if-absent, and a lexicographic range scan (start inclusive, end
exclusive). Backends are expected to make each call atomic and immediately
visible to later calls.
"""

from __future__ import annotations

import bisect
import threading
from typing import Dict, Iterator, List, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Common interface for ledger storage backends.

    Implementations raise `StoreReadError` / `StoreWriteError` for failures of
    the underlying medium; a missing key is not a failure and yields None.
    """

    def get(self, key: str) -> Optional[bytes]:
        ...

    def put(self, key: str, value: bytes) -> None:
        ...

    def put_if_absent(self, key: str, value: bytes) -> bool:
        """
        Insert only if `key` is unset; return False when it already exists.

        The existence check and the insert are one atomic step, so of several
        concurrent inserts on the same key exactly one returns True.
        """
        ...

    def range_scan(self, start_key: str, end_key: str) -> Iterator[Tuple[str, bytes]]:
        """
        Yield (key, value) pairs with start_key <= key < end_key in key order.
        """
        ...


class InMemoryStore(KeyValueStore):
    """
    Process-local ordered store backed by a dict and a sorted key list.

    Range scans snapshot the matching entries under the lock when called; puts
    made after that are not visible to the returned iterator.
    """

    def __init__(self, initial: Optional[Dict[str, bytes]] = None) -> None:
        self._lock = threading.Lock()
        self._values: Dict[str, bytes] = {key: bytes(value) for key, value in (initial or {}).items()}
        self._keys: List[str] = sorted(self._values)

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            return self._values.get(key)

    def put(self, key: str, value: bytes) -> None:
        with self._lock:
            if key not in self._values:
                bisect.insort(self._keys, key)
            self._values[key] = bytes(value)

    def put_if_absent(self, key: str, value: bytes) -> bool:
        with self._lock:
            if key in self._values:
                return False
            bisect.insort(self._keys, key)
            self._values[key] = bytes(value)
            return True

    def range_scan(self, start_key: str, end_key: str) -> Iterator[Tuple[str, bytes]]:
        with self._lock:
            lo = bisect.bisect_left(self._keys, start_key)
            hi = bisect.bisect_left(self._keys, end_key)
            snapshot = [(key, self._values[key]) for key in self._keys[lo:hi]]
        return iter(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)


__all__ = ["KeyValueStore", "InMemoryStore"]
