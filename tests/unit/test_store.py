from __future__ import annotations

import threading

from produce_ledger.config import Settings
from produce_ledger.infrastructure import build_store
from produce_ledger.infrastructure.postgres_store import PostgresStore
from produce_ledger.infrastructure.store import InMemoryStore, KeyValueStore

WRITER_THREADS = 8
KEYS_PER_THREAD = 50


def test_get_missing_key_returns_none(store: InMemoryStore) -> None:
    assert store.get("1") is None


def test_put_overwrites_in_place(store: InMemoryStore) -> None:
    store.put("1", b"a")
    store.put("1", b"b")

    assert store.get("1") == b"b"
    assert len(store) == 1


def test_range_scan_is_start_inclusive_end_exclusive() -> None:
    store = InMemoryStore({key: key.encode() for key in ["0", "1", "5", "9", "999", "9990"]})

    assert [key for key, _ in store.range_scan("1", "9")] == ["1", "5"]
    assert [key for key, _ in store.range_scan("0", "999")] == ["0", "1", "5", "9"]


def test_range_scan_is_a_snapshot(store: InMemoryStore) -> None:
    store.put("1", b"one")
    scan = store.range_scan("0", "9")

    store.put("2", b"two")

    assert list(scan) == [("1", b"one")]


def test_concurrent_puts_keep_keys_sorted(store: InMemoryStore) -> None:
    def _writer(offset: int) -> None:
        for index in range(KEYS_PER_THREAD):
            store.put(f"{offset}-{index:03d}", b"x")

    threads = [threading.Thread(target=_writer, args=(n,)) for n in range(WRITER_THREADS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    keys = [key for key, _ in store.range_scan("", "~")]
    assert len(keys) == WRITER_THREADS * KEYS_PER_THREAD
    assert keys == sorted(keys)


def test_backends_satisfy_store_protocol() -> None:
    assert isinstance(InMemoryStore(), KeyValueStore)
    assert isinstance(PostgresStore(pool=object(), schema="public"), KeyValueStore)  # type: ignore[arg-type]


def test_build_store_selects_backend() -> None:
    assert isinstance(build_store(Settings(store_backend="memory")), InMemoryStore)

    pg = build_store(Settings(store_backend="postgres", db_schema="ledger"))
    assert isinstance(pg, PostgresStore)
    assert pg.schema == "ledger"


def test_put_if_absent_never_overwrites(store: InMemoryStore) -> None:
    assert store.put_if_absent("6", b"first") is True
    assert store.put_if_absent("6", b"second") is False

    assert store.get("6") == b"first"
    assert [key for key, _ in store.range_scan("0", "999")] == ["6"]


def test_concurrent_put_if_absent_admits_one_writer(store: InMemoryStore) -> None:
    results: list[bool] = []
    start = threading.Barrier(WRITER_THREADS)

    def _insert(n: int) -> None:
        start.wait()
        results.append(store.put_if_absent("6", str(n).encode()))

    threads = [threading.Thread(target=_insert, args=(n,)) for n in range(WRITER_THREADS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1
    assert len(store) == 1
