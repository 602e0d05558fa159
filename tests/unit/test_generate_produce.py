from __future__ import annotations

import csv
from pathlib import Path

from typer.testing import CliRunner

from produce_ledger.dispatcher import Dispatcher
from produce_ledger.infrastructure.store import InMemoryStore
from scripts import generate_produce

ROWS = 12


def test_generate_rows_is_deterministic() -> None:
    first = generate_produce._generate_rows(ROWS, start_key=6, seed=123)
    second = generate_produce._generate_rows(ROWS, start_key=6, seed=123)

    assert first == second
    assert [row[0] for row in first] == [str(key) for key in range(6, 6 + ROWS)]
    assert all(len(row) == 7 for row in first)


def test_generated_rows_pass_record_produce(store: InMemoryStore, dispatcher: Dispatcher) -> None:
    for args in generate_produce._generate_rows(ROWS, start_key=100, seed=7):
        assert dispatcher.dispatch(store, "recordProduce", args).ok

    assert len(store) == ROWS


def test_main_writes_csv_without_loading(tmp_path: Path) -> None:
    csv_path = tmp_path / "out" / "produce.csv"

    result = CliRunner().invoke(
        generate_produce.app, ["--rows", "3", "--no-load", "--output", str(csv_path)]
    )

    assert result.exit_code == 0
    with csv_path.open("r", newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    # header + 3 rows
    assert len(rows) == 4
    assert rows[0] == generate_produce.CSV_HEADER


def test_main_refuses_to_load_into_memory_store(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("STORE_BACKEND", "memory")
    csv_path = tmp_path / "produce.csv"

    result = CliRunner().invoke(generate_produce.app, ["--rows", "3", "--output", str(csv_path)])

    assert result.exit_code == 2
    assert "STORE_BACKEND=postgres" in result.output
    assert not csv_path.exists()
