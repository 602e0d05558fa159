"""
Synthetic produce generator for the produce ledger.

Implements deterministic pseudo-random record generation, optional CSV
emission, and loading through the `recordProduce` command so every generated
row passes the same validation as a real invocation.
"""

from __future__ import annotations

import csv
import random
import sys
import time
from datetime import UTC, datetime, timedelta
from pathlib import Path

import typer

from produce_ledger.config import get_settings
from produce_ledger.dispatcher import Dispatcher
from produce_ledger.infrastructure import build_store
from produce_ledger.utils.logging import configure_logging

app = typer.Typer(help="Generate synthetic produce records and load them into the ledger.")

PRODUCTS = ["Chicken", "Beef", "Pork", "Salmon", "Wheat", "Rice", "Apples", "Milk"]
HOLDERS = ["Sakya", "Ilya", "Dan", "George", "John", "Alice", "Bob"]
CSV_HEADER = ["key", "product", "weight", "organic", "location", "timestamp", "holder"]


def _generate_rows(rows: int, start_key: int, seed: int) -> list[list[str]]:
    """Return `recordProduce` argument lists for keys start_key, start_key+1, ..."""
    rng = random.Random(seed)
    base_time = datetime(2019, 1, 1, tzinfo=UTC)
    generated: list[list[str]] = []
    for offset in range(rows):
        timestamp = base_time + timedelta(minutes=rng.randint(0, 525_600))
        generated.append(
            [
                str(start_key + offset),
                rng.choice(PRODUCTS),
                f"{rng.uniform(100, 5_000):.2f}",
                "true" if rng.random() < 0.5 else "false",
                f"{rng.uniform(-90, 90):.4f}, {rng.uniform(-180, 180):.4f}",
                timestamp.isoformat(),
                rng.choice(HOLDERS),
            ]
        )
    return generated


def _write_csv(csv_path: Path, rows: list[list[str]]) -> None:
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        writer.writerows(rows)


@app.command()
def main(
    rows: int = typer.Option(
        100,
        "--rows",
        "-r",
        help="Number of records to generate.",
    ),
    start_key: int = typer.Option(
        6,
        "--start-key",
        "-k",
        help="First ledger key; keys 1-5 are reserved for the seed data.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Optional CSV output path.",
    ),
    no_load: bool = typer.Option(
        False,
        "--no-load",
        help="Only generate; skip writing into the ledger.",
    ),
) -> None:
    """
    Generate synthetic produce and optionally record it in the PostgreSQL ledger.
    """
    settings = get_settings()
    configure_logging(level="WARNING", json_logs=settings.log_json)

    if not no_load and settings.store_backend != "postgres":
        typer.echo(
            "Loading requires STORE_BACKEND=postgres; pass --no-load to only generate.",
            err=True,
        )
        raise typer.Exit(code=2)

    start = time.perf_counter()
    generated = _generate_rows(rows, start_key=start_key, seed=seed)
    typer.echo(f"Generated {rows:,} records from key {start_key} (seed={seed})")

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        _write_csv(output, generated)
        typer.echo(f"CSV written to {output}")

    if no_load:
        typer.echo("Skipping load (no-load flag set).")
        return

    dispatcher = Dispatcher.from_settings(settings)
    store = build_store(settings)
    failures = 0
    for args in generated:
        response = dispatcher.dispatch(store, "recordProduce", args)
        if not response.ok:
            failures += 1
            typer.echo(f"key {args[0]}: {response.error}: {response.message}", err=True)

    duration = time.perf_counter() - start
    typer.echo(
        f"Recorded {rows - failures:,}/{rows:,} records in {duration:.2f}s "
        f"(store={settings.store_backend})."
    )
    if failures:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
