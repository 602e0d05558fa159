from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.table import Table

from produce_ledger.domain.errors import InvalidField
from produce_ledger.domain.models import ProduceRecord


def _total_weight(records: List[Tuple[str, ProduceRecord]]) -> Optional[Decimal]:
    """Sum record weights, or None if any weight is not a decimal."""
    total = Decimal("0")
    for _, record in records:
        try:
            total += record.weight_value
        except InvalidField:
            return None
    return total


def print_records(records: List[Tuple[str, ProduceRecord]], console: Optional[Console] = None) -> None:
    """
    Render ledger entries as a rich table, in scan order.
    """
    console = console or Console()

    if not records:
        console.print("[yellow]No produce recorded in the scanned key range.[/yellow]")
        return

    total = _total_weight(records)
    caption = f"{len(records)} record(s)"
    if total is not None:
        caption = f"{caption} │ total weight {total:,.2f}"

    table = Table(
        title="Produce Ledger",
        box=box.ROUNDED,
        caption=caption,
    )

    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Product", style="magenta")
    table.add_column("Weight", justify="right", style="green")
    table.add_column("Organic", justify="center", style="bold green")
    table.add_column("Location", style="yellow")
    table.add_column("Timestamp", style="dim")
    table.add_column("Holder", style="bold blue")

    for key, record in records:
        table.add_row(
            key,
            record.product,
            record.weight,
            record.organic,
            record.location,
            record.timestamp,
            record.holder,
        )

    console.print(table)


__all__ = ["print_records"]
