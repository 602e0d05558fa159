from __future__ import annotations

import sys
from typing import List, Optional

import psycopg
import typer

from produce_ledger.commands import available_commands
from produce_ledger.config import Settings, get_settings
from produce_ledger.dispatcher import Dispatcher
from produce_ledger.domain.errors import LedgerError
from produce_ledger.infrastructure import build_store, db_factory
from produce_ledger.infrastructure.postgres_store import create_ledger_table
from produce_ledger.operations import list_records
from produce_ledger.reporter import print_records
from produce_ledger.utils.logging import configure_logging

app = typer.Typer(help="Produce provenance ledger CLI.")


def _configure() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


def _require_postgres(settings: Settings, action: str) -> None:
    """
    Exit with code 2 unless ledger state outlives this process.
    """
    if settings.store_backend != "postgres":
        typer.echo(
            f"{action} requires STORE_BACKEND=postgres; the memory store is discarded when the process exits.",
            err=True,
        )
        raise typer.Exit(code=2)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"store={settings.store_backend} | "
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} "
        f"schema={settings.db_schema} | "
        f"scan=[{settings.scan_start_key!r}, {settings.scan_end_key!r})"
    )
    typer.echo("Commands: " + ", ".join(available_commands()))


@app.command("init-db")
def init_db() -> None:
    """
    Create the ledger table in PostgreSQL (STORE_BACKEND=postgres only).
    """
    _configure()
    settings = get_settings()
    _require_postgres(settings, "init-db")
    try:
        with db_factory.get_sync_connection() as conn:
            create_ledger_table(conn, settings.db_schema)
    except psycopg.Error as exc:
        typer.echo(f"Failed to create ledger table: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo("Ledger table ready.")


@app.command(context_settings={"ignore_unknown_options": True})
def invoke(
    command: str = typer.Argument(..., help="Ledger command, e.g. queryProduce."),
    args: Optional[List[str]] = typer.Argument(None, help="Positional command arguments."),
) -> None:
    """
    Dispatch one ledger command and print its payload.
    """
    _configure()
    settings = get_settings()
    _require_postgres(settings, "invoke")
    response = Dispatcher.from_settings(settings).dispatch(build_store(settings), command, args or [])
    if not response.ok:
        typer.echo(f"{response.error}: {response.message}", err=True)
        raise typer.Exit(code=1)
    if response.payload:
        typer.echo(response.text)
    else:
        typer.echo("OK")


@app.command()
def show() -> None:
    """
    Render every record in the configured scan range as a table.
    """
    _configure()
    settings = get_settings()
    _require_postgres(settings, "show")
    try:
        records = list_records(build_store(settings), settings.scan_start_key, settings.scan_end_key)
    except LedgerError as exc:
        typer.echo(f"{exc.code}: {exc.message}", err=True)
        raise typer.Exit(code=1)
    print_records(records)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
