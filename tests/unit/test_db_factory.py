from __future__ import annotations

from typing import Any, List

import psycopg
import pytest
from typer.testing import CliRunner

from produce_ledger import main as cli
from produce_ledger.config import Settings
from produce_ledger.infrastructure import db_factory

EXPECTED_ATTEMPTS = 3


class _FakeConnection:
    def __init__(self) -> None:
        self.statements: List[Any] = []

    def __enter__(self) -> "_FakeConnection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        del exc_type, exc, tb

    def execute(self, statement: Any, params: Any = None) -> None:
        self.statements.append(statement)


@pytest.fixture
def no_retry_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(db_factory.get_sync_connection.retry, "sleep", lambda _seconds: None)


def test_build_dsn_from_settings() -> None:
    settings = Settings(db_user="ledger", db_password="secret", db_host="db", db_port=6543, db_name="farm")
    assert db_factory.build_dsn(settings) == "postgresql://ledger:secret@db:6543/farm"


def test_get_sync_connection_retries_transient_errors(
    monkeypatch: pytest.MonkeyPatch, no_retry_sleep: None
) -> None:
    attempts: List[str] = []
    connection = _FakeConnection()

    def _connect(dsn: str) -> _FakeConnection:
        attempts.append(dsn)
        if len(attempts) < EXPECTED_ATTEMPTS:
            raise psycopg.OperationalError("server starting up")
        return connection

    monkeypatch.setattr(db_factory.psycopg, "connect", _connect)

    assert db_factory.get_sync_connection("postgresql://x@y/z") is connection
    assert len(attempts) == EXPECTED_ATTEMPTS


def test_get_sync_connection_gives_up_after_three_attempts(
    monkeypatch: pytest.MonkeyPatch, no_retry_sleep: None
) -> None:
    attempts: List[str] = []

    def _connect(dsn: str) -> _FakeConnection:
        attempts.append(dsn)
        raise psycopg.OperationalError("connection refused")

    monkeypatch.setattr(db_factory.psycopg, "connect", _connect)

    with pytest.raises(psycopg.OperationalError):
        db_factory.get_sync_connection("postgresql://x@y/z")
    assert len(attempts) == EXPECTED_ATTEMPTS


def test_init_db_creates_table(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORE_BACKEND", "postgres")
    monkeypatch.setenv("DB_SCHEMA", "ledger")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    connection = _FakeConnection()
    monkeypatch.setattr(db_factory, "get_sync_connection", lambda: connection)

    result = CliRunner().invoke(cli.app, ["init-db"])

    assert result.exit_code == 0
    assert "Ledger table ready." in result.output
    assert len(connection.statements) == 1
