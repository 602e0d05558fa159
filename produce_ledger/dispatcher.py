"""
Command dispatcher: the single entry point for ledger invocations.

The routing table maps each command type to its handler and is built once per
dispatcher; the store handle is passed explicitly on every call so a dispatcher
can be shared freely. Ledger errors are turned into failed `Response`s here and
nowhere else.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence, Type

from pydantic import BaseModel

from produce_ledger.commands import (
    ChangeProduceHolder,
    Command,
    InitLedger,
    QueryAllProduce,
    QueryProduce,
    RecordProduce,
    parse_command,
)
from produce_ledger.config import Settings, get_settings
from produce_ledger.domain.errors import LedgerError
from produce_ledger.infrastructure.store import KeyValueStore
from produce_ledger.operations import (
    SCAN_END_KEY,
    SCAN_START_KEY,
    create_record,
    read_all_records,
    read_record,
    seed_initial_data,
    transfer_holder,
)
from produce_ledger.utils.logging import get_logger

log = get_logger(__name__)

Handler = Callable[[KeyValueStore, Command], bytes]


class Response(BaseModel):
    """
    Uniform outcome of one command: a payload on success, an error otherwise.
    """

    ok: bool
    payload: bytes = b""
    error: Optional[str] = None
    message: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def success(cls, payload: bytes = b"") -> "Response":
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, exc: LedgerError) -> "Response":
        return cls(ok=False, error=exc.code, message=exc.message)

    @property
    def text(self) -> str:
        return self.payload.decode("utf-8")


def _record_produce(store: KeyValueStore, command: RecordProduce) -> bytes:
    create_record(store, command.key, command.record)
    return b""


def _change_holder(store: KeyValueStore, command: ChangeProduceHolder) -> bytes:
    transfer_holder(store, command.key, command.new_holder)
    return b""


def _init_ledger(store: KeyValueStore, command: InitLedger) -> bytes:
    seed_initial_data(store)
    return b""


class Dispatcher:
    """
    Routes typed commands to record operations.

    Parameters
    ----------
    scan_start_key, scan_end_key : str
        Bounds used by `queryAllProduce`.
    """

    def __init__(self, scan_start_key: str = SCAN_START_KEY, scan_end_key: str = SCAN_END_KEY) -> None:
        self.scan_start_key = scan_start_key
        self.scan_end_key = scan_end_key
        self._routes: Mapping[Type[Command], Handler] = MappingProxyType(
            {
                InitLedger: _init_ledger,
                RecordProduce: _record_produce,
                QueryProduce: lambda store, command: read_record(store, command.key),
                QueryAllProduce: lambda store, command: read_all_records(
                    store, self.scan_start_key, self.scan_end_key
                ),
                ChangeProduceHolder: _change_holder,
            }
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Dispatcher":
        settings = settings or get_settings()
        return cls(scan_start_key=settings.scan_start_key, scan_end_key=settings.scan_end_key)

    def execute(self, store: KeyValueStore, command: Command) -> bytes:
        """Run an already-parsed command; ledger errors propagate."""
        return self._routes[type(command)](store, command)

    def dispatch(self, store: KeyValueStore, name: str, args: Sequence[str]) -> Response:
        """
        Parse and run one command, returning a success or failure `Response`.
        """
        log.debug("Dispatching command", extra={"command": name, "arg_count": len(args)})
        try:
            command = parse_command(name, args)
            payload = self.execute(store, command)
        except LedgerError as exc:
            log.warning(
                f"[COMMAND FAILED] {name}: {exc.message}",
                extra={"command": name, "error": exc.code},
            )
            return Response.failure(exc)
        return Response.success(payload)


__all__ = ["Dispatcher", "Response"]
