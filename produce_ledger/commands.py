"""
Typed ledger commands.

Incoming requests are a command name plus positional string arguments. They are
decoded once, here, into one of five frozen command types; everything past
this point works with typed fields instead of argument positions.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar, Mapping, Sequence, Type, Union

from produce_ledger.domain.errors import InvalidArgumentCount, UnknownCommand
from produce_ledger.domain.models import ProduceRecord


@dataclass(frozen=True)
class InitLedger:
    name: ClassVar[str] = "initLedger"
    arity: ClassVar[int] = 0

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "InitLedger":
        return cls()


@dataclass(frozen=True)
class RecordProduce:
    """Create a record: key followed by the six record fields in order."""

    name: ClassVar[str] = "recordProduce"
    arity: ClassVar[int] = 7

    key: str
    record: ProduceRecord

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "RecordProduce":
        key, product, weight, organic, location, timestamp, holder = args
        return cls(
            key=key,
            record=ProduceRecord(
                product=product,
                weight=weight,
                organic=organic,
                location=location,
                timestamp=timestamp,
                holder=holder,
            ),
        )


@dataclass(frozen=True)
class QueryProduce:
    name: ClassVar[str] = "queryProduce"
    arity: ClassVar[int] = 1

    key: str

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "QueryProduce":
        return cls(key=args[0])


@dataclass(frozen=True)
class QueryAllProduce:
    name: ClassVar[str] = "queryAllProduce"
    arity: ClassVar[int] = 0

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "QueryAllProduce":
        return cls()


@dataclass(frozen=True)
class ChangeProduceHolder:
    name: ClassVar[str] = "changeProduceHolder"
    arity: ClassVar[int] = 2

    key: str
    new_holder: str

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "ChangeProduceHolder":
        return cls(key=args[0], new_holder=args[1])


Command = Union[InitLedger, RecordProduce, QueryProduce, QueryAllProduce, ChangeProduceHolder]

COMMAND_TYPES: Mapping[str, Type[Command]] = MappingProxyType(
    {
        command_type.name: command_type
        for command_type in (InitLedger, RecordProduce, QueryProduce, QueryAllProduce, ChangeProduceHolder)
    }
)


def available_commands() -> list[str]:
    """List supported command names."""
    return sorted(COMMAND_TYPES)


def parse_command(name: str, args: Sequence[str]) -> Command:
    """
    Decode a command name and its positional arguments.

    Raises
    ------
    UnknownCommand
        If `name` does not exactly match a supported command.
    InvalidArgumentCount
        If the number of arguments differs from the command's arity.
    """
    command_type = COMMAND_TYPES.get(name)
    if command_type is None:
        raise UnknownCommand(name)
    if len(args) != command_type.arity:
        raise InvalidArgumentCount(expected=command_type.arity, received=len(args))
    return command_type.from_args(args)


__all__ = [
    "Command",
    "InitLedger",
    "RecordProduce",
    "QueryProduce",
    "QueryAllProduce",
    "ChangeProduceHolder",
    "COMMAND_TYPES",
    "available_commands",
    "parse_command",
]
