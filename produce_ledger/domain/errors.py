"""
Error taxonomy for the produce ledger.

Every failure the core can report is a subclass of `LedgerError`. Operations
raise at the point of detection; the dispatcher is the single place that turns
them into error responses. Each class carries a stable machine-friendly `code`.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for all ledger failures."""

    code: str = "LedgerError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentCount(LedgerError):
    code = "InvalidArgumentCount"

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(f"Incorrect number of arguments. Expecting {expected}")
        self.expected = expected
        self.received = received


class InvalidKey(LedgerError):
    code = "InvalidKey"

    def __init__(self, key: str) -> None:
        super().__init__(f"Failed to record into ledger for non integer ID: {key}")
        self.key = key


class InvalidField(LedgerError):
    """A typed record field (weight, organic) does not hold a valid value."""

    code = "InvalidField"

    def __init__(self, field: str, value: str, expected: str) -> None:
        super().__init__(f"Invalid value {value!r} for field '{field}': expected {expected}")
        self.field = field
        self.value = value


class DuplicateKey(LedgerError):
    code = "DuplicateKey"

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Produce with ID {key} already exists in the ledger, "
            "you may want to use changeProduceHolder function"
        )
        self.key = key


class NotFound(LedgerError):
    code = "NotFound"

    def __init__(self, key: str) -> None:
        super().__init__(f"Could not locate produce with ID {key}, verify if the key number is correct")
        self.key = key


class DecodeError(LedgerError):
    code = "DecodeError"


class StoreError(LedgerError):
    """Failure reported by the underlying key-value store."""

    code = "StoreError"


class StoreReadError(StoreError):
    code = "StoreReadError"


class StoreWriteError(StoreError):
    code = "StoreWriteError"


class UnknownCommand(LedgerError):
    code = "UnknownCommand"

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid ledger function name: {name!r}")
        self.name = name


__all__ = [
    "LedgerError",
    "InvalidArgumentCount",
    "InvalidKey",
    "InvalidField",
    "DuplicateKey",
    "NotFound",
    "DecodeError",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
    "UnknownCommand",
]
