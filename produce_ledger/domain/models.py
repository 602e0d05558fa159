"""
Domain models for the produce ledger.

`ProduceRecord` mirrors the JSON object persisted under each ledger key. Every
attribute travels and is stored as text; the typed accessors convert the
numeric and boolean fields into native values where callers need them.
"""
from __future__ import annotations

import re
from decimal import Decimal

from pydantic import BaseModel, Field

from produce_ledger.domain.errors import InvalidField

_BOOLEAN_TEXT = {"true": True, "false": False}
# Optional sign, ASCII digits, optional fractional part. No exponent or separators.
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


class ProduceRecord(BaseModel):
    """
    Provenance record for one unit of produce.
    """

    product: str = Field("", description="Product category, e.g. 'Salmon'.")
    weight: str = Field("", description="Decimal quantity rendered as text.")
    organic: str = Field("", description="'true' or 'false'.")
    location: str = Field("", description="Latitude/longitude pair as free text.")
    timestamp: str = Field("", description="Point in time as free text.")
    holder: str = Field("", description="Identifier of the current custodian.")

    model_config = {
        "frozen": True,
        "strict": True,
        "extra": "ignore",
    }

    @property
    def weight_value(self) -> Decimal:
        if not _DECIMAL_PATTERN.fullmatch(self.weight):
            raise InvalidField("weight", self.weight, "a plain decimal number")
        return Decimal(self.weight)

    @property
    def is_organic(self) -> bool:
        try:
            return _BOOLEAN_TEXT[self.organic.lower()]
        except KeyError:
            raise InvalidField("organic", self.organic, "'true' or 'false'") from None

    def validate_typed_fields(self) -> None:
        """Raise `InvalidField` unless weight and organic convert cleanly."""
        _ = (self.weight_value, self.is_organic)

    def with_holder(self, holder: str) -> "ProduceRecord":
        """Return a copy with only the custodian changed."""
        return self.model_copy(update={"holder": holder})


__all__ = ["ProduceRecord"]
