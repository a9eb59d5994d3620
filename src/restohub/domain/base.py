"""
Shared pydantic base for domain records.

Python attributes are snake_case; persisted and wire shapes are camelCase
(``restaurantId``, ``occupancyPct``). Models accept either spelling on input
and always dump camelCase.
"""

from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainValidator, StringConstraints
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]


def _check_number(value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Input should be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("Input should be a finite number")
    return value


def _check_non_negative(value: int | float) -> int | float:
    if value < 0:
        raise ValueError("Input should be greater than or equal to 0")
    return value


# JSON numbers keep their type: 5 stays 5 and 4.5 stays 4.5.
Number = Annotated[int | float, PlainValidator(_check_number)]
NonNegativeNumber = Annotated[Number, AfterValidator(_check_non_negative)]


class HubModel(BaseModel):
    """Base model: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_record(self) -> dict[str, Any]:
        """JSON-compatible dict in the persisted (camelCase) shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_payload(self) -> dict[str, Any]:
        """Like :meth:`to_record` but only with the keys the caller sent."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Any:
        return cls.model_validate(record)
