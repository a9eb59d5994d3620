"""
Occupancy ingest payload and canonical occupancy signal.

A signal carries either an explicit ``occupancyPct`` or a complete
``occupiedSeats``/``capacitySeats`` pair. Two roundings exist on purpose:

- :func:`to_canonical_occupancy_signals` (this module) keeps two decimals
  and passes ``ts`` through unchanged.
- the occupancy events connector rounds to a whole percent and re-renders
  ``ts`` in the canonical UTC shape.

Both clamp to ``[0, 100]``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import AfterValidator, Field, StrictInt, model_validator

from restohub.core.timestamps import parse_iso8601
from restohub.domain.base import HubModel, NonEmptyStr, Number


def _check_timestamp(value: str) -> str:
    try:
        parse_iso8601(value)
    except ValueError as e:
        raise ValueError(f"invalid ISO-8601 timestamp: {value!r}") from e
    return value


IsoTimestamp = Annotated[NonEmptyStr, AfterValidator(_check_timestamp)]


def _check_pct(value: int | float) -> int | float:
    if not 0 <= value <= 100:
        raise ValueError("Input should be between 0 and 100")
    return value


Percent = Annotated[Number, AfterValidator(_check_pct)]


class OccupancySignalInput(HubModel):
    """One observation as submitted by the producer."""

    ts: IsoTimestamp
    occupancy_pct: Percent | None = None
    occupied_seats: StrictInt | None = Field(default=None, ge=0)
    capacity_seats: StrictInt | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _pct_or_seat_pair(self) -> OccupancySignalInput:
        has_pct = self.occupancy_pct is not None
        has_seats = self.occupied_seats is not None or self.capacity_seats is not None
        if not has_pct and not has_seats:
            raise ValueError("either occupancyPct or the occupiedSeats+capacitySeats pair is required")
        if has_seats and (self.occupied_seats is None or self.capacity_seats is None):
            raise ValueError("occupiedSeats and capacitySeats must be given together")
        return self


class OccupancyIngestPayload(HubModel):
    """Raw occupancy submission for one restaurant."""

    restaurant_id: NonEmptyStr
    signals: list[OccupancySignalInput] = Field(min_length=1)


class OccupancySignal(HubModel):
    """Canonical occupancy signal. Natural key: ``(restaurant_id, ts)``."""

    restaurant_id: NonEmptyStr
    ts: IsoTimestamp
    occupancy_pct: Percent

    @property
    def natural_key(self) -> tuple[str, str]:
        return (self.restaurant_id, self.ts)


def pct_from_seats(occupied_seats: int, capacity_seats: int) -> float:
    """Occupied share of capacity in percent; zero capacity reads as empty."""
    if not capacity_seats or capacity_seats <= 0:
        return 0.0
    return occupied_seats / capacity_seats * 100


def clamp_pct(value: float) -> float:
    return max(0.0, min(100.0, value))


def round_half_up(value: float, places: int = 0) -> float:
    """Round halves away from zero on the exact binary value of ``value``."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def whole_to_int(value: float) -> int | float:
    """``50.0`` becomes ``50`` so stored percentages read like the input."""
    return int(value) if float(value).is_integer() else value


def signal_pct(signal: OccupancySignalInput) -> int | float:
    """Explicit percentage if given, else derived from the seat pair."""
    if signal.occupancy_pct is not None:
        return signal.occupancy_pct
    return pct_from_seats(signal.occupied_seats or 0, signal.capacity_seats or 0)


def to_canonical_occupancy_signals(payload: OccupancyIngestPayload) -> list[OccupancySignal]:
    return [
        OccupancySignal(
            restaurant_id=payload.restaurant_id,
            ts=signal.ts,
            occupancy_pct=whole_to_int(clamp_pct(round_half_up(signal_pct(signal), 2))),
        )
        for signal in payload.signals
    ]
