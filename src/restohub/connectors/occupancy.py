"""Occupancy connector for seat-count / percentage event feeds."""

from __future__ import annotations

from restohub.connectors.protocol import BaseConnector, CanonicalBatch, ConnectorContext
from restohub.core.errors import ValidationError
from restohub.core.result import Err, Ok, Result
from restohub.core.timestamps import normalize_iso8601
from restohub.domain.occupancy import (
    OccupancyIngestPayload,
    OccupancySignal,
    clamp_pct,
    round_half_up,
    signal_pct,
    whole_to_int,
)


class OccupancyEventsConnector(BaseConnector):
    """
    Percent comes from ``occupancyPct`` or ``occupiedSeats / capacitySeats``,
    is rounded to a whole number and clamped to ``[0, 100]``. Timestamps
    are re-rendered as UTC ``...sss Z``.
    """

    id = "occupancy_events_v1"
    source = "occupancy"
    payload_model = OccupancyIngestPayload

    def _check(self, payload: OccupancyIngestPayload) -> Result[OccupancyIngestPayload]:
        for idx, signal in enumerate(payload.signals):
            if (
                signal.occupied_seats is not None
                and signal.capacity_seats is not None
                and signal.occupied_seats > signal.capacity_seats
            ):
                return Err(ValidationError(
                    f"Signal {idx}: occupiedSeats cannot exceed capacitySeats",
                    field=f"signals.{idx}.occupiedSeats",
                ).with_context(source=self.source))
        return Ok(payload)

    def _canonicalize(self, payload: OccupancyIngestPayload, ctx: ConnectorContext) -> CanonicalBatch:
        signals = [
            OccupancySignal(
                restaurant_id=payload.restaurant_id,
                ts=normalize_iso8601(signal.ts),
                occupancy_pct=whole_to_int(clamp_pct(round_half_up(signal_pct(signal)))),
            )
            for signal in payload.signals
        ]
        return CanonicalBatch(occupancy_signals=signals)
