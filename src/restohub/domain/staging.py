"""Staging record: a raw payload exactly as it was accepted."""

from __future__ import annotations

from typing import Any

from restohub.domain.base import HubModel, NonEmptyStr


class StagingRecord(HubModel):
    id: NonEmptyStr
    source: NonEmptyStr
    org_id: str | None = None
    received_at: NonEmptyStr
    payload: dict[str, Any]

    def to_record(self) -> dict[str, Any]:
        # orgId is kept as an explicit null so records from anonymous
        # callers still have the same shape
        record = super().to_record()
        record.setdefault("orgId", None)
        return record
