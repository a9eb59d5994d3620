"""Staging repository: append-only store of accepted raw payloads.

Records are never updated or deleted. Normalization reads them back on
every run.
"""

from __future__ import annotations

import uuid
from typing import Any

from restohub.core.logging import get_logger
from restohub.core.timestamps import utc_now_iso
from restohub.domain.staging import StagingRecord
from restohub.repositories.base import CollectionRepository

logger = get_logger(__name__)


class StagingRepository(CollectionRepository):
    COLLECTION = "staging"

    def append(
        self,
        *,
        source: str,
        payload: dict[str, Any],
        org_id: str | None = None,
        received_at: str | None = None,
        record_id: str | None = None,
    ) -> str:
        """Append one record and return its id.

        ``record_id`` defaults to a fresh uuid and ``received_at`` to now.
        """
        record = StagingRecord(
            id=record_id or str(uuid.uuid4()),
            source=source,
            org_id=org_id,
            received_at=received_at or utc_now_iso(),
            payload=payload,
        )
        self._append(self.COLLECTION, record.to_record())
        logger.debug("staging_appended", source=source, staging_record_id=record.id, org_id=org_id)
        return record.id

    def list_by_source(self, source: str, org_id: str | None = None) -> list[StagingRecord]:
        """Records for ``source`` in append order, optionally for one org."""
        return [
            StagingRecord.from_record(r)
            for r in self._load(self.COLLECTION)
            if r.get("source") == source and (not org_id or r.get("orgId") == org_id)
        ]

    def get(self, record_id: str) -> StagingRecord | None:
        for r in self._load(self.COLLECTION):
            if r.get("id") == record_id:
                return StagingRecord.from_record(r)
        return None

    def list(self) -> list[StagingRecord]:
        return [StagingRecord.from_record(r) for r in self._load(self.COLLECTION)]
