"""Audit repository: append-only ledger of publish/consume decisions."""

from __future__ import annotations

from restohub.domain.audit import AuditAction, AuditEvent
from restohub.repositories.base import CollectionRepository


class AuditRepository(CollectionRepository):
    COLLECTION = "audit"

    def append(self, event: AuditEvent) -> None:
        self._append(self.COLLECTION, event.to_record())

    def list(
        self,
        *,
        action: AuditAction | str | None = None,
        product_id: str | None = None,
        space: str | None = None,
        since: str | None = None,
    ) -> list[AuditEvent]:
        """Events in append order matching every filter given.

        ``since`` keeps events with ``ts >= since`` compared as strings;
        ISO-8601 UTC timestamps in one shape sort chronologically.
        """
        wanted_action = AuditAction(action).value if action else None
        events = []
        for r in self._load(self.COLLECTION):
            if wanted_action and r.get("action") != wanted_action:
                continue
            if product_id and r.get("productId") != product_id:
                continue
            if space and r.get("space") != space:
                continue
            if since and str(r.get("ts", "")) < since:
                continue
            events.append(AuditEvent.from_record(r))
        return events
