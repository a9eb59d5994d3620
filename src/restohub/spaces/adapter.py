"""
Space adapter: publish data products into a space and consume them.

One adapter serves one space. Publishing stores a copy of the product in
the space's published collection; consuming re-reads that copy, checks
its policy against the caller and, when allowed, resolves the payload
from the canonical store at that moment.

Audit:
    Every publish appends one PUBLISH event. Every consume attempt appends
    exactly one CONSUME event: with ``decision`` allow/deny after a policy
    check, or with no decision when the product is not published in the
    space. Audit is written before the payload is resolved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from restohub.core.logging import get_logger
from restohub.core.timestamps import utc_now_iso
from restohub.domain.audit import AuditAction, AuditEvent, Decision
from restohub.domain.policy import Identity
from restohub.domain.product import DataProduct, ProductType
from restohub.governance.evaluator import evaluate_access
from restohub.repositories.audit import AuditRepository
from restohub.repositories.canonical import CanonicalRepository
from restohub.repositories.published import PublishedRepository

logger = get_logger(__name__)

REASON_NOT_FOUND = "product not found"
REASON_PURPOSE_REQUIRED = "purpose required"

Payload = list[dict[str, Any]] | dict[str, Any] | None


@dataclass(frozen=True)
class PublishReceipt:
    id: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id}


@dataclass(frozen=True)
class ConsumeGranted:
    """Access allowed. ``data_product`` is the published record as stored."""

    data_product: dict[str, Any]
    payload: Payload

    allowed = True

    def to_dict(self) -> dict[str, Any]:
        return {"dataProduct": self.data_product, "payload": self.payload}


@dataclass(frozen=True)
class ConsumeDenied:
    reason: str

    allowed = False

    def to_dict(self) -> dict[str, Any]:
        return {"denied": True, "reason": self.reason}


ConsumeOutcome = ConsumeGranted | ConsumeDenied


class SpaceAdapter:
    def __init__(
        self,
        space: str,
        published: PublishedRepository,
        audit: AuditRepository,
        canonical: CanonicalRepository,
    ) -> None:
        self.space = space
        self.published = published
        self.audit = audit
        self.canonical = canonical

    def publish(self, product: DataProduct, actor: Identity) -> PublishReceipt:
        """Insert or replace ``product`` in this space and audit it."""
        self.published.publish(self.space, product)
        self.audit.append(AuditEvent(
            ts=utc_now_iso(),
            actor_org=actor.org_id,
            action=AuditAction.PUBLISH,
            space=self.space,
            product_id=product.id,
        ))
        logger.info("product_published", space=self.space, product_id=product.id, actor_org=actor.org_id)
        return PublishReceipt(id=product.id)

    def consume(self, product_id: str, actor: Identity, purpose: str) -> ConsumeOutcome:
        record = self.published.get_record(self.space, product_id)

        if record is None:
            self._audit_consume(actor, product_id, purpose, None, REASON_NOT_FOUND)
            logger.info("consume_denied", space=self.space, product_id=product_id, reason=REASON_NOT_FOUND)
            return ConsumeDenied(reason=REASON_NOT_FOUND)

        decision = evaluate_access(record.get("policy") or {}, actor, purpose)
        self._audit_consume(
            actor,
            product_id,
            purpose,
            Decision.ALLOW if decision.allow else Decision.DENY,
            decision.reason,
        )

        if not decision.allow:
            logger.info("consume_denied", space=self.space, product_id=product_id, reason=decision.reason)
            return ConsumeDenied(reason=decision.reason)

        logger.info("consume_granted", space=self.space, product_id=product_id, purpose=purpose)
        return ConsumeGranted(data_product=record, payload=self.resolve_payload(record))

    def reject_consume(self, product_id: str, actor: Identity, purpose: str, reason: str) -> None:
        """Audit a consume attempt turned away before any policy check."""
        self._audit_consume(actor, product_id or None, purpose or None, None, reason)
        logger.info("consume_rejected", space=self.space, product_id=product_id, reason=reason)

    def resolve_payload(self, record: dict[str, Any]) -> Payload:
        """Canonical data the product points at, read now."""
        ref = record.get("payloadRef") or {}
        if ref.get("kind") != "normalized":
            return None

        restaurant_id = ref.get("restaurantId")
        source = ref.get("source")
        if source == ProductType.MENU.value:
            return [i.to_record() for i in self.canonical.list_menu_items(restaurant_id)]
        if source == ProductType.OCCUPANCY.value:
            return [s.to_record() for s in self.canonical.list_occupancy_signals(restaurant_id)]
        if source == ProductType.RESTAURANT.value:
            profiles = self.canonical.list_restaurants(restaurant_id)
            return profiles[-1].to_record() if profiles else None
        return None

    def list_published(self) -> list[DataProduct]:
        return self.published.list(self.space)

    def _audit_consume(
        self,
        actor: Identity,
        product_id: str | None,
        purpose: str | None,
        decision: Decision | None,
        reason: str,
    ) -> None:
        self.audit.append(AuditEvent(
            ts=utc_now_iso(),
            actor_org=actor.org_id,
            action=AuditAction.CONSUME,
            space=self.space,
            product_id=product_id,
            purpose=purpose,
            decision=decision,
            reason=reason,
        ))

    def __repr__(self) -> str:
        return f"SpaceAdapter(space={self.space!r})"
