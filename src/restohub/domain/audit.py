"""Audit event model. Events are appended and never changed."""

from __future__ import annotations

from enum import Enum

from restohub.domain.base import HubModel, NonEmptyStr


class AuditAction(str, Enum):
    PUBLISH = "PUBLISH"
    CONSUME = "CONSUME"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


class AuditEvent(HubModel):
    ts: NonEmptyStr
    actor_org: NonEmptyStr
    action: AuditAction
    space: str | None = None
    product_id: str | None = None
    purpose: str | None = None
    decision: Decision | None = None
    reason: str | None = None
