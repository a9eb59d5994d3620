"""
Access policy and caller identity.

``AccessPolicy.pii`` is typed ``Literal[False]``: a policy claiming to hold
PII does not validate. Products are built with ``pii=False`` forced, so a
``True`` can only reach the evaluator through a hand-edited store, where
the evaluator denies it.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from restohub.domain.base import HubModel, NonEmptyStr, NonNegativeNumber

DEFAULT_ALLOWED_PURPOSES = ("discovery", "recommendation", "analytics")
DEFAULT_ALLOWED_ROLES = ("destination", "marketplace", "restaurant")
DEFAULT_RETENTION_DAYS = 30


class AccessPolicy(HubModel):
    allowed_purposes: list[str]
    allowed_roles: list[str]
    retention_days: NonNegativeNumber
    pii: Literal[False] = False


class Identity(HubModel):
    """Validated caller identity handed over by the request gatekeeper."""

    org_id: NonEmptyStr
    roles: list[str] = Field(default_factory=list)


def default_policy(retention_days: float = DEFAULT_RETENTION_DAYS) -> dict[str, Any]:
    """Default policy as a plain record, ready to have overrides merged in."""
    return {
        "allowedPurposes": list(DEFAULT_ALLOWED_PURPOSES),
        "allowedRoles": list(DEFAULT_ALLOWED_ROLES),
        "retentionDays": retention_days,
        "pii": False,
    }
