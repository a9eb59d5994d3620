"""
Access policy evaluation.

``evaluate_access`` is a pure function run on every consume attempt. It is
never cached: the stored policy or the caller's roles may change between
requests.

Checks run in order and the first failure wins:

1. ``pii`` is not ``False``           → ``"pii must be false"``
2. purpose not in allowed purposes    → ``"purpose '<purpose>' not allowed"``
3. no role in common                  → ``"no matching role"``

Otherwise access is granted with reason ``"access granted"``.

Examples:
    >>> policy = {"allowedPurposes": ["analytics"], "allowedRoles": ["x"],
    ...           "retentionDays": 30, "pii": False}
    >>> evaluate_access(policy, {"orgId": "o", "roles": ["x"]}, "analytics")
    AccessDecision(allow=True, reason='access granted')
    >>> evaluate_access(policy, {"orgId": "o", "roles": ["x"]}, "marketing").reason
    "purpose 'marketing' not allowed"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from restohub.domain.policy import AccessPolicy, Identity

REASON_PII = "pii must be false"
REASON_NO_ROLE = "no matching role"
REASON_GRANTED = "access granted"


def purpose_not_allowed(purpose: str) -> str:
    return f"purpose '{purpose}' not allowed"


@dataclass(frozen=True, slots=True)
class AccessDecision:
    """Outcome of a policy check. A denial is a value, not an exception."""

    allow: bool
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"allow": self.allow, "reason": self.reason}


def _policy_fields(policy: AccessPolicy | Mapping[str, Any]) -> tuple[Any, list[str], list[str]]:
    if isinstance(policy, AccessPolicy):
        return policy.pii, policy.allowed_purposes, policy.allowed_roles
    return (
        policy.get("pii"),
        list(policy.get("allowedPurposes") or []),
        list(policy.get("allowedRoles") or []),
    )


def _identity_roles(identity: Identity | Mapping[str, Any]) -> list[str]:
    if isinstance(identity, Identity):
        return identity.roles
    return list(identity.get("roles") or [])


def evaluate_access(
    policy: AccessPolicy | Mapping[str, Any],
    identity: Identity | Mapping[str, Any],
    purpose: str,
) -> AccessDecision:
    """Decide whether ``identity`` may use a product for ``purpose``.

    ``policy`` may be a validated :class:`AccessPolicy` or the raw stored
    mapping; the raw form lets a stored ``pii: true`` reach check 1.
    """
    pii, allowed_purposes, allowed_roles = _policy_fields(policy)

    if pii is not False:
        return AccessDecision(allow=False, reason=REASON_PII)

    if purpose not in allowed_purposes:
        return AccessDecision(allow=False, reason=purpose_not_allowed(purpose))

    if not set(_identity_roles(identity)) & set(allowed_roles):
        return AccessDecision(allow=False, reason=REASON_NO_ROLE)

    return AccessDecision(allow=True, reason=REASON_GRANTED)
