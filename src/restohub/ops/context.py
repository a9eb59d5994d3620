"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument. The context carries the services container, the caller identity
handed over by the request gatekeeper, a request id, and a dry-run flag.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from restohub.core.container import HubServices
from restohub.domain.policy import Identity

ANONYMOUS_ORG = "anonymous"


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        services: Container with the repositories and pipeline components.
        org_id: Caller organisation, ``None`` for anonymous callers.
        roles: Caller roles, matched against product policies on consume.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request: ``"api"``, ``"cli"`` or ``"sdk"``.
        dry_run: When ``True``, write operations validate and return a
            preview without touching storage.
    """

    services: HubServices
    org_id: str | None = None
    roles: list[str] = field(default_factory=list)
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    dry_run: bool = False

    @property
    def actor(self) -> Identity:
        """Identity recorded in audit events; anonymous callers get a placeholder org."""
        return Identity(org_id=self.org_id or ANONYMOUS_ORG, roles=list(self.roles))

    def log_fields(self) -> dict[str, Any]:
        return {"request_id": self.request_id, "org_id": self.org_id, "caller": self.caller}
