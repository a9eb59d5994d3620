"""
Typed request objects for operations.

Each dataclass is the *input* contract of one operation function. Requests
carry transport-agnostic data only: no HTTP bodies, no Typer params.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# ------------------------------------------------------------------ #
# Ingest
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class IngestRequest:
    """Request for :func:`restohub.ops.ingest.ingest`."""

    source: str = ""
    body: Any = None


# ------------------------------------------------------------------ #
# Products
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class BuildProductRequest:
    """Request for :func:`restohub.ops.products.build_product`.

    Attributes:
        product_type: ``menu``, ``occupancy`` or ``restaurant``.
        restaurant_id: Restaurant whose canonical data the product points at.
        policy_overrides: Keys merged over the default access policy.
    """

    product_type: str = ""
    restaurant_id: str = ""
    policy_overrides: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class ListProductsRequest:
    product_type: str | None = None
    restaurant_id: str | None = None


# ------------------------------------------------------------------ #
# Spaces
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class PublishRequest:
    space: str = ""
    product_id: str = ""


@dataclass(frozen=True, slots=True)
class ConsumeRequest:
    space: str = ""
    product_id: str = ""
    purpose: str = ""


# ------------------------------------------------------------------ #
# Audit
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class ListAuditRequest:
    """Request for :func:`restohub.ops.audit.list_audit`.

    ``since`` must be an ISO-8601 timestamp; events with ``ts >= since``
    are kept.
    """

    action: str | None = None
    product_id: str | None = None
    space: str | None = None
    since: str | None = None


# ------------------------------------------------------------------ #
# Debug
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class ListStagingRequest:
    source: str = ""


@dataclass(frozen=True, slots=True)
class ListCanonicalRequest:
    kind: str = ""
    restaurant_id: str | None = None
