"""Publishing and consuming data products in spaces."""

from restohub.spaces.adapter import (
    ConsumeDenied,
    ConsumeGranted,
    ConsumeOutcome,
    PublishReceipt,
    SpaceAdapter,
)
from restohub.spaces.registry import DEFAULT_SPACES, SpaceRegistry

__all__ = [
    "DEFAULT_SPACES",
    "ConsumeDenied",
    "ConsumeGranted",
    "ConsumeOutcome",
    "PublishReceipt",
    "SpaceAdapter",
    "SpaceRegistry",
]
