"""Menu connector for JSON menu submissions."""

from __future__ import annotations

from restohub.connectors.protocol import (
    BaseConnector,
    CanonicalBatch,
    ConnectorContext,
    normalize_string,
    normalize_tags,
)
from restohub.domain.menu import DEFAULT_CURRENCY, MenuIngestPayload, to_canonical_menu_items
from restohub.repositories.staging import StagingRepository


class MenuJsonConnector(BaseConnector):
    """
    Canonicalization: ``name``, ``description`` and ``category`` are
    trimmed; allergens are trimmed, lowercased and de-duplicated; currency
    falls back to ``default_currency``.
    """

    id = "menu_json_v1"
    source = "menu"
    payload_model = MenuIngestPayload

    def __init__(self, staging: StagingRepository, default_currency: str = DEFAULT_CURRENCY) -> None:
        super().__init__(staging)
        self.default_currency = default_currency

    def _canonicalize(self, payload: MenuIngestPayload, ctx: ConnectorContext) -> CanonicalBatch:
        items = [
            item.model_copy(update={
                "name": normalize_string(item.name),
                "description": normalize_string(item.description),
                "category": normalize_string(item.category),
                "allergens": normalize_tags(item.allergens),
            })
            for item in to_canonical_menu_items(payload, self.default_currency)
        ]
        return CanonicalBatch(menu_items=items)
