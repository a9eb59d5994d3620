"""Published repository: one ``published-<space>`` collection per space.

Reads return raw records: consume must run the policy check against
whatever is stored, including a policy that would no longer validate.
"""

from __future__ import annotations

from typing import Any

from restohub.core.storage import check_collection_name
from restohub.domain.product import DataProduct
from restohub.repositories.base import CollectionRepository


def _id_key(r: dict) -> tuple:
    return (r.get("id"),)


class PublishedRepository(CollectionRepository):
    PREFIX = "published-"

    def collection_for(self, space: str) -> str:
        return check_collection_name(f"{self.PREFIX}{space}")

    def publish(self, space: str, product: DataProduct) -> str:
        """Insert or replace ``product`` in ``space``. Republishing overwrites."""
        self._upsert(self.collection_for(space), [product.to_record()], _id_key)
        return product.id

    def get_record(self, space: str, product_id: str) -> dict[str, Any] | None:
        for r in self._load(self.collection_for(space)):
            if r.get("id") == product_id:
                return r
        return None

    def list(self, space: str) -> list[DataProduct]:
        return [DataProduct.from_record(r) for r in self._load(self.collection_for(space))]
