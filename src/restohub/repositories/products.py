"""Data product repository: products upserted by id."""

from __future__ import annotations

from restohub.domain.product import DataProduct, ProductType
from restohub.repositories.base import CollectionRepository


def _id_key(r: dict) -> tuple:
    return (r.get("id"),)


class DataProductRepository(CollectionRepository):
    COLLECTION = "products"

    def upsert(self, product: DataProduct) -> str:
        self._upsert(self.COLLECTION, [product.to_record()], _id_key)
        return product.id

    def get(self, product_id: str) -> DataProduct | None:
        for r in self._load(self.COLLECTION):
            if r.get("id") == product_id:
                return DataProduct.from_record(r)
        return None

    def list(
        self,
        *,
        product_type: ProductType | str | None = None,
        restaurant_id: str | None = None,
    ) -> list[DataProduct]:
        wanted_type = ProductType(product_type).value if product_type else None
        products = []
        for r in self._load(self.COLLECTION):
            if wanted_type and r.get("type") != wanted_type:
                continue
            if restaurant_id and (r.get("metadata") or {}).get("restaurantId") != restaurant_id:
                continue
            products.append(DataProduct.from_record(r))
        return products
