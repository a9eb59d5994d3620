"""
Menu ingest payload and canonical menu item.

``to_canonical_menu_items`` is the plain domain mapping (currency default,
restaurant id stamped on each item). String trimming and allergen
normalization belong to the menu connector, which runs this mapping first.
"""

from __future__ import annotations

from pydantic import Field, StrictBool, field_validator

from restohub.domain.base import HubModel, NonEmptyStr, NonNegativeNumber

DEFAULT_CURRENCY = "EUR"


class MenuItemInput(HubModel):
    """One item as submitted by the producer."""

    id: NonEmptyStr
    name: NonEmptyStr
    description: str | None = None
    price: NonNegativeNumber
    category: str | None = None
    allergens: list[str]
    gluten_free: StrictBool
    vegan: StrictBool | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class MenuIngestPayload(HubModel):
    """Raw menu submission for one restaurant."""

    restaurant_id: NonEmptyStr
    currency: NonEmptyStr | None = None
    items: list[MenuItemInput] = Field(min_length=1)


class MenuItem(HubModel):
    """Canonical menu item. Natural key: ``(restaurant_id, id)``."""

    id: NonEmptyStr
    restaurant_id: NonEmptyStr
    name: NonEmptyStr
    description: str | None = None
    price: NonNegativeNumber
    currency: NonEmptyStr
    category: str | None = None
    allergens: list[str] = Field(default_factory=list)
    gluten_free: bool | None = None
    vegan: bool | None = None

    @property
    def natural_key(self) -> tuple[str, str]:
        return (self.restaurant_id, self.id)


def to_canonical_menu_items(
    payload: MenuIngestPayload,
    default_currency: str = DEFAULT_CURRENCY,
) -> list[MenuItem]:
    currency = payload.currency or default_currency
    return [
        MenuItem(
            id=item.id,
            restaurant_id=payload.restaurant_id,
            name=item.name,
            description=item.description,
            price=item.price,
            currency=currency,
            category=item.category,
            allergens=list(item.allergens),
            gluten_free=item.gluten_free,
            vegan=item.vegan,
        )
        for item in payload.items
    ]
