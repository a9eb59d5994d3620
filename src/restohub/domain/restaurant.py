"""Restaurant profile payload and canonical profile."""

from __future__ import annotations

from pydantic import Field, StrictInt, field_validator

from restohub.domain.base import HubModel, NonEmptyStr
from restohub.domain.occupancy import IsoTimestamp


class RestaurantProfileInput(HubModel):
    restaurant_id: NonEmptyStr
    name: NonEmptyStr
    address: str | None = None
    city: str | None = None
    cuisine: list[str] = Field(default_factory=list)
    capacity_seats: StrictInt | None = Field(default=None, gt=0)
    updated_at: IsoTimestamp | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class RestaurantProfile(HubModel):
    """Canonical profile. Natural key: ``restaurant_id``."""

    restaurant_id: NonEmptyStr
    name: NonEmptyStr
    address: str | None = None
    city: str | None = None
    cuisine: list[str] = Field(default_factory=list)
    capacity_seats: int | None = None
    updated_at: str | None = None

    @property
    def natural_key(self) -> tuple[str]:
        return (self.restaurant_id,)
