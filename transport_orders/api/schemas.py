from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..domain.models import (
    CargoDescription,
    CreateOrder,
    LocationDescription,
    OrderStatus,
    RouteUpdate,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class LocationIn(CamelModel):
    home: bool
    city: str
    street: str

    def to_domain(self) -> LocationDescription:
        return LocationDescription(home=self.home, city=self.city, street=self.street)


class CargoIn(CamelModel):
    weight: Optional[float] = None
    size: Optional[str] = None
    description: Optional[str] = None

    def to_domain(self) -> CargoDescription:
        return CargoDescription(
            weight=self.weight, size=self.size, description=self.description
        )


class CreateOrderIn(CamelModel):
    user_id: int
    from_location: LocationIn
    to_location: LocationIn
    cargos: List[CargoIn] = Field(default_factory=list)

    def to_domain(self) -> CreateOrder:
        return CreateOrder(
            owner_id=self.user_id,
            from_location=self.from_location.to_domain(),
            to_location=self.to_location.to_domain(),
            cargos=tuple(cargo.to_domain() for cargo in self.cargos),
        )


class UpdateOrderIn(CamelModel):
    from_location: LocationIn
    to_location: LocationIn

    def to_domain(self) -> RouteUpdate:
        return RouteUpdate(
            from_location=self.from_location.to_domain(),
            to_location=self.to_location.to_domain(),
        )


class OrderOut(CamelModel):
    id: int
    owner_id: int
    from_location_id: int
    to_location_id: int
    status: OrderStatus
    created_at: datetime
    updated_at: datetime


class OrderIdOut(CamelModel):
    id: int


class LocationOut(CamelModel):
    home: bool
    city: str
    street: str


class OwnerOut(CamelModel):
    first_name: str
    last_name: str


class OrderSummaryOut(CamelModel):
    id: int
    created_at: datetime
    updated_at: datetime
    user: OwnerOut = Field(validation_alias="owner")
    from_location: LocationOut
    to_location: LocationOut
    status: OrderStatus
