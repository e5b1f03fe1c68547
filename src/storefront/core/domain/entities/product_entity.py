from __future__ import annotations

from dataclasses import dataclass, field

from storefront.core.domain.entities._base import EntityMixin
from storefront.core.domain.events.events import (
    DomainEvent,
    ProductCreatedEvent,
    ProductPriceChangedEvent,
)
from storefront.core.domain.exceptions import EntityValidationError


@dataclass(slots=True)
class ProductEntity(EntityMixin):
    id: str
    name: str
    price: float
    description: str | None = None
    _events: list[DomainEvent] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not self.id:
            raise EntityValidationError("Id is required")
        if not self.name:
            raise EntityValidationError("Name is required")
        if self.price < 0:
            raise EntityValidationError("Price must be greater or equal to zero")

    @classmethod
    def create(
        cls, id: str, name: str, price: float, description: str | None = None
    ) -> ProductEntity:
        product = cls(id=id, name=name, price=price, description=description)
        product.record_event(
            ProductCreatedEvent(
                {
                    "id": product.id,
                    "name": product.name,
                    "description": product.description,
                    "price": product.price,
                }
            )
        )
        return product

    def change_name(self, name: str) -> None:
        self.name = name
        self.validate()

    def change_price(self, price: float) -> None:
        old_price = self.price
        self.price = price
        self.validate()
        self.record_event(
            ProductPriceChangedEvent(
                {"id": self.id, "old_price": old_price, "new_price": self.price}
            )
        )
