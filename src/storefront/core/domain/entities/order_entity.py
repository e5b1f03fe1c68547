from __future__ import annotations

from dataclasses import dataclass, field

from storefront.core.domain.entities._base import EntityMixin
from storefront.core.domain.events.events import DomainEvent, OrderPlacedEvent
from storefront.core.domain.exceptions import EntityValidationError


@dataclass(slots=True)
class OrderItemEntity(EntityMixin):
    id: str
    name: str
    price: float
    product_id: str
    quantity: int

    def __post_init__(self) -> None:
        if self.price < 0:
            raise EntityValidationError("Price must be greater or equal to zero")
        if self.quantity <= 0:
            raise EntityValidationError("Quantity must be greater than zero")

    def total(self) -> float:
        return self.price * self.quantity


@dataclass(slots=True)
class OrderEntity(EntityMixin):
    id: str
    customer_id: str
    items: list[OrderItemEntity] = field(default_factory=list)
    _events: list[DomainEvent] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise EntityValidationError("Id is required")
        if not self.customer_id:
            raise EntityValidationError("CustomerId is required")
        if not self.items:
            raise EntityValidationError("Items are required")

    @classmethod
    def from_dict(cls, data: dict) -> OrderEntity:
        items = [
            item if isinstance(item, OrderItemEntity) else OrderItemEntity.from_dict(item)
            for item in data.get("items", [])
        ]
        return cls(id=data["id"], customer_id=data["customer_id"], items=items)

    def total(self) -> float:
        return sum(item.total() for item in self.items)

    @classmethod
    def place(cls, id: str, customer_id: str, items: list[OrderItemEntity]) -> OrderEntity:
        order = cls(id=id, customer_id=customer_id, items=list(items))
        order.record_event(
            OrderPlacedEvent(
                {
                    "id": order.id,
                    "customer_id": order.customer_id,
                    "total": order.total(),
                    "items": [item.to_dict() for item in order.items],
                }
            )
        )
        return order
