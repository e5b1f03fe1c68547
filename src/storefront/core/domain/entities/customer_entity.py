from __future__ import annotations

from dataclasses import dataclass, field

from storefront.core.domain.entities._base import EntityMixin
from storefront.core.domain.entities.address_entity import AddressEntity
from storefront.core.domain.events.events import (
    CustomerAddressChangedEvent,
    CustomerCreatedEvent,
    DomainEvent,
)
from storefront.core.domain.exceptions import EntityValidationError


@dataclass(slots=True)
class CustomerEntity(EntityMixin):
    id: str
    name: str
    address: AddressEntity | None = None
    active: bool = False
    reward_points: int = 0
    _events: list[DomainEvent] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not self.id:
            raise EntityValidationError("Id is required")
        if not self.name:
            raise EntityValidationError("Name is required")

    @classmethod
    def create(cls, id: str, name: str, address: AddressEntity | None = None) -> CustomerEntity:
        customer = cls(id=id, name=name, address=address)
        payload = {"id": customer.id, "name": customer.name}
        if address is not None:
            payload["address"] = address.to_dict()
        customer.record_event(CustomerCreatedEvent(payload))
        return customer

    @classmethod
    def from_dict(cls, data: dict) -> CustomerEntity:
        raw_address = data.get("address")
        if isinstance(raw_address, dict):
            raw_address = AddressEntity.from_dict(raw_address)
        return cls(
            id=data["id"],
            name=data["name"],
            address=raw_address,
            active=data.get("active", False),
            reward_points=data.get("reward_points", 0),
        )

    def change_name(self, name: str) -> None:
        self.name = name
        self.validate()

    def change_address(self, address: AddressEntity) -> None:
        self.address = address
        self.record_event(
            CustomerAddressChangedEvent(
                {"id": self.id, "name": self.name, "address": address.to_dict()}
            )
        )

    def activate(self) -> None:
        if self.address is None:
            raise EntityValidationError("Address is mandatory to activate a customer")
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    def add_reward_points(self, points: int) -> None:
        if points < 0:
            raise EntityValidationError("Reward points must be greater or equal to zero")
        self.reward_points += points
