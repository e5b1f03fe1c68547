from dataclasses import dataclass

from storefront.core.application.cqrs import CommandDTO
from storefront.core.application.dtos.customer_dto import AddressDTO, CustomerDTO
from storefront.core.domain.entities.customer_entity import CustomerEntity


@dataclass(frozen=True)
class CreateCustomerCommand(CommandDTO):
    payload: CustomerDTO

@dataclass(frozen=True)
class ChangeCustomerAddressCommand(CommandDTO):
    customer: CustomerEntity
    address: AddressDTO
