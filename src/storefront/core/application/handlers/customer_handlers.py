import structlog

from storefront.core.application.commands.customer_commands import (
    ChangeCustomerAddressCommand,
    CreateCustomerCommand,
)
from storefront.core.application.cqrs import CommandHandler
from storefront.core.domain.entities.address_entity import AddressEntity
from storefront.core.domain.entities.customer_entity import CustomerEntity

logger = structlog.get_logger(__name__)


class CreateCustomerHandler(CommandHandler[CreateCustomerCommand]):
    def handle(self, command: CreateCustomerCommand) -> CustomerEntity:
        dto = command.payload
        address = AddressEntity.from_dict(dto.address.model_dump()) if dto.address else None
        customer = CustomerEntity.create(id=dto.id, name=dto.name, address=address)
        logger.debug("customer.created", customer_id=customer.id)
        return customer


class ChangeCustomerAddressHandler(CommandHandler[ChangeCustomerAddressCommand]):
    def handle(self, command: ChangeCustomerAddressCommand) -> CustomerEntity:
        customer = command.customer
        customer.change_address(AddressEntity.from_dict(command.address.model_dump()))
        logger.debug("customer.address_changed", customer_id=customer.id)
        return customer
