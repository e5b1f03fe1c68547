#!/usr/bin/env python
from storefront.adapters.config import settings
from storefront.adapters.config.structlog_config import configure_logging

configure_logging()

def main():
    """Sobe o container e executa um fluxo de exemplo (produto + cliente + troca de endereço)."""
    from storefront.adapters.config.composition_root import setup_di_container_from_settings
    from storefront.core.application.commands.customer_commands import (
        ChangeCustomerAddressCommand,
        CreateCustomerCommand,
    )
    from storefront.core.application.commands.product_commands import CreateProductCommand
    from storefront.core.application.dtos.customer_dto import AddressDTO, CustomerDTO
    from storefront.core.application.dtos.product_dto import ProductDTO

    container = setup_di_container_from_settings(settings)
    bus = container.command_bus()

    bus.dispatch(CreateProductCommand(ProductDTO(
        id="1", name="Product 1", description="Product 1 description", price=10.0,
    )))
    customer = bus.dispatch(CreateCustomerCommand(CustomerDTO(id="123", name="Customer 1")))
    bus.dispatch(ChangeCustomerAddressCommand(
        customer=customer,
        address=AddressDTO(street="Street 2", number=2, zip_code="Zipcode 2", city="City 2"),
    ))

if __name__ == '__main__':
    main()
