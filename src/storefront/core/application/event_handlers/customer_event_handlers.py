import structlog

from storefront.core.domain.events.events import (
    CustomerAddressChangedEvent,
    CustomerCreatedEvent,
)

logger = structlog.get_logger(__name__)


class SendMessage1WhenCustomerIsCreatedHandler:
    def handle(self, event: CustomerCreatedEvent) -> None:
        logger.info(
            "Esse é o primeiro log do evento: CustomerCreated",
            customer_id=event.payload.get("id"),
        )


class SendMessage2WhenCustomerIsCreatedHandler:
    def handle(self, event: CustomerCreatedEvent) -> None:
        logger.info(
            "Esse é o segundo log do evento: CustomerCreated",
            customer_id=event.payload.get("id"),
        )


class SendMessageWhenCustomerAddressIsChangedHandler:
    def handle(self, event: CustomerAddressChangedEvent) -> None:
        address = event.payload.get("address") or {}
        rendered = ", ".join(str(address[k]) for k in ("street", "number", "zip_code", "city") if k in address)
        logger.info(
            f"Endereço do cliente: {event.payload.get('id')}, {event.payload.get('name')} "
            f"alterado para: {rendered}",
        )
