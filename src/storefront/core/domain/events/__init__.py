from storefront.core.domain.events.events import (
    CustomerAddressChangedEvent,
    CustomerCreatedEvent,
    DomainEvent,
    EventLike,
    HandlerLike,
    OrderPlacedEvent,
    ProductCreatedEvent,
    ProductPriceChangedEvent,
    event_name_of,
)

__all__ = [
    "CustomerAddressChangedEvent",
    "CustomerCreatedEvent",
    "DomainEvent",
    "EventLike",
    "HandlerLike",
    "OrderPlacedEvent",
    "ProductCreatedEvent",
    "ProductPriceChangedEvent",
    "event_name_of",
]
