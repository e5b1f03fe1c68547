from storefront.core.application.event_handlers.customer_event_handlers import (
    SendMessage1WhenCustomerIsCreatedHandler,
    SendMessage2WhenCustomerIsCreatedHandler,
    SendMessageWhenCustomerAddressIsChangedHandler,
)
from storefront.core.application.event_handlers.product_event_handlers import (
    SendEmailWhenProductIsCreatedHandler,
)

__all__ = [
    "SendEmailWhenProductIsCreatedHandler",
    "SendMessage1WhenCustomerIsCreatedHandler",
    "SendMessage2WhenCustomerIsCreatedHandler",
    "SendMessageWhenCustomerAddressIsChangedHandler",
]
