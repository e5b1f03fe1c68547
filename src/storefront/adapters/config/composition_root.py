import structlog
from dependency_injector import containers, providers

from storefront.core.application.commands.customer_commands import (
    ChangeCustomerAddressCommand,
    CreateCustomerCommand,
)
from storefront.core.application.commands.order_commands import PlaceOrderCommand
from storefront.core.application.commands.product_commands import (
    ChangeProductPriceCommand,
    CreateProductCommand,
)
from storefront.core.application.cqrs import CommandBusImpl
from storefront.core.application.event_handlers.customer_event_handlers import (
    SendMessage1WhenCustomerIsCreatedHandler,
    SendMessage2WhenCustomerIsCreatedHandler,
    SendMessageWhenCustomerAddressIsChangedHandler,
)
from storefront.core.application.event_handlers.product_event_handlers import (
    SendEmailWhenProductIsCreatedHandler,
)
from storefront.core.application.handlers.customer_handlers import (
    ChangeCustomerAddressHandler,
    CreateCustomerHandler,
)
from storefront.core.application.handlers.order_handlers import PlaceOrderHandler
from storefront.core.application.handlers.product_handlers import (
    ChangeProductPriceHandler,
    CreateProductHandler,
)
from storefront.core.domain.events.events import (
    CustomerAddressChangedEvent,
    CustomerCreatedEvent,
    ProductCreatedEvent,
)
from storefront.core.domain.services.event_dispatcher import EventDispatcher

logger = structlog.get_logger(__name__)

container = None


class Container(containers.DeclarativeContainer):
    config = providers.Configuration()

    # Infra
    event_dispatcher = providers.Singleton(
        EventDispatcher,
        deduplicate=config.events.deduplicate,
    )

    # CQRS
    command_bus = providers.Singleton(
        CommandBusImpl,
        dispatcher=event_dispatcher,
        isolate_failures=config.events.isolate_failures,
    )

    # Handlers de comandos
    create_customer_handler = providers.Factory(CreateCustomerHandler)
    change_customer_address_handler = providers.Factory(ChangeCustomerAddressHandler)
    create_product_handler = providers.Factory(CreateProductHandler)
    change_product_price_handler = providers.Factory(ChangeProductPriceHandler)
    place_order_handler = providers.Factory(PlaceOrderHandler)

    # Handlers de eventos
    send_email_when_product_is_created = providers.Singleton(SendEmailWhenProductIsCreatedHandler)
    send_message1_when_customer_is_created = providers.Singleton(SendMessage1WhenCustomerIsCreatedHandler)
    send_message2_when_customer_is_created = providers.Singleton(SendMessage2WhenCustomerIsCreatedHandler)
    send_message_when_customer_address_is_changed = providers.Singleton(
        SendMessageWhenCustomerAddressIsChangedHandler
    )


def register_event_handlers(c: Container) -> None:
    """Assina os handlers de evento no dispatcher (ordem = ordem de execução)."""
    dispatcher = c.event_dispatcher()
    subscriptions = [
        (ProductCreatedEvent, c.send_email_when_product_is_created()),
        (CustomerCreatedEvent, c.send_message1_when_customer_is_created()),
        (CustomerCreatedEvent, c.send_message2_when_customer_is_created()),
        (CustomerAddressChangedEvent, c.send_message_when_customer_address_is_changed()),
    ]
    for event_type, handler in subscriptions:
        dispatcher.register(event_type.event_name, handler)


def register_command_handlers(c: Container) -> None:
    bus = c.command_bus()
    bus.register(CreateCustomerCommand, c.create_customer_handler())
    bus.register(ChangeCustomerAddressCommand, c.change_customer_address_handler())
    bus.register(CreateProductCommand, c.create_product_handler())
    bus.register(ChangeProductPriceCommand, c.change_product_price_handler())
    bus.register(PlaceOrderCommand, c.place_order_handler())


def build_container(*, deduplicate: bool = False, isolate_failures: bool = False) -> Container:
    """Cria um container novo, com handlers já registrados."""
    c = Container()
    c.config.from_dict(
        {"events": {"deduplicate": deduplicate, "isolate_failures": isolate_failures}}
    )
    register_event_handlers(c)
    register_command_handlers(c)
    return c


def setup_di_container_from_settings(settings) -> Container:
    """Inicializa (uma única vez) o container global a partir do módulo de settings."""
    global container  # noqa: PLW0603
    if container is not None:
        logger.debug("DI container já inicializado.")
        return container

    container = build_container(
        deduplicate=settings.EVENTS_DEDUPLICATE_HANDLERS,
        isolate_failures=settings.EVENTS_ISOLATE_HANDLER_FAILURES,
    )
    logger.info(
        "DI container inicializado",
        deduplicate=settings.EVENTS_DEDUPLICATE_HANDLERS,
        isolate_failures=settings.EVENTS_ISOLATE_HANDLER_FAILURES,
    )
    return container
