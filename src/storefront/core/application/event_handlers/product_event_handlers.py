import structlog

from storefront.core.domain.events.events import ProductCreatedEvent

logger = structlog.get_logger(__name__)


class SendEmailWhenProductIsCreatedHandler:
    def handle(self, event: ProductCreatedEvent) -> None:
        logger.info(
            "Sending email to product owner",
            product_name=event.payload.get("name"),
            occurred_at=event.occurred_at.isoformat(),
        )
