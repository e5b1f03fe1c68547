import structlog

from storefront.core.application.commands.product_commands import (
    ChangeProductPriceCommand,
    CreateProductCommand,
)
from storefront.core.application.cqrs import CommandHandler
from storefront.core.domain.entities.product_entity import ProductEntity

logger = structlog.get_logger(__name__)


class CreateProductHandler(CommandHandler[CreateProductCommand]):
    def handle(self, command: CreateProductCommand) -> ProductEntity:
        dto = command.payload
        product = ProductEntity.create(
            id=dto.id,
            name=dto.name,
            price=dto.price,
            description=dto.description,
        )
        logger.debug("product.created", product_id=product.id)
        return product


class ChangeProductPriceHandler(CommandHandler[ChangeProductPriceCommand]):
    def handle(self, command: ChangeProductPriceCommand) -> ProductEntity:
        product = command.product
        product.change_price(command.price)
        logger.debug("product.price_changed", product_id=product.id, price=product.price)
        return product
