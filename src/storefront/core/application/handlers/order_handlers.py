from storefront.core.application.commands.order_commands import PlaceOrderCommand
from storefront.core.application.cqrs import CommandHandler
from storefront.core.domain.entities.order_entity import OrderEntity, OrderItemEntity


class PlaceOrderHandler(CommandHandler[PlaceOrderCommand]):
    def handle(self, command: PlaceOrderCommand) -> OrderEntity:
        dto = command.payload
        items = [OrderItemEntity(**item.model_dump()) for item in dto.items]
        return OrderEntity.place(id=dto.id, customer_id=dto.customer_id, items=items)
