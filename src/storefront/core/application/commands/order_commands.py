from dataclasses import dataclass

from storefront.core.application.cqrs import CommandDTO
from storefront.core.application.dtos.order_dto import OrderDTO


@dataclass(frozen=True)
class PlaceOrderCommand(CommandDTO):
    payload: OrderDTO
