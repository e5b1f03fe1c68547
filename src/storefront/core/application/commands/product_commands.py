from dataclasses import dataclass

from storefront.core.application.cqrs import CommandDTO
from storefront.core.application.dtos.product_dto import ProductDTO
from storefront.core.domain.entities.product_entity import ProductEntity


@dataclass(frozen=True)
class CreateProductCommand(CommandDTO):
    payload: ProductDTO

@dataclass(frozen=True)
class ChangeProductPriceCommand(CommandDTO):
    product: ProductEntity
    price: float
