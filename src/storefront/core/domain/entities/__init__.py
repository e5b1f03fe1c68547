from storefront.core.domain.entities.address_entity import AddressEntity
from storefront.core.domain.entities.customer_entity import CustomerEntity
from storefront.core.domain.entities.order_entity import OrderEntity, OrderItemEntity
from storefront.core.domain.entities.product_entity import ProductEntity

__all__ = [
    "AddressEntity",
    "CustomerEntity",
    "OrderEntity",
    "OrderItemEntity",
    "ProductEntity",
]
