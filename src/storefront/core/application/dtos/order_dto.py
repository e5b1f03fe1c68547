from pydantic import BaseModel, Field


class OrderItemDTO(BaseModel):
    id: str = Field(min_length=1)
    name: str
    price: float = Field(ge=0)
    product_id: str = Field(min_length=1)
    quantity: int = Field(gt=0)


class OrderDTO(BaseModel):
    id: str = Field(min_length=1)
    customer_id: str = Field(min_length=1)
    items: list[OrderItemDTO] = Field(min_length=1)
