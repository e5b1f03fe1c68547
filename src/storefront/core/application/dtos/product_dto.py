from pydantic import BaseModel, Field


class ProductDTO(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    description: str | None = None
