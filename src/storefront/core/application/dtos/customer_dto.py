from pydantic import BaseModel, Field


class AddressDTO(BaseModel):
    street: str = Field(min_length=1)
    number: int = Field(gt=0)
    zip_code: str = Field(min_length=1)
    city: str = Field(min_length=1)


class CustomerDTO(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    address: AddressDTO | None = None
