from __future__ import annotations

from dataclasses import dataclass

from storefront.core.domain.entities._base import EntityMixin
from storefront.core.domain.exceptions import EntityValidationError


@dataclass(slots=True, frozen=True)
class AddressEntity(EntityMixin):
    """Value object: igualdade por valor, imutável."""
    street: str
    number: int
    zip_code: str
    city: str

    def __post_init__(self) -> None:
        if not self.street:
            raise EntityValidationError("Street is required")
        if self.number is None or self.number <= 0:
            raise EntityValidationError("Number must be greater than zero")
        if not self.zip_code:
            raise EntityValidationError("Zip code is required")
        if not self.city:
            raise EntityValidationError("City is required")

    def __str__(self) -> str:
        return f"{self.street}, {self.number}, {self.zip_code} {self.city}"

    @classmethod
    def from_dict(cls, data: dict) -> AddressEntity:
        return cls(
            street=data["street"],
            number=int(data["number"]),
            zip_code=data["zip_code"],
            city=data["city"],
        )
