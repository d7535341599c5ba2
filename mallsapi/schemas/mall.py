"""
Malls API Backend — Mall Schemas
==================================

What:  Request body for creating/replacing a mall and the mall representation
       returned by every mall route.

Validation rules (MallIn):
    name        2-100 chars
    address     at least 10 chars
    city        at least 3 chars
    province    one of the ten Province values
    postalCode  exactly 4 digits; a JSON number (8870) is accepted and
                normalized to the string "8870"
"""

import uuid
from typing import Any, List

from pydantic import Field, field_validator

from mallsapi.models.mall import Mall, Province
from mallsapi.schemas.common import ApiModel


class MallIn(ApiModel):
    """POST /api/malls and PUT /api/malls/{id} body (full replacement)."""

    name: str = Field(min_length=2, max_length=100)
    address: str = Field(min_length=10, max_length=255)
    city: str = Field(min_length=3, max_length=100)
    province: Province
    postal_code: str = Field(pattern=r"^\d{4}$")

    @field_validator("postal_code", mode="before")
    @classmethod
    def coerce_postal_code(cls, v: Any) -> Any:
        """Accepts numeric postal codes; bool is rejected rather than coerced."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class MallResponse(ApiModel):
    """A mall with its store and employee id lists."""

    id: uuid.UUID = Field(alias="_id")
    name: str
    address: str
    city: str
    province: Province
    postal_code: str
    stores: List[uuid.UUID] = Field(default_factory=list)
    employees: List[uuid.UUID] = Field(default_factory=list)

    @classmethod
    def from_model(cls, mall: Mall) -> "MallResponse":
        return cls(
            id=mall.id,
            name=mall.name,
            address=mall.address,
            city=mall.city,
            province=mall.province,
            postal_code=mall.postal_code,
            stores=mall.store_ids,
            employees=mall.employee_ids,
        )
