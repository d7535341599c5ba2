"""
Malls API Backend — Store Schemas
===================================
"""

import uuid
from typing import List

from pydantic import Field

from mallsapi.models.store import Store
from mallsapi.schemas.common import ApiModel


class StoreIn(ApiModel):
    """POST /api/stores and PUT /api/stores/{id} body."""

    name: str = Field(min_length=2, max_length=75)
    type: str = Field(min_length=2, max_length=50)


class StoreResponse(ApiModel):
    """A store with the ids of the malls carrying it."""

    id: uuid.UUID = Field(alias="_id")
    name: str
    type: str
    malls: List[uuid.UUID] = Field(default_factory=list)

    @classmethod
    def from_model(cls, store: Store) -> "StoreResponse":
        return cls(id=store.id, name=store.name, type=store.type, malls=store.mall_ids)
