"""
Malls API Backend — Entity Lookup
===================================

What:  find-by-id with not-found translation, shared by every service.
How:   populate_existing makes a re-fetch inside the same session refresh the
       eagerly loaded collections, so an object already in the identity map
       never serves stale association lists after a sweep.
"""

import uuid
from typing import Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mallsapi.database import Base
from mallsapi.exceptions import NotFoundError

ModelT = TypeVar("ModelT", bound=Base)


async def get_or_404(
    db: AsyncSession,
    model: Type[ModelT],
    entity_id: uuid.UUID,
    resource: str,
) -> ModelT:
    """
    Raises:
        NotFoundError: "<resource> not found" when no row has that id
    """
    result = await db.execute(
        select(model)
        .where(model.id == entity_id)
        .execution_options(populate_existing=True)
    )
    entity = result.scalar_one_or_none()
    if entity is None:
        raise NotFoundError(resource=resource, resource_id=str(entity_id))
    return entity
