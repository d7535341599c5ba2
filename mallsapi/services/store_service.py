"""
Malls API Backend — Store Service
===================================

What:  CRUD for stores, including deletion with the association sweep.
Who:   Called by the /api/stores routes.

Deletion (remove_store):
    1. Snapshot the store (its `malls` list as it was)
    2. One DELETE over mall_stores for this store, covering every mall
    3. One DELETE over employees owned by the store
    4. DELETE the store row
    Every statement runs in the request transaction; afterwards no mall
    lists the store.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mallsapi.exceptions import DatabaseError, MallsApiError, ValidationError
from mallsapi.models.employee import Employee
from mallsapi.models.mall import MallStore
from mallsapi.models.store import Store
from mallsapi.schemas.store import StoreIn, StoreResponse
from mallsapi.services.lookup import get_or_404

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "Store name already exists"


class StoreService:
    """
    Business logic for stores.

    Error Handling Strategy:
        Domain errors propagate unchanged. A unique-name violation becomes a
        400 ValidationError; any other SQLAlchemy failure becomes a
        DatabaseError (503) with the cause logged server-side.
    """

    async def list_stores(self, db: AsyncSession) -> List[StoreResponse]:
        try:
            result = await db.execute(
                select(Store).order_by(Store.name).execution_options(populate_existing=True)
            )
            return [StoreResponse.from_model(s) for s in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing stores: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "list_stores"})

    async def get_store(self, db: AsyncSession, store_id: uuid.UUID) -> StoreResponse:
        try:
            store = await get_or_404(db, Store, store_id, "Store")
            return StoreResponse.from_model(store)
        except MallsApiError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error fetching store %s: %s", store_id, str(e))
            raise DatabaseError(context={"store_id": str(store_id)})

    async def _ensure_name_free(
        self, db: AsyncSession, name: str, exclude_id: Optional[uuid.UUID] = None
    ) -> None:
        query = select(Store.id).where(Store.name == name)
        if exclude_id is not None:
            query = query.where(Store.id != exclude_id)
        if (await db.execute(query)).first() is not None:
            raise ValidationError(message=DUPLICATE_NAME_MESSAGE, field="name")

    async def create_store(self, db: AsyncSession, data: StoreIn) -> StoreResponse:
        """
        Raises:
            ValidationError: another store already uses the name (400)
        """
        try:
            await self._ensure_name_free(db, data.name)
            store = Store(name=data.name, type=data.type)
            db.add(store)
            await db.flush()
            logger.info("Store created: %s (%s)", store.id, store.name)
            return StoreResponse(id=store.id, name=store.name, type=store.type, malls=[])
        except MallsApiError:
            raise
        except IntegrityError:
            logger.warning("Unique index rejected store name %r", data.name)
            raise ValidationError(message=DUPLICATE_NAME_MESSAGE, field="name")
        except SQLAlchemyError as e:
            logger.error("Database error creating store: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "create_store"})

    async def update_store(
        self, db: AsyncSession, store_id: uuid.UUID, data: StoreIn
    ) -> StoreResponse:
        try:
            store = await get_or_404(db, Store, store_id, "Store")
            await self._ensure_name_free(db, data.name, exclude_id=store.id)
            store.name = data.name
            store.type = data.type
            await db.flush()
            logger.info("Store updated: %s", store.id)
            return StoreResponse.from_model(store)
        except MallsApiError:
            raise
        except IntegrityError:
            logger.warning("Unique index rejected store name %r for store %s", data.name, store_id)
            raise ValidationError(message=DUPLICATE_NAME_MESSAGE, field="name")
        except SQLAlchemyError as e:
            logger.error("Database error updating store %s: %s", store_id, str(e))
            raise DatabaseError(context={"store_id": str(store_id)})

    async def remove_store(self, db: AsyncSession, store_id: uuid.UUID) -> StoreResponse:
        """
        Deletes a store and sweeps every reference to it.

        Returns:
            The store as it was before deletion, including its former malls
        """
        try:
            store = await get_or_404(db, Store, store_id, "Store")
            snapshot = StoreResponse.from_model(store)

            swept = await db.execute(
                delete(MallStore).where(MallStore.store_id == store.id)
            )
            removed_staff = await db.execute(
                delete(Employee).where(Employee.store_id == store.id)
            )
            await db.execute(delete(Store).where(Store.id == store.id))

            logger.info(
                "Store deleted: %s (unlinked from %d malls, %d employees removed)",
                store_id,
                swept.rowcount,
                removed_staff.rowcount,
            )
            return snapshot
        except MallsApiError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting store %s: %s", store_id, str(e), exc_info=True)
            raise DatabaseError(context={"store_id": str(store_id)})


store_service = StoreService()
