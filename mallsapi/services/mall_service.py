"""
Malls API Backend — Mall Service (Relationship Integrity)
===========================================================

What:  Mall CRUD plus the two relationships a mall owns: its stores (via
       mall_stores) and its employees (containment).
Why:   Keeps both sides of Mall↔Store consistent and never leaves a mall
       listing an employee or store that no longer exists.
Who:   Called by the /api/malls routes.

Operation Guarantees:
    ┌────────────────────┬────────────────────────────────────────────────┐
    │ add_store_to_mall  │ one mall_stores row; duplicate → 400, no write │
    │ add_employee       │ employee bound to both ids, listed by the mall │
    │ update_employee    │ personal fields replaced, ownership kept       │
    │ remove_employee    │ must belong to the mall; removed by id         │
    │ delete_mall        │ links and employees removed, stores untouched  │
    └────────────────────┴────────────────────────────────────────────────┘

    Every operation resolves all ids before writing anything. The request
    session commits on success and rolls back on any raised error, so a
    failure part-way leaves no partial state behind.
"""

import logging
import uuid
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mallsapi.exceptions import (
    DatabaseError,
    DuplicateAssociationError,
    MallsApiError,
    NotFoundError,
)
from mallsapi.models.employee import Employee
from mallsapi.models.mall import Mall, MallStore
from mallsapi.models.store import Store
from mallsapi.schemas.employee import EmployeeIn, EmployeeResponse
from mallsapi.schemas.mall import MallIn, MallResponse
from mallsapi.schemas.store import StoreResponse
from mallsapi.services.lookup import get_or_404

logger = logging.getLogger(__name__)


class MallService:
    """
    Business logic for malls, their stores and their employees.

    Error Handling Strategy:
        MallsApiError subclasses propagate as-is. SQLAlchemy failures are
        logged with their cause and re-raised as DatabaseError (503), except
        a unique violation on mall_stores, which is a duplicate association.
    """

    # ── Malls ─────────────────────────────────────────────────────────────

    async def list_malls(self, db: AsyncSession) -> List[MallResponse]:
        try:
            result = await db.execute(
                select(Mall).order_by(Mall.name).execution_options(populate_existing=True)
            )
            return [MallResponse.from_model(m) for m in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing malls: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "list_malls"})

    async def get_mall(self, db: AsyncSession, mall_id: uuid.UUID) -> MallResponse:
        try:
            mall = await get_or_404(db, Mall, mall_id, "Mall")
            return MallResponse.from_model(mall)
        except MallsApiError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error fetching mall %s: %s", mall_id, str(e))
            raise DatabaseError(context={"mall_id": str(mall_id)})

    async def create_mall(self, db: AsyncSession, data: MallIn) -> MallResponse:
        """Creates a mall with empty store and employee lists."""
        try:
            mall = Mall(
                name=data.name,
                address=data.address,
                city=data.city,
                province=data.province,
                postal_code=data.postal_code,
            )
            db.add(mall)
            await db.flush()
            logger.info("Mall created: %s (%s)", mall.id, mall.name)
            return MallResponse(
                id=mall.id,
                name=mall.name,
                address=mall.address,
                city=mall.city,
                province=mall.province,
                postal_code=mall.postal_code,
                stores=[],
                employees=[],
            )
        except SQLAlchemyError as e:
            logger.error("Database error creating mall: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "create_mall"})

    async def update_mall(
        self, db: AsyncSession, mall_id: uuid.UUID, data: MallIn
    ) -> MallResponse:
        """Full replacement of the scalar fields; relations are kept."""
        try:
            mall = await get_or_404(db, Mall, mall_id, "Mall")
            mall.name = data.name
            mall.address = data.address
            mall.city = data.city
            mall.province = data.province
            mall.postal_code = data.postal_code
            await db.flush()
            logger.info("Mall updated: %s", mall.id)
            return MallResponse.from_model(mall)
        except MallsApiError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating mall %s: %s", mall_id, str(e))
            raise DatabaseError(context={"mall_id": str(mall_id)})

    async def delete_mall(self, db: AsyncSession, mall_id: uuid.UUID) -> MallResponse:
        """
        Deletes a mall together with its links and employees.

        Stores survive; they simply stop listing this mall.

        Returns:
            The mall as it was before deletion
        """
        try:
            mall = await get_or_404(db, Mall, mall_id, "Mall")
            snapshot = MallResponse.from_model(mall)

            await db.execute(delete(MallStore).where(MallStore.mall_id == mall.id))
            await db.execute(delete(Employee).where(Employee.mall_id == mall.id))
            await db.execute(delete(Mall).where(Mall.id == mall.id))

            logger.info(
                "Mall deleted: %s (%d stores unlinked, %d employees removed)",
                mall_id,
                len(snapshot.stores),
                len(snapshot.employees),
            )
            return snapshot
        except MallsApiError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting mall %s: %s", mall_id, str(e), exc_info=True)
            raise DatabaseError(context={"mall_id": str(mall_id)})

    # ── Mall ↔ Store ──────────────────────────────────────────────────────

    async def add_store_to_mall(
        self, db: AsyncSession, mall_id: uuid.UUID, store_id: uuid.UUID
    ) -> MallResponse:
        """
        Associates a store with a mall.

        Raises:
            NotFoundError: mall or store does not exist (404)
            DuplicateAssociationError: store already in the mall (400)
        """
        try:
            mall = await get_or_404(db, Mall, mall_id, "Mall")
            store = await get_or_404(db, Store, store_id, "Store")

            if store.id in mall.store_ids:
                logger.warning("Store %s already in mall %s", store.id, mall.id)
                raise DuplicateAssociationError(str(mall.id), str(store.id))

            # back_populates appends the link to both mall.store_links and store.mall_links
            db.add(MallStore(mall=mall, store=store))
            await db.flush()

            logger.info("Store %s added to mall %s", store.id, mall.id)
            return MallResponse.from_model(mall)
        except MallsApiError:
            raise
        except IntegrityError:
            logger.warning("Concurrent duplicate link for mall %s, store %s", mall_id, store_id)
            raise DuplicateAssociationError(str(mall_id), str(store_id))
        except SQLAlchemyError as e:
            logger.error("Database error linking store %s to mall %s: %s", store_id, mall_id, str(e))
            raise DatabaseError(context={"mall_id": str(mall_id), "store_id": str(store_id)})

    async def list_mall_stores(
        self, db: AsyncSession, mall_id: uuid.UUID
    ) -> List[StoreResponse]:
        try:
            await get_or_404(db, Mall, mall_id, "Mall")
            result = await db.execute(
                select(Store)
                .join(MallStore, MallStore.store_id == Store.id)
                .where(MallStore.mall_id == mall_id)
                .order_by(MallStore.position)
                .execution_options(populate_existing=True)
            )
            return [StoreResponse.from_model(s) for s in result.scalars().all()]
        except MallsApiError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error listing stores of mall %s: %s", mall_id, str(e))
            raise DatabaseError(context={"mall_id": str(mall_id)})

    # ── Employees ─────────────────────────────────────────────────────────

    async def _employee_of_mall(
        self, db: AsyncSession, mall: Mall, employee_id: uuid.UUID
    ) -> Employee:
        result = await db.execute(
            select(Employee).where(
                Employee.id == employee_id, Employee.mall_id == mall.id
            )
        )
        employee = result.scalar_one_or_none()
        if employee is None:
            raise NotFoundError(
                resource="Employee",
                resource_id=str(employee_id),
                context={"mall_id": str(mall.id)},
            )
        return employee

    async def list_mall_employees(
        self, db: AsyncSession, mall_id: uuid.UUID
    ) -> List[EmployeeResponse]:
        try:
            mall = await get_or_404(db, Mall, mall_id, "Mall")
            return [EmployeeResponse.from_model(e) for e in mall.employees]
        except MallsApiError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error listing employees of mall %s: %s", mall_id, str(e))
            raise DatabaseError(context={"mall_id": str(mall_id)})

    async def get_mall_employee(
        self, db: AsyncSession, mall_id: uuid.UUID, employee_id: uuid.UUID
    ) -> EmployeeResponse:
        try:
            mall = await get_or_404(db, Mall, mall_id, "Mall")
            employee = await self._employee_of_mall(db, mall, employee_id)
            return EmployeeResponse.from_model(employee)
        except MallsApiError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error fetching employee %s: %s", employee_id, str(e))
            raise DatabaseError(context={"employee_id": str(employee_id)})

    async def add_employee(
        self,
        db: AsyncSession,
        mall_id: uuid.UUID,
        store_id: uuid.UUID,
        data: EmployeeIn,
    ) -> EmployeeResponse:
        """
        Creates an employee working in `store_id` and lists it on the mall.

        The store does not have to be associated with the mall.
        """
        try:
            mall = await get_or_404(db, Mall, mall_id, "Mall")
            store = await get_or_404(db, Store, store_id, "Store")

            employee = Employee(
                first_name=data.first_name,
                last_name=data.last_name,
                type=data.type,
                salary=data.salary,
                hire_date=data.hire_date,
                store=store,
            )
            mall.employees.append(employee)
            await db.flush()

            logger.info("Employee %s added to mall %s (store %s)", employee.id, mall.id, store.id)
            return EmployeeResponse.from_model(employee)
        except MallsApiError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error adding employee to mall %s: %s", mall_id, str(e))
            raise DatabaseError(context={"mall_id": str(mall_id), "store_id": str(store_id)})

    async def update_employee(
        self,
        db: AsyncSession,
        mall_id: uuid.UUID,
        employee_id: uuid.UUID,
        data: EmployeeIn,
    ) -> EmployeeResponse:
        """Replaces firstName, lastName, type, salary and hireDate."""
        try:
            mall = await get_or_404(db, Mall, mall_id, "Mall")
            employee = await self._employee_of_mall(db, mall, employee_id)

            employee.first_name = data.first_name
            employee.last_name = data.last_name
            employee.type = data.type
            employee.salary = data.salary
            employee.hire_date = data.hire_date
            await db.flush()

            logger.info("Employee updated: %s", employee.id)
            return EmployeeResponse.from_model(employee)
        except MallsApiError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating employee %s: %s", employee_id, str(e))
            raise DatabaseError(context={"employee_id": str(employee_id)})

    async def remove_employee(
        self, db: AsyncSession, mall_id: uuid.UUID, employee_id: uuid.UUID
    ) -> EmployeeResponse:
        """
        Deletes an employee of the mall, matching by id.

        Returns:
            The employee as it was before deletion
        """
        try:
            mall = await get_or_404(db, Mall, mall_id, "Mall")
            employee = await self._employee_of_mall(db, mall, employee_id)
            snapshot = EmployeeResponse.from_model(employee)

            mall.employees.remove(employee)
            await db.delete(employee)
            await db.flush()

            logger.info("Employee %s removed from mall %s", employee_id, mall.id)
            return snapshot
        except MallsApiError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error removing employee %s: %s", employee_id, str(e))
            raise DatabaseError(context={"employee_id": str(employee_id)})


mall_service = MallService()
