"""
Malls API Backend — Store Service Tests
=========================================

What:  Store CRUD and the deletion sweep, on a real SQLite session.

What we test:
    ✅ After remove_store, no mall lists the store (across several malls)
    ✅ The store's employees are removed; other employees stay
    ✅ The returned snapshot reflects the store before deletion
    ✅ Store names are unique on create and update
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from mallsapi.exceptions import NotFoundError, ValidationError
from mallsapi.models.employee import Employee
from mallsapi.models.mall import MallStore
from mallsapi.schemas.employee import EmployeeIn
from mallsapi.schemas.mall import MallIn
from mallsapi.schemas.store import StoreIn
from mallsapi.services.mall_service import MallService
from mallsapi.services.store_service import StoreService

from conftest import EMPLOYEE_PAYLOAD, MALL_PAYLOAD


class TestStoreCrud:

    def setup_method(self):
        self.service = StoreService()

    @pytest.mark.asyncio
    async def test_create_and_get(self, db_session):
        created = await self.service.create_store(
            db_session, StoreIn(name="McDonalds", type="Fast Food")
        )
        fetched = await self.service.get_store(db_session, created.id)
        assert fetched.name == "McDonalds"
        assert fetched.malls == []

    @pytest.mark.asyncio
    async def test_duplicate_name_rejected(self, db_session):
        await self.service.create_store(db_session, StoreIn(name="McDonalds", type="Fast Food"))
        with pytest.raises(ValidationError, match="Store name already exists"):
            await self.service.create_store(db_session, StoreIn(name="McDonalds", type="Burgers"))

    @pytest.mark.asyncio
    async def test_update_store(self, db_session):
        created = await self.service.create_store(
            db_session, StoreIn(name="McDonalds", type="Fast Food")
        )
        updated = await self.service.update_store(
            db_session, created.id, StoreIn(name="McDonalds", type="Burgers")
        )
        assert updated.type == "Burgers"

    @pytest.mark.asyncio
    async def test_update_to_taken_name_rejected(self, db_session):
        await self.service.create_store(db_session, StoreIn(name="McDonalds", type="Fast Food"))
        other = await self.service.create_store(db_session, StoreIn(name="Zara", type="Clothing"))
        with pytest.raises(ValidationError):
            await self.service.update_store(
                db_session, other.id, StoreIn(name="McDonalds", type="Clothing")
            )

    @pytest.mark.asyncio
    async def test_unique_index_catches_duplicate_name_on_create(self, db_session, monkeypatch):
        await self.service.create_store(db_session, StoreIn(name="McDonalds", type="Fast Food"))
        await db_session.commit()
        monkeypatch.setattr(self.service, "_ensure_name_free", AsyncMock(return_value=None))

        with pytest.raises(ValidationError, match="Store name already exists") as exc_info:
            await self.service.create_store(db_session, StoreIn(name="McDonalds", type="Burgers"))
        assert exc_info.value.field == "name"

    @pytest.mark.asyncio
    async def test_unique_index_catches_duplicate_name_on_update(self, db_session, monkeypatch):
        await self.service.create_store(db_session, StoreIn(name="McDonalds", type="Fast Food"))
        other = await self.service.create_store(db_session, StoreIn(name="Zara", type="Clothing"))
        await db_session.commit()
        monkeypatch.setattr(self.service, "_ensure_name_free", AsyncMock(return_value=None))

        with pytest.raises(ValidationError, match="Store name already exists"):
            await self.service.update_store(
                db_session, other.id, StoreIn(name="McDonalds", type="Clothing")
            )

    @pytest.mark.asyncio
    async def test_list_stores_sorted_by_name(self, db_session):
        await self.service.create_store(db_session, StoreIn(name="Zara", type="Clothing"))
        await self.service.create_store(db_session, StoreIn(name="Action", type="Discount"))
        names = [s.name for s in await self.service.list_stores(db_session)]
        assert names == ["Action", "Zara"]

    @pytest.mark.asyncio
    async def test_remove_unknown_store(self, db_session):
        with pytest.raises(NotFoundError, match="Store not found"):
            await self.service.remove_store(db_session, uuid.uuid4())


class TestStoreDeletionSweep:

    def setup_method(self):
        self.service = StoreService()
        self.malls = MallService()

    async def seed(self, db):
        """Two malls carrying McDonalds and Zara, one employee in each store."""
        first = await self.malls.create_mall(db, MallIn.model_validate(MALL_PAYLOAD))
        second = await self.malls.create_mall(
            db, MallIn.model_validate({**MALL_PAYLOAD, "name": "Ring Kortrijk"})
        )
        burger = await self.service.create_store(db, StoreIn(name="McDonalds", type="Fast Food"))
        fashion = await self.service.create_store(db, StoreIn(name="Zara", type="Clothing"))
        for mall in (first, second):
            await self.malls.add_store_to_mall(db, mall.id, burger.id)
            await self.malls.add_store_to_mall(db, mall.id, fashion.id)

        employee = EmployeeIn.model_validate(EMPLOYEE_PAYLOAD)
        await self.malls.add_employee(db, first.id, burger.id, employee)
        await self.malls.add_employee(db, first.id, fashion.id, employee)
        return first, second, burger, fashion

    @pytest.mark.asyncio
    async def test_no_mall_lists_deleted_store(self, db_session):
        first, second, burger, fashion = await self.seed(db_session)

        await self.service.remove_store(db_session, burger.id)

        for mall in await self.malls.list_malls(db_session):
            assert burger.id not in mall.stores
            assert mall.stores == [fashion.id]

    @pytest.mark.asyncio
    async def test_snapshot_returned(self, db_session):
        first, second, burger, _ = await self.seed(db_session)

        removed = await self.service.remove_store(db_session, burger.id)

        assert removed.id == burger.id
        assert removed.name == "McDonalds"
        assert removed.malls == [first.id, second.id]
        with pytest.raises(NotFoundError):
            await self.service.get_store(db_session, burger.id)

    @pytest.mark.asyncio
    async def test_store_employees_removed_others_kept(self, db_session):
        first, _, burger, fashion = await self.seed(db_session)

        await self.service.remove_store(db_session, burger.id)

        remaining = await self.malls.list_mall_employees(db_session, first.id)
        assert [e.store for e in remaining] == [fashion.id]
        orphans = await db_session.scalar(
            select(func.count()).select_from(Employee).where(Employee.store_id == burger.id)
        )
        assert orphans == 0

    @pytest.mark.asyncio
    async def test_no_association_rows_left(self, db_session):
        _, _, burger, _ = await self.seed(db_session)

        await self.service.remove_store(db_session, burger.id)

        links = await db_session.scalar(
            select(func.count()).select_from(MallStore).where(MallStore.store_id == burger.id)
        )
        assert links == 0
