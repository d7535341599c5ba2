"""
Malls API Backend — User Service Tests
========================================

What:  Registration, login and admin toggling against a real SQLite session.
"""

import pytest
from sqlalchemy.exc import OperationalError
from starlette.concurrency import run_in_threadpool

from mallsapi.exceptions import (
    AlreadyRegisteredError,
    DatabaseError,
    InvalidPasswordError,
    NotFoundError,
)
from mallsapi.models.user import User
from mallsapi.schemas.user import AuthRequest, UserCreate
from mallsapi.security import decode_access_token, get_password_hash, verify_password
from mallsapi.services import user_service as user_service_module
from mallsapi.services.user_service import UserService


def new_user(email: str = "firstuser@test.com", password: str = "secret123") -> UserCreate:
    return UserCreate(name="Fabian E.", email=email, password=password)


class TestRegister:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_register_returns_public_fields(self, db_session):
        result = await self.service.register(db_session, new_user())
        assert result.email == "firstuser@test.com"
        assert set(result.model_dump(by_alias=True)) == {"_id", "name", "email"}

    @pytest.mark.asyncio
    async def test_password_is_stored_hashed(self, db_session):
        result = await self.service.register(db_session, new_user())
        user = await db_session.get(User, result.id)
        assert user.password != "secret123"
        assert verify_password("secret123", user.password)
        assert user.is_admin is False

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, db_session):
        await self.service.register(db_session, new_user())
        with pytest.raises(AlreadyRegisteredError, match="User is already registered"):
            await self.service.register(db_session, new_user())

    @pytest.mark.asyncio
    async def test_distinct_emails_both_succeed(self, db_session):
        first = await self.service.register(db_session, new_user("first@test.com"))
        second = await self.service.register(db_session, new_user("second@test.com"))
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_storage_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(DatabaseError) as exc_info:
            await self.service.register(mock_db_session, new_user())
        assert exc_info.value.status_code == 503


class TestAuthenticate:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_valid_credentials_issue_token(self, db_session):
        registered = await self.service.register(db_session, new_user())
        user, token = await self.service.authenticate(
            db_session, AuthRequest(email="firstuser@test.com", password="secret123")
        )
        assert user.id == registered.id
        identity = decode_access_token(token)
        assert identity.user_id == registered.id
        assert identity.is_admin is False

    @pytest.mark.asyncio
    async def test_unknown_email_is_not_found(self, db_session):
        with pytest.raises(NotFoundError, match="Invalid email"):
            await self.service.authenticate(
                db_session, AuthRequest(email="nobody@test.com", password="secret123")
            )

    @pytest.mark.asyncio
    async def test_wrong_password(self, db_session):
        await self.service.register(db_session, new_user())
        with pytest.raises(InvalidPasswordError, match="Invalid password"):
            await self.service.authenticate(
                db_session, AuthRequest(email="firstuser@test.com", password="wrong-one")
            )

    @pytest.mark.asyncio
    async def test_bcrypt_runs_off_the_event_loop(self, db_session, monkeypatch):
        offloaded = []

        async def recording_threadpool(func, *args):
            offloaded.append(func)
            return await run_in_threadpool(func, *args)

        monkeypatch.setattr(user_service_module, "run_in_threadpool", recording_threadpool)

        await self.service.register(db_session, new_user())
        await self.service.authenticate(
            db_session, AuthRequest(email="firstuser@test.com", password="secret123")
        )
        assert offloaded == [get_password_hash, verify_password]


class TestProfileAndAdmin:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_profile_excludes_password(self, db_session):
        registered = await self.service.register(db_session, new_user())
        profile = await self.service.get_profile(db_session, registered.id)
        dumped = profile.model_dump(by_alias=True)
        assert "password" not in dumped
        assert dumped["isAdmin"] is False

    @pytest.mark.asyncio
    async def test_set_admin_then_token_carries_flag(self, db_session):
        await self.service.register(db_session, new_user())
        profile = await self.service.set_admin(db_session, "firstuser@test.com", True)
        assert profile.is_admin is True

        _, token = await self.service.authenticate(
            db_session, AuthRequest(email="firstuser@test.com", password="secret123")
        )
        assert decode_access_token(token).is_admin is True

    @pytest.mark.asyncio
    async def test_revoke_admin(self, db_session):
        await self.service.register(db_session, new_user())
        await self.service.set_admin(db_session, "firstuser@test.com", True)
        profile = await self.service.set_admin(db_session, "firstuser@test.com", False)
        assert profile.is_admin is False

    @pytest.mark.asyncio
    async def test_set_admin_unknown_email(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.set_admin(db_session, "nobody@test.com", True)
