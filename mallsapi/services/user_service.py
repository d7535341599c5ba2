"""
Malls API Backend — User Service (Credentials)
================================================

What:  Registration, login, profile lookup and the out-of-band admin toggle.
Who:   Called by the /api/users and /api/auth routes and scripts/promote_admin.py.

Login flow:
    email unknown       → NotFoundError "Invalid email"  (404)
    password mismatch   → InvalidPasswordError            (400)
    success             → (user, signed token)
"""

import logging
import uuid
from typing import Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from mallsapi.exceptions import (
    AlreadyRegisteredError,
    DatabaseError,
    InvalidPasswordError,
    MallsApiError,
    NotFoundError,
)
from mallsapi.models.user import User
from mallsapi.schemas.user import AuthRequest, UserCreate, UserProfile, UserResponse
from mallsapi.security import create_access_token, get_password_hash, verify_password
from mallsapi.services.lookup import get_or_404

logger = logging.getLogger(__name__)


class UserService:
    """Stateless; every call receives the request's session."""

    async def _find_by_email(self, db: AsyncSession, email: str):
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def register(self, db: AsyncSession, data: UserCreate) -> UserResponse:
        """
        Creates a user with a bcrypt-hashed password.

        Raises:
            AlreadyRegisteredError: the email is already bound to a user (400)
            DatabaseError: storage failure (503)
        """
        try:
            if await self._find_by_email(db, data.email) is not None:
                raise AlreadyRegisteredError(email=data.email)

            user = User(
                name=data.name,
                email=data.email,
                password=await run_in_threadpool(get_password_hash, data.password),
            )
            db.add(user)
            await db.flush()
            logger.info("User registered: %s", user.id)
            return UserResponse(id=user.id, name=user.name, email=user.email)

        except MallsApiError:
            raise
        except IntegrityError:
            # Concurrent registration raced past the lookup
            raise AlreadyRegisteredError(email=data.email)
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "register"})

    async def authenticate(
        self, db: AsyncSession, data: AuthRequest
    ) -> Tuple[UserResponse, str]:
        """
        Verifies credentials and issues an x-auth-token.

        Returns:
            (public user record, signed token)
        """
        try:
            user = await self._find_by_email(db, data.email)
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "authenticate"})

        if user is None:
            logger.warning("Login failed: unknown email")
            raise NotFoundError(resource="user", message="Invalid email")
        if not await run_in_threadpool(verify_password, data.password, user.password):
            logger.warning("Login failed: bad password for user %s", user.id)
            raise InvalidPasswordError()

        token = create_access_token(user.id, is_admin=user.is_admin)
        logger.info("User authenticated: %s", user.id)
        return UserResponse(id=user.id, name=user.name, email=user.email), token

    async def get_profile(self, db: AsyncSession, user_id: uuid.UUID) -> UserProfile:
        try:
            user = await get_or_404(db, User, user_id, "User")
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": str(user_id)})
        return UserProfile(
            id=user.id, name=user.name, email=user.email, is_admin=user.is_admin
        )

    async def set_admin(
        self, db: AsyncSession, email: str, is_admin: bool = True
    ) -> UserProfile:
        """
        Grants or revokes the admin flag. Tokens issued earlier keep the flag
        they were signed with until they expire.
        """
        user = await self._find_by_email(db, email)
        if user is None:
            raise NotFoundError(resource="user", message=f"No user with email {email}")
        user.is_admin = is_admin
        await db.flush()
        logger.info("Admin flag for user %s set to %s", user.id, is_admin)
        return UserProfile(
            id=user.id, name=user.name, email=user.email, is_admin=user.is_admin
        )


user_service = UserService()
