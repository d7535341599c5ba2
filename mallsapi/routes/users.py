"""
Malls API Backend — User Routes
=================================

What:  POST /api/users (register) and GET /api/users/me (own profile).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mallsapi.database import get_db_session
from mallsapi.dependencies import get_current_identity
from mallsapi.schemas.common import ErrorResponse
from mallsapi.schemas.user import UserCreate, UserProfile, UserResponse
from mallsapi.security import TokenIdentity
from mallsapi.services.user_service import user_service

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get(
    "/me",
    response_model=UserProfile,
    responses={
        401: {"description": "Missing token", "model": ErrorResponse},
        404: {"description": "User no longer exists", "model": ErrorResponse},
    },
    summary="Current user profile",
)
async def get_me(
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> UserProfile:
    return await user_service.get_profile(db, identity.user_id)


@router.post(
    "",
    response_model=UserResponse,
    responses={400: {"description": "Invalid input or email taken", "model": ErrorResponse}},
    summary="Register a new user",
)
async def register(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Creates the account and returns `{_id, name, email}`; log in via /api/auth."""
    return await user_service.register(db, payload)
