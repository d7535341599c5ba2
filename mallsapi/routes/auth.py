"""
Malls API Backend — Login Route
=================================

What:  POST /api/auth exchanges email + password for an x-auth-token.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from mallsapi.database import get_db_session
from mallsapi.dependencies import TOKEN_HEADER
from mallsapi.schemas.common import ErrorResponse
from mallsapi.schemas.user import AuthRequest, UserResponse
from mallsapi.services.user_service import user_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "",
    response_model=UserResponse,
    responses={
        400: {"description": "Invalid input or password", "model": ErrorResponse},
        404: {"description": "Unknown email", "model": ErrorResponse},
    },
    summary="Log in",
)
async def login(
    payload: AuthRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user, token = await user_service.authenticate(db, payload)
    response.headers[TOKEN_HEADER] = token
    return user
