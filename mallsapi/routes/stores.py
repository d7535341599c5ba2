"""
Malls API Backend — Store Route Handlers
==========================================

What:  /api/stores CRUD. Deleting a store (admin only) also unlinks it from
       every mall and removes its employees.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mallsapi.database import get_db_session
from mallsapi.dependencies import get_current_identity, require_admin
from mallsapi.schemas.common import ErrorResponse
from mallsapi.schemas.store import StoreIn, StoreResponse
from mallsapi.services.store_service import store_service
from mallsapi.validation import parse_identifier

router = APIRouter(prefix="/api/stores", tags=["Stores"])

_WRITE = {
    400: {"description": "Invalid input, token or duplicate name", "model": ErrorResponse},
    401: {"description": "Missing token", "model": ErrorResponse},
    404: {"description": "Store not found", "model": ErrorResponse},
}


@router.get("", response_model=List[StoreResponse], summary="List stores")
async def list_stores(db: AsyncSession = Depends(get_db_session)) -> List[StoreResponse]:
    return await store_service.list_stores(db)


@router.get(
    "/{store_id}",
    response_model=StoreResponse,
    responses={404: _WRITE[404]},
    summary="Get a store",
)
async def get_store(
    store_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> StoreResponse:
    return await store_service.get_store(db, parse_identifier(store_id, "Store"))


@router.post(
    "",
    response_model=StoreResponse,
    responses=_WRITE,
    dependencies=[Depends(get_current_identity)],
    summary="Create a store",
)
async def create_store(
    payload: StoreIn,
    db: AsyncSession = Depends(get_db_session),
) -> StoreResponse:
    return await store_service.create_store(db, payload)


@router.put(
    "/{store_id}",
    response_model=StoreResponse,
    responses=_WRITE,
    dependencies=[Depends(get_current_identity)],
    summary="Update a store",
)
async def update_store(
    store_id: str,
    payload: StoreIn,
    db: AsyncSession = Depends(get_db_session),
) -> StoreResponse:
    return await store_service.update_store(db, parse_identifier(store_id, "Store"), payload)


@router.delete(
    "/{store_id}",
    response_model=StoreResponse,
    responses={**_WRITE, 403: {"description": "Admin role required", "model": ErrorResponse}},
    dependencies=[Depends(require_admin)],
    summary="Delete a store and unlink it from every mall",
)
async def delete_store(
    store_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> StoreResponse:
    return await store_service.remove_store(db, parse_identifier(store_id, "Store"))
