"""
Malls API Backend — Mall Route Handlers
=========================================

What:  /api/malls CRUD, the mall's stores, and employees nested under a mall.
How:   Thin handlers: parse path ids, delegate to MallService, return the
       response model. Auth is declared per route through dependencies.

Route Order:
    Fixed segments (/stores, /employees, /employee) are declared before the
    two-segment /{mall_id}/{other_id} forms so Starlette matches them first.

    GET    /api/malls                                  list
    POST   /api/malls                                  create        (token)
    GET    /api/malls/{id}/stores                      mall's stores
    GET    /api/malls/{id}/employees                   mall's employees
    GET    /api/malls/{id}                             one mall
    PUT    /api/malls/{id}                             replace       (token)
    DELETE /api/malls/{id}                             delete        (admin)
    DELETE /api/malls/{id}/employee/{employeeId}       delete        (admin)
    DELETE /api/malls/{id}/employees/{employeeId}      same, alias   (admin)
    DELETE /api/malls/{id}/{employeeId}                same, alias   (admin)
    POST   /api/malls/{id}/{storeId}/employees         new employee  (token)
    GET    /api/malls/{id}/{employeeId}                one employee
    POST   /api/malls/{id}/{storeId}                   link store    (token)
    PUT    /api/malls/{id}/{employeeId}                edit employee (token)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mallsapi.database import get_db_session
from mallsapi.dependencies import get_current_identity, require_admin
from mallsapi.schemas.common import ErrorResponse
from mallsapi.schemas.employee import EmployeeIn, EmployeeResponse
from mallsapi.schemas.mall import MallIn, MallResponse
from mallsapi.schemas.store import StoreResponse
from mallsapi.services.mall_service import mall_service
from mallsapi.validation import parse_identifier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/malls", tags=["Malls"])

_NOT_FOUND = {404: {"description": "Mall, store or employee not found", "model": ErrorResponse}}
_WRITE = {
    400: {"description": "Invalid input or token", "model": ErrorResponse},
    401: {"description": "Missing token", "model": ErrorResponse},
    **_NOT_FOUND,
}
_ADMIN = {**_WRITE, 403: {"description": "Admin role required", "model": ErrorResponse}}


# ── Malls ─────────────────────────────────────────────────────────────────

@router.get("", response_model=List[MallResponse], summary="List malls")
async def list_malls(db: AsyncSession = Depends(get_db_session)) -> List[MallResponse]:
    return await mall_service.list_malls(db)


@router.post(
    "",
    response_model=MallResponse,
    responses=_WRITE,
    dependencies=[Depends(get_current_identity)],
    summary="Create a mall",
)
async def create_mall(
    payload: MallIn,
    db: AsyncSession = Depends(get_db_session),
) -> MallResponse:
    return await mall_service.create_mall(db, payload)


@router.get(
    "/{mall_id}/stores",
    response_model=List[StoreResponse],
    responses=_NOT_FOUND,
    summary="Stores carried by a mall",
)
async def list_mall_stores(
    mall_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[StoreResponse]:
    return await mall_service.list_mall_stores(db, parse_identifier(mall_id, "Mall"))


@router.get(
    "/{mall_id}/employees",
    response_model=List[EmployeeResponse],
    responses=_NOT_FOUND,
    summary="Employees of a mall",
)
async def list_mall_employees(
    mall_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[EmployeeResponse]:
    return await mall_service.list_mall_employees(db, parse_identifier(mall_id, "Mall"))


@router.get("/{mall_id}", response_model=MallResponse, responses=_NOT_FOUND, summary="Get a mall")
async def get_mall(
    mall_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MallResponse:
    return await mall_service.get_mall(db, parse_identifier(mall_id, "Mall"))


@router.put(
    "/{mall_id}",
    response_model=MallResponse,
    responses=_WRITE,
    dependencies=[Depends(get_current_identity)],
    summary="Replace a mall",
)
async def update_mall(
    mall_id: str,
    payload: MallIn,
    db: AsyncSession = Depends(get_db_session),
) -> MallResponse:
    return await mall_service.update_mall(db, parse_identifier(mall_id, "Mall"), payload)


@router.delete(
    "/{mall_id}",
    response_model=MallResponse,
    responses=_ADMIN,
    dependencies=[Depends(require_admin)],
    summary="Delete a mall",
)
async def delete_mall(
    mall_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MallResponse:
    return await mall_service.delete_mall(db, parse_identifier(mall_id, "Mall"))


# ── Employees ─────────────────────────────────────────────────────────────

@router.delete(
    "/{mall_id}/employee/{employee_id}",
    response_model=EmployeeResponse,
    responses=_ADMIN,
    dependencies=[Depends(require_admin)],
    summary="Delete an employee of a mall",
)
@router.delete(
    "/{mall_id}/employees/{employee_id}",
    response_model=EmployeeResponse,
    responses=_ADMIN,
    dependencies=[Depends(require_admin)],
    include_in_schema=False,
)
@router.delete(
    "/{mall_id}/{employee_id}",
    response_model=EmployeeResponse,
    responses=_ADMIN,
    dependencies=[Depends(require_admin)],
    include_in_schema=False,
)
async def remove_employee(
    mall_id: str,
    employee_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeResponse:
    return await mall_service.remove_employee(
        db,
        parse_identifier(mall_id, "Mall"),
        parse_identifier(employee_id, "Employee"),
    )


@router.post(
    "/{mall_id}/{store_id}/employees",
    response_model=EmployeeResponse,
    responses=_WRITE,
    dependencies=[Depends(get_current_identity)],
    summary="Hire an employee into a store of a mall",
)
async def add_employee(
    mall_id: str,
    store_id: str,
    payload: EmployeeIn,
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeResponse:
    return await mall_service.add_employee(
        db,
        parse_identifier(mall_id, "Mall"),
        parse_identifier(store_id, "Store"),
        payload,
    )


@router.get(
    "/{mall_id}/{employee_id}",
    response_model=EmployeeResponse,
    responses=_NOT_FOUND,
    summary="Get one employee of a mall",
)
async def get_mall_employee(
    mall_id: str,
    employee_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeResponse:
    return await mall_service.get_mall_employee(
        db,
        parse_identifier(mall_id, "Mall"),
        parse_identifier(employee_id, "Employee"),
    )


@router.put(
    "/{mall_id}/{employee_id}",
    response_model=EmployeeResponse,
    responses=_WRITE,
    dependencies=[Depends(get_current_identity)],
    summary="Replace an employee's personal fields",
)
async def update_employee(
    mall_id: str,
    employee_id: str,
    payload: EmployeeIn,
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeResponse:
    return await mall_service.update_employee(
        db,
        parse_identifier(mall_id, "Mall"),
        parse_identifier(employee_id, "Employee"),
        payload,
    )


# ── Mall ↔ Store ──────────────────────────────────────────────────────────

@router.post(
    "/{mall_id}/{store_id}",
    response_model=MallResponse,
    responses=_WRITE,
    dependencies=[Depends(get_current_identity)],
    summary="Add a store to a mall",
)
async def add_store_to_mall(
    mall_id: str,
    store_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MallResponse:
    return await mall_service.add_store_to_mall(
        db,
        parse_identifier(mall_id, "Mall"),
        parse_identifier(store_id, "Store"),
    )
