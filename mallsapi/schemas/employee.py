"""
Malls API Backend — Employee Schemas
======================================

What:  Request body for creating/replacing an employee and its response.

Validation rules (EmployeeIn), each checked independently:
    type      must be Manager, Employee or Intern
    salary    must be numeric (numeric strings such as "1250" are coerced);
              booleans are rejected
    hireDate  must parse as an ISO 8601 date or datetime

Ownership (store, mall) comes from the URL, never from the body.
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from mallsapi.models.employee import Employee, EmployeeType
from mallsapi.schemas.common import ApiModel


class EmployeeIn(ApiModel):
    """POST .../employees and PUT /api/malls/{mallId}/{employeeId} body."""

    first_name: str = Field(min_length=2, max_length=75)
    last_name: str = Field(min_length=2, max_length=50)
    type: EmployeeType
    salary: float = Field(ge=0, allow_inf_nan=False)
    hire_date: datetime

    @field_validator("salary", mode="before")
    @classmethod
    def reject_boolean_salary(cls, v: Any) -> Any:
        """JSON true/false would otherwise be coerced to 1.0/0.0."""
        if isinstance(v, bool):
            raise ValueError("Input should be a valid number")
        return v


class EmployeeResponse(ApiModel):
    id: uuid.UUID = Field(alias="_id")
    first_name: str
    last_name: str
    type: EmployeeType
    salary: float
    hire_date: datetime
    store: uuid.UUID
    mall: uuid.UUID

    @classmethod
    def from_model(cls, employee: Employee) -> "EmployeeResponse":
        return cls(
            id=employee.id,
            first_name=employee.first_name,
            last_name=employee.last_name,
            type=employee.type,
            salary=employee.salary,
            hire_date=employee.hire_date,
            store=employee.store_id,
            mall=employee.mall_id,
        )
