from mallsapi.models.user import User
from mallsapi.models.mall import Mall, MallStore, Province
from mallsapi.models.store import Store
from mallsapi.models.employee import Employee, EmployeeType

__all__ = [
    "User",
    "Mall",
    "MallStore",
    "Province",
    "Store",
    "Employee",
    "EmployeeType",
]
