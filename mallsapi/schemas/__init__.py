from mallsapi.schemas.common import ApiModel, ErrorResponse, HealthResponse
from mallsapi.schemas.employee import EmployeeIn, EmployeeResponse
from mallsapi.schemas.mall import MallIn, MallResponse
from mallsapi.schemas.store import StoreIn, StoreResponse
from mallsapi.schemas.user import AuthRequest, UserCreate, UserProfile, UserResponse

__all__ = [
    "ApiModel",
    "ErrorResponse",
    "HealthResponse",
    "EmployeeIn",
    "EmployeeResponse",
    "MallIn",
    "MallResponse",
    "StoreIn",
    "StoreResponse",
    "AuthRequest",
    "UserCreate",
    "UserProfile",
    "UserResponse",
]
