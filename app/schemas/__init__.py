from .base import BaseSchema, BaseTimestampSchema, DataResponse, MessageDataResponse, MessageResponse
from .health_check import HealthCheckResponse
from .user import (
    Pagination,
    UserCreate,
    UserCreateDB,
    UserFilter,
    UserListRequest,
    UserResponse,
    UsersListResponse,
    UserUpdate,
)
from .token import AuthenticatedIdentity, TokenClaims
from .auth import LoginData, LoginRequest

__all__ = [
    "BaseSchema",
    "BaseTimestampSchema",
    "DataResponse",
    "MessageDataResponse",
    "MessageResponse",
    "HealthCheckResponse",
    "Pagination",
    "UserCreate",
    "UserCreateDB",
    "UserFilter",
    "UserListRequest",
    "UserResponse",
    "UsersListResponse",
    "UserUpdate",
    "AuthenticatedIdentity",
    "TokenClaims",
    "LoginData",
    "LoginRequest",
]
