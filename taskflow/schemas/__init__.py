from taskflow.schemas.auth import AuthResponse, LoginRequest
from taskflow.schemas.base import BaseResponse, PageResponse
from taskflow.schemas.error import ErrorResponse
from taskflow.schemas.task import TaskInput, TaskPageResponse, TaskResponse
from taskflow.schemas.user import (
    UserCreate,
    UserPageResponse,
    UserResponse,
    UserSummary,
    UserUpdate,
)

__all__ = [
    "AuthResponse",
    "BaseResponse",
    "ErrorResponse",
    "LoginRequest",
    "PageResponse",
    "TaskInput",
    "TaskPageResponse",
    "TaskResponse",
    "UserCreate",
    "UserPageResponse",
    "UserResponse",
    "UserSummary",
    "UserUpdate",
]
