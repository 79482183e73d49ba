"""Domain services: authentication, users and ownership-checked tasks."""

from taskflow.services import auth_service, task_service, user_service
from taskflow.services.pagination import PageParams

__all__ = [
    "PageParams",
    "auth_service",
    "task_service",
    "user_service",
]
