"""SQLAlchemy models package."""

from taskflow.models.task import Task, TaskPriority, TaskStatus
from taskflow.models.user import User

__all__ = [
    "Task",
    "TaskPriority",
    "TaskStatus",
    "User",
]
