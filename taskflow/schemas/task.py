"""Pydantic schemas for tasks."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from taskflow.models import TaskPriority, TaskStatus
from taskflow.schemas.base import BaseResponse, PageResponse, ensure_aware


class TaskInput(BaseModel):
    """Body of POST /tasks and PUT /tasks/{id}.

    Owner fields sent by clients are ignored; the task always belongs to the
    authenticated user.
    """

    title: Annotated[str, Field(max_length=255)]
    description: str | None = None
    due_date: datetime | None = None
    priority: TaskPriority
    status: TaskStatus | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title is required")
        return v

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v: datetime | None) -> datetime | None:
        return ensure_aware(v)


class TaskResponse(BaseResponse):
    """Task projection."""

    id: int
    title: str
    description: str | None = None
    due_date: datetime | None = None
    priority: TaskPriority
    status: TaskStatus
    user_id: int
    created_at: datetime
    updated_at: datetime

    @field_validator("due_date", "created_at", "updated_at", mode="before")
    @classmethod
    def ensure_timezone_aware(cls, v: datetime | None) -> datetime | None:
        return ensure_aware(v)


TaskPageResponse = PageResponse[TaskResponse]
