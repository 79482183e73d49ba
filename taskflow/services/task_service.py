"""Ownership-checked task operations.

Every operation takes the caller's identity claim (the email carried by the
access token) and resolves it to a user before touching any task. A task
that exists but belongs to someone else is reported as forbidden, never as
missing.
"""

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.logger import async_log_timing, get_logger
from taskflow.models import Task, TaskStatus, User
from taskflow.schemas.base import ensure_aware
from taskflow.schemas.task import TaskInput
from taskflow.services.auth_service import current_user
from taskflow.services.pagination import PageParams, fetch_page, parse_sort
from taskflow.utils.exceptions import raise_forbidden, raise_not_found, raise_validation_failed

logger = get_logger(__name__)

TASK_SORT_FIELDS = {
    "id": Task.id,
    "title": Task.title,
    "due_date": Task.due_date,
    "priority": Task.priority,
    "status": Task.status,
    "created_at": Task.created_at,
    "updated_at": Task.updated_at,
}

FORBIDDEN_MESSAGE = "You don't have permission to access this task. It belongs to another user."


def ensure_owner(task: Task, user: User) -> None:
    if task.user_id != user.id:
        logger.warning(
            "Task ownership violation",
            task_id=task.id,
            owner_id=task.user_id,
            requester_id=user.id,
        )
        raise_forbidden(FORBIDDEN_MESSAGE)


def _check_due_date(due_date: datetime | None) -> None:
    if due_date is not None and due_date <= datetime.now(UTC):
        raise_validation_failed({"due_date": "Due date must be in the future"})


async def _load_task(db: AsyncSession, task_id: int) -> Task:
    result = await db.execute(select(Task).where(Task.id == task_id))
    task = result.scalar_one_or_none()
    if task is None:
        raise_not_found("Task", "id", task_id)
    return task


async def _owned_task(db: AsyncSession, task_id: int, identity: str) -> Task:
    user = await current_user(db, identity)
    task = await _load_task(db, task_id)
    ensure_owner(task, user)
    return task


async def get_task(db: AsyncSession, task_id: int, identity: str) -> Task:
    return await _owned_task(db, task_id, identity)


async def list_tasks(db: AsyncSession, identity: str) -> list[Task]:
    """All of the caller's tasks, newest first."""
    user = await current_user(db, identity)
    result = await db.execute(
        select(Task)
        .where(Task.user_id == user.id)
        .order_by(Task.created_at.desc(), Task.id.desc())
    )
    return list(result.scalars().all())


async def list_tasks_page(
    db: AsyncSession, identity: str, params: PageParams
) -> tuple[list[Task], int]:
    user = await current_user(db, identity)
    order_by = parse_sort(params.sort, TASK_SORT_FIELDS, default="created_at,asc")

    async with async_log_timing("list_tasks_page", logger=logger, level="debug", user_id=user.id) as ctx:
        tasks, total = await fetch_page(db, select(Task).where(Task.user_id == user.id), params, order_by)
        ctx["total"] = total
    return tasks, total


async def create_task(db: AsyncSession, task_data: TaskInput, identity: str) -> Task:
    user = await current_user(db, identity)
    _check_due_date(task_data.due_date)

    task = Task(
        user_id=user.id,
        title=task_data.title,
        description=task_data.description,
        due_date=task_data.due_date,
        priority=task_data.priority,
        status=task_data.status or TaskStatus.PENDING,
    )
    db.add(task)
    await db.flush()
    await db.refresh(task)

    logger.info("Task created", task_id=task.id, user_id=user.id)
    return task


async def update_task(db: AsyncSession, task_id: int, task_data: TaskInput, identity: str) -> Task:
    """Replace every editable field of an owned task with the supplied values."""
    task = await _owned_task(db, task_id, identity)

    if task_data.due_date != ensure_aware(task.due_date):
        _check_due_date(task_data.due_date)

    task.title = task_data.title
    task.description = task_data.description
    task.due_date = task_data.due_date
    task.priority = task_data.priority
    task.status = task_data.status or TaskStatus.PENDING
    task.updated_at = datetime.now(UTC)

    await db.flush()
    await db.refresh(task)

    logger.info("Task updated", task_id=task.id)
    return task


async def delete_task(db: AsyncSession, task_id: int, identity: str) -> None:
    task = await _owned_task(db, task_id, identity)

    await db.delete(task)
    await db.flush()

    logger.info("Task deleted", task_id=task_id)
