"""Task API router.

Every endpoint acts on behalf of the bearer token's identity; the service
layer enforces that only the owner can see or change a task.
"""

from fastapi import APIRouter, Request, Response, status

from taskflow.deps import CurrentIdentity, DbSession, PageQuery
from taskflow.schemas import TaskInput, TaskPageResponse, TaskResponse
from taskflow.services import task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/paged", response_model=TaskPageResponse)
async def list_tasks_paged(
    db: DbSession,
    identity: CurrentIdentity,
    page_params: PageQuery,
) -> TaskPageResponse:
    """List the caller's tasks one page at a time."""
    tasks, total = await task_service.list_tasks_page(db, identity, page_params)
    return TaskPageResponse.build(
        items=[TaskResponse.model_validate(task) for task in tasks],
        total=total,
        page=page_params.page,
        size=page_params.size,
    )


@router.get("", response_model=list[TaskResponse])
async def list_tasks(db: DbSession, identity: CurrentIdentity) -> list[TaskResponse]:
    """List all of the caller's tasks, newest first."""
    tasks = await task_service.list_tasks(db, identity)
    return [TaskResponse.model_validate(task) for task in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, db: DbSession, identity: CurrentIdentity) -> TaskResponse:
    task = await task_service.get_task(db, task_id, identity)
    return TaskResponse.model_validate(task)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskInput,
    request: Request,
    response: Response,
    db: DbSession,
    identity: CurrentIdentity,
) -> TaskResponse:
    """Create a task owned by the caller."""
    task = await task_service.create_task(db, task_data, identity)
    await db.commit()

    response.headers["Location"] = str(request.url_for("get_task", task_id=task.id))
    return TaskResponse.model_validate(task)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    task_data: TaskInput,
    db: DbSession,
    identity: CurrentIdentity,
) -> TaskResponse:
    """Replace a task's fields with the supplied values."""
    task = await task_service.update_task(db, task_id, task_data, identity)
    await db.commit()
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int, db: DbSession, identity: CurrentIdentity) -> None:
    await task_service.delete_task(db, task_id, identity)
    await db.commit()
