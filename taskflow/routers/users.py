"""User management API router."""

from fastapi import APIRouter, Request, Response, status

from taskflow.deps import CurrentIdentity, DbSession, PageQuery
from taskflow.schemas import UserCreate, UserPageResponse, UserResponse, UserUpdate
from taskflow.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    request: Request,
    response: Response,
    db: DbSession,
) -> UserResponse:
    """Register a new user."""
    user = await user_service.create_user(db, user_data)
    await db.commit()

    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return UserResponse.model_validate(user)


@router.get("", response_model=UserPageResponse)
async def list_users(
    db: DbSession,
    identity: CurrentIdentity,
    page_params: PageQuery,
) -> UserPageResponse:
    """List users with pagination."""
    users, total = await user_service.list_users(db, page_params)
    return UserPageResponse.build(
        items=[UserResponse.model_validate(user) for user in users],
        total=total,
        page=page_params.page,
        size=page_params.size,
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: DbSession, identity: CurrentIdentity) -> UserResponse:
    """Get user by ID."""
    user = await user_service.get_user(db, user_id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    db: DbSession,
    identity: CurrentIdentity,
) -> UserResponse:
    """Update user details."""
    user = await user_service.update_user(db, user_id, user_data)
    await db.commit()
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, db: DbSession, identity: CurrentIdentity) -> None:
    """Delete a user and their tasks."""
    await user_service.delete_user(db, user_id)
    await db.commit()
