"""User administration service."""

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.logger import get_logger, log_exception
from taskflow.models import Task, User
from taskflow.schemas.user import UserCreate, UserUpdate, normalize_email
from taskflow.security import hash_password
from taskflow.services.pagination import PageParams, fetch_page, parse_sort
from taskflow.utils.exceptions import raise_conflict, raise_not_found

logger = get_logger(__name__)

USER_SORT_FIELDS = {
    "id": User.id,
    "full_name": User.full_name,
    "email": User.email,
    "age": User.age,
    "created_at": User.created_at,
}


def _email_taken_message(email: str) -> str:
    return f"User with email '{email}' already exists"


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise_not_found("User", "id", user_id)

    return user


async def list_users(db: AsyncSession, params: PageParams) -> tuple[list[User], int]:
    """Return one page of users; an empty table gives an empty page."""
    order_by = parse_sort(params.sort, USER_SORT_FIELDS, default="id,asc")
    return await fetch_page(db, select(User), params, order_by)


async def create_user(db: AsyncSession, user_data: UserCreate) -> User:
    if await get_user_by_email(db, user_data.email) is not None:
        raise_conflict(_email_taken_message(user_data.email))

    user = User(
        full_name=user_data.full_name,
        age=user_data.age,
        email=user_data.email,
        hashed_password=hash_password(user_data.password),
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as exc:
        # Another request registered the same email between the check and the insert
        await db.rollback()
        log_exception(logger, exc, "User insert violated integrity", level="warning", include_traceback=False)
        raise_conflict(_email_taken_message(user_data.email), cause=exc)
    await db.refresh(user)

    logger.info("User created", user_id=user.id)
    return user


async def update_user(db: AsyncSession, user_id: int, user_data: UserUpdate) -> User:
    """Replace profile fields; re-hash only when a new password is supplied."""
    user = await get_user(db, user_id)

    if user_data.email != user.email:
        other = await get_user_by_email(db, user_data.email)
        if other is not None and other.id != user_id:
            raise_conflict(_email_taken_message(user_data.email))

    user.full_name = user_data.full_name
    user.age = user_data.age
    user.email = user_data.email
    if user_data.password:
        user.hashed_password = hash_password(user_data.password)

    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        log_exception(logger, exc, "User update violated integrity", level="warning", include_traceback=False)
        raise_conflict(_email_taken_message(user_data.email), cause=exc)
    await db.refresh(user)

    logger.info("User updated", user_id=user_id)
    return user


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """Delete a user together with all of their tasks."""
    user = await get_user(db, user_id)

    await db.execute(delete(Task).where(Task.user_id == user.id))
    await db.delete(user)
    await db.flush()

    logger.info("User deleted", user_id=user_id)
