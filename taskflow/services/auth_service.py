"""Credential verification and token issuance."""

from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.logger import get_logger
from taskflow.models import User
from taskflow.security import issue_token, verify_password
from taskflow.services.user_service import get_user_by_email
from taskflow.utils.exceptions import raise_not_found, raise_unauthorized

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


async def verify_credentials(db: AsyncSession, email: str, password: str) -> User:
    """Return the user owning these credentials.

    Unknown emails and wrong passwords fail identically so callers cannot
    probe which accounts exist.
    """
    user = await get_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        logger.warning("Failed login attempt")
        raise_unauthorized(INVALID_CREDENTIALS)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> tuple[str, User]:
    user = await verify_credentials(db, email, password)
    token = issue_token(user.email)
    logger.info("Successful login", user_id=user.id)
    return token, user


async def current_user(db: AsyncSession, identity: str) -> User:
    """Resolve an identity claim taken from a validated token."""
    user = await get_user_by_email(db, identity)
    if user is None:
        raise_not_found("User", "email", identity)
    return user
