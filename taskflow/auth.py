"""Authentication helpers for request-scoped identity."""

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from taskflow.security import resolve_identity

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth")


async def get_current_identity(token: str = Depends(oauth2_scheme)) -> str:
    """Resolve the caller's identity claim (email) from the bearer token.

    Only the token is checked here; services resolve the claim to a user
    record themselves.
    """
    return resolve_identity(token)
