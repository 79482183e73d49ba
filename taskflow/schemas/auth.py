"""Pydantic schemas for authentication."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

from taskflow.schemas.user import UserSummary, normalize_email


class LoginRequest(BaseModel):
    """Credentials submitted to POST /auth.

    The email format is checked at registration, not here; it is only
    normalized the same way registration stores it.
    """

    email: Annotated[str, Field(min_length=1), AfterValidator(normalize_email)]
    password: Annotated[str, Field(min_length=1)]


class AuthResponse(BaseModel):
    """Access token plus the authenticated user's summary."""

    token: str
    token_type: str = "bearer"
    user: UserSummary
