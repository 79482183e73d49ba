"""Authentication API router."""

from fastapi import APIRouter

from taskflow.deps import CurrentIdentity, DbSession
from taskflow.schemas import AuthResponse, LoginRequest, UserSummary
from taskflow.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("", response_model=AuthResponse)
async def login(data: LoginRequest, db: DbSession) -> AuthResponse:
    """Exchange email and password for an access token."""
    token, user = await auth_service.authenticate(db, data.email, data.password)
    return AuthResponse(token=token, user=UserSummary.model_validate(user))


@router.get("/me", response_model=UserSummary)
async def get_me(db: DbSession, identity: CurrentIdentity) -> UserSummary:
    """Get current authenticated user."""
    user = await auth_service.current_user(db, identity)
    return UserSummary.model_validate(user)
