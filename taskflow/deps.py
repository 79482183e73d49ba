"""Common FastAPI dependencies for consistent type annotations.

Usage:
    from taskflow.deps import CurrentIdentity, DbSession, PageQuery

    async def my_endpoint(db: DbSession, identity: CurrentIdentity):
        # db is AsyncSession with get_db dependency injected
        # identity is the email carried by the validated bearer token
        ...
"""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.auth import get_current_identity
from taskflow.config import settings
from taskflow.database import get_db
from taskflow.services.pagination import PageParams


def get_page_params(
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Items per page",
    ),
    sort: str | None = Query(None, description="Sort as field[,asc|desc]"),
) -> PageParams:
    return PageParams(page=page, size=size, sort=sort)


DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentIdentity = Annotated[str, Depends(get_current_identity)]
PageQuery = Annotated[PageParams, Depends(get_page_params)]

__all__ = ["CurrentIdentity", "DbSession", "PageQuery"]
