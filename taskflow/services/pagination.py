"""Page/size/sort handling shared by the list endpoints."""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from taskflow.config import settings
from taskflow.utils.exceptions import raise_validation_failed


@dataclass(frozen=True)
class PageParams:
    """Zero-based page request, e.g. ``PageParams(page=0, size=8, sort="created_at,desc")``."""

    page: int = 0
    size: int = settings.default_page_size
    sort: str | None = None

    @property
    def offset(self) -> int:
        return self.page * self.size


def parse_sort(
    sort: str | None,
    allowed: dict[str, InstrumentedAttribute[Any]],
    default: str,
) -> list[Any]:
    """Translate ``field[,asc|desc]`` into ORDER BY clauses.

    Unknown fields or directions are reported as validation errors on ``sort``.
    """
    field, _, direction = (sort or default).partition(",")
    field = field.strip()
    direction = direction.strip().lower() or "asc"

    column = allowed.get(field)
    if column is None:
        raise_validation_failed(
            {"sort": f"Unsupported sort field '{field}'. Allowed: {', '.join(sorted(allowed))}"}
        )
    if direction not in ("asc", "desc"):
        raise_validation_failed({"sort": f"Unsupported sort direction '{direction}'"})

    primary = column.desc() if direction == "desc" else column.asc()
    clauses = [primary]
    # Stable ordering across pages when the sort column has duplicates
    id_column = allowed.get("id")
    if id_column is not None and column is not id_column:
        clauses.append(id_column.desc() if direction == "desc" else id_column.asc())
    return clauses


async def fetch_page(
    db: AsyncSession,
    base_query: Select[Any],
    params: PageParams,
    order_by: list[Any],
) -> tuple[list[Any], int]:
    """Run the count and the bounded query for one page."""
    count_query = select(func.count()).select_from(base_query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    query = base_query.order_by(*order_by).limit(params.size).offset(params.offset)
    result = await db.execute(query)
    return list(result.scalars().all()), total
