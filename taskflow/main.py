"""TaskFlow Backend - FastAPI Application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse
from sqlalchemy import text

from taskflow import __version__
from taskflow.api.errors import register_exception_handlers
from taskflow.api.middleware import add_cors_middleware, logging_middleware
from taskflow.database import init_db
from taskflow.deps import DbSession
from taskflow.logger import configure_logging, get_logger
from taskflow.routers import auth, tasks, users

# Initialize logging early
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - init DB on startup."""
    await init_db()
    logger.info("Application started", version=__version__)
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="TaskFlow API",
    description="Personal task management with per-user ownership",
    version=__version__,
    lifespan=lifespan,
)

app.middleware("http")(logging_middleware)
add_cors_middleware(app)
register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(tasks.router)
app.include_router(users.router)


@app.get("/health")
async def health_check(db: DbSession) -> Response:
    """Report application health with a database round trip.

    Returns 200 when the database answers, 503 otherwise.
    """
    try:
        await db.execute(text("SELECT 1"))
        database_ok = True
    except Exception as exc:
        logger.error(
            "Health check: database unavailable",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        database_ok = False

    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={
            "status": "healthy" if database_ok else "unhealthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "checks": {"database": database_ok},
            "version": __version__,
        },
    )
