"""Tests for application wiring: health, request tracing, auth guard."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_reports_database(public_client: AsyncClient) -> None:
    response = await public_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"] == {"database": True}


@pytest.mark.asyncio
async def test_request_id_is_echoed(public_client: AsyncClient) -> None:
    response = await public_client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_request_id_generated_when_missing(public_client: AsyncClient) -> None:
    response = await public_client.get("/health")

    assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/tasks", "/tasks/1", "/tasks/paged", "/users", "/auth/me"])
async def test_protected_routes_require_token(public_client: AsyncClient, path: str) -> None:
    response = await public_client.get(path)

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_invalid_token_is_rejected(public_client: AsyncClient) -> None:
    response = await public_client.get("/tasks", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["message"] == "Authentication failed. Please login again."
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_expired_token_is_rejected_like_missing_one(public_client: AsyncClient) -> None:
    from datetime import timedelta

    from taskflow.security import create_access_token

    token = create_access_token({"sub": "late@example.com"}, timedelta(seconds=-1))
    response = await public_client.get("/tasks", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_cli_defaults() -> None:
    from taskflow.__main__ import build_parser

    args = build_parser().parse_args([])

    assert (args.host, args.port, args.reload) == ("127.0.0.1", 8000, False)


def test_cli_runs_uvicorn_with_options(monkeypatch) -> None:
    from taskflow import __main__ as cli

    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    cli.main(["--host", "0.0.0.0", "--port", "9000"])

    assert calls == [("taskflow.main:app", {"host": "0.0.0.0", "port": 9000, "reload": False})]


@pytest.mark.asyncio
async def test_create_schema_is_idempotent(db_engine) -> None:
    from sqlalchemy import inspect

    from taskflow.database import create_schema

    await create_schema(bind=db_engine)

    async with db_engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    assert {"users", "tasks"} <= set(tables)
