"""Tests for the boundary that turns failures into structured error payloads."""

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError

from taskflow.api.errors import register_exception_handlers
from taskflow.utils.exceptions import raise_forbidden, raise_not_found, raise_validation_failed


class Payload(BaseModel):
    name: str = Field(min_length=2)
    count: int


def build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/missing/{item_id}")
    async def missing(item_id: int) -> None:
        raise_not_found("Task", "id", item_id)

    @app.get("/forbidden")
    async def forbidden() -> None:
        raise_forbidden("Not yours")

    @app.get("/invalid")
    async def invalid() -> None:
        raise_validation_failed({"due_date": "Due date must be in the future"})

    @app.post("/payload")
    async def payload(body: Payload) -> dict:
        return body.model_dump()

    @app.get("/duplicate")
    async def duplicate() -> None:
        raise IntegrityError(
            "INSERT INTO users", {}, Exception('duplicate key value violates unique constraint "ix_users_email"')
        )

    @app.get("/integrity")
    async def integrity() -> None:
        raise IntegrityError("INSERT INTO tasks", {}, Exception("NOT NULL constraint failed: tasks.title"))

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("kaboom")

    return app


@pytest_asyncio.fixture
async def error_client():
    transport = ASGITransport(app=build_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_domain_error_payload_shape(error_client: AsyncClient) -> None:
    response = await error_client.get("/missing/999")

    assert response.status_code == 404
    body = response.json()
    assert body["message"] == "Task not found with id: 999"
    assert body["status"] == 404
    assert body["error"] == "Not Found"
    assert body["path"] == "/missing/999"
    assert body["timestamp"]
    assert body["validationErrors"] is None


@pytest.mark.asyncio
async def test_forbidden_maps_to_403(error_client: AsyncClient) -> None:
    response = await error_client.get("/forbidden")

    assert response.status_code == 403
    assert response.json()["error"] == "Forbidden"
    assert response.json()["message"] == "Not yours"


@pytest.mark.asyncio
async def test_service_validation_error_keeps_field_messages(error_client: AsyncClient) -> None:
    response = await error_client.get("/invalid")

    assert response.status_code == 400
    assert response.json()["validationErrors"] == {"due_date": "Due date must be in the future"}


@pytest.mark.asyncio
async def test_request_validation_becomes_400_with_field_map(error_client: AsyncClient) -> None:
    response = await error_client.post("/payload", json={"name": "x"})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["error"] == "Bad Request"
    assert set(body["validationErrors"]) == {"name", "count"}


@pytest.mark.asyncio
async def test_path_parameter_validation_uses_parameter_name(error_client: AsyncClient) -> None:
    response = await error_client.get("/missing/not-a-number")

    assert response.status_code == 400
    assert "item_id" in response.json()["validationErrors"]


@pytest.mark.asyncio
async def test_unknown_route_uses_same_shape(error_client: AsyncClient) -> None:
    response = await error_client.get("/nope")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Not Found"
    assert body["path"] == "/nope"


@pytest.mark.asyncio
async def test_unique_violation_maps_to_conflict(error_client: AsyncClient) -> None:
    response = await error_client.get("/duplicate")

    assert response.status_code == 409
    assert response.json()["message"] == "Email already exists. Please use a different email address."


@pytest.mark.asyncio
async def test_other_integrity_violation_is_internal_error(error_client: AsyncClient, monkeypatch) -> None:
    from taskflow.api import errors

    monkeypatch.setattr(errors.settings, "debug", False)
    response = await error_client.get("/integrity")

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "An internal server error occurred"
    assert body["error"] == "Internal Server Error"
    assert "NOT NULL" not in response.text


@pytest.mark.asyncio
async def test_unhandled_exception_hides_details(error_client: AsyncClient, monkeypatch) -> None:
    from taskflow.api import errors

    monkeypatch.setattr(errors.settings, "debug", False)
    response = await error_client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "An internal server error occurred"
    assert body["error"] == "Internal Server Error"
    assert "kaboom" not in response.text
