"""Structured error payload returned for every failed request."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    status: int
    error: str
    path: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    validation_errors: dict[str, str] | None = Field(default=None, alias="validationErrors")
