from __future__ import annotations

from datetime import UTC, datetime
from http import HTTPStatus

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Health check response."""

    status: str = Field(
        description="Service status indicator. `ok` means the API process is up and responding.",
        examples=["ok"],
    )


class ErrorOut(BaseModel):
    """Structured error body shared by header, topic and inference failures."""

    timestamp: str = Field(description="ISO-8601 UTC time the error was produced.")
    status: int = Field(examples=[400])
    error: str = Field(description="HTTP reason phrase.", examples=["Bad Request"])
    message: str = Field(examples=["The 'X-Forwarded-For' header is required."])
    path: str = Field(examples=["/ask"])

    @classmethod
    def build(cls, *, status: int, message: str, path: str) -> ErrorOut:
        return cls(
            timestamp=datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            status=status,
            error=HTTPStatus(status).phrase,
            message=message,
            path=path,
        )


class DataFileErrorOut(BaseModel):
    """Bare error body returned when the reference data file cannot be read."""

    error: str = Field(examples=["Data file is missing or cannot be read."])
