"""Pydantic models for API payloads."""

from typing import Any

from pydantic import BaseModel, Field


class EntityCreateRequest(BaseModel):
    """Fields for a new entity; ``published`` may be included."""

    fields: dict[str, Any]


class EntityUpdateRequest(BaseModel):
    """Partial update with an optional prior snapshot for the audit trail."""

    fields: dict[str, Any] = Field(min_length=1)
    before: dict[str, Any] | None = None
