"""GraphQL wire envelope contracts."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, JsonValue, field_validator


class GraphQLErrorLocation(BaseModel):
    model_config = {"frozen": True}

    line: int
    column: int


class GraphQLError(BaseModel):
    model_config = {"frozen": True}

    message: str
    locations: list[GraphQLErrorLocation] = Field(default_factory=list)
    path: list[str | int] = Field(default_factory=list)
    extensions: dict[str, Any] = Field(default_factory=dict)


class GraphQLResponse(BaseModel):
    """Parsed ``{data, errors}`` response body."""

    model_config = {"frozen": True}

    data: JsonValue = None
    errors: list[GraphQLError] = Field(default_factory=list)

    @field_validator("errors", mode="before")
    @classmethod
    def _null_errors(cls, value: Any) -> Any:
        return [] if value is None else value
