"""Document contracts returned by the Apito GraphQL API."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, JsonValue, field_validator

T = TypeVar("T")

Payload = dict[str, JsonValue]
"""Untyped document payload as it arrives on the wire."""


def parse_expire_at(value: str | None) -> int | None:
    """Convert an ``expire_at`` marker to epoch seconds.

    All-digit markers are read as epoch seconds, anything else as an
    ISO-8601 timestamp (naive timestamps are taken as UTC). Returns None
    for empty or unparseable markers.
    """
    raw = (value or "").strip()
    if not raw:
        return None
    if raw.isdigit():
        return int(raw)
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return int(parsed.timestamp())


class DocumentMeta(BaseModel):
    model_config = {"frozen": True}

    created_at: str | None = None
    updated_at: str | None = None
    status: str | None = None
    revision: int | None = None
    revision_at: str | None = None
    root_revision_id: str | None = None


class _DocumentEnvelope(BaseModel):
    """Fields shared by raw and typed documents."""

    model_config = {"frozen": True, "populate_by_name": True}

    key: str | None = Field(default=None, alias="_key")
    id: str = ""
    meta: DocumentMeta | None = None
    expire_at: str | None = None
    relation_doc_id: str | None = None
    type: str = ""

    @field_validator("id", "type", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def expire_at_epoch(self) -> int | None:
        return parse_expire_at(self.expire_at)


class Document(_DocumentEnvelope):
    """One record as returned by a query or mutation."""

    data: Payload = Field(default_factory=dict)

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, value: Any) -> Any:
        return {} if value is None else value


class SearchResult(BaseModel):
    """Documents in service order plus the total count reported by the service.

    ``count`` is supplied independently of ``results`` and is never
    reconciled with ``len(results)``.
    """

    model_config = {"frozen": True}

    results: list[Document] = Field(default_factory=list)
    count: int = 0

    @field_validator("results", mode="before")
    @classmethod
    def _null_results(cls, value: Any) -> Any:
        return [] if value is None else value


class TypedDocument(_DocumentEnvelope, Generic[T]):
    """A document whose payload has been projected onto ``T``."""

    data: T


class TypedSearchResult(BaseModel, Generic[T]):
    model_config = {"frozen": True}

    results: list[TypedDocument[T]] = Field(default_factory=list)
    count: int = 0
