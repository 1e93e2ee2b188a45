"""Request payload contracts for Apito operations."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, JsonValue

from apito_sdk.contracts.document import Payload


class SearchFilter(BaseModel):
    """Paging, where-clause and free-text search for ``getModelData``."""

    model_config = {"frozen": True}

    page: int | None = None
    limit: int | None = None
    where: dict[str, JsonValue] | None = None
    search: str | None = None

    def to_variables(self) -> dict[str, Any]:
        """Return only the filter parameters that were set."""
        return self.model_dump(exclude_none=True)


class RelationConnection(BaseModel):
    """Descriptor used to traverse from one document to related documents.

    Keys beyond ``model`` and ``filter`` are part of the descriptor the
    service understands and are sent unchanged.
    """

    model_config = {"frozen": True, "extra": "allow"}

    model: str = ""
    filter: SearchFilter | None = None

    def to_variable(self, source_id: str) -> dict[str, Any]:
        variable = self.model_dump(mode="json", exclude_none=True)
        variable["_id"] = source_id
        return variable


class CreateAndUpdateRequest(BaseModel):
    """Input for ``upsertModelData``; ``id`` is only used by updates."""

    model_config = {"frozen": True}

    model: str = ""
    payload: Payload | None = None
    id: str = ""
    connect: dict[str, JsonValue] | None = None
    disconnect: dict[str, JsonValue] | None = None
    single_page_data: bool = False
    force_update: bool = False


class AuditData(BaseModel):
    model_config = {"frozen": True}

    resource: str
    action: str
    author: dict[str, JsonValue] = Field(default_factory=dict)
    data: dict[str, JsonValue] = Field(default_factory=dict)
    meta: dict[str, JsonValue] = Field(default_factory=dict)
    additional_fields: dict[str, JsonValue] = Field(default_factory=dict)
    """Extra keys written at the top level of the audit record."""

    def to_record(self) -> dict[str, Any]:
        """Flatten into the record sent to ``sendAuditLog``.

        Core keys win over same-named additional fields.
        """
        core = self.model_dump(mode="json", exclude={"additional_fields"})
        return {**self.additional_fields, **core}
