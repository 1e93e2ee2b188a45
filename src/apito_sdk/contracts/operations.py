"""Operation contract implemented by the Apito client."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from pydantic import JsonValue

from apito_sdk.contracts.document import Document, SearchResult
from apito_sdk.contracts.requests import AuditData, CreateAndUpdateRequest, RelationConnection, SearchFilter


class DocumentOperations(ABC):
    @abstractmethod
    async def __aenter__(self) -> DocumentOperations: ...

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...

    @abstractmethod
    async def generate_tenant_token(self, token: str, tenant: str, *, tenant_id: str | None = None) -> str: ...

    @abstractmethod
    async def get_single_resource(
        self, model: str, id: str, *, single_page_data: bool = False, tenant_id: str | None = None
    ) -> Document: ...

    @abstractmethod
    async def search_resources(
        self, model: str, filter: SearchFilter | None = None, *, tenant_id: str | None = None
    ) -> SearchResult: ...

    @abstractmethod
    async def get_relation_documents(
        self, id: str, connection: RelationConnection, *, tenant_id: str | None = None
    ) -> SearchResult: ...

    @abstractmethod
    async def create_new_resource(
        self, request: CreateAndUpdateRequest, *, tenant_id: str | None = None
    ) -> Document: ...

    @abstractmethod
    async def update_resource(self, request: CreateAndUpdateRequest, *, tenant_id: str | None = None) -> Document: ...

    @abstractmethod
    async def delete_resource(self, model: str, id: str, *, tenant_id: str | None = None) -> None: ...

    @abstractmethod
    async def send_audit_log(self, audit_data: AuditData, *, tenant_id: str | None = None) -> None: ...

    @abstractmethod
    async def debug(self, stage: str, *data: JsonValue, tenant_id: str | None = None) -> JsonValue: ...
