"""Apito GraphQL client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any, TypeVar

import httpx
from pydantic import JsonValue, ValidationError

from apito_sdk.contracts.config import ApitoConfig
from apito_sdk.contracts.document import Document, SearchResult, TypedDocument, TypedSearchResult
from apito_sdk.contracts.exceptions import GraphQLClientError, InvalidRequestError, ResponseShapeError
from apito_sdk.contracts.operations import DocumentOperations
from apito_sdk.contracts.requests import AuditData, CreateAndUpdateRequest, RelationConnection, SearchFilter
from apito_sdk.conversion import convert_to_typed_document, convert_to_typed_search_result
from apito_sdk.graphql import queries
from apito_sdk.graphql.transport import GraphQLTransport

_LOG = logging.getLogger(__name__)

T = TypeVar("T")


class ApitoClient(DocumentOperations):
    """Async client for the Apito GraphQL API.

    Each operation performs at most one round trip and keeps no per-call
    state on the client, so one instance can serve concurrent tasks. Every
    operation accepts an explicit ``tenant_id``; without one the configured
    tenant (if any) is sent.

    Usage::

        async with ApitoClient(config) as client:
            todo = await client.get_single_resource_typed(Todo, "todos", "t1")
    """

    def __init__(self, config: ApitoConfig, *, http_client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._transport = GraphQLTransport(config, http_client=http_client)

    @property
    def config(self) -> ApitoConfig:
        return self._config

    async def __aenter__(self) -> ApitoClient:
        await self._transport.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transport.aclose()

    # ------------------------------------------------------------------
    # Untyped operations
    # ------------------------------------------------------------------

    async def generate_tenant_token(self, token: str, tenant: str, *, tenant_id: str | None = None) -> str:
        data = await self._run(
            "generate_tenant_token",
            queries.GENERATE_TENANT_TOKEN,
            {"token": token, "tenantId": tenant},
            tenant_id=tenant_id,
        )
        result = self._require_dict(data, "generateTenantToken")
        token_value = result.get("token")
        if not isinstance(token_value, str):
            raise ResponseShapeError("unexpected token format")
        return token_value

    async def get_single_resource(
        self, model: str, id: str, *, single_page_data: bool = False, tenant_id: str | None = None
    ) -> Document:
        data = await self._run(
            "get_single_resource",
            queries.GET_SINGLE_DATA,
            {"model": model, "_id": id, "single_page_data": single_page_data},
            tenant_id=tenant_id,
        )
        return self._document(data, "getSingleData")

    async def search_resources(
        self,
        model: str,
        filter: SearchFilter | Mapping[str, Any] | None = None,
        *,
        tenant_id: str | None = None,
    ) -> SearchResult:
        variables: dict[str, Any] = {"model": model}
        search_filter = self._coerce(SearchFilter, filter) if filter is not None else None
        if search_filter is not None:
            variables.update(search_filter.to_variables())

        data = await self._run("search_resources", queries.GET_MODEL_DATA, variables, tenant_id=tenant_id)
        return self._search_result(data, "getModelData")

    async def get_relation_documents(
        self,
        id: str,
        connection: RelationConnection | Mapping[str, Any],
        *,
        tenant_id: str | None = None,
    ) -> SearchResult:
        descriptor = self._coerce(RelationConnection, connection)
        if not descriptor.model:
            raise InvalidRequestError("model is required in connection parameters")

        variables: dict[str, Any] = {"model": descriptor.model, "connection": descriptor.to_variable(id)}
        if descriptor.filter is not None:
            variables.update(descriptor.filter.to_variables())

        data = await self._run("get_relation_documents", queries.GET_RELATION_DATA, variables, tenant_id=tenant_id)
        return self._search_result(data, "getModelData")

    async def create_new_resource(
        self, request: CreateAndUpdateRequest | Mapping[str, Any], *, tenant_id: str | None = None
    ) -> Document:
        req = self._coerce(CreateAndUpdateRequest, request)
        if not req.model:
            raise InvalidRequestError("model is required")
        if req.payload is None:
            raise InvalidRequestError("payload is required")

        variables: dict[str, Any] = {
            "model": req.model,
            "payload": req.payload,
            "single_page_data": req.single_page_data,
        }
        if req.connect is not None:
            variables["connect"] = req.connect

        data = await self._run("create_new_resource", queries.CREATE_MODEL_DATA, variables, tenant_id=tenant_id)
        return self._document(data, "upsertModelData")

    async def update_resource(
        self, request: CreateAndUpdateRequest | Mapping[str, Any], *, tenant_id: str | None = None
    ) -> Document:
        req = self._coerce(CreateAndUpdateRequest, request)
        if not req.id:
            raise InvalidRequestError("id is required")
        if not req.model:
            raise InvalidRequestError("model is required")
        if req.payload is None:
            raise InvalidRequestError("payload is required")

        variables: dict[str, Any] = {
            "_id": req.id,
            "model": req.model,
            "payload": req.payload,
            "single_page_data": req.single_page_data,
            "force_update": req.force_update,
        }
        if req.connect is not None:
            variables["connect"] = req.connect
        if req.disconnect is not None:
            variables["disconnect"] = req.disconnect

        data = await self._run("update_resource", queries.UPDATE_MODEL_DATA, variables, tenant_id=tenant_id)
        return self._document(data, "upsertModelData")

    async def delete_resource(self, model: str, id: str, *, tenant_id: str | None = None) -> None:
        await self._run("delete_resource", queries.DELETE_MODEL_DATA, {"model": model, "_id": id}, tenant_id=tenant_id)

    async def send_audit_log(
        self, audit_data: AuditData | Mapping[str, Any], *, tenant_id: str | None = None
    ) -> None:
        record = self._coerce(AuditData, audit_data).to_record()
        await self._run("send_audit_log", queries.SEND_AUDIT_LOG, {"auditData": record}, tenant_id=tenant_id)

    async def debug(self, stage: str, *data: JsonValue, tenant_id: str | None = None) -> JsonValue:
        """Send arbitrary values to the service's debug hook and return its answer."""
        response_data = await self._run(
            "debug",
            queries.DEBUG,
            {"stage": stage, "data": list(data)},
            tenant_id=tenant_id,
        )
        if "debug" not in response_data:
            raise ResponseShapeError("debug not found in response")
        return response_data["debug"]

    # ------------------------------------------------------------------
    # Typed operations
    # ------------------------------------------------------------------

    async def get_single_resource_typed(
        self,
        data_type: type[T],
        model: str,
        id: str,
        *,
        single_page_data: bool = False,
        tenant_id: str | None = None,
    ) -> TypedDocument[T]:
        document = await self.get_single_resource(model, id, single_page_data=single_page_data, tenant_id=tenant_id)
        return convert_to_typed_document(document, data_type)

    async def search_resources_typed(
        self,
        data_type: type[T],
        model: str,
        filter: SearchFilter | Mapping[str, Any] | None = None,
        *,
        tenant_id: str | None = None,
    ) -> TypedSearchResult[T]:
        results = await self.search_resources(model, filter, tenant_id=tenant_id)
        return convert_to_typed_search_result(results, data_type)

    async def get_relation_documents_typed(
        self,
        data_type: type[T],
        id: str,
        connection: RelationConnection | Mapping[str, Any],
        *,
        tenant_id: str | None = None,
    ) -> TypedSearchResult[T]:
        results = await self.get_relation_documents(id, connection, tenant_id=tenant_id)
        return convert_to_typed_search_result(results, data_type)

    async def create_new_resource_typed(
        self,
        data_type: type[T],
        request: CreateAndUpdateRequest | Mapping[str, Any],
        *,
        tenant_id: str | None = None,
    ) -> TypedDocument[T]:
        document = await self.create_new_resource(request, tenant_id=tenant_id)
        return convert_to_typed_document(document, data_type)

    async def update_resource_typed(
        self,
        data_type: type[T],
        request: CreateAndUpdateRequest | Mapping[str, Any],
        *,
        tenant_id: str | None = None,
    ) -> TypedDocument[T]:
        document = await self.update_resource(request, tenant_id=tenant_id)
        return convert_to_typed_document(document, data_type)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _run(
        self,
        operation: str,
        query: str,
        variables: dict[str, Any],
        *,
        tenant_id: str | None,
    ) -> dict[str, Any]:
        try:
            response = await self._transport.execute(
                query, variables, tenant_id=tenant_id, operation_name=operation
            )
            return self._transport.get_data(response)
        except GraphQLClientError as exc:
            _LOG.debug("Apito operation %s failed: %s", operation, exc)
            raise

    @staticmethod
    def _coerce(model_type: type[Any], value: Any) -> Any:
        if isinstance(value, model_type):
            return value
        try:
            return model_type.model_validate(value)
        except ValidationError as exc:
            raise InvalidRequestError(f"invalid {model_type.__name__}: {exc}") from exc

    @staticmethod
    def _require_dict(data: dict[str, Any], key: str) -> dict[str, Any]:
        if key not in data:
            raise ResponseShapeError(f"{key} not found in response")
        value = data[key]
        if not isinstance(value, dict):
            raise ResponseShapeError(f"unexpected response format at key '{key}'")
        return value

    def _document(self, data: dict[str, Any], key: str) -> Document:
        raw = self._require_dict(data, key)
        try:
            return Document.model_validate(raw)
        except ValidationError as exc:
            raise ResponseShapeError(f"failed to unmarshal {key}: {exc}") from exc

    def _search_result(self, data: dict[str, Any], key: str) -> SearchResult:
        raw = self._require_dict(data, key)
        try:
            return SearchResult.model_validate(raw)
        except ValidationError as exc:
            raise ResponseShapeError(f"failed to unmarshal {key}: {exc}") from exc
