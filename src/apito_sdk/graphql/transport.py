"""httpx-based GraphQL transport for the Apito endpoint."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from apito_sdk.contracts.config import ApitoConfig
from apito_sdk.contracts.exceptions import (
    GraphQLResponseError,
    HttpStatusError,
    ResponseShapeError,
    TransportError,
)
from apito_sdk.contracts.graphql import GraphQLResponse

_LOG = logging.getLogger(__name__)

API_KEY_HEADER = "X-Apito-Key"
TENANT_HEADER = "X-Apito-Tenant-ID"


class GraphQLTransport:
    """Sends one GraphQL POST per call and parses the ``{data, errors}`` envelope.

    A caller-supplied ``http_client`` is shared, not owned: the transport
    never closes it. Without one, an ``httpx.AsyncClient`` is created on
    first use with the configured timeout and closed by :meth:`aclose`.
    """

    def __init__(self, config: ApitoConfig, *, http_client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._http_client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> GraphQLTransport:
        self._require_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        *,
        tenant_id: str | None = None,
        operation_name: str | None = None,
    ) -> GraphQLResponse:
        """Execute a query or mutation.

        Args:
            query: The GraphQL operation string.
            variables: Mapping of variable names to values; omitted from the
                body when None.
            tenant_id: Tenant for this call; falls back to the configured tenant.
            operation_name: Label used in log lines only.

        Returns:
            The parsed response envelope.

        Raises:
            TransportError: The request could not be serialized or sent.
            HttpStatusError: The endpoint answered with a non-2xx status.
            ResponseShapeError: The body is not a GraphQL response object.
            GraphQLResponseError: The response carries a non-empty ``errors`` list.
        """
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables
        headers = {API_KEY_HEADER: self._config.api_key}
        tenant = tenant_id or self._config.tenant_id
        if tenant:
            headers[TENANT_HEADER] = tenant

        client = self._require_client()
        _LOG.debug("Sending GraphQL operation %s (tenant=%s)", operation_name or "anonymous", tenant or "-")
        try:
            response = await client.post(self._config.base_url, json=payload, headers=headers)
        except (TypeError, ValueError) as exc:
            raise TransportError(f"failed to marshal GraphQL payload: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"failed to execute HTTP request: {exc}") from exc

        _LOG.debug("GraphQL operation %s returned HTTP %d", operation_name or "anonymous", response.status_code)
        if not response.is_success:
            raise HttpStatusError(response.status_code, response.text)

        try:
            body = response.json()
        except ValueError as exc:
            raise ResponseShapeError(f"failed to unmarshal GraphQL response: {exc}") from exc
        if not isinstance(body, dict):
            raise ResponseShapeError("GraphQL response body is not a JSON object")
        try:
            parsed = GraphQLResponse.model_validate(body)
        except ValidationError as exc:
            raise ResponseShapeError(f"invalid GraphQL response envelope: {exc}") from exc

        if parsed.errors:
            raise GraphQLResponseError(parsed.errors)
        return parsed

    @staticmethod
    def get_data(response: GraphQLResponse) -> dict[str, Any]:
        """Return the ``data`` object of a response.

        Raises:
            ResponseShapeError: If ``data`` is missing or not an object.
        """
        data = response.data
        if not isinstance(data, dict):
            raise ResponseShapeError("unexpected response format: data is not an object")
        return data

    def _require_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=httpx.Timeout(self._config.timeout))
        return self._http_client
