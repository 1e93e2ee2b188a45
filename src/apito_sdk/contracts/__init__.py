"""Public contracts for the Apito SDK."""

from apito_sdk.contracts.config import ApitoConfig
from apito_sdk.contracts.document import (
    Document,
    DocumentMeta,
    Payload,
    SearchResult,
    TypedDocument,
    TypedSearchResult,
    parse_expire_at,
)
from apito_sdk.contracts.exceptions import (
    ApitoError,
    ConfigError,
    ConversionError,
    GraphQLClientError,
    GraphQLResponseError,
    HttpStatusError,
    InvalidRequestError,
    ResponseShapeError,
    TransportError,
)
from apito_sdk.contracts.graphql import GraphQLError, GraphQLErrorLocation, GraphQLResponse
from apito_sdk.contracts.operations import DocumentOperations
from apito_sdk.contracts.requests import AuditData, CreateAndUpdateRequest, RelationConnection, SearchFilter

__all__ = [
    "ApitoConfig",
    "ApitoError",
    "AuditData",
    "ConfigError",
    "ConversionError",
    "CreateAndUpdateRequest",
    "Document",
    "DocumentMeta",
    "DocumentOperations",
    "GraphQLClientError",
    "GraphQLError",
    "GraphQLErrorLocation",
    "GraphQLResponse",
    "GraphQLResponseError",
    "HttpStatusError",
    "InvalidRequestError",
    "Payload",
    "RelationConnection",
    "ResponseShapeError",
    "SearchFilter",
    "SearchResult",
    "TransportError",
    "TypedDocument",
    "TypedSearchResult",
    "parse_expire_at",
]
