"""Public API surface for the Apito SDK."""

__version__ = "1.2.0"

from apito_sdk.client import ApitoClient
from apito_sdk.config import config_from_env, load_config
from apito_sdk.contracts.config import ApitoConfig
from apito_sdk.contracts.document import (
    Document,
    DocumentMeta,
    SearchResult,
    TypedDocument,
    TypedSearchResult,
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
from apito_sdk.contracts.requests import AuditData, CreateAndUpdateRequest, RelationConnection, SearchFilter
from apito_sdk.conversion import convert_to_typed_document, convert_to_typed_search_result


def get_version() -> str:
    return __version__


__all__ = [
    "ApitoClient",
    "ApitoConfig",
    "ApitoError",
    "AuditData",
    "ConfigError",
    "ConversionError",
    "CreateAndUpdateRequest",
    "Document",
    "DocumentMeta",
    "GraphQLClientError",
    "GraphQLResponseError",
    "HttpStatusError",
    "InvalidRequestError",
    "RelationConnection",
    "ResponseShapeError",
    "SearchFilter",
    "SearchResult",
    "TransportError",
    "TypedDocument",
    "TypedSearchResult",
    "__version__",
    "config_from_env",
    "convert_to_typed_document",
    "convert_to_typed_search_result",
    "get_version",
    "load_config",
]
