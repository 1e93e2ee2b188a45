"""Exception hierarchy for the Apito SDK.

All SDK exceptions inherit from :class:`ApitoError`, so callers can catch
every library failure with a single ``except`` clause while still telling
transport, remote, shape and conversion failures apart.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from apito_sdk.contracts.graphql import GraphQLError


class ApitoError(Exception):
    """Base exception for all Apito SDK errors."""


class ConfigError(ApitoError):
    """Configuration loading or validation failure."""


class InvalidRequestError(ApitoError):
    """Caller input rejected before any request was sent."""


class GraphQLClientError(ApitoError):
    """Base failure of a GraphQL round trip."""


class TransportError(GraphQLClientError):
    """The request could not be sent or its response could not be read."""


class HttpStatusError(TransportError):
    """The endpoint answered with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the endpoint.
        body: Raw response body text.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"HTTP error {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class GraphQLResponseError(GraphQLClientError):
    """The endpoint answered but reported GraphQL ``errors``.

    Attributes:
        errors: Every error object returned by the service, in order.
    """

    def __init__(self, errors: Sequence[GraphQLError]) -> None:
        self.errors = list(errors)
        joined = "; ".join(error.message for error in self.errors)
        super().__init__(f"GraphQL errors: {joined}")


class ResponseShapeError(GraphQLClientError):
    """Response envelope was not valid JSON or lacked the expected shape."""


class ConversionError(ApitoError):
    """A raw payload could not be projected onto the requested type.

    Attributes:
        fields: Dotted paths of the payload fields that failed.
        index: Position of the failing document inside a search result.
    """

    def __init__(self, message: str, *, fields: Sequence[str] = (), index: int | None = None) -> None:
        super().__init__(message)
        self.fields = tuple(fields)
        self.index = index
