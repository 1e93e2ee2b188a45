"""GraphQL transport and operation catalogue for the Apito API."""

from apito_sdk.graphql.transport import API_KEY_HEADER, TENANT_HEADER, GraphQLTransport

__all__ = ["API_KEY_HEADER", "TENANT_HEADER", "GraphQLTransport"]
