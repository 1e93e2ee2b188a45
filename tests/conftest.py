"""Shared test fixtures for apito_sdk tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import pytest
import pytest_asyncio

from apito_sdk.client import ApitoClient
from apito_sdk.contracts.config import ApitoConfig
from tests.fakes.graphql_server import FakeGraphQLServer


@pytest.fixture
def config() -> ApitoConfig:
    """A minimal valid ApitoConfig pointing at the fake endpoint."""
    return ApitoConfig(base_url="https://api.example.com/graphql", api_key="test-api-key")


@pytest.fixture
def server() -> FakeGraphQLServer:
    return FakeGraphQLServer()


@pytest_asyncio.fixture
async def client(config: ApitoConfig, server: FakeGraphQLServer) -> AsyncIterator[ApitoClient]:
    http_client = server.http_client()
    async with ApitoClient(config, http_client=http_client) as apito:
        yield apito
    await http_client.aclose()


@pytest.fixture
def raw_document_payload() -> dict[str, Any]:
    """A document as the service returns it from ``getSingleData``."""
    return {
        "_key": "k-1",
        "id": "t1",
        "data": {"title": "Buy milk", "done": False, "tags": ["home"]},
        "meta": {
            "created_at": "2024-05-01T10:00:00Z",
            "updated_at": "2024-05-02T10:00:00Z",
            "status": "published",
            "revision": 3,
            "revision_at": "2024-05-02T10:00:00Z",
        },
        "expire_at": "2030-01-01T00:00:00Z",
        "relation_doc_id": "rel-9",
        "type": "todo",
    }
