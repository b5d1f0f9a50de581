"""Shared test fixtures for the registration API tests."""

from __future__ import annotations

import json
from typing import Any, Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.main import app
from app.services.notion_service import NotionClient, get_notion_client


class FakeNotion:
    """Stands in for the Notion API behind an httpx.MockTransport.

    By default every create-page request succeeds and the page echoes the
    properties it was created with. Assign ``handler`` to change that.
    """

    __test__ = False

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = self.echo_page
        self.transport = httpx.MockTransport(self._dispatch)

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @staticmethod
    def echo_page(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "object": "page",
                "id": f"page-{body['properties']['Name']['title'][0]['text']['content'].strip() or 'anon'}",
                "parent": body["parent"],
                "properties": body["properties"],
            },
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    """Settings with fake credentials, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        notion_api_key="secret_test",
        notion_database_id="db-123",
        notion_api_url="https://notion.test/v1",
    )


@pytest.fixture
def fake_notion() -> FakeNotion:
    return FakeNotion()


@pytest.fixture
def notion_client(settings: Settings, fake_notion: FakeNotion) -> NotionClient:
    return NotionClient.from_settings(settings, transport=fake_notion.transport)


@pytest.fixture
def client(settings: Settings, notion_client: NotionClient) -> Iterator[TestClient]:
    """TestClient with settings and the Notion client swapped for fakes."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_notion_client] = lambda: notion_client
    yield TestClient(app)
    app.dependency_overrides.clear()
