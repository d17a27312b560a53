"""Pytest fixtures and shared test configuration.

Fixtures:
    - gemini_config: Gemini settings with a test API key
    - gemini_stub: Recording stand-in for the Gemini REST API
    - async_client: HTTPX client for API testing, wired to the stub

The Gemini API is served by ``httpx.MockTransport`` injected through
FastAPI's dependency overrides, so no request leaves the process.
"""

import json
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.gemini.config import GeminiConfig
from src.gemini.service import ChatService, get_chat_service

TEST_API_KEY = "test-gemini-key"
TEST_BASE_URL = "https://generativelanguage.googleapis.com"


class GeminiStub:
    """Records outbound requests and answers with a canned response."""

    def __init__(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_payload(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


def text_reply(text: str) -> dict[str, Any]:
    """Build a generateContent success body carrying ``text``."""
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


@pytest.fixture
def gemini_config() -> GeminiConfig:
    """Return Gemini settings with a known key and base URL."""
    return GeminiConfig(
        api_key=TEST_API_KEY,
        base_url=TEST_BASE_URL,
        system_instruction="Test instruction.",
        timeout=None,
    )


@pytest.fixture
def gemini_stub() -> GeminiStub:
    """Return a Gemini stub answering with a plain text reply."""
    return GeminiStub(body=text_reply("Hello from Gemini"))


@pytest.fixture
async def async_client(
    gemini_config: GeminiConfig, gemini_stub: GeminiStub
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient bound to an app whose Gemini calls hit ``gemini_stub``.
    """
    app = create_app()
    app.dependency_overrides[get_chat_service] = lambda: ChatService(
        gemini_config, transport=gemini_stub.transport
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
