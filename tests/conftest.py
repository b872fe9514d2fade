"""Shared fixtures: a stand-in Anchor provider built on httpx.MockTransport."""

import json
from typing import Any, Callable, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from session_proxy.api.config import ProxySettings
from session_proxy.api.server import create_app

API_KEY = "sk-test-secret-key"


class FakeProvider:
    """Records every outbound request and answers with a canned response."""

    def __init__(self):
        self.calls: List[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {"data": []}
        self.raw: Optional[bytes] = None
        self.responder: Optional[Callable] = None

    def respond(self, status_code: int, body: Any = None, raw: Optional[bytes] = None):
        self.status_code = status_code
        self.body = body
        self.raw = raw

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.responder is not None:
            return await self.responder(request)
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def last_json(self) -> Any:
        return json.loads(self.calls[-1].content)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def settings() -> ProxySettings:
    return ProxySettings(
        api_key=API_KEY,
        base_url="https://anchor.test",
        request_timeout=0.5,
    )


@pytest.fixture
def transport(provider) -> httpx.MockTransport:
    return httpx.MockTransport(provider)


@pytest.fixture
def client(settings, transport) -> TestClient:
    return TestClient(create_app(settings, transport=transport))
