"""Shared pytest fixtures for keepsake-mcp tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from keepsake_mcp.api.request import RemoteCall
from keepsake_mcp.api.result import RemoteResult, normalize
from keepsake_mcp.config.settings import KeepsakeSettings
from keepsake_mcp.mcp.registry import OperationRegistry
from keepsake_mcp.mcp.tools import build_registry

TEST_API_URL = "https://keepsake.test/api/v1"
TEST_API_KEY = "test-key-123"
CONTACT_ID = "3f1c2a9e-8b7d-4c6e-9a1b-2d3e4f5a6b7c"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings() -> KeepsakeSettings:
    """Settings pointing at a fake API host."""
    return KeepsakeSettings(api_url=TEST_API_URL, api_key=TEST_API_KEY)


@pytest.fixture
def registry() -> OperationRegistry:
    """The sealed production registry."""
    return build_registry()


class RecordingTransport(httpx.MockTransport):
    """MockTransport that records every request and replies with *reply*.

    *reply* is either a JSON-serializable payload or a callable taking the
    request and returning an ``httpx.Response`` (or raising).
    """

    def __init__(self, reply: Any = None) -> None:
        self.requests: list[httpx.Request] = []
        self._reply = reply if reply is not None else {"data": []}
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if callable(self._reply):
            return self._reply(request)
        return httpx.Response(200, json=self._reply)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    return RecordingTransport


class FakeSender:
    """Records RemoteCalls and answers with a fixed payload, no HTTP involved."""

    def __init__(self, payload: Any = None) -> None:
        self.calls: list[RemoteCall] = []
        self.payload = payload if payload is not None else {"data": {"ok": True}}

    async def send(self, call: RemoteCall) -> RemoteResult:
        self.calls.append(call)
        return normalize(self.payload)


@pytest.fixture
def sender() -> FakeSender:
    return FakeSender()
