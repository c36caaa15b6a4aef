"""Tests for KeepsakeClient against an httpx MockTransport."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import anyio
import httpx
import pytest

from keepsake_mcp.api.client import KeepsakeClient
from keepsake_mcp.api.request import RemoteCall, build_call
from keepsake_mcp.api.result import NETWORK_ERROR, ApiFailure, ApiSuccess, RemoteResult
from keepsake_mcp.config.settings import KeepsakeSettings
from keepsake_mcp.errors import ConfigurationError


def _send(
    settings: KeepsakeSettings, transport: httpx.MockTransport, *calls: RemoteCall
) -> list[RemoteResult]:
    async def run() -> list[RemoteResult]:
        async with KeepsakeClient(settings, transport=transport) as client:
            return [await client.send(call) for call in calls]

    return anyio.run(run)


class TestRequestShape:
    def test_url_joins_base_path_and_query(
        self, settings: KeepsakeSettings, make_transport: Callable[..., Any]
    ) -> None:
        transport = make_transport()
        _send(settings, transport, build_call("/contacts", query={"limit": 5}))
        assert str(transport.last.url) == "https://keepsake.test/api/v1/contacts?limit=5"

    def test_auth_and_content_type_headers(
        self, settings: KeepsakeSettings, make_transport: Callable[..., Any]
    ) -> None:
        transport = make_transport()
        _send(settings, transport, build_call("/contacts"))
        assert transport.last.headers["Authorization"] == "Bearer test-key-123"
        assert transport.last.headers["Content-Type"] == "application/json"

    def test_get_sends_no_body(
        self, settings: KeepsakeSettings, make_transport: Callable[..., Any]
    ) -> None:
        transport = make_transport()
        _send(settings, transport, build_call("/contacts", body={"ignored": True}))
        assert transport.last.method == "GET"
        assert transport.last.content == b""

    def test_post_sends_json_body(
        self, settings: KeepsakeSettings, make_transport: Callable[..., Any]
    ) -> None:
        transport = make_transport()
        body = {"first_name": "Ada", "last_name": "Lovelace"}
        _send(settings, transport, build_call("/contacts", "POST", body=body))
        assert transport.last.method == "POST"
        assert transport.last_json() == body

    def test_post_without_body_sends_nothing(
        self, settings: KeepsakeSettings, make_transport: Callable[..., Any]
    ) -> None:
        transport = make_transport()
        _send(settings, transport, build_call("/tasks/x/complete", "POST"))
        assert transport.last.content == b""

    def test_permanent_fragment_reaches_the_wire(
        self, settings: KeepsakeSettings, make_transport: Callable[..., Any]
    ) -> None:
        transport = make_transport()
        _send(settings, transport, build_call("/companies/abc", "DELETE", suffix="?permanent=true"))
        assert transport.last.method == "DELETE"
        assert transport.last.url.path == "/api/v1/companies/abc"
        assert transport.last.url.query == b"permanent=true"

    def test_identical_calls_are_not_memoized(
        self, settings: KeepsakeSettings, make_transport: Callable[..., Any]
    ) -> None:
        transport = make_transport()
        call = build_call("/contacts", query={"limit": 5})
        _send(settings, transport, call, call)
        assert len(transport.requests) == 2
        first, second = transport.requests
        assert (first.method, str(first.url)) == (second.method, str(second.url))


class TestOutcomes:
    def test_success_payload(
        self, settings: KeepsakeSettings, make_transport: Callable[..., Any]
    ) -> None:
        transport = make_transport({"data": [{"id": "1"}], "meta": {"total": 1}})
        [result] = _send(settings, transport, build_call("/contacts"))
        assert isinstance(result, ApiSuccess)
        assert result.data == [{"id": "1"}]

    def test_remote_error_passes_through(
        self, settings: KeepsakeSettings, make_transport: Callable[..., Any]
    ) -> None:
        transport = make_transport(
            lambda request: httpx.Response(
                404, json={"error": {"code": "NOT_FOUND", "message": "gone"}}
            )
        )
        [result] = _send(settings, transport, build_call("/contacts/x"))
        assert isinstance(result, ApiFailure)
        assert result.code == "NOT_FOUND"
        assert result.message == "gone"

    def test_status_code_is_not_interpreted(
        self, settings: KeepsakeSettings, make_transport: Callable[..., Any]
    ) -> None:
        transport = make_transport(lambda request: httpx.Response(500, json={"data": "odd"}))
        [result] = _send(settings, transport, build_call("/contacts"))
        assert isinstance(result, ApiSuccess)

    def test_connection_error_becomes_network_error(
        self, settings: KeepsakeSettings, make_transport: Callable[..., Any]
    ) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = make_transport(refuse)
        [result] = _send(settings, transport, build_call("/contacts"))
        assert isinstance(result, ApiFailure)
        assert result.code == NETWORK_ERROR
        assert "connection refused" in result.message
        assert len(transport.requests) == 1

    def test_undecodable_body_becomes_network_error(
        self, settings: KeepsakeSettings, make_transport: Callable[..., Any]
    ) -> None:
        transport = make_transport(
            lambda request: httpx.Response(502, text="<html>Bad gateway</html>")
        )
        [result] = _send(settings, transport, build_call("/contacts"))
        assert isinstance(result, ApiFailure)
        assert result.code == NETWORK_ERROR

    def test_malformed_base_url_becomes_network_error(
        self, make_transport: Callable[..., Any]
    ) -> None:
        settings = KeepsakeSettings(api_url="https://keepsake.test:notaport/api", api_key="k")
        transport = make_transport()
        [result] = _send(settings, transport, build_call("/contacts"))
        assert isinstance(result, ApiFailure)
        assert result.code == NETWORK_ERROR
        assert result.message.startswith("InvalidURL: ")
        assert transport.requests == []


class TestConstruction:
    def test_missing_api_key_is_rejected(self) -> None:
        settings = KeepsakeSettings(api_key="")
        with pytest.raises(ConfigurationError):
            KeepsakeClient(settings)

    def test_url_for(self, settings: KeepsakeSettings) -> None:
        async def run() -> str:
            async with KeepsakeClient(settings) as client:
                return client.url_for(build_call("/tags", query={"limit": 1}))

        assert anyio.run(run) == "https://keepsake.test/api/v1/tags?limit=1"
