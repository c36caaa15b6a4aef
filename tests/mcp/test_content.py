"""Tests for the content renderer."""

from __future__ import annotations

import json

import httpx

from keepsake_mcp.api.result import network_failure, normalize
from keepsake_mcp.mcp.content import ERROR_PREFIX, render


class TestFailures:
    def test_string_error(self) -> None:
        assert render(normalize({"error": "not found"})).text == "Error: not found"

    def test_object_error_uses_message(self) -> None:
        content = render(normalize({"error": {"code": "X", "message": "bad id"}}))
        assert content.text == "Error: bad id"

    def test_object_error_without_message_is_json(self) -> None:
        content = render(normalize({"error": {"code": "RATE_LIMITED"}}))
        assert content.text == 'Error: {"code":"RATE_LIMITED"}'

    def test_network_error(self) -> None:
        content = render(network_failure(httpx.ConnectError("dns failure")))
        assert len(content.blocks) == 1
        assert content.blocks[0].type == "text"
        assert content.text.startswith(ERROR_PREFIX)
        assert "dns failure" in content.text


class TestSuccesses:
    def test_data_is_pretty_printed(self) -> None:
        data = {"id": "1", "first_name": "Ada", "tags": ["math"]}
        content = render(normalize({"data": data, "meta": {"total": 1}}))
        assert content.text == json.dumps(data, indent=2)
        assert json.loads(content.text) == data

    def test_missing_data_renders_whole_payload(self) -> None:
        payload = {"server_time": "2026-02-11T10:00:00Z", "contacts": []}
        content = render(normalize(payload))
        assert json.loads(content.text) == payload
        assert content.text == json.dumps(payload, indent=2)

    def test_null_data_renders_whole_payload(self) -> None:
        payload = {"data": None, "message": "ok"}
        assert json.loads(render(normalize(payload)).text) == payload

    def test_falsy_data_is_still_data(self) -> None:
        assert render(normalize({"data": []})).text == "[]"
        assert render(normalize({"data": 0})).text == "0"

    def test_non_ascii_is_kept(self) -> None:
        content = render(normalize({"data": {"name": "Bérénice"}}))
        assert "Bérénice" in content.text

    def test_exactly_one_block(self) -> None:
        for payload in ({"data": 1}, {"error": "x"}, [1, 2], "text"):
            assert len(render(normalize(payload)).blocks) == 1
