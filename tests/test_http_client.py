"""Tests for the shared JSON-over-HTTP client."""

import json
from unittest.mock import patch

import httpx
import pytest

from reqanalyst.services.shared import HTTPClient, HTTPClientError


def _client(handler) -> HTTPClient:
    client = HTTPClient(
        base_url="https://api.test", timeout=5.0, headers={"Authorization": "Bearer sk-test"}
    )
    client._client = httpx.Client(base_url=client.base_url, transport=httpx.MockTransport(handler))
    return client


def test_post_json_returns_decoded_body():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    assert _client(handler).post_json("/things", json={"name": "x"}) == {"ok": True}
    assert seen[0].method == "POST"
    assert seen[0].headers["authorization"] == "Bearer sk-test"
    assert json.loads(seen[0].content) == {"name": "x"}


def test_error_status_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, text="boom")

    with pytest.raises(HTTPClientError) as exc_info:
        _client(handler).post_json("/things", json={})

    assert exc_info.value.status_code == 500
    assert len(calls) == 1


def test_connection_failures_retried_then_raised():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with patch("tenacity.nap.time.sleep"):
        with pytest.raises(HTTPClientError, match="Connection failed") as exc_info:
            _client(handler).post_json("/things", json={})

    assert exc_info.value.status_code is None
    assert len(calls) == 3


def test_invalid_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not json")

    with pytest.raises(HTTPClientError, match="Invalid JSON"):
        _client(handler).post_json("/things", json={})
