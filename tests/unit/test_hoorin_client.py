"""HoorinClient 단위 테스트 (키 풀 경로)"""

from __future__ import annotations

import json

import pytest

from courier_check.core.exceptions import (
    ExternalApiException,
    InvalidJsonException,
    NoApiKeysException,
    UpstreamTransportException,
)
from courier_check.couriers import HoorinClient, HttpResponse, KeyRotator
from courier_check.utils.hash_utils import KEY_INDEX_KEY
from tests.fixtures.courier_payloads import HOORIN_SUMMARY

API_URL = "https://hoorin.test/api/courier"


def _client(state_store, fake_http, api_keys="key-a\nkey-b"):
    return HoorinClient(
        KeyRotator(state_store),
        http_client=fake_http,
        api_keys=api_keys,
        api_url=API_URL,
        timeout_s=15,
    )


@pytest.mark.asyncio
class TestHoorinClient:
    async def test_success_returns_parsed_body_unchanged(self, state_store, fake_http):
        fake_http.add("GET", API_URL, HttpResponse(200, json.dumps(HOORIN_SUMMARY)))

        result = await _client(state_store, fake_http).fetch("01712345678")

        assert result == HOORIN_SUMMARY
        call = fake_http.calls[0]
        assert call.kwargs["params"] == {"apiKey": "key-a", "searchTerm": "01712345678"}
        assert call.kwargs["timeout_s"] == 15

    async def test_keys_rotate_per_request(self, state_store, fake_http):
        fake_http.add("GET", API_URL, HttpResponse(200, "{}"))
        client = _client(state_store, fake_http)

        for _ in range(3):
            await client.fetch("01712345678")

        used = [c.kwargs["params"]["apiKey"] for c in fake_http.calls]
        assert used == ["key-a", "key-b", "key-a"]

    async def test_non_200_raises_external_api_error(self, state_store, fake_http):
        fake_http.add("GET", API_URL, HttpResponse(500, '{"error": "quota"}'))

        with pytest.raises(ExternalApiException) as exc_info:
            await _client(state_store, fake_http).fetch("01712345678")

        exc = exc_info.value
        assert exc.upstream_code == 500
        assert exc.upstream_body == {"error": "quota"}
        assert exc.status_code == 502
        assert exc.to_dict()["code"] == "external_api_error"

    async def test_non_200_with_non_json_body(self, state_store, fake_http):
        fake_http.add("GET", API_URL, HttpResponse(503, "<html>down</html>"))

        with pytest.raises(ExternalApiException) as exc_info:
            await _client(state_store, fake_http).fetch("01712345678")
        assert exc_info.value.upstream_body is None

    async def test_invalid_json(self, state_store, fake_http):
        fake_http.add("GET", API_URL, HttpResponse(200, "not json"))

        with pytest.raises(InvalidJsonException) as exc_info:
            await _client(state_store, fake_http).fetch("01712345678")
        assert exc_info.value.details["body"] == "not json"

    async def test_transport_failure(self, state_store, fake_http):
        fake_http.add("GET", API_URL, None)

        with pytest.raises(UpstreamTransportException) as exc_info:
            await _client(state_store, fake_http).fetch("01712345678")
        assert exc_info.value.error_code == "api_call_failed"
        assert exc_info.value.status_code == 500

    async def test_no_keys_makes_no_request(self, state_store, fake_http):
        with pytest.raises(NoApiKeysException):
            await _client(state_store, fake_http, api_keys="  \n ").fetch("01712345678")
        assert fake_http.calls == []

    async def test_cursor_advances_even_on_failure(self, state_store, fake_http):
        fake_http.add("GET", API_URL, HttpResponse(500, "{}"))
        client = _client(state_store, fake_http)

        with pytest.raises(ExternalApiException):
            await client.fetch("01712345678")

        assert state_store.get_json(KEY_INDEX_KEY) == 1
