"""Courier Check API 통합 테스트

ASGITransport로 앱을 직접 호출하고, 외부 의존성(Redis, DB, 택배사 HTTP)은
Dependency Override + Fake로 대체합니다.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from courier_check.api.routes import courier_routes, health_routes
from courier_check.app import app
from courier_check.core.config import settings
from courier_check.core.security import get_license_repository
from courier_check.couriers import (
    DirectCourierFetcher,
    HoorinClient,
    HttpResponse,
    KeyRotator,
    SessionStore,
)
from courier_check.engine import CourierCheckDispatcher, ResultCache
from tests.fixtures.courier_payloads import (
    HOORIN_SUMMARY,
    PATHAO_STATS,
    REDX_STATS,
    STEADFAST_LOGIN_HTML_NO_TOKEN,
)

LICENSE_KEY = "LIC-INTEGRATION"
AUTH = {"Authorization": f"Bearer {LICENSE_KEY}"}
HOORIN_URL = "https://hoorin.test/api"


class FakeLicenseRepository:
    def __init__(self, allow_courier_api=1):
        self.row = SimpleNamespace(
            id=1,
            license_key=LICENSE_KEY,
            status="active",
            expires_at=datetime.now() + timedelta(days=1),
            allow_courier_api=allow_courier_api,
        )

    def get_by_key(self, license_key):
        return self.row if license_key == self.row.license_key else None

    def mark_expired(self, row):
        row.status = "expired"


class StaticBot:
    def __init__(self, courier, credentials):
        self.courier = courier
        self.credentials = credentials

    async def login(self):
        return dict(self.credentials)


def _dispatcher(state_store, fake_http, data_source):
    sessions = SessionStore(
        state_store,
        bots={
            "steadfast": StaticBot("steadfast", {}),
            "redx": StaticBot("redx", {"token": "redx-token-1"}),
        },
        ttl_seconds=60,
    )
    return CourierCheckDispatcher(
        result_cache=ResultCache(state_store),
        hoorin_client=HoorinClient(
            KeyRotator(state_store), fake_http, api_keys="key-a\nkey-b", api_url=HOORIN_URL, timeout_s=5
        ),
        direct_fetcher=DirectCourierFetcher(sessions, fake_http, timeout_s=5),
        data_source=data_source,
        cache_duration_hours=6,
    )


@pytest.fixture
def override(state_store, fake_http):
    """Dependency Override 설치 후 정리"""

    def install(data_source="direct", repo=None):
        dispatcher = _dispatcher(state_store, fake_http, data_source)
        app.dependency_overrides[courier_routes.get_dispatcher] = lambda: dispatcher
        app.dependency_overrides[get_license_repository] = lambda: repo or FakeLicenseRepository()
        return dispatcher

    yield install
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
class TestLicenseGate:
    async def test_missing_authorization(self, override, client):
        override()
        response = await client.post("/courier-check/v1/status", json={"searchTerm": "01712345678"})

        assert response.status_code == 401
        assert response.json()["code"] == "401_unauthorized"

    async def test_license_without_courier_permission(self, override, client):
        override(repo=FakeLicenseRepository(allow_courier_api=0))
        response = await client.post(
            "/courier-check/v1/status", json={"searchTerm": "01712345678"}, headers=AUTH
        )

        assert response.status_code == 403
        assert response.json()["data"]["status"] == 403


@pytest.mark.asyncio
class TestCourierStatus:
    async def test_missing_search_term(self, override, client, fake_http):
        override()
        response = await client.post("/courier-check/v1/status", json={}, headers=AUTH)

        assert response.status_code == 400
        assert response.json() == {
            "code": "missing_parameter",
            "message": "searchTerm is required in the JSON body.",
            "data": {"status": 400},
        }
        assert fake_http.calls == []

    async def test_non_json_body(self, override, client):
        override()
        response = await client.post(
            "/courier-check/v1/status",
            content="searchTerm=01712345678",
            headers={**AUTH, "Content-Type": "text/plain"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "missing_parameter"

    async def test_direct_path_with_degraded_steadfast(self, override, client, fake_http, state_store):
        """Steadfast 세션 없이도 200, Steadfast는 0으로 채움"""
        override("direct")
        fake_http.add("POST", settings.pathao_lookup_url, HttpResponse(200, PATHAO_STATS))
        fake_http.add("GET", settings.redx_lookup_url, HttpResponse(200, REDX_STATS))
        fake_http.add("GET", settings.steadfast_lookup_url, HttpResponse(200, STEADFAST_LOGIN_HTML_NO_TOKEN))

        response = await client.post(
            "/courier-check/v1/status", json={"searchTerm": "01712345678"}, headers=AUTH
        )

        assert response.status_code == 200
        summaries = response.json()["Summaries"]
        assert summaries["RedX"] == {"Total Parcels": 10, "Delivered Parcels": 7, "Canceled Parcels": 3}
        assert summaries["Pathao"]["Canceled Delivery"] == 2
        assert summaries["Steadfast"] == {"Total Parcels": 0, "Delivered Parcels": 0, "Canceled Parcels": 0}

        # 두 번째 요청은 캐시에서 응답
        calls_before = len(fake_http.calls)
        again = await client.post(
            "/courier-check/v1/status", json={"searchTerm": "01712345678"}, headers=AUTH
        )
        assert again.json() == response.json()
        assert len(fake_http.calls) == calls_before

    async def test_numeric_search_term_accepted(self, override, client, fake_http):
        override("pool")
        fake_http.add("GET", HOORIN_URL, HttpResponse(200, json.dumps(HOORIN_SUMMARY)))

        response = await client.post("/courier-check/v1/status", json={"searchTerm": 1712345678}, headers=AUTH)

        assert response.status_code == 200
        assert response.json() == HOORIN_SUMMARY
        assert fake_http.calls[0].kwargs["params"]["searchTerm"] == "1712345678"

    async def test_pool_upstream_error_shape(self, override, client, fake_http, state_store):
        override("pool")
        fake_http.add("GET", HOORIN_URL, HttpResponse(500, json.dumps({"error": "quota exceeded"})))

        response = await client.post(
            "/courier-check/v1/status", json={"searchTerm": "01712345678"}, headers=AUTH
        )

        assert response.status_code == 502
        assert response.json() == {
            "code": "external_api_error",
            "message": "The external API returned an error.",
            "data": {
                "status": 502,
                "upstream_code": 500,
                "upstream_body": {"error": "quota exceeded"},
            },
        }
        assert state_store.set_calls == 0


@pytest.mark.asyncio
async def test_health_reports_state_store(monkeypatch, client, state_store):
    monkeypatch.setattr(health_routes, "get_state_store", lambda: state_store)

    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["redis"] is True
    assert body["status"] in ("ok", "degraded")
