import pytest
from fastapi.testclient import TestClient

from trend_dashboard.config import Settings
from trend_dashboard.exceptions import StoreUnavailable
from trend_dashboard.main import create_app
from trend_dashboard.store import InMemoryDashboardStore


class UnavailableStore(InMemoryDashboardStore):
    async def ping(self):
        raise StoreUnavailable("Query store unavailable: ping")

    async def list_product_trends(self, filters=None):
        raise StoreUnavailable("Query store unavailable: list product trends")

    async def list_visitor_logs(self, filters=None):
        raise StoreUnavailable("Query store unavailable: list visitor logs")


def test_products_endpoint_returns_seed_summary(client):
    r = client.get("/products")
    assert r.status_code == 200, r.text
    data = r.json()

    assert [p["product_id"] for p in data] == ["prod-1", "prod-2"]
    assert data[0] == {
        "product_id": "prod-1",
        "total_views": 250,
        "total_purchases": 10,
        "conversion_rate": pytest.approx(0.04),
        "days": 3,
    }
    assert data[1]["total_views"] == 180
    assert data[1]["total_purchases"] == 7
    assert data[1]["conversion_rate"] == pytest.approx(7 / 180)


def test_visitors_endpoint_returns_seed_summary(client):
    r = client.get("/visitors")
    assert r.status_code == 200, r.text
    data = r.json()

    assert data["total"] == 8
    assert data["distinct_sessions"] == 7
    assert data["by_country"] == {"US": 5, "CA": 2, "UK": 1}
    assert list(data["by_country"]) == ["US", "CA", "UK"]
    assert data["by_path"] == {"/products": 4, "/cart": 1, "/home": 2, "/checkout": 1}
    assert list(data["by_path"]) == ["/products", "/home", "/cart", "/checkout"]


def test_repeated_requests_return_identical_payloads(client):
    assert client.get("/products").json() == client.get("/products").json()
    assert client.get("/visitors").json() == client.get("/visitors").json()


def test_empty_store_returns_empty_payloads(settings):
    with TestClient(create_app(settings, store=InMemoryDashboardStore())) as c:
        assert c.get("/products").json() == []
        assert c.get("/visitors").json() == {
            "total": 0,
            "distinct_sessions": 0,
            "by_country": {},
            "by_path": {},
        }


def test_products_date_range_and_limit(client):
    r = client.get("/products", params={"start": "2025-09-01", "end": "2025-09-05", "limit": 1})
    assert r.status_code == 200, r.text
    assert r.json() == [
        {"product_id": "prod-1", "total_views": 200, "total_purchases": 8, "conversion_rate": 0.04, "days": 2}
    ]


def test_visitors_date_range(client):
    r = client.get("/visitors", params={"start": "2025-09-06"})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["total"] == 2
    assert data["distinct_sessions"] == 2
    assert data["by_country"] == {"CA": 1, "US": 1}


@pytest.mark.parametrize(
    "path, params",
    [
        ("/products", {"start": "2025-09-05", "end": "2025-09-01"}),
        ("/products", {"limit": 0}),
        ("/visitors", {"start": "2025-09-05", "end": "2025-09-01"}),
    ],
)
def test_out_of_range_filters_are_bad_requests(client, path, params):
    r = client.get(path, params=params)
    assert r.status_code == 400
    assert "detail" in r.json()


def test_malformed_filter_is_rejected_by_validation(client):
    r = client.get("/products", params={"start": "last-week"})
    assert r.status_code == 422


@pytest.mark.parametrize("path", ["/products", "/visitors"])
def test_store_failure_maps_to_503(settings, path):
    with TestClient(create_app(settings, store=UnavailableStore())) as c:
        r = c.get(path)
    assert r.status_code == 503
    assert r.json()["detail"].startswith("Query store unavailable")


def test_health(client, settings):
    assert client.get("/health").json() == {"status": "ok"}

    with TestClient(create_app(settings, store=UnavailableStore())) as c:
        r = c.get("/health")
    assert r.status_code == 503
    assert r.json()["status"] == "unavailable"


def test_dashboard_prefix_setting(settings, seeded_store):
    prefixed = settings.model_copy(update={"DASHBOARD_PREFIX": "/api/dashboard"})
    with TestClient(create_app(prefixed, store=seeded_store)) as c:
        assert c.get("/api/dashboard/visitors").json()["total"] == 8
        assert c.get("/visitors").status_code == 404


def test_memory_backend_is_built_from_settings():
    settings = Settings(STORE_BACKEND="memory", LOG_LEVEL="WARNING")
    with TestClient(create_app(settings)) as c:
        assert c.get("/products").json() == []
        assert c.get("/visitors").json()["total"] == 0
        assert c.get("/health").json() == {"status": "ok"}
