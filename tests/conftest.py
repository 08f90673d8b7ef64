import pytest
from fastapi.testclient import TestClient

from trend_dashboard.config import Settings
from trend_dashboard.main import create_app
from trend_dashboard.seed import PRODUCT_TRENDS, VISITOR_LOGS
from trend_dashboard.store import InMemoryDashboardStore


@pytest.fixture
def settings() -> Settings:
    return Settings(STORE_BACKEND="memory", LOG_LEVEL="WARNING", CREATE_TABLES=False)


@pytest.fixture
def seeded_store() -> InMemoryDashboardStore:
    return InMemoryDashboardStore(PRODUCT_TRENDS, VISITOR_LOGS)


@pytest.fixture
def client(settings, seeded_store):
    app = create_app(settings, store=seeded_store)
    with TestClient(app) as test_client:
        yield test_client
