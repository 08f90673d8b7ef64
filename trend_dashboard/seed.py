# trend_dashboard/seed.py
"""Fixed sample rows for local development and demos."""
import logging
from datetime import date, datetime, timezone
from typing import Dict, List

from .schemas import ProductTrendCreate, VisitorLogCreate
from .store import DashboardStore

logger = logging.getLogger(__name__)


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


# views and purchases for two products over ten days
PRODUCT_TRENDS: List[ProductTrendCreate] = [
    ProductTrendCreate(product_id="prod-1", date=date(2025, 8, 28), views=50, purchases=2),
    ProductTrendCreate(product_id="prod-1", date=date(2025, 9, 1), views=120, purchases=5),
    ProductTrendCreate(product_id="prod-1", date=date(2025, 9, 5), views=80, purchases=3),
    ProductTrendCreate(product_id="prod-2", date=date(2025, 8, 30), views=30, purchases=1),
    ProductTrendCreate(product_id="prod-2", date=date(2025, 9, 2), views=90, purchases=4),
    ProductTrendCreate(product_id="prod-2", date=date(2025, 9, 6), views=60, purchases=2),
]

# visits over seven days; sess-1 appears twice
VISITOR_LOGS: List[VisitorLogCreate] = [
    VisitorLogCreate(session_id="sess-1", ip="192.168.1.1", user_agent="Chrome", path="/products", country="US", created_at=_utc(2025, 9, 1, 10, 0)),
    VisitorLogCreate(session_id="sess-1", ip="192.168.1.1", user_agent="Chrome", path="/cart", country="US", created_at=_utc(2025, 9, 1, 10, 5)),
    VisitorLogCreate(session_id="sess-2", ip="192.168.1.2", user_agent="Firefox", path="/products", country="US", created_at=_utc(2025, 9, 2, 12, 0)),
    VisitorLogCreate(session_id="sess-3", ip="192.168.1.3", user_agent="Safari", path="/home", country="CA", created_at=_utc(2025, 9, 3, 14, 0)),
    VisitorLogCreate(session_id="sess-4", ip="192.168.1.4", user_agent="Edge", path="/products", country="US", created_at=_utc(2025, 9, 4, 16, 0)),
    VisitorLogCreate(session_id="sess-5", ip="192.168.1.5", user_agent="Chrome", path="/checkout", country="UK", created_at=_utc(2025, 9, 5, 18, 0)),
    VisitorLogCreate(session_id="sess-6", ip="192.168.1.6", user_agent="Firefox", path="/products", country="US", created_at=_utc(2025, 9, 6, 20, 0)),
    VisitorLogCreate(session_id="sess-7", ip="192.168.1.7", user_agent="Safari", path="/home", country="CA", created_at=_utc(2025, 9, 7, 22, 0)),
]


async def seed_store(store: DashboardStore) -> Dict[str, int]:
    """Bulk-insert the sample rows. Not idempotent: each call appends another copy."""
    counts = {
        "product_trends": await store.add_product_trends(PRODUCT_TRENDS),
        "visitor_logs": await store.add_visitor_logs(VISITOR_LOGS),
    }
    logger.info("Seeded sample data: %s", counts)
    return counts
