# trend_dashboard/aggregator.py
import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional

from .schemas import (
    ProductSummary,
    ProductTrendRecord,
    SummaryFilters,
    VisitorLogRecord,
    VisitorSummary,
)
from .store import DashboardStore

logger = logging.getLogger(__name__)


def conversion_rate(purchases: int, views: int) -> float:
    # no views -> no conversion, never a ZeroDivisionError
    if views == 0:
        return 0.0
    return purchases / views


def summarize_products(rows: Iterable[ProductTrendRecord], limit: Optional[int] = None) -> List[ProductSummary]:
    """Fold daily rows into one summary per product.

    Ordered by total views (highest first), ties by product id, then cut to ``limit``.
    """
    totals: Dict[str, List[int]] = {}  # product_id -> [views, purchases, days]
    for row in rows:
        acc = totals.setdefault(row.product_id, [0, 0, 0])
        acc[0] += row.views
        acc[1] += row.purchases
        acc[2] += 1

    summaries = [
        ProductSummary(
            product_id=product_id,
            total_views=views,
            total_purchases=purchases,
            conversion_rate=conversion_rate(purchases, views),
            days=days,
        )
        for product_id, (views, purchases, days) in totals.items()
    ]
    summaries.sort(key=lambda s: (-s.total_views, s.product_id))
    if limit is not None:
        summaries = summaries[:limit]
    return summaries


def _ranked(counts: Counter) -> Dict[str, int]:
    return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


def summarize_visitors(rows: Iterable[VisitorLogRecord]) -> VisitorSummary:
    total = 0
    sessions = set()
    countries: Counter = Counter()
    paths: Counter = Counter()
    for row in rows:
        total += 1
        sessions.add(row.session_id)
        countries[row.country] += 1
        paths[row.path] += 1

    return VisitorSummary(
        total=total,
        distinct_sessions=len(sessions),
        by_country=_ranked(countries),
        by_path=_ranked(paths),
    )


async def get_product_summary(store: DashboardStore, filters: Optional[SummaryFilters] = None) -> List[ProductSummary]:
    filters = (filters or SummaryFilters()).validated()
    rows = await store.list_product_trends(filters)
    summaries = summarize_products(rows, limit=filters.limit)
    logger.debug("Product summary: %d rows -> %d products", len(rows), len(summaries))
    return summaries


async def get_visitor_summary(store: DashboardStore, filters: Optional[SummaryFilters] = None) -> VisitorSummary:
    """Visitor totals for the date range in ``filters``; ``limit`` does not apply here."""
    filters = filters or SummaryFilters()
    filters = SummaryFilters(start=filters.start, end=filters.end).validated()
    rows = await store.list_visitor_logs(filters)
    summary = summarize_visitors(rows)
    logger.debug("Visitor summary: %d visits, %d sessions", summary.total, summary.distinct_sessions)
    return summary
