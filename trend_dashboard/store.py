# trend_dashboard/store.py
"""Query store port and its implementations.

The aggregator only talks to a ``DashboardStore``. Production runs on
``SqlDashboardStore`` (async SQLAlchemy); tests and ``STORE_BACKEND=memory``
use ``InMemoryDashboardStore``.
"""
import asyncio
import logging
from typing import Awaitable, Iterable, List, Optional, Protocol, Sequence, TypeVar

from sqlalchemy import insert, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from .database import create_session_maker, create_tables
from .exceptions import StoreUnavailable
from .models import ProductTrend, VisitorLog
from .schemas import (
    ProductTrendCreate,
    ProductTrendRecord,
    SummaryFilters,
    VisitorLogCreate,
    VisitorLogRecord,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DashboardStore(Protocol):
    async def open(self) -> None: ...

    async def close(self) -> None: ...

    async def ping(self) -> None: ...

    async def list_product_trends(self, filters: Optional[SummaryFilters] = None) -> List[ProductTrendRecord]: ...

    async def list_visitor_logs(self, filters: Optional[SummaryFilters] = None) -> List[VisitorLogRecord]: ...

    async def add_product_trends(self, rows: Iterable[ProductTrendCreate]) -> int: ...

    async def add_visitor_logs(self, rows: Iterable[VisitorLogCreate]) -> int: ...


class SqlDashboardStore:
    """Relational store behind an explicitly opened/closed async engine."""

    def __init__(self, engine: AsyncEngine, timeout: Optional[float] = None, auto_create: bool = False):
        self.engine = engine
        self.timeout = timeout
        self.auto_create = auto_create
        self._session_maker = create_session_maker(engine)

    async def open(self) -> None:
        if self.auto_create:
            await self._guard(create_tables(self.engine), "create tables")
        logger.info("SQL store opened (%s)", self.engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("SQL store closed")

    async def ping(self) -> None:
        async def _ping():
            async with self._session_maker() as session:
                await session.execute(text("SELECT 1"))

        await self._guard(_ping(), "ping")

    async def list_product_trends(self, filters: Optional[SummaryFilters] = None) -> List[ProductTrendRecord]:
        stmt = select(ProductTrend).order_by(ProductTrend.product_id, ProductTrend.date, ProductTrend.id)
        if filters is not None:
            if filters.start is not None:
                stmt = stmt.where(ProductTrend.date >= filters.start)
            if filters.end is not None:
                stmt = stmt.where(ProductTrend.date <= filters.end)

        async def _query():
            async with self._session_maker() as session:
                res = await session.execute(stmt)
                return [ProductTrendRecord.model_validate(r) for r in res.scalars().all()]

        return await self._guard(_query(), "list product trends")

    async def list_visitor_logs(self, filters: Optional[SummaryFilters] = None) -> List[VisitorLogRecord]:
        stmt = select(VisitorLog).order_by(VisitorLog.created_at, VisitorLog.id)
        if filters is not None:
            lower, upper = filters.datetime_bounds()
            if lower is not None:
                stmt = stmt.where(VisitorLog.created_at >= lower)
            if upper is not None:
                stmt = stmt.where(VisitorLog.created_at < upper)

        async def _query():
            async with self._session_maker() as session:
                res = await session.execute(stmt)
                return [VisitorLogRecord.model_validate(r) for r in res.scalars().all()]

        return await self._guard(_query(), "list visitor logs")

    async def add_product_trends(self, rows: Iterable[ProductTrendCreate]) -> int:
        return await self._bulk_insert(ProductTrend, [r.model_dump() for r in rows], "insert product trends")

    async def add_visitor_logs(self, rows: Iterable[VisitorLogCreate]) -> int:
        return await self._bulk_insert(VisitorLog, [r.model_dump() for r in rows], "insert visitor logs")

    async def _bulk_insert(self, model, values: Sequence[dict], what: str) -> int:
        if not values:
            return 0

        async def _insert():
            async with self._session_maker() as session:
                await session.execute(insert(model), list(values))
                await session.commit()

        await self._guard(_insert(), what)
        return len(values)

    async def _guard(self, coro: Awaitable[T], what: str) -> T:
        try:
            if self.timeout is not None:
                return await asyncio.wait_for(coro, timeout=self.timeout)
            return await coro
        except asyncio.TimeoutError as e:
            logger.error("Store %s timed out after %ss", what, self.timeout)
            raise StoreUnavailable(f"Query store timed out: {what}") from e
        except (SQLAlchemyError, OSError) as e:
            logger.exception("Store %s failed", what)
            raise StoreUnavailable(f"Query store unavailable: {what}") from e


class InMemoryDashboardStore:
    """List-backed store with the same filter semantics as the SQL one."""

    def __init__(
        self,
        product_trends: Iterable[ProductTrendCreate] = (),
        visitor_logs: Iterable[VisitorLogCreate] = (),
    ):
        self._product_trends: List[ProductTrendRecord] = [
            ProductTrendRecord(**r.model_dump()) for r in product_trends
        ]
        self._visitor_logs: List[VisitorLogRecord] = [
            VisitorLogRecord(**r.model_dump()) for r in visitor_logs
        ]

    async def open(self) -> None:
        logger.info("In-memory store opened")

    async def close(self) -> None:
        logger.info("In-memory store closed")

    async def ping(self) -> None:
        return None

    async def list_product_trends(self, filters: Optional[SummaryFilters] = None) -> List[ProductTrendRecord]:
        rows = self._product_trends
        if filters is not None:
            rows = [r for r in rows if filters.covers_date(r.date)]
        return sorted(rows, key=lambda r: (r.product_id, r.date))

    async def list_visitor_logs(self, filters: Optional[SummaryFilters] = None) -> List[VisitorLogRecord]:
        rows = self._visitor_logs
        if filters is not None:
            rows = [r for r in rows if filters.covers_datetime(r.created_at)]
        return list(rows)

    async def add_product_trends(self, rows: Iterable[ProductTrendCreate]) -> int:
        new = [ProductTrendRecord(**r.model_dump()) for r in rows]
        self._product_trends.extend(new)
        return len(new)

    async def add_visitor_logs(self, rows: Iterable[VisitorLogCreate]) -> int:
        new = [VisitorLogRecord(**r.model_dump()) for r in rows]
        self._visitor_logs.extend(new)
        return len(new)
