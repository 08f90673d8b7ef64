# trend_dashboard/dashboard.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from .aggregator import get_product_summary, get_visitor_summary
from .schemas import ProductSummary, SummaryFilters, VisitorSummary
from .store import DashboardStore

router = APIRouter(tags=["dashboard"])


def get_store(request: Request) -> DashboardStore:
    # opened in the app lifespan, see main.create_app
    return request.app.state.store


def product_filters(
    start: Optional[date] = Query(None, description="First day (inclusive), ISO date"),
    end: Optional[date] = Query(None, description="Last day (inclusive), ISO date"),
    limit: Optional[int] = Query(None, description="Return at most this many products"),
) -> SummaryFilters:
    return SummaryFilters(start=start, end=end, limit=limit).validated()


def visitor_filters(
    start: Optional[date] = Query(None, description="First day (inclusive), ISO date"),
    end: Optional[date] = Query(None, description="Last day (inclusive), ISO date"),
) -> SummaryFilters:
    return SummaryFilters(start=start, end=end).validated()


@router.get("/products", response_model=List[ProductSummary], summary="Per-product views, purchases and conversion")
async def dashboard_products(
    filters: SummaryFilters = Depends(product_filters),
    store: DashboardStore = Depends(get_store),
):
    return await get_product_summary(store, filters)


@router.get("/visitors", response_model=VisitorSummary, summary="Visit totals with country and path breakdowns")
async def dashboard_visitors(
    filters: SummaryFilters = Depends(visitor_filters),
    store: DashboardStore = Depends(get_store),
):
    return await get_visitor_summary(store, filters)
