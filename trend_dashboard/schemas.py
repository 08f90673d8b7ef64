# trend_dashboard/schemas.py
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field

from .exceptions import BadRequest


# 📈 Product trend rows
class ProductTrendBase(BaseModel):
    product_id: str
    date: date
    views: int = Field(ge=0)
    purchases: int = Field(ge=0)

class ProductTrendCreate(ProductTrendBase):
    pass

class ProductTrendRecord(ProductTrendBase):
    class Config:
        from_attributes = True


# 👣 Visitor log rows
class VisitorLogBase(BaseModel):
    session_id: str
    ip: str
    user_agent: str
    path: str
    country: str
    created_at: datetime

class VisitorLogCreate(VisitorLogBase):
    pass

class VisitorLogRecord(VisitorLogBase):
    class Config:
        from_attributes = True


# 🔎 Optional filters shared by both summaries
class SummaryFilters(BaseModel):
    start: Optional[date] = None  # inclusive
    end: Optional[date] = None    # inclusive
    limit: Optional[int] = None

    def validated(self) -> "SummaryFilters":
        if self.start is not None and self.end is not None and self.start > self.end:
            raise BadRequest(f"start ({self.start}) must not be after end ({self.end})")
        if self.limit is not None and self.limit < 1:
            raise BadRequest("limit must be >= 1")
        return self

    def datetime_bounds(self) -> Tuple[Optional[datetime], Optional[datetime]]:
        """UTC half-open range [lower, upper) covering the calendar days start..end."""
        lower = upper = None
        if self.start is not None:
            lower = datetime.combine(self.start, time.min, tzinfo=timezone.utc)
        if self.end is not None:
            upper = datetime.combine(self.end + timedelta(days=1), time.min, tzinfo=timezone.utc)
        return lower, upper

    def covers_date(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True

    def covers_datetime(self, moment: datetime) -> bool:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return self.covers_date(moment.astimezone(timezone.utc).date())


# 📊 Responses
class ProductSummary(BaseModel):
    product_id: str
    total_views: int
    total_purchases: int
    conversion_rate: float
    days: int

class VisitorSummary(BaseModel):
    total: int
    distinct_sessions: int
    by_country: Dict[str, int]
    by_path: Dict[str, int]