# trend_dashboard/models.py
from sqlalchemy import CheckConstraint, Column, Date, DateTime, Index, Integer, String

from .database import Base


# 📈 Daily views/purchases of one product
class ProductTrend(Base):
    __tablename__ = "product_trends"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(String(64), nullable=False)
    date = Column(Date, nullable=False)
    views = Column(Integer, nullable=False, default=0)
    purchases = Column(Integer, nullable=False, default=0)  # expected <= views, not enforced

    __table_args__ = (
        CheckConstraint("views >= 0", name="ck_product_trends_views_nonneg"),
        CheckConstraint("purchases >= 0", name="ck_product_trends_purchases_nonneg"),
        Index("ix_product_trends_product_date", "product_id", "date"),
    )


# 👣 One page visit
class VisitorLog(Base):
    __tablename__ = "visitor_logs"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String(128), nullable=False)
    ip = Column(String(64), nullable=False)
    user_agent = Column(String(512), nullable=False)
    path = Column(String(2048), nullable=False)
    country = Column(String(8), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_visitor_logs_created_at", "created_at"),
        Index("ix_visitor_logs_session", "session_id"),
    )
