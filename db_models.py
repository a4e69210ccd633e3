"""
Core module implementing `db_models` functionality for the KPI observation store.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from sqlalchemy import DateTime, Float, Index, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class KpiObservation(Base):
    __tablename__ = "kpi_observations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    portfolio_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    organization_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    category: Mapped[str] = mapped_column(String(128), nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    period: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_kpi_observations_portfolio_period", "portfolio_id", "period"),
        Index("ix_kpi_observations_org_period", "organization_id", "period"),
        Index("ix_kpi_observations_portfolio_category_period", "portfolio_id", "category", "period"),
    )
