"""
SQL backed observation source reading the kpi_observations table.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, ContextManager, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError, TimeoutError as PoolTimeout
from sqlalchemy.orm import Session

from config import SOURCE_KIND_SQL
from database import get_db_session
from datasources.base import ObservationSource
from datasources.exceptions import DataSourceError, DataSourceUnavailable, QueryTimeout
from datasources.retry import retry
from db_models import KpiObservation
from engine.types import HistoricalObservation

log = logging.getLogger(__name__)


def _scoped(stmt, portfolio_id: Optional[str], organization_id: Optional[str]):
    if portfolio_id:
        stmt = stmt.where(KpiObservation.portfolio_id == portfolio_id)
    if organization_id:
        stmt = stmt.where(KpiObservation.organization_id == organization_id)
    return stmt


class SqlObservationSource(ObservationSource):
    kind = SOURCE_KIND_SQL

    def __init__(self, session_scope: Callable[[], ContextManager[Session]] = get_db_session) -> None:
        self._session_scope = session_scope

    def _fetch_sync(
        self,
        portfolio_id: Optional[str],
        organization_id: Optional[str],
        category: Optional[str],
    ) -> List[HistoricalObservation]:
        stmt = _scoped(select(KpiObservation), portfolio_id, organization_id)
        if category:
            stmt = stmt.where(KpiObservation.category == category)
        stmt = stmt.order_by(KpiObservation.period.asc())
        try:
            with self._session_scope() as session:
                rows = session.scalars(stmt).all()
                return [
                    HistoricalObservation(category=r.category, value=float(r.value), period=r.period)
                    for r in rows
                ]
        except PoolTimeout as exc:
            raise QueryTimeout(f"KPI store connection pool exhausted: {exc}") from exc
        except OperationalError as exc:
            raise DataSourceUnavailable(f"KPI store unavailable: {exc}") from exc
        except SQLAlchemyError as exc:
            raise DataSourceError(f"KPI query failed: {exc}") from exc

    def _count_sync(self, portfolio_id: Optional[str], organization_id: Optional[str]) -> int:
        stmt = _scoped(select(func.count()).select_from(KpiObservation), portfolio_id, organization_id)
        try:
            with self._session_scope() as session:
                return int(session.scalar(stmt) or 0)
        except PoolTimeout as exc:
            raise QueryTimeout(f"KPI store connection pool exhausted: {exc}") from exc
        except OperationalError as exc:
            raise DataSourceUnavailable(f"KPI store unavailable: {exc}") from exc
        except SQLAlchemyError as exc:
            raise DataSourceError(f"KPI count failed: {exc}") from exc

    @retry()
    async def fetch(
        self,
        portfolio_id: Optional[str] = None,
        organization_id: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[HistoricalObservation]:
        rows = await asyncio.to_thread(self._fetch_sync, portfolio_id, organization_id, category)
        log.debug("sql fetch portfolio=%s org=%s category=%s rows=%d",
                  portfolio_id, organization_id, category, len(rows))
        return rows

    @retry()
    async def count(
        self,
        portfolio_id: Optional[str] = None,
        organization_id: Optional[str] = None,
    ) -> int:
        return await asyncio.to_thread(self._count_sync, portfolio_id, organization_id)
