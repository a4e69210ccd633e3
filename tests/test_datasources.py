"""
Test cases for the in-memory and SQL observation sources, covering scope filtering, ordering, file seeding and error mapping.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import json
from contextlib import contextmanager
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeout
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings
from datasources.base import parse_record
from datasources.exceptions import DataSourceUnavailable, InvalidRecord, QueryTimeout
from datasources.memory import InMemoryObservationSource
from datasources.sql import SqlObservationSource
from db_models import Base, KpiObservation

RECORDS = [
    {"portfolio_id": "p1", "category": "Revenue", "value": 300, "period": "2024-09-30"},
    {"portfolio_id": "p1", "category": "Revenue", "value": 100, "period": "2024-03-31"},
    {"portfolio_id": "p1", "category": "Headcount", "value": 12, "period": "2024-06-30"},
    {"portfolio_id": "p2", "organization_id": "o9", "category": "Revenue", "value": 5, "period": "2024-03-31"},
]


def test_parse_record_rejects_malformed_rows():
    obs = parse_record({"category": "Revenue", "value": "12.5", "period": "2024-01-31"})
    assert obs.value == 12.5
    assert obs.period == datetime(2024, 1, 31)

    with pytest.raises(InvalidRecord):
        parse_record({"category": "Revenue", "period": "2024-01-31"})
    with pytest.raises(InvalidRecord):
        parse_record({"category": "Revenue", "value": 1, "period": "not a date"})


@pytest.mark.asyncio
async def test_memory_fetch_filters_scope_and_sorts():
    source = InMemoryObservationSource(RECORDS)
    rows = await source.fetch(portfolio_id="p1")
    assert [r.value for r in rows] == [100.0, 12.0, 300.0]

    revenue = await source.fetch(portfolio_id="p1", category="Revenue")
    assert [r.value for r in revenue] == [100.0, 300.0]

    by_org = await source.fetch(organization_id="o9")
    assert [r.value for r in by_org] == [5.0]


@pytest.mark.asyncio
async def test_memory_count_is_scope_wide():
    source = InMemoryObservationSource(RECORDS)
    assert await source.count(portfolio_id="p1") == 3
    assert await source.count(portfolio_id="missing") == 0


@pytest.mark.asyncio
async def test_memory_from_file_accepts_wrapped_payload(tmp_path):
    path = tmp_path / "kpis.json"
    path.write_text(json.dumps({"observations": RECORDS}))
    source = InMemoryObservationSource.from_file(path)
    assert await source.count() == 4


def test_memory_from_missing_file(tmp_path):
    with pytest.raises(DataSourceUnavailable):
        InMemoryObservationSource.from_file(tmp_path / "nope.json")


@pytest.fixture
def sql_source():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, expire_on_commit=False)

    @contextmanager
    def session_scope():
        session = factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    with session_scope() as session:
        for raw in RECORDS:
            session.add(
                KpiObservation(
                    portfolio_id=raw.get("portfolio_id"),
                    organization_id=raw.get("organization_id"),
                    category=raw["category"],
                    value=float(raw["value"]),
                    period=datetime.fromisoformat(raw["period"]),
                )
            )
    yield SqlObservationSource(session_scope=session_scope)
    engine.dispose()


@pytest.mark.asyncio
async def test_sql_fetch_and_count(sql_source):
    rows = await sql_source.fetch(portfolio_id="p1")
    assert [(r.category, r.value) for r in rows] == [("Revenue", 100.0), ("Headcount", 12.0), ("Revenue", 300.0)]

    revenue = await sql_source.fetch(portfolio_id="p1", category="Revenue")
    assert len(revenue) == 2
    assert await sql_source.count(portfolio_id="p1") == 3
    assert await sql_source.count(organization_id="o9") == 1


@pytest.mark.asyncio
async def test_sql_operational_error_is_retried_then_mapped(monkeypatch):
    monkeypatch.setattr(settings, "source_retry_delay", 0)
    monkeypatch.setattr(settings, "source_retry_attempts", 3)
    calls = []

    @contextmanager
    def broken_scope():
        calls.append(1)
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))
        yield  # pragma: no cover

    source = SqlObservationSource(session_scope=broken_scope)
    with pytest.raises(DataSourceUnavailable):
        await source.fetch(portfolio_id="p1")
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_sql_pool_timeout_maps_to_query_timeout(monkeypatch):
    monkeypatch.setattr(settings, "source_retry_delay", 0)
    monkeypatch.setattr(settings, "source_retry_attempts", 1)

    @contextmanager
    def exhausted_scope():
        raise PoolTimeout("QueuePool limit reached")
        yield  # pragma: no cover

    with pytest.raises(QueryTimeout):
        await SqlObservationSource(session_scope=exhausted_scope).count(portfolio_id="p1")


def test_kpi_table_holds_only_forecast_inputs():
    columns = set(KpiObservation.__table__.columns.keys())
    assert columns == {"id", "portfolio_id", "organization_id", "category", "value", "period", "created_at"}
