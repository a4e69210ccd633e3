"""
Tests for observation source construction from settings.
"""

from __future__ import annotations

import json

import database
from config import Settings
from datasources.factory import DataSourceFactory
from datasources.memory import InMemoryObservationSource
from datasources.sql import SqlObservationSource


def test_factory_defaults_to_empty_memory_source():
    source = DataSourceFactory.create(Settings(database_url=None, observations_file=None))
    assert isinstance(source, InMemoryObservationSource)
    assert source.kind == "memory"


def test_factory_seeds_memory_source_from_file(tmp_path):
    path = tmp_path / "kpis.json"
    path.write_text(json.dumps([
        {"portfolio_id": "p1", "category": "Revenue", "value": 1, "period": "2024-03-31"},
    ]))
    source = DataSourceFactory.create(Settings(database_url=None, observations_file=str(path)))
    assert isinstance(source, InMemoryObservationSource)


def test_factory_prefers_database_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'kpi.db'}"
    try:
        source = DataSourceFactory.create(Settings(database_url=url, observations_file="ignored.json"))
        assert isinstance(source, SqlObservationSource)
        assert source.kind == "sql"
        assert database.connection_test() is True
    finally:
        database.dispose_database()
