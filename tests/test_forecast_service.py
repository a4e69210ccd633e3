"""
Test cases for the forecast service, covering request translation, validation before fetching and the observation count fallback.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from api.requests import PredictionRequest
from datasources.exceptions import QueryTimeout
from datasources.memory import InMemoryObservationSource
from engine.enums import ForecastModel, Timeframe
from engine.errors import ValidationError
from engine.orchestrator import ForecastOrchestrator
from services.forecast_service import ForecastService, to_engine_request

RECORDS = [
    {"organization_id": "o1", "category": "Revenue", "value": v, "period": p}
    for v, p in [(10, "2024-01-31"), (20, "2024-02-29"), (30, "2024-03-31")]
]


class CountingSource(InMemoryObservationSource):
    def __init__(self, records, fail_count=False):
        super().__init__(records)
        self.fetches = 0
        self.fail_count = fail_count

    async def fetch(self, portfolio_id=None, organization_id=None, category=None):
        self.fetches += 1
        return await super().fetch(portfolio_id, organization_id, category)

    async def count(self, portfolio_id=None, organization_id=None):
        if self.fail_count:
            raise QueryTimeout("count timed out")
        return await super().count(portfolio_id, organization_id)


def test_to_engine_request():
    req = PredictionRequest(organization_id="o1", timeframe="month", horizon=6, model="ml")
    engine_req = to_engine_request(req)
    assert engine_req.timeframe is Timeframe.month
    assert engine_req.model is ForecastModel.ml
    assert engine_req.scope_id == "o1"
    assert engine_req.include_intervals is True


@pytest.mark.asyncio
async def test_invalid_request_never_hits_source():
    source = CountingSource(RECORDS)
    service = ForecastService(source, ForecastOrchestrator())
    with pytest.raises(ValidationError):
        await service.run(PredictionRequest(organization_id="o1", horizon=13))
    assert source.fetches == 0


@pytest.mark.asyncio
async def test_count_failure_falls_back_to_fetched_rows():
    source = CountingSource(RECORDS, fail_count=True)
    service = ForecastService(source, ForecastOrchestrator())
    res = await service.run(PredictionRequest(organization_id="o1", timeframe="month", horizon=1))
    assert res.metadata.observation_count == 3
    assert res.categories["revenue"][0].period == "2024-04-30"
    assert res.categories["revenue"][0].predicted == pytest.approx(40.0)
