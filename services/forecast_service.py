"""
Forecast service that fetches historical KPI observations for a scope and runs the forecast engine over them.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import logging

from api.requests import PredictionRequest
from api.responses import Capabilities, CapabilitiesResponse, PredictionResponse
from config import CAPABILITY_FEATURES, SERVICE_NAME, SERVICE_VERSION, Settings, settings as default_settings
from datasources.base import ObservationSource
from datasources.exceptions import DataSourceError
from engine.enums import Timeframe
from engine.orchestrator import ForecastOrchestrator
from engine.types import ForecastRequest

log = logging.getLogger(__name__)


def to_engine_request(req: PredictionRequest) -> ForecastRequest:
    return ForecastRequest(
        timeframe=req.timeframe,
        horizon=req.horizon,
        portfolio_id=req.portfolio_id,
        organization_id=req.organization_id,
        category=req.category,
        include_intervals=req.include_intervals,
        include_scenarios=req.include_scenarios,
        model=req.model,
    )


class ForecastService:
    def __init__(
        self,
        source: ObservationSource,
        orchestrator: ForecastOrchestrator,
        settings: Settings | None = None,
    ) -> None:
        self.source = source
        self.orchestrator = orchestrator
        self._settings = settings or default_settings

    async def run(self, req: PredictionRequest) -> PredictionResponse:
        request = to_engine_request(req)
        # reject bad parameters before touching the store
        self.orchestrator.validate(request)

        observations = await self.source.fetch(
            portfolio_id=request.portfolio_id,
            organization_id=request.organization_id,
            category=request.category,
        )
        try:
            count = await self.source.count(
                portfolio_id=request.portfolio_id,
                organization_id=request.organization_id,
            )
        except DataSourceError as exc:
            log.warning("observation count unavailable for scope=%s: %s", request.scope_id, exc)
            count = len(observations)

        result = self.orchestrator.run(request, observations, observation_count=count)
        return PredictionResponse.from_result(result)

    def capabilities(self) -> CapabilitiesResponse:
        return CapabilitiesResponse(
            service=SERVICE_NAME,
            version=SERVICE_VERSION,
            capabilities=Capabilities(
                models=self.orchestrator.models,
                timeframes=list(Timeframe),
                max_horizon=self._settings.max_horizon,
                features=list(CAPABILITY_FEATURES),
            ),
            usage={
                "endpoint": "POST /api/v1/predictions",
                "scope": "portfolio_id or organization_id",
            },
        )
