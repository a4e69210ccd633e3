"""
Prediction routes: KPI forecasts with intervals, scenarios and recommendations, plus the descriptive capabilities listing.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.requests import PredictionRequest
from api.responses import CapabilitiesResponse, PredictionResponse
from api.routes.common import get_service
from api.routes.exception import handle_exceptions
from services.forecast_service import ForecastService

router = APIRouter(tags=["Predictions"])


@router.post(
    "/predictions",
    response_model=PredictionResponse,
    response_model_exclude_none=True,
    summary="Forecast KPI categories for a portfolio or organization",
)
@handle_exceptions
async def predictions(
    req: PredictionRequest,
    service: ForecastService = Depends(get_service),
) -> PredictionResponse:
    return await service.run(req)


@router.get(
    "/predictions/capabilities",
    response_model=CapabilitiesResponse,
    summary="Supported models, timeframes and features",
)
@handle_exceptions
async def capabilities(service: ForecastService = Depends(get_service)) -> CapabilitiesResponse:
    return service.capabilities()
