from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field

from engine.enums import ForecastModel, Timeframe


class PredictionRequest(BaseModel):
    portfolio_id: Optional[str] = None
    organization_id: Optional[str] = None
    category: Optional[str] = None
    timeframe: Timeframe = Timeframe.quarter
    # upper bound is enforced by the engine so it reports a validation_error
    horizon: int = Field(default=4, ge=1)
    include_intervals: bool = True
    include_scenarios: bool = False
    model: ForecastModel = ForecastModel.linear
