"""
Factor attribution for forecast points: recent historical trend direction, a cyclical seasonal contribution and the model's own uncertainty.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from config import (
    MODEL_UNCERTAINTY_CONFIDENCE,
    MODEL_UNCERTAINTY_DEFAULT,
    Settings,
    settings as default_settings,
)
from engine.enums import ForecastModel
from engine.types import PredictionFactor

HISTORICAL_TREND = "Historical Trend"
SEASONAL_PATTERNS = "Seasonal Patterns"
MODEL_UNCERTAINTY = "Model Uncertainty"


def trend_factor(vals: Sequence[float], cfg: Settings | None = None) -> Optional[PredictionFactor]:
    cfg = cfg or default_settings
    if len(vals) < cfg.trend_min_points:
        return None
    recent = list(vals[-cfg.trend_window:])
    trend = "positive" if recent[-1] > recent[0] else "negative"
    return PredictionFactor(
        name=HISTORICAL_TREND,
        impact=cfg.trend_impact if trend == "positive" else -cfg.trend_impact,
        confidence=cfg.trend_confidence,
        description=f"Recent {trend} trend in historical data",
    )


def seasonal_factor(offset: int, cfg: Settings | None = None) -> PredictionFactor:
    cfg = cfg or default_settings
    return PredictionFactor(
        name=SEASONAL_PATTERNS,
        impact=math.sin(offset * math.pi / 6) * cfg.seasonal_factor_amplitude,
        confidence=cfg.seasonal_factor_confidence,
        description="Seasonal business cycle impact",
    )


def uncertainty_factor(model: ForecastModel) -> PredictionFactor:
    return PredictionFactor(
        name=MODEL_UNCERTAINTY,
        impact=0.0,
        confidence=MODEL_UNCERTAINTY_CONFIDENCE.get(model.value, MODEL_UNCERTAINTY_DEFAULT),
        description=f"{model.value} model prediction confidence",
    )


def attribute(
    vals: Sequence[float],
    offset: int,
    model: ForecastModel,
    cfg: Settings | None = None,
) -> List[PredictionFactor]:
    factors: List[PredictionFactor] = []
    trend = trend_factor(vals, cfg)
    if trend is not None:
        factors.append(trend)
    factors.append(seasonal_factor(offset, cfg))
    factors.append(uncertainty_factor(model))
    return factors
