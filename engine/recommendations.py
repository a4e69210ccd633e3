"""
Rule based recommendations derived from assembled forecasts and scenarios.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from config import Settings, settings as default_settings
from engine.enums import BucketKind
from engine.types import CategoryForecast, Prediction, ScenarioSet

REVENUE_SCALING = (
    "Strong revenue growth predicted - consider scaling operations and market expansion"
)
REVENUE_EFFICIENCY = (
    "Modest revenue growth predicted - focus on efficiency improvements and new revenue streams"
)
GROWTH_LOW_CONFIDENCE = (
    "Growth predictions have low confidence - gather more data and monitor key metrics closely"
)
SCENARIO_PLANNING = (
    "Consider scenario planning for risk management and opportunity identification"
)
CONTINGENCY_PLANNING = (
    "Develop contingency plans for pessimistic scenarios while preparing for optimistic outcomes"
)
CONTINUE_MONITORING = (
    "Continue monitoring KPIs and update predictions as new data becomes available"
)


def growth_pct(predictions: Sequence[Prediction]) -> Optional[float]:
    """Percentage change from the first to the last prediction.

    A zero starting value yields ``inf`` when the series rises and ``None``
    when it stays at zero; ``None`` means no revenue rule applies.
    """
    if len(predictions) < 2:
        return 0.0
    first, last = predictions[0].predicted, predictions[-1].predicted
    if first == 0:
        return math.inf if last > 0 else None
    return (last / first - 1.0) * 100.0


def mean_confidence(predictions: Sequence[Prediction]) -> float:
    if not predictions:
        return 0.0
    return sum(p.confidence for p in predictions) / len(predictions)


def _find(categories: Sequence[CategoryForecast], kind: BucketKind) -> Optional[CategoryForecast]:
    return next((c for c in categories if c.bucket.kind is kind), None)


class RecommendationSynthesizer:
    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings

    def synthesize(
        self,
        categories: Sequence[CategoryForecast],
        scenarios: Optional[ScenarioSet] = None,
    ) -> List[str]:
        cfg = self._settings
        out: List[str] = []

        revenue = _find(categories, BucketKind.revenue)
        if revenue is not None:
            pct = growth_pct(revenue.predictions)
            if pct is not None and pct > cfg.revenue_growth_high_pct:
                out.append(REVENUE_SCALING)
            elif pct is not None and pct < cfg.revenue_growth_low_pct:
                out.append(REVENUE_EFFICIENCY)

        growth = _find(categories, BucketKind.growth)
        if growth is not None and growth.predictions:
            if mean_confidence(growth.predictions) < cfg.growth_confidence_threshold:
                out.append(GROWTH_LOW_CONFIDENCE)

        if scenarios is not None:
            out.append(SCENARIO_PLANNING)
            out.append(CONTINGENCY_PLANNING)

        if not out:
            out.append(CONTINUE_MONITORING)
        return out
