"""
Forecast orchestration: validates a request, buckets the historical observations, runs the model, factor and interval pipeline per bucket, then derives scenarios and recommendations and assembles the final result.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Tuple

from config import Settings, settings as default_settings
from engine.enums import ForecastModel
from engine.errors import ValidationError
from engine.forecast import ModelLibrary, attribute_factors, estimate_interval, period_label
from engine.grouping import ObservationGrouper
from engine.recommendations import RecommendationSynthesizer
from engine.scenarios import ScenarioGenerator
from engine.types import (
    Bucket,
    CategoryForecast,
    ForecastMetadata,
    ForecastRequest,
    ForecastResult,
    HistoricalObservation,
    Prediction,
)

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ForecastOrchestrator:
    def __init__(
        self,
        settings: Settings | None = None,
        grouper: ObservationGrouper | None = None,
        models: ModelLibrary | None = None,
        scenarios: ScenarioGenerator | None = None,
        recommender: RecommendationSynthesizer | None = None,
        clock: Callable[[], datetime] = _utcnow,
        executor: Executor | None = None,
    ) -> None:
        self._settings = settings or default_settings
        self._grouper = grouper or ObservationGrouper(self._settings)
        self._models = models or ModelLibrary(self._settings)
        self._scenarios = scenarios or ScenarioGenerator(self._settings)
        self._recommender = recommender or RecommendationSynthesizer(self._settings)
        self._clock = clock
        self._executor = executor

    @property
    def models(self) -> List[ForecastModel]:
        return self._models.models

    def validate(self, request: ForecastRequest) -> None:
        max_horizon = self._settings.max_horizon
        if request.horizon > max_horizon:
            raise ValidationError(f"Maximum {max_horizon} periods allowed for predictions")
        if request.horizon < 1:
            raise ValidationError("At least 1 period is required for predictions")
        if not request.scope_id:
            raise ValidationError("Either portfolio_id or organization_id is required")

    def forecast_bucket(
        self,
        bucket: Bucket,
        observations: Sequence[HistoricalObservation],
        request: ForecastRequest,
    ) -> CategoryForecast:
        vals = [o.value for o in observations]
        last_period = observations[-1].period
        predictions: List[Prediction] = []

        for offset in range(1, request.horizon + 1):
            point = self._models.predict(request.model, vals, offset, request.timeframe)
            interval = (
                estimate_interval(point.predicted, point.confidence, self._settings)
                if request.include_intervals
                else None
            )
            predictions.append(
                Prediction(
                    period_label=period_label(last_period, request.timeframe, offset),
                    predicted=point.predicted,
                    confidence=point.confidence,
                    interval=interval,
                    factors=tuple(attribute_factors(vals, offset, request.model, self._settings)),
                )
            )
        return CategoryForecast(bucket=bucket, predictions=tuple(predictions))

    def _forecast_all(
        self,
        groups: Sequence[Tuple[Bucket, List[HistoricalObservation]]],
        request: ForecastRequest,
    ) -> Tuple[CategoryForecast, ...]:
        if self._executor is None or len(groups) < 2:
            return tuple(self.forecast_bucket(b, obs, request) for b, obs in groups)
        # buckets are independent; map keeps the grouping order
        return tuple(
            self._executor.map(lambda g: self.forecast_bucket(g[0], g[1], request), groups)
        )

    def run(
        self,
        request: ForecastRequest,
        observations: Sequence[HistoricalObservation],
        observation_count: Optional[int] = None,
    ) -> ForecastResult:
        self.validate(request)
        groups = self._grouper.partition(observations)
        log.info(
            "forecasting scope=%s model=%s horizon=%d buckets=%d observations=%d",
            request.scope_id, request.model.value, request.horizon, len(groups), len(observations),
        )

        categories = self._forecast_all(groups, request)
        scenarios = self._scenarios.generate(categories) if request.include_scenarios else None
        recommendations = self._recommender.synthesize(categories, scenarios)

        metadata = ForecastMetadata(
            model=request.model,
            observation_count=len(observations) if observation_count is None else observation_count,
            estimated_accuracy=request.model.accuracy(),
            generated_at=self._clock(),
            horizon=request.horizon,
            timeframe=request.timeframe,
        )
        log.debug("forecast complete scope=%s recommendations=%d", request.scope_id, len(recommendations))
        return ForecastResult(
            categories=categories,
            recommendations=tuple(recommendations),
            metadata=metadata,
            scenarios=scenarios,
        )
