"""
Response models for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, Field, model_serializer

from engine.enums import ForecastModel, Timeframe
from engine.types import ForecastResult, Prediction as PredictionValue, ScenarioSet


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class PredictionFactor(NpModel):

    name: str
    impact: float
    confidence: float = Field(ge=0.0, le=1.0)
    description: str


class ConfidenceInterval(NpModel):

    lower: float
    upper: float


class Prediction(NpModel):

    period: str
    predicted: float = Field(ge=0.0)
    confidence: float = Field(ge=0.0, le=1.0)
    confidence_interval: Optional[ConfidenceInterval] = None
    factors: List[PredictionFactor] = Field(default_factory=list)

    @classmethod
    def from_value(cls, p: PredictionValue) -> Prediction:
        return cls(
            period=p.period_label,
            predicted=p.predicted,
            confidence=p.confidence,
            confidence_interval=(
                ConfidenceInterval(lower=p.interval.lower, upper=p.interval.upper)
                if p.interval else None
            ),
            factors=[
                PredictionFactor(
                    name=f.name, impact=f.impact, confidence=f.confidence, description=f.description
                )
                for f in p.factors
            ],
        )


class ScenarioProbability(NpModel):

    optimistic: float
    realistic: float
    pessimistic: float


class ScenarioAnalysis(NpModel):

    optimistic: List[Prediction]
    realistic: List[Prediction]
    pessimistic: List[Prediction]
    probability: ScenarioProbability

    @classmethod
    def from_value(cls, s: ScenarioSet) -> ScenarioAnalysis:
        return cls(
            optimistic=[Prediction.from_value(p) for p in s.optimistic],
            realistic=[Prediction.from_value(p) for p in s.realistic],
            pessimistic=[Prediction.from_value(p) for p in s.pessimistic],
            probability=ScenarioProbability(**s.probability),
        )


class PredictionMetadata(NpModel):

    model: ForecastModel
    observation_count: int
    estimated_accuracy: float
    generated_at: datetime
    horizon: int
    timeframe: Timeframe


class PredictionResponse(NpModel):

    success: bool = True
    # keyed by bucket name: "revenue", "growth", "profitability" or the custom category
    categories: Dict[str, List[Prediction]]
    scenarios: Optional[ScenarioAnalysis] = None
    recommendations: List[str]
    metadata: PredictionMetadata

    @classmethod
    def from_result(cls, result: ForecastResult) -> PredictionResponse:
        meta = result.metadata
        return cls(
            categories={
                cat.bucket.name: [Prediction.from_value(p) for p in cat.predictions]
                for cat in result.categories
            },
            scenarios=ScenarioAnalysis.from_value(result.scenarios) if result.scenarios else None,
            recommendations=list(result.recommendations),
            metadata=PredictionMetadata(
                model=meta.model,
                observation_count=meta.observation_count,
                estimated_accuracy=meta.estimated_accuracy,
                generated_at=meta.generated_at,
                horizon=meta.horizon,
                timeframe=meta.timeframe,
            ),
        )


class Capabilities(NpModel):

    models: List[ForecastModel]
    timeframes: List[Timeframe]
    max_horizon: int
    features: List[str]


class CapabilitiesResponse(NpModel):

    success: bool = True
    service: str
    version: str
    capabilities: Capabilities
    usage: Dict[str, str] = Field(default_factory=dict)
