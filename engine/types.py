"""
Request scoped value types shared by the forecast engine components.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Optional, Tuple

from engine.enums import BucketKind, ForecastModel, Timeframe


@dataclass(frozen=True)
class HistoricalObservation:
    category: str
    value: float
    period: datetime


@dataclass(frozen=True)
class ForecastRequest:
    timeframe: Timeframe
    horizon: int
    portfolio_id: Optional[str] = None
    organization_id: Optional[str] = None
    category: Optional[str] = None
    include_intervals: bool = True
    include_scenarios: bool = False
    model: ForecastModel = ForecastModel.linear

    @property
    def scope_id(self) -> Optional[str]:
        return self.portfolio_id or self.organization_id


@dataclass(frozen=True)
class Bucket:
    kind: BucketKind
    name: str

    @classmethod
    def revenue(cls) -> Bucket:
        return cls(BucketKind.revenue, BucketKind.revenue.value)

    @classmethod
    def growth(cls) -> Bucket:
        return cls(BucketKind.growth, BucketKind.growth.value)

    @classmethod
    def profitability(cls) -> Bucket:
        return cls(BucketKind.profitability, BucketKind.profitability.value)

    @classmethod
    def custom(cls, name: str) -> Bucket:
        return cls(BucketKind.custom, name)

    @property
    def is_custom(self) -> bool:
        return self.kind is BucketKind.custom


@dataclass(frozen=True)
class PredictionFactor:
    name: str
    impact: float
    confidence: float
    description: str


@dataclass(frozen=True)
class ConfidenceInterval:
    lower: float
    upper: float

    def scaled(self, multiplier: float) -> ConfidenceInterval:
        return ConfidenceInterval(lower=self.lower * multiplier, upper=self.upper * multiplier)


@dataclass(frozen=True)
class Prediction:
    period_label: str
    predicted: float
    confidence: float
    interval: Optional[ConfidenceInterval] = None
    factors: Tuple[PredictionFactor, ...] = ()

    def scaled(self, multiplier: float) -> Prediction:
        return replace(
            self,
            predicted=self.predicted * multiplier,
            interval=self.interval.scaled(multiplier) if self.interval else None,
        )


@dataclass(frozen=True)
class CategoryForecast:
    bucket: Bucket
    predictions: Tuple[Prediction, ...]


@dataclass(frozen=True)
class ScenarioSet:
    optimistic: Tuple[Prediction, ...]
    realistic: Tuple[Prediction, ...]
    pessimistic: Tuple[Prediction, ...]
    probability: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class ForecastMetadata:
    model: ForecastModel
    observation_count: int
    estimated_accuracy: float
    generated_at: datetime
    horizon: int
    timeframe: Timeframe


@dataclass(frozen=True)
class ForecastResult:
    categories: Tuple[CategoryForecast, ...]
    recommendations: Tuple[str, ...]
    metadata: ForecastMetadata
    scenarios: Optional[ScenarioSet] = None

    def bucket(self, kind: BucketKind, name: Optional[str] = None) -> Optional[CategoryForecast]:
        for cat in self.categories:
            if cat.bucket.kind is kind and (name is None or cat.bucket.name == name):
                return cat
        return None
