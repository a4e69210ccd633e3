"""
Enumerations for Forecast Models, Timeframes, Buckets and Scenarios

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from config import MODEL_ACCURACY, SEASONAL_PERIODS, TIMEFRAME_MONTHS


class ForecastModel(str, Enum):
    linear = "linear"
    exponential = "exponential"
    seasonal = "seasonal"
    ml = "ml"

    def accuracy(self) -> float:
        return MODEL_ACCURACY[self.value]


class Timeframe(str, Enum):
    month = "month"
    quarter = "quarter"
    year = "year"

    @property
    def seasonal_period(self) -> int:
        return SEASONAL_PERIODS[self.value]

    @property
    def months(self) -> int:
        return TIMEFRAME_MONTHS[self.value]


class BucketKind(str, Enum):
    revenue = "revenue"
    growth = "growth"
    profitability = "profitability"
    custom = "custom"


class Scenario(str, Enum):
    optimistic = "optimistic"
    realistic = "realistic"
    pessimistic = "pessimistic"


class SufficiencyPolicy(str, Enum):
    aggregate = "aggregate"
    per_category = "per_category"
