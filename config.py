"""
Constants and configuration for the KPI Forecast Engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict, List, Optional

from pydantic_settings import BaseSettings


KPIFORECAST_DATABASE_URL = os.getenv("KPIFORECAST_DATABASE_URL", "")
KPIFORECAST_OBSERVATIONS_FILE = os.getenv("KPIFORECAST_OBSERVATIONS_FILE", "")
KPIFORECAST_LOG_LEVEL = os.getenv("KPIFORECAST_LOG_LEVEL", "INFO").upper()
KPIFORECAST_HOST = os.getenv("KPIFORECAST_HOST", "0.0.0.0")
KPIFORECAST_PORT = int(os.getenv("KPIFORECAST_PORT", "4323"))

SOURCE_KIND_MEMORY = "memory"
SOURCE_KIND_SQL = "sql"

SUFFICIENCY_AGGREGATE = "aggregate"
SUFFICIENCY_PER_CATEGORY = "per_category"

SERVICE_NAME = "KPI Forecast Engine"
SERVICE_VERSION = "1.0.0"

# estimated accuracy reported in response metadata; fixed per model, not measured
MODEL_ACCURACY: Dict[str, float] = {
    "ml": 0.85,
    "seasonal": 0.80,
    "exponential": 0.75,
    "linear": 0.70,
}

# confidence attached to the "Model Uncertainty" factor
MODEL_UNCERTAINTY_CONFIDENCE: Dict[str, float] = {
    "ml": 0.9,
    "seasonal": 0.8,
}
MODEL_UNCERTAINTY_DEFAULT: float = 0.7

# number of observations making up one seasonal cycle for each timeframe
SEASONAL_PERIODS: Dict[str, int] = {
    "month": 12,
    "quarter": 4,
    "year": 1,
}

# months added per horizon step when labelling future periods
TIMEFRAME_MONTHS: Dict[str, int] = {
    "month": 1,
    "quarter": 3,
    "year": 12,
}

CAPABILITY_FEATURES: List[str] = [
    "confidence_intervals",
    "scenario_analysis",
    "prediction_factors",
]


class Settings(BaseSettings):
    # request limits
    max_horizon: int = 12
    min_history: int = 3
    # "aggregate" counts observations across the whole request before bucketing;
    # "per_category" additionally requires min_history inside every bucket
    sufficiency_policy: str = SUFFICIENCY_AGGREGATE

    # linear model: confidence = clamp(1 - decay * i, floor, cap)
    linear_confidence_decay: float = 0.1
    linear_confidence_floor: float = 0.5
    linear_confidence_cap: float = 0.95

    # exponential smoothing
    exp_alpha: float = 0.3
    exp_confidence_decay: float = 0.15
    exp_confidence_floor: float = 0.4
    exp_confidence_cap: float = 0.9

    # seasonal adjustment
    seasonal_confidence_decay: float = 0.08
    seasonal_confidence_floor: float = 0.6
    seasonal_confidence_cap: float = 0.85

    # heuristic polynomial correction on top of the linear base
    ml_momentum_weight: float = 0.1
    ml_min_points: int = 4
    ml_confidence_decay: float = 0.06
    ml_confidence_floor: float = 0.7
    ml_confidence_cap: float = 0.92

    # factor attribution
    trend_window: int = 3
    trend_min_points: int = 2
    trend_impact: float = 0.15
    trend_confidence: float = 0.8
    seasonal_factor_amplitude: float = 0.1
    seasonal_factor_confidence: float = 0.6

    # half-width of the interval as a share of predicted * (1 - confidence)
    interval_spread: float = 0.5

    # scenarios
    scenario_optimistic_multiplier: float = 1.2
    scenario_pessimistic_multiplier: float = 0.8
    scenario_probabilities: Dict[str, float] = {
        "optimistic": 0.25,
        "realistic": 0.50,
        "pessimistic": 0.25,
    }

    # recommendation rules
    revenue_growth_high_pct: float = 20.0
    revenue_growth_low_pct: float = 5.0
    growth_confidence_threshold: float = 0.7

    # observation source
    database_url: Optional[str] = KPIFORECAST_DATABASE_URL or None
    observations_file: Optional[str] = KPIFORECAST_OBSERVATIONS_FILE or None
    source_retry_attempts: int = 3
    source_retry_delay: float = 0.5
    source_retry_backoff: float = 2.0

    # 1 evaluates buckets sequentially; larger values use a thread pool
    max_parallel_categories: int = 1

    log_level: str = KPIFORECAST_LOG_LEVEL
    host: str = KPIFORECAST_HOST
    port: int = KPIFORECAST_PORT

    model_config = {
        "env_prefix": "KPIFORECAST_",
        "extra": "ignore",
    }


settings = Settings()
