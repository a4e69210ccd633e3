"""
Point forecast models for KPI series: ordinary least squares trend, simple exponential smoothing with geometric growth, seasonal factor adjustment over a linear base, and a heuristic polynomial ("ml") correction. Every model maps a historical series and a future offset to a non-negative prediction with a confidence that decays with distance.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

import numpy as np

from config import Settings, settings as default_settings
from engine.enums import ForecastModel, Timeframe
from engine.errors import ComputationError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointForecast:
    predicted: float
    confidence: float


def _decay(offset: int, rate: float, floor: float, cap: float) -> float:
    return max(floor, min(cap, 1.0 - offset * rate))


def _finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise ComputationError(f"{what} is not a finite number")
    return float(value)


def _ema(vals: Sequence[float], alpha: float) -> np.ndarray:
    result = np.zeros(len(vals))
    result[0] = vals[0]
    for i in range(1, len(vals)):
        result[i] = alpha * vals[i] + (1 - alpha) * result[i - 1]
    return result


def _linear_fit(vals: Sequence[float]) -> tuple[float, float]:
    n = len(vals)
    if n == 0:
        raise ComputationError("cannot fit a trend to an empty series")
    x = np.arange(1, n + 1, dtype=float)
    y = np.asarray(vals, dtype=float)
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_x2 = float(np.sum(x * x))
    denom = n * sum_x2 - sum_x * sum_x
    # a single observation has no slope; hold the level flat
    slope = (n * sum_xy - sum_x * sum_y) / denom if denom != 0 else 0.0
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def _linear_raw(vals: Sequence[float], offset: int) -> float:
    slope, intercept = _linear_fit(vals)
    return slope * (len(vals) + offset) + intercept


def _growth_rate(vals: Sequence[float]) -> float:
    n = len(vals)
    if n < 2:
        return 0.0
    first, last = float(vals[0]), float(vals[-1])
    if first == 0:
        return 0.0
    ratio = last / first
    if ratio < 0 or not math.isfinite(ratio):
        return 0.0
    try:
        g = ratio ** (1.0 / (n - 1)) - 1.0
    except (OverflowError, ZeroDivisionError):
        return 0.0
    return g if math.isfinite(g) else 0.0


def _seasonal_factors(vals: Sequence[float], period: int) -> List[float]:
    arr = np.asarray(vals, dtype=float)
    overall = float(np.mean(arr))
    if overall == 0 or not math.isfinite(overall):
        return [1.0] * period
    return [float(np.mean(arr[p::period])) / overall for p in range(period)]


def linear(vals: Sequence[float], offset: int, cfg: Settings | None = None) -> PointForecast:
    cfg = cfg or default_settings
    predicted = _finite(_linear_raw(vals, offset), "linear prediction")
    confidence = _decay(
        offset, cfg.linear_confidence_decay, cfg.linear_confidence_floor, cfg.linear_confidence_cap
    )
    return PointForecast(max(0.0, predicted), confidence)


def exponential(vals: Sequence[float], offset: int, cfg: Settings | None = None) -> PointForecast:
    cfg = cfg or default_settings
    if not vals:
        raise ComputationError("cannot smooth an empty series")
    level = float(_ema(vals, cfg.exp_alpha)[-1])
    growth = _growth_rate(vals)
    try:
        predicted = level * (1.0 + growth) ** offset
    except OverflowError as exc:
        raise ComputationError("exponential prediction overflowed") from exc
    predicted = _finite(predicted, "exponential prediction")
    confidence = _decay(
        offset, cfg.exp_confidence_decay, cfg.exp_confidence_floor, cfg.exp_confidence_cap
    )
    return PointForecast(max(0.0, predicted), confidence)


def seasonal(
    vals: Sequence[float],
    offset: int,
    timeframe: Timeframe,
    cfg: Settings | None = None,
) -> PointForecast:
    cfg = cfg or default_settings
    period = timeframe.seasonal_period
    if len(vals) < period:
        return linear(vals, offset, cfg)

    factors = _seasonal_factors(vals, period)
    base = _linear_raw(vals, offset)
    predicted = _finite(base * factors[(offset - 1) % period], "seasonal prediction")
    confidence = _decay(
        offset,
        cfg.seasonal_confidence_decay,
        cfg.seasonal_confidence_floor,
        cfg.seasonal_confidence_cap,
    )
    return PointForecast(max(0.0, predicted), confidence)


def ml(vals: Sequence[float], offset: int, cfg: Settings | None = None) -> PointForecast:
    cfg = cfg or default_settings
    base = _linear_raw(vals, offset)
    momentum = 0.0
    if len(vals) >= cfg.ml_min_points:
        momentum = (float(vals[-1]) - float(vals[-2])) * cfg.ml_momentum_weight * offset
    predicted = _finite(base + momentum, "ml prediction")
    confidence = _decay(
        offset, cfg.ml_confidence_decay, cfg.ml_confidence_floor, cfg.ml_confidence_cap
    )
    return PointForecast(max(0.0, predicted), confidence)


class ModelLibrary:
    """Dispatches a model name to its implementation.

    A model whose arithmetic breaks down for the given series (overflow,
    non-finite result) is answered with the linear model instead; if the
    linear model fails too the :class:`ComputationError` propagates.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings
        self._models: Dict[ForecastModel, Callable[[Sequence[float], int, Timeframe], PointForecast]] = {
            ForecastModel.linear: lambda v, i, tf: linear(v, i, self._settings),
            ForecastModel.exponential: lambda v, i, tf: exponential(v, i, self._settings),
            ForecastModel.seasonal: lambda v, i, tf: seasonal(v, i, tf, self._settings),
            ForecastModel.ml: lambda v, i, tf: ml(v, i, self._settings),
        }

    @property
    def models(self) -> List[ForecastModel]:
        return list(self._models)

    def predict(
        self,
        model: ForecastModel,
        vals: Sequence[float],
        offset: int,
        timeframe: Timeframe,
    ) -> PointForecast:
        try:
            return self._models[model](vals, offset, timeframe)
        except ComputationError as exc:
            if model is ForecastModel.linear:
                raise
            log.warning("%s model failed at offset %d (%s); using linear", model.value, offset, exc)
            return linear(vals, offset, self._settings)
