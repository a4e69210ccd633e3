"""
Symmetric confidence band around a point forecast.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from config import Settings, settings as default_settings
from engine.types import ConfidenceInterval


def estimate(predicted: float, confidence: float, cfg: Settings | None = None) -> ConfidenceInterval:
    cfg = cfg or default_settings
    variance = predicted * (1.0 - confidence) * cfg.interval_spread
    return ConfidenceInterval(lower=max(0.0, predicted - variance), upper=predicted + variance)
