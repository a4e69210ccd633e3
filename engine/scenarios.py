"""
Scenario generation from realistic base forecasts, scaling every predicted value and interval bound by fixed optimistic and pessimistic multipliers and attaching fixed probability weights.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import Dict, Sequence, Tuple

from config import Settings, settings as default_settings
from engine.enums import Scenario
from engine.types import CategoryForecast, Prediction, ScenarioSet


def flatten(categories: Sequence[CategoryForecast]) -> Tuple[Prediction, ...]:
    return tuple(p for cat in categories for p in cat.predictions)


def scale(predictions: Sequence[Prediction], multiplier: float) -> Tuple[Prediction, ...]:
    return tuple(p.scaled(multiplier) for p in predictions)


class ScenarioGenerator:
    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings

    def probabilities(self) -> Dict[str, float]:
        configured = self._settings.scenario_probabilities
        probs = {s.value: float(configured.get(s.value, 0.0)) for s in Scenario}
        if not math.isclose(sum(probs.values()), 1.0, abs_tol=1e-12):
            raise ValueError(f"scenario probabilities must sum to 1.0, got {probs}")
        return probs

    def generate(self, categories: Sequence[CategoryForecast]) -> ScenarioSet:
        realistic = flatten(categories)
        return ScenarioSet(
            optimistic=scale(realistic, self._settings.scenario_optimistic_multiplier),
            realistic=realistic,
            pessimistic=scale(realistic, self._settings.scenario_pessimistic_multiplier),
            probability=self.probabilities(),
        )
