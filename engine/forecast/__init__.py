"""
Forecasting logic for KPI series, including the point forecast model library, factor attribution, confidence interval estimation and future period labelling.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from engine.forecast.models import ModelLibrary, PointForecast
from engine.forecast.factors import attribute as attribute_factors
from engine.forecast.intervals import estimate as estimate_interval
from engine.forecast.periods import period_label

__all__ = ["ModelLibrary", "PointForecast", "attribute_factors", "estimate_interval", "period_label"]
