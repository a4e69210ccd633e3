"""
Test cases for enums used by the forecast engine, including ForecastModel, Timeframe, BucketKind and Scenario, validating their properties and relationships.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.enums import BucketKind, ForecastModel, Scenario, Timeframe


def test_model_accuracy_ordering():
    assert ForecastModel.linear.accuracy() == 0.70
    assert ForecastModel.exponential.accuracy() == 0.75
    assert ForecastModel.seasonal.accuracy() == 0.80
    assert ForecastModel.ml.accuracy() == 0.85
    accuracies = [m.accuracy() for m in ForecastModel]
    assert accuracies == sorted(accuracies)


def test_timeframe_periods():
    assert [t.seasonal_period for t in Timeframe] == [12, 4, 1]
    assert [t.months for t in Timeframe] == [1, 3, 12]


def test_bucket_and_scenario_values():
    assert list(BucketKind) == [BucketKind.revenue, BucketKind.growth, BucketKind.profitability, BucketKind.custom]
    assert Scenario.realistic.value == "realistic"
    assert ForecastModel("ml") is ForecastModel.ml
