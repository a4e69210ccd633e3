"""
Test cases for observation grouping, covering bucket classification, merge and ordering behaviour and both sufficiency policies.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime

import pytest

from config import SUFFICIENCY_PER_CATEGORY
from engine.enums import BucketKind
from engine.errors import InsufficientHistoryError
from engine.grouping import ObservationGrouper, classify
from engine.types import Bucket, HistoricalObservation


@pytest.mark.parametrize(
    "category,kind",
    [
        ("Revenue", BucketKind.revenue),
        ("monthly recurring REVENUE", BucketKind.revenue),
        ("Revenue Growth", BucketKind.revenue),
        ("User growth", BucketKind.growth),
        ("Net Profit", BucketKind.profitability),
        ("Gross Margin", BucketKind.profitability),
        ("Headcount", BucketKind.custom),
    ],
)
def test_classify(category, kind):
    assert classify(category).kind is kind


def test_custom_bucket_keeps_literal_name():
    bucket = classify("Customer Count")
    assert bucket == Bucket.custom("Customer Count")
    assert bucket.is_custom


def test_group_orders_buckets_by_first_appearance(make_obs):
    obs = make_obs("Headcount", [1, 2]) + make_obs("Revenue", [10, 20, 30])
    groups = ObservationGrouper().group(obs)
    assert [b.name for b, _ in groups] == ["Headcount", "revenue"]


def test_group_keeps_each_category_as_its_own_series():
    obs = [
        HistoricalObservation("Gross Revenue", 1000.0, datetime(2024, 3, 31)),
        HistoricalObservation("Net Revenue", 100.0, datetime(2024, 3, 31)),
        HistoricalObservation("Net Revenue", 110.0, datetime(2024, 6, 30)),
        HistoricalObservation("Gross Revenue", 1100.0, datetime(2024, 6, 30)),
    ]
    groups = ObservationGrouper().group(obs)
    assert [(b, [m.value for m in members]) for b, members in groups] == [
        (Bucket.custom("Gross Revenue"), [1000.0, 1100.0]),
        (Bucket.revenue(), [100.0, 110.0]),
    ]


def test_category_named_after_bucket_keeps_it(caplog):
    obs = [
        HistoricalObservation("revenue", 10.0, datetime(2024, 3, 31)),
        HistoricalObservation("Net Revenue", 1.0, datetime(2024, 3, 31)),
    ]
    with caplog.at_level("WARNING", logger="engine.grouping"):
        groups = ObservationGrouper().group(obs)
    assert [b for b, _ in groups] == [Bucket.revenue(), Bucket.custom("Net Revenue")]
    assert "both map to revenue" in caplog.text


def test_aggregate_sufficiency(make_obs):
    grouper = ObservationGrouper()
    with pytest.raises(InsufficientHistoryError) as exc_info:
        grouper.partition(make_obs("Revenue", [1, 2]))
    assert exc_info.value.available == 2
    assert exc_info.value.required == 3

    with pytest.raises(InsufficientHistoryError):
        grouper.partition([])

    assert len(grouper.partition(make_obs("Revenue", [1, 2, 3]))) == 1


def test_aggregate_policy_lets_sparse_bucket_through(make_obs):
    obs = make_obs("Revenue", [1, 2, 3]) + make_obs("Growth", [5])
    groups = ObservationGrouper().partition(obs)
    assert {b.kind for b, _ in groups} == {BucketKind.revenue, BucketKind.growth}


def test_per_category_policy_rejects_sparse_bucket(cfg, make_obs):
    cfg.sufficiency_policy = SUFFICIENCY_PER_CATEGORY
    obs = make_obs("Revenue", [1, 2, 3]) + make_obs("Growth", [5])
    with pytest.raises(InsufficientHistoryError) as exc_info:
        ObservationGrouper(cfg).partition(obs)
    assert "growth" in exc_info.value.message
    assert exc_info.value.available == 1
