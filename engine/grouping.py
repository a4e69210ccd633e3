"""
Grouping logic for historical KPI observations, splitting a flat observation list into one series per category, tagging each series with a semantic bucket (revenue, growth, profitability, custom) by case-insensitive category matching, and gating the request on a minimum amount of history.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from config import Settings, settings as default_settings
from engine.enums import SufficiencyPolicy
from engine.errors import InsufficientHistoryError
from engine.types import Bucket, HistoricalObservation

log = logging.getLogger(__name__)

_PROFITABILITY_MARKERS: Tuple[str, ...] = ("profit", "margin")


def classify(category: str) -> Bucket:
    label = category.lower()
    if "revenue" in label:
        return Bucket.revenue()
    if "growth" in label:
        return Bucket.growth()
    if any(marker in label for marker in _PROFITABILITY_MARKERS):
        return Bucket.profitability()
    return Bucket.custom(category)


def _canonical_holders(categories: Iterable[str]) -> Dict[Bucket, str]:
    holders: Dict[Bucket, str] = {}
    for category in categories:
        bucket = classify(category)
        if bucket.is_custom:
            continue
        current = holders.get(bucket)
        # a category spelled exactly like the bucket cannot be renamed to a custom key
        if current is not None and current.lower() == bucket.name:
            log.warning("categories %r and %r both map to %s; %r reported as custom",
                        current, category, bucket.name, category)
            continue
        if current is not None:
            log.warning("categories %r and %r both map to %s; %r reported as custom",
                        current, category, bucket.name, current)
        holders[bucket] = category
    return holders


def _bucket_for(category: str, holders: Dict[Bucket, str]) -> Bucket:
    bucket = classify(category)
    if bucket.is_custom or holders.get(bucket) == category:
        return bucket
    return Bucket.custom(category)


class ObservationGrouper:
    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings

    @property
    def policy(self) -> SufficiencyPolicy:
        return SufficiencyPolicy(self._settings.sufficiency_policy)

    def group(
        self, observations: Sequence[HistoricalObservation]
    ) -> List[Tuple[Bucket, List[HistoricalObservation]]]:
        """Split observations into one series per literal category.

        Each category keeps its own values. Categories are tagged with their
        bucket afterwards; when several claim the same canonical bucket the
        last one holds it (a category literally named after the bucket is
        preferred) and the others are reported as custom buckets.
        """
        ordered = sorted(observations, key=lambda o: o.period)
        series: Dict[str, List[HistoricalObservation]] = {}
        for obs in ordered:
            series.setdefault(obs.category, []).append(obs)
        holders = _canonical_holders(series)
        return [
            (_bucket_for(category, holders), members)
            for category, members in series.items()
        ]

    def check_total(self, observations: Sequence[HistoricalObservation]) -> None:
        required = self._settings.min_history
        available = len(observations)
        if available < required:
            log.info("rejecting request: %d observation(s), %d required", available, required)
            raise InsufficientHistoryError(
                f"Insufficient historical data for predictions "
                f"(minimum {required} data points required, got {available})",
                available=available,
                required=required,
            )

    def check_buckets(self, groups: Sequence[Tuple[Bucket, List[HistoricalObservation]]]) -> None:
        if self.policy is not SufficiencyPolicy.per_category:
            return
        required = self._settings.min_history
        for bucket, members in groups:
            if len(members) < required:
                log.info(
                    "rejecting request: bucket %s has %d observation(s), %d required",
                    bucket.name, len(members), required,
                )
                raise InsufficientHistoryError(
                    f"Insufficient historical data for category '{bucket.name}' "
                    f"(minimum {required} data points required, got {len(members)})",
                    available=len(members),
                    required=required,
                )

    def partition(
        self, observations: Sequence[HistoricalObservation]
    ) -> List[Tuple[Bucket, List[HistoricalObservation]]]:
        self.check_total(observations)
        groups = self.group(observations)
        self.check_buckets(groups)
        return groups
