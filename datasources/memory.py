"""
In-memory observation source, optionally seeded from a JSON file.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from config import SOURCE_KIND_MEMORY
from datasources.base import ObservationSource, parse_record
from datasources.exceptions import DataSourceUnavailable
from engine.types import HistoricalObservation

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScopedObservation:
    portfolio_id: Optional[str]
    organization_id: Optional[str]
    observation: HistoricalObservation

    def matches(self, portfolio_id: Optional[str], organization_id: Optional[str]) -> bool:
        if portfolio_id and self.portfolio_id != portfolio_id:
            return False
        if organization_id and self.organization_id != organization_id:
            return False
        return True


class InMemoryObservationSource(ObservationSource):
    kind = SOURCE_KIND_MEMORY

    def __init__(self, records: Iterable[Dict[str, Any]] = ()) -> None:
        self._rows: List[ScopedObservation] = []
        for raw in records:
            self.add(raw)

    @classmethod
    def from_file(cls, path: str | Path) -> InMemoryObservationSource:
        try:
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
        except OSError as exc:
            raise DataSourceUnavailable(f"Cannot read observations file {path}: {exc}") from exc
        records = payload.get("observations", []) if isinstance(payload, dict) else payload
        source = cls(records)
        log.info("loaded %d observation(s) from %s", len(source._rows), path)
        return source

    def add(self, raw: Dict[str, Any]) -> None:
        self._rows.append(
            ScopedObservation(
                portfolio_id=raw.get("portfolio_id"),
                organization_id=raw.get("organization_id"),
                observation=parse_record(raw),
            )
        )

    async def fetch(
        self,
        portfolio_id: Optional[str] = None,
        organization_id: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[HistoricalObservation]:
        out = [
            r.observation
            for r in self._rows
            if r.matches(portfolio_id, organization_id)
            and (category is None or r.observation.category == category)
        ]
        out.sort(key=lambda o: o.period)
        log.debug("memory fetch portfolio=%s org=%s category=%s rows=%d",
                  portfolio_id, organization_id, category, len(out))
        return out

    async def count(
        self,
        portfolio_id: Optional[str] = None,
        organization_id: Optional[str] = None,
    ) -> int:
        return sum(1 for r in self._rows if r.matches(portfolio_id, organization_id))
