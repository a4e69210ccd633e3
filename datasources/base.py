"""
Base observation source and shared record helpers

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from datasources.exceptions import InvalidRecord
from engine.types import HistoricalObservation


def parse_record(raw: Dict[str, Any]) -> HistoricalObservation:
    try:
        period = raw["period"]
        if not isinstance(period, datetime):
            period = datetime.fromisoformat(str(period))
        return HistoricalObservation(
            category=str(raw["category"]),
            value=float(raw["value"]),
            period=period,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidRecord(f"Malformed KPI observation {raw!r}: {exc}") from exc


class ObservationSource(ABC):
    kind: str = ""

    @abstractmethod
    async def fetch(
        self,
        portfolio_id: Optional[str] = None,
        organization_id: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[HistoricalObservation]:
        """Observations for the scope, sorted ascending by period."""

    @abstractmethod
    async def count(
        self,
        portfolio_id: Optional[str] = None,
        organization_id: Optional[str] = None,
    ) -> int: ...

    async def aclose(self) -> None:
        return None
