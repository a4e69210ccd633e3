import os
import sys
from datetime import datetime, timezone
from typing import Callable, List, Sequence

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from config import Settings
from engine.forecast.periods import add_months
from engine.types import HistoricalObservation

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def cfg() -> Settings:
    """A fresh settings instance so tests can mutate it without leaking."""
    return Settings()


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def make_obs() -> Callable[..., List[HistoricalObservation]]:
    def _make(
        category: str,
        values: Sequence[float],
        start: datetime = datetime(2024, 3, 31),
        step_months: int = 3,
    ) -> List[HistoricalObservation]:
        return [
            HistoricalObservation(category=category, value=float(v), period=add_months(start, i * step_months))
            for i, v in enumerate(values)
        ]

    return _make
