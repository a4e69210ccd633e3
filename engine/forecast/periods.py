"""
Calendar helpers for labelling future forecast periods.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import calendar
from datetime import datetime

from engine.enums import Timeframe


def add_months(start: datetime, months: int) -> datetime:
    # day is clamped to the end of the target month (Jan 31 + 1 month -> Feb 28/29)
    index = start.month - 1 + months
    year = start.year + index // 12
    month = index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


def future_period(last: datetime, timeframe: Timeframe, offset: int) -> datetime:
    return add_months(last, timeframe.months * offset)


def period_label(last: datetime, timeframe: Timeframe, offset: int) -> str:
    return future_period(last, timeframe, offset).date().isoformat()
