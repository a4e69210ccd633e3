"""
Error taxonomy for the forecast engine.

Every failure raised by the engine is terminal for the current request and
carries a machine readable ``kind`` so callers can decide whether to retry
with different parameters (smaller horizon, different scope).

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict


class ForecastError(Exception):
    kind = "forecast_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


class ValidationError(ForecastError):
    kind = "validation_error"


class InsufficientHistoryError(ForecastError):
    kind = "insufficient_history"

    def __init__(self, message: str, available: int, required: int) -> None:
        super().__init__(message)
        self.available = available
        self.required = required

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "available": self.available, "required": self.required}


class ComputationError(ForecastError):
    kind = "computation_error"
