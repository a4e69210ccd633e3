"""
Shared dependencies for API route modules.

The forecast service is built once by the application lifespan and stored on
``app.state``; routes receive it through FastAPI dependency injection so
nothing in the request path reaches for module level singletons.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from services.forecast_service import ForecastService


def get_service(request: Request) -> ForecastService:
    service = getattr(request.app.state, "forecast_service", None)
    if service is None:
        raise HTTPException(
            status_code=503,
            detail={"kind": "not_ready", "message": "Forecast service not initialised"},
        )
    return service
