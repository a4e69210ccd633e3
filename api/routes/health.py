"""
Health check route to verify service and observation source wiring.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.routes.common import get_service
from api.routes.exception import handle_exceptions
from config import SOURCE_KIND_SQL
from database import connection_test
from services.forecast_service import ForecastService

router = APIRouter(tags=["Health"])


@router.get("/health")
@handle_exceptions
async def health(service: ForecastService = Depends(get_service)) -> Dict[str, Any]:
    kind = service.source.kind
    status = "ok"
    if kind == SOURCE_KIND_SQL and not connection_test():
        status = "degraded"
    return {"status": status, "source": kind}
