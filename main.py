"""
Entry point for the KPI Forecast Engine API server.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI

from api.routes import router
from config import SERVICE_VERSION, Settings, settings
from database import dispose_database
from datasources.base import ObservationSource
from datasources.factory import DataSourceFactory
from engine.orchestrator import ForecastOrchestrator
from services.forecast_service import ForecastService

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


def build_service(
    cfg: Settings,
    source: ObservationSource,
    executor: Optional[ThreadPoolExecutor] = None,
) -> ForecastService:
    orchestrator = ForecastOrchestrator(settings=cfg, executor=executor)
    return ForecastService(source=source, orchestrator=orchestrator, settings=cfg)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    source = DataSourceFactory.create(settings)
    executor = (
        ThreadPoolExecutor(max_workers=settings.max_parallel_categories, thread_name_prefix="forecast")
        if settings.max_parallel_categories > 1
        else None
    )
    app.state.forecast_service = build_service(settings, source, executor)
    log.info("forecast engine ready (source=%s, parallel=%d)", source.kind, settings.max_parallel_categories)
    try:
        yield
    finally:
        await source.aclose()
        if executor is not None:
            executor.shutdown(wait=False)
        dispose_database()


app = FastAPI(
    title="KPI Forecast Engine",
    description="Closed-form KPI forecasting with confidence intervals, scenarios and recommendations.",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

app.include_router(router, prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
