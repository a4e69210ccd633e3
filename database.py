"""
Database initialization and session management for the KPI observation store.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, sessionmaker

from db_models import Base

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def _engine_options(database_url: str) -> Dict[str, Any]:
    if make_url(database_url).drivername.startswith("sqlite"):
        return {}
    return {
        "pool_size": int(os.getenv("KPIFORECAST_DB_POOL_SIZE", "10")),
        "max_overflow": int(os.getenv("KPIFORECAST_DB_MAX_OVERFLOW", "20")),
        "pool_timeout": int(os.getenv("KPIFORECAST_DB_POOL_TIMEOUT", "30")),
        "pool_recycle": int(os.getenv("KPIFORECAST_DB_POOL_RECYCLE", "1800")),
    }


def init_database(database_url: str) -> None:
    global _engine, _session_factory
    if _engine is not None:
        return
    _engine = create_engine(database_url, pool_pre_ping=True, **_engine_options(database_url))
    _session_factory = sessionmaker(bind=_engine, autocommit=False, autoflush=False, expire_on_commit=False)


@contextmanager
def get_db_session() -> Iterator[Session]:
    if _session_factory is None:
        raise RuntimeError("Database not initialized")
    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    if _engine is None:
        raise RuntimeError("Database not initialized")
    Base.metadata.create_all(bind=_engine)


def connection_test() -> bool:
    if _engine is None:
        return False
    try:
        with _engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


def dispose_database() -> None:
    global _engine, _session_factory
    _session_factory = None
    if _engine is not None:
        _engine.dispose()
        _engine = None
