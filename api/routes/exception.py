"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler and turns
failures into :class:`fastapi.HTTPException` responses whose detail is a
``{"kind": ..., "message": ...}`` mapping:

* ``HTTPException`` raised by the handler is re-raised verbatim.
* Engine errors map by type: validation problems to ``400``, insufficient
  history to ``422``, computation failures to ``500``.
* Observation source failures become ``502``.
* Anything else becomes ``500``.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, Dict, Tuple, Type, TypeVar, cast

from fastapi import HTTPException

from datasources.exceptions import DataSourceError
from engine import errors

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_STATUS: Tuple[Tuple[Type[Exception], int], ...] = (
    (errors.ValidationError, 400),
    (errors.InsufficientHistoryError, 422),
    (errors.ComputationError, 500),
    (errors.ForecastError, 500),
    (DataSourceError, 502),
)


def to_http(exc: Exception) -> HTTPException:
    for exc_type, status_code in _STATUS:
        if isinstance(exc, exc_type):
            if isinstance(exc, errors.ForecastError):
                detail: Dict[str, Any] = exc.to_dict()
            else:
                detail = {"kind": getattr(exc, "kind", "error"), "message": str(exc)}
            return HTTPException(status_code=status_code, detail=detail)
    log.exception("unhandled error in route: %s", exc)
    return HTTPException(status_code=500, detail={"kind": "internal_error", "message": str(exc)})


def handle_exceptions(func: F) -> F:
    """Decorator that converts uncaught exceptions to HTTP errors.

    The decorator works with both regular and async functions.
    """

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise to_http(exc) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as exc:
            raise to_http(exc) from exc

    return cast(F, sync_wrapper)
