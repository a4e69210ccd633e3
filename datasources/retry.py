"""
Retry decorator for observation source methods.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from functools import wraps
from typing import Any, Callable, Optional, Tuple, Type, TypeVar, cast

from datasources.exceptions import DataSourceUnavailable, QueryTimeout

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

TRANSIENT_ERRORS: Tuple[Type[Exception], ...] = (DataSourceUnavailable, QueryTimeout)


def retry(
    *,
    attempts: Optional[int] = None,
    delay: Optional[float] = None,
    backoff: Optional[float] = None,
    exceptions: Tuple[Type[Exception], ...] = TRANSIENT_ERRORS,
) -> Callable[[F], F]:
    """Retry a sync or async callable on transient source errors.

    Unset parameters are read from ``settings`` at call time so tests can
    tune them with ``monkeypatch``.
    """

    def _params() -> Tuple[int, float, float]:
        from config import settings

        return (
            max(1, attempts if attempts is not None else settings.source_retry_attempts),
            delay if delay is not None else settings.source_retry_delay,
            backoff if backoff is not None else settings.source_retry_backoff,
        )

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                max_attempts, _delay, _backoff = _params()
                _attempt = 0
                while True:
                    try:
                        return await func(*args, **kwargs)
                    except exceptions as exc:
                        _attempt += 1
                        if _attempt >= max_attempts:
                            log.warning("%s failed after %d attempt(s): %s", func.__qualname__, _attempt, exc)
                            raise
                        log.debug("%s attempt %d failed: %s", func.__qualname__, _attempt, exc)
                        await asyncio.sleep(_delay)
                        _delay *= _backoff

            return cast(F, async_wrapper)

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            max_attempts, _delay, _backoff = _params()
            _attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except exceptions as exc:
                    _attempt += 1
                    if _attempt >= max_attempts:
                        log.warning("%s failed after %d attempt(s): %s", func.__qualname__, _attempt, exc)
                        raise
                    log.debug("%s attempt %d failed: %s", func.__qualname__, _attempt, exc)
                    time.sleep(_delay)
                    _delay *= _backoff

        return cast(F, sync_wrapper)

    return decorator
