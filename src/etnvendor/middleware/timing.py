from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def log_timing(tag: Optional[str] = None) -> Callable[[F], F]:
    """Log how long the wrapped call took, in milliseconds, at DEBUG level."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            t0 = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                dt_ms = (time.perf_counter() - t0) * 1000.0
                logger.debug("[%s] %.3fms", tag or func.__name__, dt_ms)

        return wrapper  # type: ignore[return-value]

    return decorator
