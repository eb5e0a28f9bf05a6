"""Boundary logging for use-case handlers.

Handlers stay free of logging calls; ``@log_use_case`` wraps their
``handle`` methods and records start, success and failure.
"""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from orderdesk.domain.exceptions import DomainException, OrderPersistenceError

F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger("orderdesk.use_case")


def log_use_case(name: str) -> Callable[[F], F]:
    """Log every call of the decorated handler method under *name*.

    Expected domain rejections are logged at WARNING and re-raised
    unchanged.  Storage failures and anything unexpected are logged with
    their traceback and re-raised.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            started = time.perf_counter()
            logger.info("%s: started", name)
            try:
                result = func(*args, **kwargs)
            except OrderPersistenceError:
                logger.exception("%s: failed to persist", name)
                raise
            except DomainException as exc:
                logger.warning(
                    "%s: rejected (%s) %s", name, type(exc).__name__, exc
                )
                raise
            except Exception:
                logger.exception("%s: failed unexpectedly", name)
                raise
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info("%s: finished in %.1f ms", name, elapsed_ms)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
