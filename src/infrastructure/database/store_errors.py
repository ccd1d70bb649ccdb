"""
Translation of driver-level failures into the catalog's store errors.

Repositories wrap their public coroutines with ``translate_store_errors`` so
callers only ever see ``StoreUnavailableError`` / ``StoreTimeoutError`` for
infrastructure trouble. Nothing is retried here.
"""
import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

import structlog
from sqlalchemy import exc as sa_exc

from src.domain.exceptions import StoreTimeoutError, StoreUnavailableError

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def translate_store_errors(fn: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    operation = fn.__qualname__

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await fn(*args, **kwargs)
        except (sa_exc.TimeoutError, asyncio.TimeoutError) as exc:
            logger.error("store_timeout", operation=operation, error=str(exc))
            raise StoreTimeoutError(f"Store timed out during {operation}.") from exc
        # OSError covers raw driver connection setup (refused, unresolvable host)
        except (
            sa_exc.OperationalError,
            sa_exc.InterfaceError,
            sa_exc.DisconnectionError,
            OSError,
        ) as exc:
            logger.error("store_unavailable", operation=operation, error=str(exc))
            raise StoreUnavailableError(f"Store unavailable during {operation}.") from exc

    return wrapper
