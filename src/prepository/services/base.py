"""Shared plumbing for database-backed services."""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from prepository.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def store_guard(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Translate SQLAlchemy failures into ``StoreUnavailableError``.

    The session is rolled back and the original exception is logged; callers
    only ever see the generic error.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            service = args[0]
            db: AsyncSession = service.db  # type: ignore[attr-defined]
            logger.error("Store failure in %s: %s", func.__qualname__, e)
            await db.rollback()
            raise StoreUnavailableError() from e

    return wrapper


class BaseService:
    """Service bound to a single request-scoped session."""

    def __init__(self, db: AsyncSession):
        self.db = db
