"""
Transaction boundary helpers.

Every mutating page operation runs its unit of work through one of these:

    db_transaction_wrap(session, work)
        Commit when work returns, roll back and re-raise when it raises.

    db_transaction_for_version_update(session, version_id, work)
        Same, and additionally touches the version's updated_at inside the
        transaction and invalidates the version's Redis cache after commit.

Boundaries nest: a helper called from inside another helper's unit of work
joins the outer transaction instead of committing on its own.
"""

import logging
from datetime import datetime
from typing import Awaitable, Callable, TypeVar
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from pagebuilder.core.cache import invalidate_version
from pagebuilder.models.orm.applications import AppVersion

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Marker in session.info while a boundary owns the session's transaction
_BOUNDARY_KEY = "pagebuilder_transaction_boundary"


async def db_transaction_wrap(
    session: AsyncSession,
    work: Callable[[AsyncSession], Awaitable[T]],
) -> T:
    """
    Run work atomically on session.

    Args:
        session: Session the work operates on
        work: Coroutine function receiving the session

    Returns:
        Whatever work returns

    Raises:
        Whatever work raises, after rolling back
    """
    if session.info.get(_BOUNDARY_KEY):
        return await work(session)

    session.info[_BOUNDARY_KEY] = True
    try:
        result = await work(session)
        await session.commit()
    except Exception as e:
        await session.rollback()
        logger.debug(f"Rolled back transaction: {e!r}")
        raise
    finally:
        session.info.pop(_BOUNDARY_KEY, None)
    return result


async def db_transaction_for_version_update(
    session: AsyncSession,
    version_id: UUID,
    work: Callable[[AsyncSession], Awaitable[T]],
) -> T:
    """
    Run work atomically and mark the version as changed.

    The version's updated_at is bumped in the same transaction, which also
    makes it the application's editing version. Cached data derived from the
    version is invalidated once the outermost boundary has committed.
    """
    outermost = not session.info.get(_BOUNDARY_KEY)

    async def _work(s: AsyncSession) -> T:
        result = await work(s)
        await s.execute(
            update(AppVersion)
            .where(AppVersion.id == version_id)
            .values(updated_at=datetime.utcnow())
        )
        return result

    result = await db_transaction_wrap(session, _work)
    if outermost:
        await invalidate_version(version_id)
    return result
