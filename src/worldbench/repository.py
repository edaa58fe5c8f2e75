import logging
from collections.abc import Awaitable, Callable, Collection, Iterable
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from worldbench.schema import World

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WorldRepository:
    """Persistence operations on World rows.

    Handlers hand a session in for the batched calls so that reads and the
    write-back of one request share a single unit of work.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def in_session(
        self,
        work: Callable[[AsyncSession], Awaitable[T]],
        *,
        manual_flush: bool = False,
    ) -> T:
        """Run ``work`` inside a session that is closed when it returns or raises.

        With ``manual_flush`` the session never autoflushes, so pending
        changes reach the database only through an explicit flush.
        """
        async with self._session_factory() as session:
            session.sync_session.autoflush = not manual_flush
            return await work(session)

    async def find_one(self, world_id: int) -> World | None:
        async with self._session_factory() as session:
            return await session.get(World, world_id)

    async def find_many(self, session: AsyncSession, ids: Collection[int]) -> list[World]:
        result = await session.scalars(select(World).where(World.id.in_(sorted(ids))))
        return list(result)

    async def update_many(self, session: AsyncSession, worlds: Iterable[World]) -> list[World]:
        worlds = list(worlds)
        session.add_all(worlds)
        await session.flush()
        await session.commit()
        logger.debug("Updated %d worlds", len(worlds))
        return worlds
