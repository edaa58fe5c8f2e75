import logging
import random

from sqlalchemy import event, func, insert, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from worldbench.config import settings
from worldbench.repository import WorldRepository
from worldbench.schema import Base, World
from worldbench.world import WORLD_COUNT

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None

SEED_BATCH_SIZE = 1000


def _set_sqlite_pragmas(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _session_factory is None:
        raise RuntimeError("Database not initialized: call init_db() first")
    return _session_factory


def get_world_repository() -> WorldRepository:
    return WorldRepository(get_session_factory())


async def init_db() -> None:
    global _engine, _session_factory
    _engine = create_async_engine(settings.database_url, echo=settings.echo_sql)
    if _engine.dialect.name == "sqlite":
        event.listen(_engine.sync_engine, "connect", _set_sqlite_pragmas)

    _session_factory = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.seed_on_startup:
        await seed_worlds()


async def seed_worlds() -> int:
    """Insert the WORLD_COUNT rows if the table is empty. Returns rows inserted."""
    async with get_session_factory()() as session:
        existing = await session.scalar(select(func.count()).select_from(World))
        if existing:
            logger.info("World table already holds %d rows, skipping seed", existing)
            return 0

        for start in range(1, WORLD_COUNT + 1, SEED_BATCH_SIZE):
            stop = min(start + SEED_BATCH_SIZE, WORLD_COUNT + 1)
            await session.execute(
                insert(World),
                [
                    {"id": world_id, "random_number": random.randint(1, WORLD_COUNT)}
                    for world_id in range(start, stop)
                ],
            )
        await session.commit()

    logger.info("Seeded %d worlds", WORLD_COUNT)
    return WORLD_COUNT


async def count_worlds() -> int:
    async with get_session_factory()() as session:
        return await session.scalar(select(func.count()).select_from(World)) or 0


async def close_db() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
