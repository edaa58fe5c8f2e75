import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from worldbench.database import get_world_repository
from worldbench.models import WorldResponse
from worldbench.repository import WorldRepository
from worldbench.schema import World
from worldbench.world import (
    parse_query_count,
    random_world_number_excluding,
    unique_world_ids,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/updates", response_model=list[WorldResponse])
async def updates(
    queries: str | None = Query(None),
    repository: WorldRepository = Depends(get_world_repository),
) -> list[WorldResponse]:
    """Fetch random worlds, give each a new random number and write them back in one batch."""
    count = parse_query_count(queries)

    async def fetch_and_update(session: AsyncSession) -> list[World]:
        worlds = await repository.find_many(session, unique_world_ids(count))
        for world in worlds:
            # The benchmark rules require the stored value to be read before it is replaced.
            previous = world.random_number
            world.random_number = random_world_number_excluding(previous)
        return await repository.update_many(session, worlds)

    worlds = await repository.in_session(fetch_and_update, manual_flush=True)
    logger.debug("Updated %d of %d requested worlds", len(worlds), count)
    return [WorldResponse.from_world(w) for w in worlds]
