from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from worldbench.database import get_world_repository
from worldbench.models import WorldResponse
from worldbench.repository import WorldRepository
from worldbench.schema import World
from worldbench.world import parse_query_count, random_world_number, unique_world_ids

router = APIRouter()


@router.get("/db", response_model=WorldResponse)
async def single_query(
    repository: WorldRepository = Depends(get_world_repository),
) -> WorldResponse:
    world_id = random_world_number()
    world = await repository.find_one(world_id)
    if world is None:
        raise HTTPException(status_code=404, detail="World not found")
    return WorldResponse.from_world(world)


@router.get("/queries", response_model=list[WorldResponse])
async def multiple_queries(
    queries: str | None = Query(None),
    repository: WorldRepository = Depends(get_world_repository),
) -> list[WorldResponse]:
    """Fetch ``queries`` distinct random worlds in one batched read.

    ``queries`` stays a plain string so that garbage input falls back to a
    single row instead of a validation error.
    """
    count = parse_query_count(queries)

    async def fetch(session: AsyncSession) -> list[World]:
        return await repository.find_many(session, unique_world_ids(count))

    worlds = await repository.in_session(fetch)
    return [WorldResponse.from_world(w) for w in worlds]
