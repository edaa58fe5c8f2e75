import logging
import time

from fastapi import APIRouter

from worldbench.models import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()

_start_time: float = 0.0


def set_start_time() -> None:
    global _start_time
    _start_time = time.monotonic()


@router.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    from worldbench.database import count_worlds

    db_connected = False
    world_count = 0
    try:
        world_count = await count_worlds()
        db_connected = True
    except Exception:
        logger.warning("Health check could not reach the database", exc_info=True)

    return HealthResponse(
        status="ok" if db_connected else "degraded",
        db_connected=db_connected,
        world_count=world_count,
        uptime_seconds=round(time.monotonic() - _start_time, 2),
    )
