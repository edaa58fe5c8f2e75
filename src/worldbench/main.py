import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from worldbench.config import settings
from worldbench.database import close_db, init_db
from worldbench.routes.db_route import router as db_router
from worldbench.routes.health import router as health_router
from worldbench.routes.health import set_start_time
from worldbench.routes.updates_route import router as updates_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    set_start_time()
    await init_db()
    logger.info("Database initialized at %s", settings.database_url)

    yield

    # Shutdown
    await close_db()
    logger.info("Graceful shutdown complete")


app = FastAPI(
    title="World Database Benchmark",
    description="Single query, multiple queries and updates tests over the World table",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(db_router)
app.include_router(updates_router)
app.include_router(health_router)
