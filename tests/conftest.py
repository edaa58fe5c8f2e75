import os

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Use a temp file database for tests (in-memory doesn't survive across connections)
TEST_DB_PATH = "/tmp/test_world.db"
os.environ["WORLDBENCH_DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["WORLDBENCH_SEED_ON_STARTUP"] = "true"

from worldbench.database import close_db, init_db  # noqa: E402
from worldbench.main import app  # noqa: E402
from worldbench.routes.health import set_start_time  # noqa: E402


def _remove_test_db() -> None:
    for suffix in ("", "-wal", "-shm"):
        try:
            os.unlink(TEST_DB_PATH + suffix)
        except FileNotFoundError:
            pass


@pytest_asyncio.fixture(autouse=True)
async def setup_and_teardown():
    """Create and seed a fresh World table before each test, dispose the engine after."""
    _remove_test_db()

    set_start_time()
    await init_db()

    yield

    await close_db()
    _remove_test_db()


@pytest_asyncio.fixture
async def client():
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def stored_numbers() -> dict[int, int]:
    """Snapshot of every world's random number, keyed by id."""
    from sqlalchemy import select

    from worldbench.database import get_session_factory
    from worldbench.schema import World

    async with get_session_factory()() as session:
        rows = await session.execute(select(World.id, World.random_number))
        return {world_id: number for world_id, number in rows}
