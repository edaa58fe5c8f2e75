import pytest
from sqlalchemy import select

from worldbench.database import get_session_factory
from worldbench.schema import World


async def _read_numbers(ids: list[int]) -> dict[int, int]:
    async with get_session_factory()() as session:
        rows = await session.execute(
            select(World.id, World.random_number).where(World.id.in_(ids))
        )
        return {world_id: number for world_id, number in rows}


@pytest.mark.asyncio
async def test_updates_changes_every_value(client, stored_numbers):
    resp = await client.get("/updates", params={"queries": "3"})
    assert resp.status_code == 200
    worlds = resp.json()
    assert len(worlds) == 3
    assert len({w["id"] for w in worlds}) == 3
    for world in worlds:
        assert 1 <= world["randomNumber"] <= 10_000
        assert world["randomNumber"] != stored_numbers[world["id"]]


@pytest.mark.asyncio
async def test_updates_are_persisted(client):
    resp = await client.get("/updates", params={"queries": "25"})
    worlds = resp.json()
    persisted = await _read_numbers([w["id"] for w in worlds])
    assert persisted == {w["id"]: w["randomNumber"] for w in worlds}


@pytest.mark.asyncio
async def test_updates_clamped_to_500(client, stored_numbers):
    resp = await client.get("/updates", params={"queries": "10000"})
    assert resp.status_code == 200
    worlds = resp.json()
    assert len(worlds) == 500
    assert all(w["randomNumber"] != stored_numbers[w["id"]] for w in worlds)


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{}, {"queries": "bar"}, {"queries": "0"}])
async def test_updates_invalid_values_update_one(client, params):
    resp = await client.get("/updates", params=params)
    assert resp.status_code == 200
    assert len(resp.json()) == 1


@pytest.mark.asyncio
async def test_updates_persistence_error_surfaces_as_500(client, monkeypatch):
    from worldbench.repository import WorldRepository

    async def failing_update(self, session, worlds):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(WorldRepository, "update_many", failing_update)
    resp = await client.get("/updates", params={"queries": "2"})
    assert resp.status_code == 500
