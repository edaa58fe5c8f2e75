import asyncio

import pytest


@pytest.mark.asyncio
async def test_db_returns_single_world(client):
    resp = await client.get("/db")
    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"id", "randomNumber"}
    assert 1 <= body["id"] <= 10_000
    assert 1 <= body["randomNumber"] <= 10_000


@pytest.mark.asyncio
async def test_db_matches_stored_row(client, stored_numbers):
    body = (await client.get("/db")).json()
    assert stored_numbers[body["id"]] == body["randomNumber"]


@pytest.mark.asyncio
async def test_db_concurrent_requests_are_independent(client):
    responses = await asyncio.gather(*(client.get("/db") for _ in range(50)))
    assert all(r.status_code == 200 for r in responses)
    ids = [r.json()["id"] for r in responses]
    assert all(1 <= i <= 10_000 for i in ids)
    # 50 uniform draws from 10k ids colliding into a handful is vanishingly unlikely
    assert len(set(ids)) > 40


@pytest.mark.asyncio
async def test_db_missing_row_returns_404(client, monkeypatch):
    monkeypatch.setattr("worldbench.routes.db_route.random_world_number", lambda: 10_001)
    resp = await client.get("/db")
    assert resp.status_code == 404
    assert "not found" in resp.json()["detail"].lower()
