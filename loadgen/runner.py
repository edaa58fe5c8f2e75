import asyncio
import time
from collections import Counter
from dataclasses import dataclass, field

import httpx

from worldbench.world import MAX_QUERIES, MIN_QUERIES, WORLD_COUNT

TEST_PATHS = {
    "db": "/db",
    "queries": "/queries",
    "updates": "/updates",
}


@dataclass
class EndpointResult:
    name: str
    latencies: list[float] = field(default_factory=list)
    errors: int = 0
    error_details: Counter = field(default_factory=Counter)
    elapsed_s: float = 0.0


def expected_rows(queries: int) -> int:
    return min(MAX_QUERIES, max(MIN_QUERIES, queries))


def validate_body(test: str, body, queries: int) -> str | None:
    """Check a response body against the benchmark's shape rules.

    Returns a short description of the first problem found, or None.
    """
    worlds = body if test != "db" else [body]
    if not isinstance(worlds, list):
        return "expected a JSON array"
    if test != "db" and len(worlds) != expected_rows(queries):
        return f"expected {expected_rows(queries)} worlds, got {len(worlds)}"

    for world in worlds:
        if not isinstance(world, dict):
            return "expected a JSON object"
        for key in ("id", "randomNumber"):
            value = world.get(key)
            if not isinstance(value, int) or not 1 <= value <= WORLD_COUNT:
                return f"invalid {key}: {value!r}"
    return None


async def run_test(
    server_url: str,
    test: str,
    num_requests: int,
    concurrency: int,
    queries: int,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> EndpointResult:
    """Fire N requests at one benchmark endpoint with bounded concurrency.

    Latencies are only recorded for responses that pass validation; every
    other outcome is counted in error_details as "status_code: reason".
    """
    semaphore = asyncio.Semaphore(concurrency)
    result = EndpointResult(name=test)
    lock = asyncio.Lock()
    params = {"queries": str(queries)} if test != "db" else None

    async def send_one(client: httpx.AsyncClient) -> None:
        async with semaphore:
            start = time.monotonic()
            try:
                resp = await client.get(TEST_PATHS[test], params=params, timeout=timeout)
                elapsed = round((time.monotonic() - start) * 1000, 2)
                if resp.status_code == 200:
                    problem = validate_body(test, resp.json(), queries)
                    async with lock:
                        if problem is None:
                            result.latencies.append(elapsed)
                        else:
                            result.errors += 1
                            result.error_details[f"invalid body: {problem}"] += 1
                else:
                    detail = _extract_error(resp)
                    async with lock:
                        result.errors += 1
                        result.error_details[f"{resp.status_code}: {detail}"] += 1
            except httpx.TimeoutException:
                async with lock:
                    result.errors += 1
                    result.error_details["timeout"] += 1
            except Exception as e:
                async with lock:
                    result.errors += 1
                    result.error_details[f"exception: {type(e).__name__}"] += 1

    started = time.monotonic()
    async with httpx.AsyncClient(base_url=server_url, transport=transport) as client:
        tasks = [send_one(client) for _ in range(num_requests)]
        await asyncio.gather(*tasks)
    result.elapsed_s = round(time.monotonic() - started, 3)

    return result


def _extract_error(resp: httpx.Response) -> str:
    """Extract a short error description from an HTTP response."""
    try:
        body = resp.json()
        if "detail" in body:
            msg = str(body["detail"])
            return msg[:80]
    except Exception:
        pass
    return resp.reason_phrase or "unknown"
