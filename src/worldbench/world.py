import random
import re

WORLD_COUNT = 10_000
MIN_QUERIES = 1
MAX_QUERIES = 500

_INTEGER = re.compile(r"[+-]?\d+")


def random_world_number() -> int:
    return random.randint(1, WORLD_COUNT)


def shift_past(draw: int, previous: int) -> int:
    """Map a draw from [2, WORLD_COUNT] onto every value except ``previous``.

    Draws at or below ``previous`` move down by one, the rest pass through.
    The mapping is a bijection, so a uniform draw stays uniform over the
    remaining WORLD_COUNT - 1 values.
    """
    if draw <= previous:
        return draw - 1
    return draw


def random_world_number_excluding(previous: int) -> int:
    """Random number in [1, WORLD_COUNT] that is guaranteed to differ from ``previous``.

    An update that writes back the value it read is a no-op the ORM may
    skip, which would fail benchmark verification.
    """
    return shift_past(random.randint(2, WORLD_COUNT), previous)


def parse_query_count(text: str | None) -> int:
    """Count of rows to fetch, clamped to [MIN_QUERIES, MAX_QUERIES].

    Only a bare optionally signed run of digits counts as an integer; anything
    else, including padded or underscore-separated numbers, falls back to
    MIN_QUERIES. Values of any magnitude are clamped rather than rejected.
    """
    if text is None or not _INTEGER.fullmatch(text):
        return MIN_QUERIES
    try:
        value = int(text)
    except ValueError:
        return MIN_QUERIES
    return min(MAX_QUERIES, max(MIN_QUERIES, value))


def unique_world_ids(count: int) -> set[int]:
    """Draw ``count`` distinct world ids by rejection sampling."""
    if count > WORLD_COUNT:
        raise ValueError(f"Cannot draw {count} distinct ids from {WORLD_COUNT} worlds")

    ids: set[int] = set()
    while len(ids) < count:
        ids.add(random_world_number())
    return ids
