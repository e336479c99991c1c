"""Unit-test fixtures: an in-memory stand-in for redis.asyncio.Redis."""

from datetime import timedelta

import pytest


class FakeRedis:
    """Implements only the calls RedisAccountCache makes."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.expiry: dict[str, timedelta | None] = {}
        self.set_calls = 0

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def set(self, key: str, value: str, ex: timedelta | None = None) -> bool:
        self.set_calls += 1
        self.store[key] = value
        self.expiry[key] = ex
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                self.expiry.pop(key, None)
                removed += 1
        return removed


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()
