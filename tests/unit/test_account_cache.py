"""Unit tests for RedisAccountCache: codec, helpers, and error absorption."""

import json
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, patch

from redis.exceptions import ConnectionError as RedisConnectionError

from src.ms_account.domain.models import Account
from src.ms_account.infrastructure.cache import (
    RedisAccountCache,
    decode_accounts,
    encode_accounts,
)

TTL = timedelta(minutes=5)


def _make_account(iban: str = "RO00AAA123456789", balance: str = "200") -> Account:
    return Account(
        iban=iban,
        customer_id="cust1",
        balance=Decimal(balance),
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
        updated_at=datetime(2026, 1, 2, tzinfo=UTC),
    )


class TestCodec:
    def test_balance_stored_as_decimal_string(self) -> None:
        payload = json.loads(encode_accounts([_make_account(balance="10.50")]))
        assert payload[0]["balance"] == "10.50"
        assert payload[0]["created_at"] == "2026-01-01T00:00:00+00:00"

    def test_decode_restores_fields(self) -> None:
        original = _make_account(balance="0.10")
        [restored] = decode_accounts(encode_accounts([original]))
        assert restored == original

    def test_missing_timestamps(self) -> None:
        account = Account(iban="RO00AAA1", customer_id="cust1", balance=Decimal("1"))
        [restored] = decode_accounts(encode_accounts([account]))
        assert restored.created_at is None
        assert restored.updated_at is None


class TestGetSet:
    async def test_miss_returns_none(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, TTL)
        assert await cache.get("cust1") is None

    async def test_set_then_get(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, TTL)
        await cache.set("cust1", [_make_account()])

        result = await cache.get("cust1")

        assert result == [_make_account()]
        assert fake_redis.expiry["accounts:cust1"] == TTL

    async def test_empty_list_is_a_hit(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, TTL)
        await cache.set("cust1", [])
        assert await cache.get("cust1") == []

    async def test_explicit_ttl_overrides_default(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, TTL)
        await cache.set("cust1", [], ttl=timedelta(seconds=45))
        assert fake_redis.expiry["accounts:cust1"] == timedelta(seconds=45)

    async def test_zero_ttl_stores_nothing(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, timedelta(0))
        await cache.set("cust1", [_make_account()])
        assert fake_redis.set_calls == 0
        assert await cache.get("cust1") is None

    async def test_get_backend_error_is_a_miss(self) -> None:
        redis = AsyncMock()
        redis.get.side_effect = RedisConnectionError("down")
        cache = RedisAccountCache(redis, TTL)
        assert await cache.get("cust1") is None

    async def test_backend_error_logged_at_error_level(self) -> None:
        redis = AsyncMock()
        redis.get.side_effect = RedisConnectionError("down")
        redis.set.side_effect = RedisConnectionError("down")
        cache = RedisAccountCache(redis, TTL)

        with patch("src.ms_account.infrastructure.cache.logger") as cache_log:
            await cache.get("cust1")
            await cache.set("cust1", [])

        assert cache_log.error.call_count == 2
        cache_log.warning.assert_not_called()

    async def test_get_corrupt_payload_is_a_miss(self) -> None:
        redis = AsyncMock()
        redis.get.return_value = "not-json"
        cache = RedisAccountCache(redis, TTL)
        assert await cache.get("cust1") is None

    async def test_set_backend_error_swallowed(self) -> None:
        redis = AsyncMock()
        redis.set.side_effect = RedisConnectionError("down")
        cache = RedisAccountCache(redis, TTL)
        await cache.set("cust1", [_make_account()])  # must not raise
        redis.set.assert_awaited_once()

    async def test_delete(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, TTL)
        await cache.set("cust1", [_make_account()])
        await cache.delete("cust1")
        assert await cache.get("cust1") is None

    async def test_delete_backend_error_swallowed(self) -> None:
        redis = AsyncMock()
        redis.delete.side_effect = RedisConnectionError("down")
        cache = RedisAccountCache(redis, TTL)
        await cache.delete("cust1")  # must not raise


class TestListHelpers:
    async def test_append_to_existing_entry(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, TTL)
        first, second = _make_account("RO00AAA1"), _make_account("RO00AAA2")
        await cache.set("cust1", [first])

        assert await cache.append_account("cust1", second) is True
        assert await cache.get("cust1") == [first, second]

    async def test_append_without_entry_creates_nothing(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, TTL)
        assert await cache.append_account("cust1", _make_account()) is False
        assert "accounts:cust1" not in fake_redis.store

    async def test_update_balance_in_place(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, TTL)
        a, b = _make_account("RO00AAA1", "1"), _make_account("RO00AAA2", "2")
        await cache.set("cust1", [a, b])

        assert await cache.update_balance("cust1", "RO00AAA1", Decimal("99.99")) is True

        result = await cache.get("cust1")
        assert [x.iban for x in result] == ["RO00AAA1", "RO00AAA2"]
        assert result[0].balance == Decimal("99.99")
        assert result[1] == b

    async def test_update_unknown_iban_leaves_entry(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, TTL)
        await cache.set("cust1", [_make_account("RO00AAA1")])
        before = fake_redis.store["accounts:cust1"]

        assert await cache.update_balance("cust1", "RO00ZZZ9", Decimal("5")) is False
        assert fake_redis.store["accounts:cust1"] == before
        assert fake_redis.set_calls == 1

    async def test_remove_keeps_order_of_remaining(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, TTL)
        accounts = [_make_account(f"RO00AAA{i}") for i in range(3)]
        await cache.set("cust1", accounts)

        assert await cache.remove_account("cust1", "RO00AAA1") is True
        assert [a.iban for a in await cache.get("cust1")] == ["RO00AAA0", "RO00AAA2"]

    async def test_remove_last_account_leaves_empty_list(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, TTL)
        await cache.set("cust1", [_make_account()])

        await cache.remove_account("cust1", "RO00AAA123456789")

        assert await cache.get("cust1") == []

    async def test_remove_without_entry(self, fake_redis) -> None:
        cache = RedisAccountCache(fake_redis, TTL)
        assert await cache.remove_account("cust1", "RO00AAA1") is False
        assert fake_redis.store == {}

    async def test_helper_backend_error_swallowed(self) -> None:
        redis = AsyncMock()
        redis.get.side_effect = RedisConnectionError("down")
        cache = RedisAccountCache(redis, TTL)
        assert await cache.append_account("cust1", _make_account()) is False
        redis.set.assert_not_awaited()
