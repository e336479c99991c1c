"""RedisAccountCache: concrete implementation of AccountCacheProtocol.

Every operation is advisory: Redis errors and undecodable payloads are
logged and turned into a miss (get) or a skipped write (everything else).
Nothing in here raises to the caller.

Entries are JSON lists; balance is a decimal string, timestamps ISO-8601.
"""

import json
import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

import redis.asyncio as aioredis

from src.ms_account.domain.cache import cache_key
from src.ms_account.domain.models import Account

logger = logging.getLogger("ms.account.cache")


def _dt_to_str(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _str_to_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def encode_accounts(accounts: list[Account]) -> str:
    return json.dumps(
        [
            {
                "iban": a.iban,
                "customer_id": a.customer_id,
                "balance": str(a.balance),
                "created_at": _dt_to_str(a.created_at),
                "updated_at": _dt_to_str(a.updated_at),
            }
            for a in accounts
        ]
    )


def decode_accounts(payload: str | bytes) -> list[Account]:
    items: list[dict[str, Any]] = json.loads(payload)
    return [
        Account(
            iban=item["iban"],
            customer_id=item["customer_id"],
            balance=Decimal(item["balance"]),
            created_at=_str_to_dt(item.get("created_at")),
            updated_at=_str_to_dt(item.get("updated_at")),
        )
        for item in items
    ]


class RedisAccountCache:
    def __init__(self, redis: aioredis.Redis, ttl: timedelta) -> None:
        self._redis = redis
        self._ttl = ttl

    async def get(self, customer_id: str) -> list[Account] | None:
        key = cache_key(customer_id)
        try:
            payload = await self._redis.get(key)
            if payload is None:
                logger.info("Cache MISS: %s", key)
                return None
            accounts = decode_accounts(payload)
        except Exception as exc:
            logger.error("Cache error during get %s: %s", key, exc)
            return None
        logger.info("Cache HIT: %s (%d accounts)", key, len(accounts))
        return accounts

    async def set(
        self, customer_id: str, accounts: list[Account], ttl: timedelta | None = None
    ) -> None:
        key = cache_key(customer_id)
        ttl = self._ttl if ttl is None else ttl
        if ttl <= timedelta(0):
            # Zero TTL: the entry would be expired on arrival.
            logger.debug("Cache disabled (ttl=0), not storing %s", key)
            return
        try:
            await self._redis.set(key, encode_accounts(accounts), ex=ttl)
        except Exception as exc:
            logger.error("Cache error during set %s: %s", key, exc)
            return
        logger.info("Cached %d accounts under %s", len(accounts), key)

    async def delete(self, customer_id: str) -> None:
        key = cache_key(customer_id)
        try:
            await self._redis.delete(key)
        except Exception as exc:
            logger.error("Cache error during delete %s: %s", key, exc)
            return
        logger.info("Cache INVALIDATE: %s", key)

    async def append_account(self, customer_id: str, account: Account) -> bool:
        accounts = await self.get(customer_id)
        if accounts is None:
            logger.info("No cache entry for customer %s, skipping append", customer_id)
            return False
        accounts.append(account)
        await self.set(customer_id, accounts)
        return True

    async def update_balance(self, customer_id: str, iban: str, balance: Decimal) -> bool:
        accounts = await self.get(customer_id)
        if accounts is None:
            logger.info("No cache entry for customer %s, skipping update of %s", customer_id, iban)
            return False
        for account in accounts:
            if account.iban == iban:
                account.balance = balance
                break
        else:
            logger.warning("Account %s not found in cache for customer %s", iban, customer_id)
            return False
        await self.set(customer_id, accounts)
        return True

    async def remove_account(self, customer_id: str, iban: str) -> bool:
        accounts = await self.get(customer_id)
        if accounts is None:
            logger.info("No cache entry for customer %s, skipping removal of %s", customer_id, iban)
            return False
        remaining = [a for a in accounts if a.iban != iban]
        if len(remaining) == len(accounts):
            logger.warning("Account %s not found in cache for customer %s", iban, customer_id)
            return False
        await self.set(customer_id, remaining)
        return True
