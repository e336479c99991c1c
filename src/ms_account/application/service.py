"""AccountApplicationService: cache-aside coordination around the store.

Read: cache first; on miss the store result (an empty list included) is
returned and written to the cache.

Writes: the store is authoritative and runs first inside the request's
transaction (commit on success, rollback + re-raise on failure). Only
after a successful commit is the cached list touched, and only if one
exists: append on create, replace balance on update, remove on delete.
An absent entry is never created by a write; the next read populates it
in full. A failed store write leaves the cache untouched.

Concurrent requests for the same customer are not serialized. A stale
snapshot can survive until its TTL runs out.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.ms_account.domain.models import Account
from src.ms_account.domain.repository import AccountCacheProtocol, AccountRepositoryProtocol
from src.ms_account.infrastructure.persistence import AccountRepository

logger = logging.getLogger("ms.account.service")


class AccountApplicationService:
    def __init__(
        self,
        cache: AccountCacheProtocol,
        repo: AccountRepositoryProtocol | None = None,
    ) -> None:
        self._cache = cache
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()

    async def get_accounts_by_customer_id(
        self, db: AsyncSession, customer_id: str
    ) -> list[Account]:
        cached = await self._cache.get(customer_id)
        if cached is not None:
            return cached

        accounts = await self._repo.get_accounts(db, customer_id)
        await self._cache.set(customer_id, accounts)
        return accounts

    async def create_account(
        self, db: AsyncSession, account: Account, customer_id: str
    ) -> Account:
        try:
            created = await self._repo.insert_account(db, account)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Created account %s for customer %s", created.iban, customer_id)
        await self._cache.append_account(customer_id, created)
        return created

    async def update_account(
        self, db: AsyncSession, iban: str, balance: Decimal, customer_id: str
    ) -> Decimal:
        try:
            stored = await self._repo.update_balance(db, iban, balance, customer_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Updated balance of account %s for customer %s", iban, customer_id)
        await self._cache.update_balance(customer_id, iban, stored)
        return stored

    async def delete_account(self, db: AsyncSession, iban: str, customer_id: str) -> None:
        try:
            await self._repo.delete_account(db, iban, customer_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Deleted account %s for customer %s", iban, customer_id)
        await self._cache.remove_account(customer_id, iban)
