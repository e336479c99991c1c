"""Repository and cache Protocols: dependency inversion for testability.

Unit tests inject mocks that conform to these Protocols.
Infrastructure layer provides the real implementations.
"""

from datetime import timedelta
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ms_account.domain.models import Account


class AccountRepositoryProtocol(Protocol):
    async def get_accounts(self, db: AsyncSession, customer_id: str) -> list[Account]: ...

    async def insert_account(self, db: AsyncSession, account: Account) -> Account: ...

    async def update_balance(
        self, db: AsyncSession, iban: str, balance: Decimal, customer_id: str
    ) -> Decimal: ...

    async def delete_account(self, db: AsyncSession, iban: str, customer_id: str) -> None: ...


class AccountCacheProtocol(Protocol):
    """Advisory cache: implementations must never raise."""

    async def get(self, customer_id: str) -> list[Account] | None: ...

    async def set(
        self, customer_id: str, accounts: list[Account], ttl: timedelta | None = None
    ) -> None: ...

    async def delete(self, customer_id: str) -> None: ...

    async def append_account(self, customer_id: str, account: Account) -> bool: ...

    async def update_balance(self, customer_id: str, iban: str, balance: Decimal) -> bool: ...

    async def remove_account(self, customer_id: str, iban: str) -> bool: ...
