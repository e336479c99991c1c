"""AccountRepository: concrete implementation of AccountRepositoryProtocol.

Mutations use PostgreSQL ... RETURNING. A result of 0 rows on update or
delete means no account matched (iban, customer_id) and raises
AccountNotFoundError. Driver/database failures are translated into the
operation-specific AccountXxxError.

Transaction ownership: The CALLER (application service) is responsible for
committing or rolling back the session.
"""

import logging
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.ms_account.domain.models import Account
from src.ms_common.errors import (
    AccountCreationError,
    AccountDeletionError,
    AccountNotFoundError,
    AccountRetrievalError,
    AccountUpdateError,
)

logger = logging.getLogger("ms.account.store")

_GET_ACCOUNTS_SQL = text("""
    SELECT iban, customer_id, balance, created_at, updated_at
    FROM accounts
    WHERE customer_id = :customer_id
    ORDER BY created_at, iban
""")

_INSERT_ACCOUNT_SQL = text("""
    INSERT INTO accounts (iban, customer_id, balance)
    VALUES (:iban, :customer_id, :balance)
    RETURNING iban, customer_id, balance, created_at, updated_at
""")

_UPDATE_BALANCE_SQL = text("""
    UPDATE accounts
    SET balance = :balance,
        updated_at = NOW()
    WHERE iban = :iban AND customer_id = :customer_id
    RETURNING iban, balance
""")

_DELETE_ACCOUNT_SQL = text("""
    DELETE FROM accounts
    WHERE iban = :iban AND customer_id = :customer_id
    RETURNING iban
""")


def _row_to_account(row: object) -> Account:
    return Account(
        iban=row.iban,  # type: ignore[attr-defined]
        customer_id=row.customer_id,  # type: ignore[attr-defined]
        balance=Decimal(row.balance),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class AccountRepository:
    """Concrete repository: one SQL statement per operation."""

    async def get_accounts(self, db: AsyncSession, customer_id: str) -> list[Account]:
        try:
            result = await db.execute(_GET_ACCOUNTS_SQL, {"customer_id": customer_id})
            rows = result.fetchall()
        except SQLAlchemyError as exc:
            logger.error("Database error retrieving accounts for customer %s", customer_id, exc_info=True)
            raise AccountRetrievalError(customer_id) from exc
        accounts = [_row_to_account(r) for r in rows]
        logger.info("Retrieved %d accounts for customer %s", len(accounts), customer_id)
        return accounts

    async def insert_account(self, db: AsyncSession, account: Account) -> Account:
        try:
            result = await db.execute(
                _INSERT_ACCOUNT_SQL,
                {
                    "iban": account.iban,
                    "customer_id": account.customer_id,
                    "balance": account.balance,
                },
            )
            row = result.fetchone()
        except SQLAlchemyError as exc:
            logger.error("Insert error for IBAN %s", account.iban, exc_info=True)
            raise AccountCreationError(account.iban) from exc
        if row is None:
            raise AccountCreationError(account.iban)
        logger.info("Account inserted for IBAN %s", account.iban)
        return _row_to_account(row)

    async def update_balance(
        self, db: AsyncSession, iban: str, balance: Decimal, customer_id: str
    ) -> Decimal:
        """Set the balance and return it as stored (rounded to the column scale)."""
        try:
            result = await db.execute(
                _UPDATE_BALANCE_SQL,
                {"iban": iban, "customer_id": customer_id, "balance": balance},
            )
            row = result.fetchone()
        except SQLAlchemyError as exc:
            logger.error("Update error for IBAN %s", iban, exc_info=True)
            raise AccountUpdateError(iban) from exc
        if row is None:
            logger.error("Failed to update account for IBAN %s: no matching row", iban)
            raise AccountNotFoundError("update", iban)
        logger.info("Account updated for IBAN %s", iban)
        return Decimal(row.balance)  # type: ignore[attr-defined]

    async def delete_account(self, db: AsyncSession, iban: str, customer_id: str) -> None:
        try:
            result = await db.execute(
                _DELETE_ACCOUNT_SQL, {"iban": iban, "customer_id": customer_id}
            )
            row = result.fetchone()
        except SQLAlchemyError as exc:
            logger.error("Delete error for IBAN %s", iban, exc_info=True)
            raise AccountDeletionError(iban) from exc
        if row is None:
            logger.error("Failed to delete account for IBAN %s: no matching row", iban)
            raise AccountNotFoundError("delete", iban)
        logger.info("Account deleted for IBAN %s", iban)
