"""Pydantic schemas for ms_account API."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from src.ms_account.domain.models import Account

IBAN_PATTERN = r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{1,30}$"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateAccountRequest(BaseModel):
    iban: str = Field(..., pattern=IBAN_PATTERN, description="IBAN of the new account")
    balance: Decimal = Field(
        ..., ge=0, max_digits=19, decimal_places=2, description="Opening balance"
    )


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AccountItem(BaseModel):
    iban: str
    customer_id: str
    balance: str  # decimal string, no float rounding
    created_at: str | None  # ISO8601 string
    updated_at: str | None

    @classmethod
    def from_domain(cls, account: Account) -> "AccountItem":
        return cls(
            iban=account.iban,
            customer_id=account.customer_id,
            balance=str(account.balance),
            created_at=_iso(account.created_at),
            updated_at=_iso(account.updated_at),
        )


class AccountListResponse(BaseModel):
    customer_id: str
    items: list[AccountItem]


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
