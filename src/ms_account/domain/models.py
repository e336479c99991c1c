"""Domain models for ms_account: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Account:
    iban: str
    customer_id: str
    balance: Decimal         # never negative, enforced by the accounts table
    created_at: datetime | None = None
    updated_at: datetime | None = None
