"""Unified error codes and custom exceptions.

Error code ranges:
  2xxx: Account
  9xxx: System

Store failures are raised as one of the account errors below and always
propagate to the caller. Cache failures never surface as exceptions.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 2xxx: Account ---

class AccountRetrievalError(AppError):
    def __init__(self, customer_id: str) -> None:
        super().__init__(2001, f"Failed to retrieve accounts for customer {customer_id}", 500)


class AccountCreationError(AppError):
    def __init__(self, iban: str) -> None:
        super().__init__(2002, f"Account creation failed for IBAN: {iban}", 400)


class AccountUpdateError(AppError):
    def __init__(self, iban: str) -> None:
        super().__init__(2003, f"Account update failed for IBAN: {iban}", 400)


class AccountDeletionError(AppError):
    def __init__(self, iban: str) -> None:
        super().__init__(2004, f"Account deletion failed for IBAN: {iban}", 400)


class AccountNotFoundError(AppError):
    def __init__(self, operation: str, iban: str) -> None:
        super().__init__(2005, f"Failed to {operation} account for IBAN: {iban}", 404)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
