"""
Ledger exceptions.

Every failure the ledger can report has a kind. Callers
branch on the kind (or the exception type), never on the
message text. Each exception carries a details dict with
the context that produced it, e.g. requested vs. available
amount for InsufficientFunds.

    LedgerError (base)
    ├── InvalidAmount
    ├── CurrencyMismatch
    ├── InsufficientFunds
    ├── SameAccountTransfer
    ├── SystemAccountOperation
    ├── AccountNotFound
    ├── TransactionNotFound
    ├── UserNotFound
    ├── UserAlreadyExists
    ├── ImmutableEntryError
    ├── CommitFailedError
    └── RollbackFailedError

Reconciliation drift is not an exception. It is reported
as a ReconciliationResult with matched=False.
"""

import enum
from typing import Any


class ErrorKind(str, enum.Enum):
    """Closed set of ledger failure kinds."""
    INVALID_AMOUNT = "INVALID_AMOUNT"
    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    SAME_ACCOUNT_TRANSFER = "SAME_ACCOUNT_TRANSFER"
    SYSTEM_ACCOUNT = "SYSTEM_ACCOUNT"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    TRANSACTION_NOT_FOUND = "TRANSACTION_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    IMMUTABLE_ENTRY = "IMMUTABLE_ENTRY"
    COMMIT_FAILED = "COMMIT_FAILED"
    ROLLBACK_FAILED = "ROLLBACK_FAILED"


# Kinds caused by bad caller input. Retrying them changes nothing.
CLIENT_ERROR_KINDS = frozenset({
    ErrorKind.INVALID_AMOUNT,
    ErrorKind.CURRENCY_MISMATCH,
    ErrorKind.INSUFFICIENT_FUNDS,
    ErrorKind.SAME_ACCOUNT_TRANSFER,
    ErrorKind.SYSTEM_ACCOUNT,
})

NOT_FOUND_KINDS = frozenset({
    ErrorKind.ACCOUNT_NOT_FOUND,
    ErrorKind.TRANSACTION_NOT_FOUND,
    ErrorKind.USER_NOT_FOUND,
})


class LedgerError(Exception):
    """
    Base class for every ledger failure.

    Subclasses set a default kind. The message is human
    readable; details holds the structured context.
    """

    kind: ErrorKind

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidAmount(LedgerError):
    kind = ErrorKind.INVALID_AMOUNT

    def __init__(self, value: Any):
        super().__init__(
            "amount must be a positive decimal with at most 4 fractional digits",
            details={"value": str(value)},
        )


class CurrencyMismatch(LedgerError):
    kind = ErrorKind.CURRENCY_MISMATCH

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"currency mismatch: expected {expected}, got {actual}",
            details={"expected": expected, "actual": actual},
        )


class InsufficientFunds(LedgerError):
    """
    Raised when a locked balance is below the requested amount.

    Attributes:
        account_id: The account that could not cover the debit
        requested: Amount the operation asked for
        available: Balance read under the row lock
    """

    kind = ErrorKind.INSUFFICIENT_FUNDS

    def __init__(self, account_id, requested, available):
        self.account_id = account_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"insufficient funds in account {account_id}: "
            f"requested {requested}, available {available}",
            details={
                "account_id": str(account_id),
                "requested": str(requested),
                "available": str(available),
            },
        )


class SameAccountTransfer(LedgerError):
    kind = ErrorKind.SAME_ACCOUNT_TRANSFER

    def __init__(self, account_id):
        self.account_id = account_id
        super().__init__(
            "cannot transfer to the same account",
            details={"account_id": str(account_id)},
        )


class SystemAccountOperation(LedgerError):
    """Raised when a user operation names the settlement account."""

    kind = ErrorKind.SYSTEM_ACCOUNT

    def __init__(self, account_id):
        self.account_id = account_id
        super().__init__(
            f"account {account_id} is a system account",
            details={"account_id": str(account_id)},
        )


class AccountNotFound(LedgerError):
    kind = ErrorKind.ACCOUNT_NOT_FOUND

    def __init__(self, account_id):
        self.account_id = account_id
        super().__init__(
            f"Account {account_id} not found",
            details={"account_id": str(account_id)},
        )


class TransactionNotFound(LedgerError):
    kind = ErrorKind.TRANSACTION_NOT_FOUND

    def __init__(self, transaction_id):
        self.transaction_id = transaction_id
        super().__init__(
            f"Transaction {transaction_id} not found",
            details={"transaction_id": str(transaction_id)},
        )


class UserNotFound(LedgerError):
    kind = ErrorKind.USER_NOT_FOUND

    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__(
            f"User {user_id} not found",
            details={"user_id": str(user_id)},
        )


class UserAlreadyExists(LedgerError):
    kind = ErrorKind.USER_ALREADY_EXISTS

    def __init__(self, email: str):
        self.email = email
        super().__init__(
            f"User with email '{email}' already exists",
            details={"email": email},
        )


class ImmutableEntryError(LedgerError):
    """Raised when code tries to update or delete a posted entry."""

    kind = ErrorKind.IMMUTABLE_ENTRY

    def __init__(self, entry_id, operation: str):
        self.entry_id = entry_id
        super().__init__(
            f"Entry {entry_id} is immutable and cannot be {operation}",
            details={"entry_id": str(entry_id), "operation": operation},
        )


class CommitFailedError(LedgerError):
    """The unit of work ran cleanly but the database refused the commit."""

    kind = ErrorKind.COMMIT_FAILED

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"commit failed: {cause}")


class RollbackFailedError(LedgerError):
    """
    The unit of work failed and the rollback failed too.

    Both errors are kept: original is what broke the
    operation, rollback_error is what broke the cleanup.
    """

    kind = ErrorKind.ROLLBACK_FAILED

    def __init__(self, original: BaseException, rollback_error: BaseException):
        self.original = original
        self.rollback_error = rollback_error
        super().__init__(
            f"tx failed: {original}, rollback failed: {rollback_error}",
            details={
                "original": repr(original),
                "rollback_error": repr(rollback_error),
            },
        )
