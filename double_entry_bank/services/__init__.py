"""Business logic services."""

from double_entry_bank.services.ledger_service import (
    LedgerService,
    ReconciliationResult,
)
from double_entry_bank.services.account_service import AccountService

__all__ = ["LedgerService", "ReconciliationResult", "AccountService"]
