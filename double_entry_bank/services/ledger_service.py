"""
Ledger service, the core of the banking system.

This service enforces the fundamental rules:
1. Every operation balances (debits = credits) within its
   transaction group
2. Entries are immutable (append-only)
3. Accounts involved in an operation share one currency
4. An account is never debited below zero, and the check
   happens under the same row lock as the write
5. The cached balance only moves by deltas written in the
   same transaction as the entries that justify them

No other service writes entries or balances.
All financial operations go through this service.
"""

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal

from double_entry_bank.amount import format_amount, parse_amount, to_fixed
from double_entry_bank.config import Settings
from double_entry_bank.exceptions import (
    CurrencyMismatch,
    InsufficientFunds,
    SameAccountTransfer,
    SystemAccountOperation,
    TransactionNotFound,
)
from double_entry_bank.models.entry import Entry
from double_entry_bank.models.enums import OperationType
from double_entry_bank.store.unit_of_work import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationResult:
    """Outcome of comparing a cached balance with its entry log."""

    account_id: uuid.UUID
    matched: bool
    stored_balance: Decimal
    calculated_balance: Decimal

    @property
    def difference(self) -> Decimal:
        return self.stored_balance - self.calculated_balance


class LedgerService:
    """
    Deposits, withdrawals, transfers, and reconciliation.

    Each money-moving method is one unit of work: it either
    commits both entries and both balance deltas, or leaves
    the database exactly as it found it.

    Lock order is global: the settlement account first, then
    user accounts by ascending id. Transfers never touch
    settlement, so no two operations can wait on each other
    in a cycle.
    """

    def __init__(self, store: Store, settings: Settings):
        self.store = store
        self.settings = settings

    def deposit(
        self,
        account_id: uuid.UUID,
        amount_str: str,
        description: str | None = None,
    ) -> uuid.UUID:
        """
        Deposit external money into a user account.

        Accounting:
            CREDIT User Account (balance increases)
            DEBIT  Settlement   (money came from outside)

        Returns the transaction group id.
        """
        amount = parse_amount(amount_str)

        with self.store.transaction() as q:
            settlement = q.accounts.get_settlement_account(
                self.settings.SETTLEMENT_ACCOUNT_NAME, for_update=True
            )
            account = q.accounts.get_account(account_id, for_update=True)

            if account.is_system:
                raise SystemAccountOperation(account.id)

            if account.currency != settlement.currency:
                raise CurrencyMismatch(settlement.currency, account.currency)

            tx_id = uuid.uuid4()

            q.entries.create_entry(
                account_id=account.id,
                transaction_id=tx_id,
                operation_type=OperationType.DEPOSIT,
                credit=amount,
                description=description or "External deposit",
            )
            q.entries.create_entry(
                account_id=settlement.id,
                transaction_id=tx_id,
                operation_type=OperationType.DEPOSIT,
                debit=amount,
                description=f"Deposit to account {account.id}",
            )

            q.accounts.update_balance(account.id, amount)
            q.accounts.update_balance(settlement.id, -amount)

        logger.info(
            "Deposit completed tx_id=%s account_id=%s amount=%s",
            tx_id, account_id, format_amount(amount),
        )
        return tx_id

    def withdraw(
        self,
        account_id: uuid.UUID,
        amount_str: str,
        description: str | None = None,
    ) -> uuid.UUID:
        """
        Withdraw money from a user account to the outside.

        The balance check reads the row under its lock, so no
        concurrent operation can spend the same funds between
        the check and the write.

        Accounting:
            DEBIT  User Account (balance decreases)
            CREDIT Settlement   (money left the ledger)
        """
        amount = parse_amount(amount_str)

        with self.store.transaction() as q:
            settlement = q.accounts.get_settlement_account(
                self.settings.SETTLEMENT_ACCOUNT_NAME, for_update=True
            )
            account = q.accounts.get_account(account_id, for_update=True)

            if account.is_system:
                raise SystemAccountOperation(account.id)

            if account.currency != settlement.currency:
                raise CurrencyMismatch(settlement.currency, account.currency)

            available = to_fixed(account.balance)
            if available < amount:
                raise InsufficientFunds(account.id, amount, available)

            tx_id = uuid.uuid4()

            q.entries.create_entry(
                account_id=account.id,
                transaction_id=tx_id,
                operation_type=OperationType.WITHDRAWAL,
                debit=amount,
                description=description or "External withdrawal",
            )
            q.entries.create_entry(
                account_id=settlement.id,
                transaction_id=tx_id,
                operation_type=OperationType.WITHDRAWAL,
                credit=amount,
                description=f"Withdrawal from {account.id}",
            )

            q.accounts.update_balance(account.id, -amount)
            q.accounts.update_balance(settlement.id, amount)

        logger.info(
            "Withdrawal completed tx_id=%s account_id=%s amount=%s",
            tx_id, account_id, format_amount(amount),
        )
        return tx_id

    def transfer(
        self,
        from_id: uuid.UUID,
        to_id: uuid.UUID,
        amount_str: str,
        description: str | None = None,
    ) -> uuid.UUID:
        """
        Move money between two user accounts.

        Both rows are locked in ascending id order, whichever
        direction the money flows, so A->B and B->A running
        at the same time queue up instead of deadlocking.
        The settlement account is refused before any lock is
        taken; only deposits and withdrawals touch it.

        Accounting:
            DEBIT  Source Account
            CREDIT Destination Account
        """
        amount = parse_amount(amount_str)

        if from_id == to_id:
            raise SameAccountTransfer(from_id)

        with self.store.transaction() as q:
            # is_system never changes, so a plain read is enough to keep
            # settlement out of the transfer lock set
            for account_id in (from_id, to_id):
                if q.accounts.get_account(account_id).is_system:
                    raise SystemAccountOperation(account_id)

            locked = {
                account_id: q.accounts.get_account(account_id, for_update=True)
                for account_id in sorted((from_id, to_id))
            }
            source = locked[from_id]
            destination = locked[to_id]

            if source.currency != destination.currency:
                raise CurrencyMismatch(source.currency, destination.currency)

            available = to_fixed(source.balance)
            if available < amount:
                raise InsufficientFunds(source.id, amount, available)

            tx_id = uuid.uuid4()

            q.entries.create_entry(
                account_id=source.id,
                transaction_id=tx_id,
                operation_type=OperationType.TRANSFER,
                debit=amount,
                description=description or f"Transfer to {destination.id}",
            )
            q.entries.create_entry(
                account_id=destination.id,
                transaction_id=tx_id,
                operation_type=OperationType.TRANSFER,
                credit=amount,
                description=description or f"Transfer from {source.id}",
            )

            q.accounts.update_balance(source.id, -amount)
            q.accounts.update_balance(destination.id, amount)

        logger.info(
            "Transfer completed tx_id=%s from_id=%s to_id=%s amount=%s",
            tx_id, from_id, to_id, format_amount(amount),
        )
        return tx_id

    def reconcile_account(self, account_id: uuid.UUID) -> ReconciliationResult:
        """
        Verify stored balance == SUM(credits) - SUM(debits).

        This is the only check that can detect drift between
        the cached balance column and the entry log, so a
        mismatch is always reported, never corrected or hidden.
        """
        with self.store.transaction() as q:
            account = q.accounts.get_account(account_id)
            stored = to_fixed(account.balance)
            calculated = q.entries.calculated_balance(account_id)

        result = ReconciliationResult(
            account_id=account_id,
            matched=stored == calculated,
            stored_balance=stored,
            calculated_balance=calculated,
        )
        _log_reconciliation(result)
        return result

    def reconcile_all(self) -> list[ReconciliationResult]:
        """Reconcile every account against one consistent snapshot."""
        with self.store.transaction() as q:
            accounts = q.accounts.list_accounts()
            calculated = q.entries.calculated_balances()
            results = []
            for account in accounts:
                stored = to_fixed(account.balance)
                derived = calculated.get(account.id, to_fixed(0))
                results.append(ReconciliationResult(
                    account_id=account.id,
                    matched=stored == derived,
                    stored_balance=stored,
                    calculated_balance=derived,
                ))

        for result in results:
            _log_reconciliation(result)
        return results

    def get_account_entries(
        self,
        account_id: uuid.UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Entry]:
        """Return one page of an account's entries, newest first."""
        if limit is None or limit <= 0:
            limit = self.settings.DEFAULT_PAGE_SIZE
        limit = min(limit, self.settings.MAX_PAGE_SIZE)
        offset = max(offset, 0)

        with self.store.transaction() as q:
            # Raises AccountNotFound for unknown ids
            q.accounts.get_account(account_id)
            return q.entries.list_by_account(account_id, limit, offset)

    def get_transaction_entries(self, transaction_id: uuid.UUID) -> list[Entry]:
        """Return all entries of one transaction group."""
        with self.store.transaction() as q:
            entries = q.entries.list_by_transaction(transaction_id)
        if not entries:
            raise TransactionNotFound(transaction_id)
        return entries


def _log_reconciliation(result: ReconciliationResult) -> None:
    if result.matched:
        logger.info(
            "Account reconciled successfully account_id=%s balance=%s",
            result.account_id, format_amount(result.stored_balance),
        )
    else:
        logger.error(
            "Balance mismatch detected account_id=%s stored_balance=%s calculated=%s",
            result.account_id,
            format_amount(result.stored_balance),
            format_amount(result.calculated_balance),
        )
