"""
Entry data access.

Entries are append-only: this module can insert and read
them, and nothing else. Historical entries never change, so
reads need no locks.
"""

import uuid
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from double_entry_bank.amount import ZERO, to_fixed
from double_entry_bank.models.entry import Entry
from double_entry_bank.models.enums import OperationType


class EntryStore:

    def __init__(self, session: Session):
        self.session = session

    def create_entry(
        self,
        account_id: uuid.UUID,
        transaction_id: uuid.UUID,
        operation_type: OperationType,
        debit: Decimal = ZERO,
        credit: Decimal = ZERO,
        description: str | None = None,
    ) -> Entry:
        """
        Append one entry and flush it.

        Flushing here surfaces the check_single_side
        constraint immediately, inside the caller's unit
        of work, instead of at commit time.
        """
        entry = Entry(
            account_id=account_id,
            transaction_id=transaction_id,
            operation_type=operation_type,
            debit=debit,
            credit=credit,
            description=description,
        )
        self.session.add(entry)
        self.session.flush()
        return entry

    def list_by_account(
        self, account_id: uuid.UUID, limit: int, offset: int = 0
    ) -> list[Entry]:
        """Return one page of an account's entries, newest first."""
        entries = self.session.execute(
            select(Entry)
            .where(Entry.account_id == account_id)
            .order_by(Entry.created_at.desc())
            .limit(limit)
            .offset(offset)
        ).scalars().all()
        return list(entries)

    def list_by_transaction(self, transaction_id: uuid.UUID) -> list[Entry]:
        """Return every entry of one transaction group, oldest first."""
        entries = self.session.execute(
            select(Entry)
            .where(Entry.transaction_id == transaction_id)
            .order_by(Entry.created_at)
        ).scalars().all()
        return list(entries)

    def calculated_balance(self, account_id: uuid.UUID) -> Decimal:
        """
        Derive an account's balance from its entries.

        balance = SUM(credit) - SUM(debit). An account with
        no entries has a derived balance of zero.
        """
        total_credits, total_debits = self.session.execute(
            select(
                func.coalesce(func.sum(Entry.credit), 0),
                func.coalesce(func.sum(Entry.debit), 0),
            ).where(Entry.account_id == account_id)
        ).one()
        return to_fixed(total_credits) - to_fixed(total_debits)

    def calculated_balances(self) -> dict[uuid.UUID, Decimal]:
        """Derived balance of every account that has entries."""
        rows = self.session.execute(
            select(
                Entry.account_id,
                func.sum(Entry.credit),
                func.sum(Entry.debit),
            ).group_by(Entry.account_id)
        ).all()
        return {
            account_id: to_fixed(credits) - to_fixed(debits)
            for account_id, credits, debits in rows
        }
