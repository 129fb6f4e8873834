"""
Account data access.

Every method runs on the session it was given; the caller's
unit of work decides when that session commits. Locking
reads (for_update=True) hold the row until that commit or
rollback.
"""

import uuid
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from double_entry_bank.exceptions import AccountNotFound
from double_entry_bank.models.account import Account


class AccountStore:

    def __init__(self, session: Session):
        self.session = session

    def get_account(
        self, account_id: uuid.UUID, for_update: bool = False
    ) -> Account:
        """
        Load an account, optionally locking its row.

        populate_existing makes a locked read overwrite any
        copy already in the identity map, so the balance seen
        after acquiring the lock is the current one.
        """
        stmt = select(Account).where(Account.id == account_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(
                populate_existing=True
            )
        account = self.session.execute(stmt).scalar_one_or_none()
        if account is None:
            raise AccountNotFound(account_id)
        return account

    def get_settlement_account(
        self, name: str, for_update: bool = False
    ) -> Account:
        """Load the system settlement account by name."""
        stmt = (
            select(Account)
            .where(Account.is_system.is_(True), Account.name == name)
            .limit(1)
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(
                populate_existing=True
            )
        account = self.session.execute(stmt).scalar_one_or_none()
        if account is None:
            raise AccountNotFound(name)
        return account

    def find_settlement_account(self, name: str) -> Account | None:
        return self.session.execute(
            select(Account)
            .where(Account.is_system.is_(True), Account.name == name)
            .limit(1)
        ).scalar_one_or_none()

    def update_balance(self, account_id: uuid.UUID, delta: Decimal) -> None:
        """
        Add delta to the stored balance.

        The new value is computed by the database from the
        current row, never written as an absolute value.
        """
        result = self.session.execute(
            update(Account)
            .where(Account.id == account_id)
            .values(balance=Account.balance + delta)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise AccountNotFound(account_id)

    def create_account(
        self,
        name: str,
        currency: str,
        owner_id: uuid.UUID | None = None,
        is_system: bool = False,
    ) -> Account:
        account = Account(
            owner_id=owner_id,
            name=name,
            currency=currency,
            is_system=is_system,
            balance=Decimal("0.0000"),
        )
        self.session.add(account)
        self.session.flush()
        return account

    def list_accounts_by_owner(self, owner_id: uuid.UUID) -> list[Account]:
        """Return the owner's accounts, newest first."""
        accounts = self.session.execute(
            select(Account)
            .where(Account.owner_id == owner_id)
            .order_by(Account.created_at.desc())
        ).scalars().all()
        return list(accounts)

    def list_accounts(self) -> list[Account]:
        accounts = self.session.execute(
            select(Account).order_by(Account.created_at)
        ).scalars().all()
        return list(accounts)
