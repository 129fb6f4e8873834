"""
Account service: users, accounts and the settlement account.

Opening an account never touches money: a new account
starts at 0.0000 and only the LedgerService moves its
balance afterwards.
"""

import logging
import uuid

from double_entry_bank.config import Settings
from double_entry_bank.models.account import Account
from double_entry_bank.models.user import User
from double_entry_bank.store.unit_of_work import Store

logger = logging.getLogger(__name__)


class AccountService:

    def __init__(self, store: Store, settings: Settings):
        self.store = store
        self.settings = settings

    def create_user(self, email: str) -> User:
        """Create a new account owner. Emails are unique."""
        with self.store.transaction() as q:
            return q.users.create_user(email)

    def open_account(
        self,
        owner_id: uuid.UUID,
        name: str,
        currency: str | None = None,
    ) -> Account:
        """
        Open a new user account.

        The owner must exist. Currency defaults to the
        ledger's configured currency.
        """
        with self.store.transaction() as q:
            q.users.get_user(owner_id)
            account = q.accounts.create_account(
                name=name,
                currency=(currency or self.settings.DEFAULT_CURRENCY).upper(),
                owner_id=owner_id,
            )

        logger.info(
            "Account opened account_id=%s owner_id=%s currency=%s",
            account.id, owner_id, account.currency,
        )
        return account

    def ensure_settlement_account(self) -> Account:
        """
        Get the settlement account, creating it if needed.

        This is the counterparty for deposits and withdrawals.
        It is seeded once; later calls return the same row.
        """
        name = self.settings.SETTLEMENT_ACCOUNT_NAME
        with self.store.transaction() as q:
            settlement = q.accounts.find_settlement_account(name)
            if settlement is None:
                settlement = q.accounts.create_account(
                    name=name,
                    currency=self.settings.DEFAULT_CURRENCY,
                    is_system=True,
                )
                logger.info(
                    "Settlement account seeded account_id=%s currency=%s",
                    settlement.id, settlement.currency,
                )
        return settlement

    def get_account(self, account_id: uuid.UUID) -> Account:
        """Get an account by ID."""
        with self.store.transaction() as q:
            return q.accounts.get_account(account_id)

    def list_accounts(self, owner_id: uuid.UUID) -> list[Account]:
        """Get all accounts for a user, newest first."""
        with self.store.transaction() as q:
            return q.accounts.list_accounts_by_owner(owner_id)
