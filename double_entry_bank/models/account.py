"""
Account model.

An account holds a cached balance. The balance column is a
convenience: it must always equal SUM(credit) - SUM(debit)
over the account's entries, and it is only ever changed by
a delta update issued in the same transaction that wrote
those entries.

The settlement account is a system account (no owner,
is_system=True) that stands for money outside the ledger.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, Boolean, DateTime, Numeric, ForeignKey, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from double_entry_bank.models.base import Base


class Account(Base):
    """
    A user or system account.

    Accounts are never deleted. Entries reference them with
    ON DELETE RESTRICT, so the audit trail cannot be orphaned.
    """

    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    owner_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0.0000")
    )
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="NGN"
    )
    is_system: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    # Relationships
    owner: Mapped["User | None"] = relationship(back_populates="accounts")
    entries: Mapped[list["Entry"]] = relationship(back_populates="account")

    def __repr__(self) -> str:
        return f"<Account {self.id} {self.name} {self.balance} {self.currency}>"
