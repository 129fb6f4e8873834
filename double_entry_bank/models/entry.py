"""
Ledger entry model.

Each entry is one side of a double-entry operation. A debit
on one account is always paired with a credit on another,
both tagged with the same transaction_id. Entries are
immutable: once posted, they are never modified or deleted.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, Numeric, ForeignKey, CheckConstraint,
    Enum as SAEnum, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from double_entry_bank.models.base import Base
from double_entry_bank.models.enums import OperationType


class Entry(Base):
    """
    An immutable debit or credit entry in the ledger.

    Within one row exactly one of debit/credit is positive
    and the other is zero; the check_single_side constraint
    enforces that in the database. Within a transaction_id
    group, total debits equal total credits. That invariant
    is enforced by the LedgerService, which is the only
    writer of entries.
    """

    __tablename__ = "entries"
    __table_args__ = (
        CheckConstraint("debit >= 0", name="check_debit_non_negative"),
        CheckConstraint("credit >= 0", name="check_credit_non_negative"),
        CheckConstraint(
            "(debit > 0 AND credit = 0) OR (debit = 0 AND credit > 0)",
            name="check_single_side",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    account_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accounts.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    debit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0.0000")
    )
    credit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0.0000")
    )
    transaction_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, nullable=False, index=True
    )
    operation_type: Mapped[OperationType] = mapped_column(
        SAEnum(
            OperationType,
            name="operation_type",
            values_callable=lambda enum_cls: [m.value for m in enum_cls],
        ),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    # Relationship back to the account
    account: Mapped["Account"] = relationship(back_populates="entries")

    def __repr__(self) -> str:
        return (
            f"<Entry {self.operation_type.value} "
            f"debit={self.debit} credit={self.credit}>"
        )
