"""create users, accounts and entries; seed settlement account

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00
"""

import uuid
from datetime import datetime

from alembic import op
import sqlalchemy as sa

from double_entry_bank.config import Settings

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

operation_type = sa.Enum(
    "deposit", "withdrawal", "transfer", name="operation_type"
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    accounts = op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "owner_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column(
            "balance", sa.Numeric(19, 4), nullable=False,
            server_default="0.0000",
        ),
        sa.Column(
            "currency", sa.String(3), nullable=False, server_default="NGN"
        ),
        sa.Column(
            "is_system", sa.Boolean(), nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_accounts_owner_id", "accounts", ["owner_id"])

    op.create_table(
        "entries",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "account_id",
            sa.Uuid(),
            sa.ForeignKey("accounts.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "debit", sa.Numeric(19, 4), nullable=False,
            server_default="0.0000",
        ),
        sa.Column(
            "credit", sa.Numeric(19, 4), nullable=False,
            server_default="0.0000",
        ),
        sa.Column("transaction_id", sa.Uuid(), nullable=False),
        sa.Column("operation_type", operation_type, nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("debit >= 0", name="check_debit_non_negative"),
        sa.CheckConstraint("credit >= 0", name="check_credit_non_negative"),
        sa.CheckConstraint(
            "(debit > 0 AND credit = 0) OR (debit = 0 AND credit > 0)",
            name="check_single_side",
        ),
    )
    op.create_index("ix_entries_transaction_id", "entries", ["transaction_id"])
    op.create_index("ix_entries_account_id", "entries", ["account_id"])

    # The system settlement account (external cash flow), named and
    # denominated the way the application will look it up
    settings = Settings()
    op.bulk_insert(accounts, [{
        "id": uuid.uuid4(),
        "owner_id": None,
        "name": settings.SETTLEMENT_ACCOUNT_NAME,
        "balance": 0,
        "currency": settings.DEFAULT_CURRENCY,
        "is_system": True,
        "created_at": datetime.utcnow(),
    }])


def downgrade() -> None:
    op.drop_index("ix_entries_account_id", table_name="entries")
    op.drop_index("ix_entries_transaction_id", table_name="entries")
    op.drop_table("entries")
    operation_type.drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_accounts_owner_id", table_name="accounts")
    op.drop_table("accounts")
    op.drop_table("users")
