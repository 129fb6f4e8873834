"""
Pydantic schemas for ledger reads.

These define the API contract: what data goes out.
They are separate from the database models because the
API shape and the storage shape are often different.
Amounts always leave the API as fixed 4-digit strings,
never as JSON numbers.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, PlainSerializer

from double_entry_bank.amount import format_amount
from double_entry_bank.models.enums import OperationType

Amount = Annotated[Decimal, PlainSerializer(format_amount, return_type=str)]


class EntryResponse(BaseModel):
    """Single entry in API responses."""
    id: uuid.UUID
    account_id: uuid.UUID
    debit: Amount
    credit: Amount
    transaction_id: uuid.UUID
    operation_type: OperationType
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class TransactionResponse(BaseModel):
    """All entries of one transaction group."""
    transaction_id: uuid.UUID
    entries: list[EntryResponse]


class ReconciliationResponse(BaseModel):
    """Result of comparing an account's cached balance with its entries."""
    account_id: uuid.UUID
    matched: bool
    stored_balance: Amount
    calculated_balance: Amount
    difference: Amount

    model_config = {"from_attributes": True}
