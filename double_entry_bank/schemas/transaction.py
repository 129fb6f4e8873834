"""
Pydantic schemas for money-moving operations.

Amounts are accepted as strings and validated by the
ledger's own amount parser, so "10.5" and "10.5000" mean
the same thing and 0.1 never passes through a float.
"""

import uuid

from pydantic import BaseModel, Field


class AmountRequest(BaseModel):
    """Body of a deposit or withdrawal."""
    amount: str = Field(max_length=32)
    description: str | None = Field(default=None, max_length=255)


class TransferRequest(BaseModel):
    from_account_id: uuid.UUID
    to_account_id: uuid.UUID
    amount: str = Field(max_length=32)
    description: str | None = Field(default=None, max_length=255)


class OperationResponse(BaseModel):
    """Acknowledgement of a committed operation."""
    transaction_id: uuid.UUID
    message: str
