"""
Pydantic schemas for user and account operations.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from double_entry_bank.schemas.ledger import Amount


# --- User Schemas ---

class UserCreate(BaseModel):
    email: EmailStr


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


# --- Account Schemas ---

class AccountOpen(BaseModel):
    """Request to open a new account."""
    owner_id: uuid.UUID
    name: str = Field(min_length=1, max_length=100)
    currency: str | None = Field(default=None, min_length=3, max_length=3)

    @field_validator("currency")
    @classmethod
    def currency_must_be_letters(cls, v: str | None) -> str | None:
        if v is not None and not v.isalpha():
            raise ValueError("currency must be a 3-letter code")
        return v.upper() if v else v


class AccountResponse(BaseModel):
    id: uuid.UUID
    owner_id: uuid.UUID | None
    name: str
    balance: Amount
    currency: str
    is_system: bool
    created_at: datetime

    model_config = {"from_attributes": True}
