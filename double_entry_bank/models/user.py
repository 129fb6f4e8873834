"""
User model.

Represents an account holder. A user can own multiple
accounts. System accounts (settlement) have no owner.
"""

import uuid
from datetime import datetime

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from double_entry_bank.models.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    # A user can have many accounts
    accounts: Mapped[list["Account"]] = relationship(back_populates="owner")

    def __repr__(self) -> str:
        return f"<User {self.email}>"
