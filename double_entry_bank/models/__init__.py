"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
Importing the package also arms the entry immutability
listeners.
"""

from double_entry_bank.models.base import Base
from double_entry_bank.models.enums import OperationType
from double_entry_bank.models.user import User
from double_entry_bank.models.account import Account
from double_entry_bank.models.entry import Entry
from double_entry_bank.models.immutability import register_immutability_listeners

register_immutability_listeners()

__all__ = [
    "Base",
    "OperationType",
    "User",
    "Account",
    "Entry",
    "register_immutability_listeners",
]
