"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored. An invalid operation type
is caught at the database level, not just in Python.
"""

import enum


class OperationType(str, enum.Enum):
    """The ledger operation that produced an entry."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER = "transfer"
