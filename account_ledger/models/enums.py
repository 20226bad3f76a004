"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored.
"""

import enum


class TransactionKind(str, enum.Enum):
    """Direction of a transaction against an account balance."""
    CREDIT = "credit"
    DEBIT = "debit"

    @property
    def sign(self) -> int:
        return 1 if self is TransactionKind.CREDIT else -1
