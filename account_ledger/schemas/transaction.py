"""
Pydantic schemas for transaction operations.

These define the API contract. The request schema rejects
malformed bodies before the transaction service is called;
the service repeats the same checks so it is safe to call
directly.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from account_ledger.models.enums import TransactionKind

# Description bound is in encoded bytes, not characters
MIN_DESCRIPTION_BYTES = 1
MAX_DESCRIPTION_BYTES = 10

# Largest amount the transactions.amount column can hold
MAX_AMOUNT = 2_147_483_647


def description_size(description: str) -> int:
    return len(description.encode("utf-8"))


class TransactionCreate(BaseModel):
    """Request to post a credit or debit against an account."""
    amount: int = Field(gt=0, le=MAX_AMOUNT, strict=True)
    kind: TransactionKind
    description: str = Field(strict=True)

    @field_validator("description")
    @classmethod
    def description_must_fit(cls, v: str) -> str:
        size = description_size(v)
        if not MIN_DESCRIPTION_BYTES <= size <= MAX_DESCRIPTION_BYTES:
            raise ValueError(
                f"description must be {MIN_DESCRIPTION_BYTES} to "
                f"{MAX_DESCRIPTION_BYTES} bytes, got {size}"
            )
        return v


class TransactionResult(BaseModel):
    """Balance and limit right after a transaction was applied."""
    balance: int
    credit_limit: int


class TransactionResponse(BaseModel):
    """One entry of a statement's recent transactions."""
    amount: int
    kind: TransactionKind
    description: str
    created_at: datetime

    model_config = {"from_attributes": True}
