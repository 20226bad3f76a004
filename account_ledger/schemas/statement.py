"""
Pydantic schemas for account statements.
"""

from datetime import datetime

from pydantic import BaseModel

from account_ledger.schemas.transaction import TransactionResponse


class StatementResponse(BaseModel):
    """
    Balance, limit and the most recent transactions of one account.

    recent_transactions is newest first and is an empty list,
    never null, for an account with no history.
    """
    balance: int
    credit_limit: int
    as_of: datetime
    recent_transactions: list[TransactionResponse]
