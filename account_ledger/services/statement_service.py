"""
Statement service: read-only view of an account.
"""

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from account_ledger.exceptions import StorageFaultError
from account_ledger.schemas.statement import StatementResponse
from account_ledger.schemas.transaction import TransactionResponse
from account_ledger.services.ledger_store import (
    LedgerStore,
    RECENT_TRANSACTIONS_LIMIT,
)

logger = logging.getLogger(__name__)


class StatementService:

    def __init__(self, db: Session):
        self.db = db
        self.store = LedgerStore(db)

    def statement(self, account_id: int) -> StatementResponse:
        """
        Build the statement of an account.

        Returns the current balance and limit with the ten most
        recent transactions, newest first. Ordering is by insertion
        identity, so transactions sharing a timestamp keep the order
        they were applied in.

        Raises AccountNotFoundError for an unknown account and
        StorageFaultError if the database fails. A failed read
        never returns a partial list.
        """
        try:
            account, txns = self.store.snapshot(
                account_id, limit=RECENT_TRANSACTIONS_LIMIT
            )
            # Naive UTC, like transactions.created_at
            as_of = datetime.utcnow()
            statement = StatementResponse(
                balance=account.balance,
                credit_limit=account.credit_limit,
                as_of=as_of,
                recent_transactions=[
                    TransactionResponse.model_validate(t) for t in txns
                ],
            )
        except SQLAlchemyError as e:
            logger.exception(
                "Storage failure reading statement of account %d", account_id
            )
            raise StorageFaultError(
                f"Could not read statement of account {account_id}"
            ) from e
        finally:
            # End the read transaction so no snapshot or lock outlives
            # the request
            self.db.rollback()

        return statement
