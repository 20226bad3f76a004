"""
Transaction service: applies credits and debits to an account.

Each call:
1. Validates the input without touching the database
2. Applies the signed amount with one conditional UPDATE that
   enforces the credit limit
3. Appends the transaction record in the same database transaction
4. Commits both together, or rolls both back

Unlike the read services, this service owns its commit: the
balance change and its record must never be left for the caller
to commit separately.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from account_ledger.exceptions import (
    AccountNotFoundError,
    InvalidTransactionError,
    LimitExceededError,
    StorageFaultError,
)
from account_ledger.models.enums import TransactionKind
from account_ledger.schemas.transaction import (
    MAX_AMOUNT,
    MAX_DESCRIPTION_BYTES,
    MIN_DESCRIPTION_BYTES,
    TransactionResult,
    description_size,
)
from account_ledger.services.ledger_store import LedgerStore

logger = logging.getLogger(__name__)


def validate_transaction(amount, kind, description) -> TransactionKind:
    """
    Check amount, kind and description, returning the parsed kind.

    Raises InvalidTransactionError on the first problem found.
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidTransactionError("amount must be an integer")
    if amount <= 0:
        raise InvalidTransactionError("amount must be positive")
    if amount > MAX_AMOUNT:
        raise InvalidTransactionError(f"amount must not exceed {MAX_AMOUNT}")

    try:
        kind = TransactionKind(kind)
    except ValueError:
        raise InvalidTransactionError(f"unknown transaction kind: {kind!r}")

    if not isinstance(description, str):
        raise InvalidTransactionError("description must be a string")
    size = description_size(description)
    if not MIN_DESCRIPTION_BYTES <= size <= MAX_DESCRIPTION_BYTES:
        raise InvalidTransactionError(
            f"description must be {MIN_DESCRIPTION_BYTES} to "
            f"{MAX_DESCRIPTION_BYTES} bytes, got {size}"
        )

    return kind


class TransactionService:

    def __init__(self, db: Session):
        self.db = db
        self.store = LedgerStore(db)

    def apply(
        self,
        account_id: int,
        amount: int,
        kind: TransactionKind | str,
        description: str,
    ) -> TransactionResult:
        """
        Apply one credit or debit to an account.

        Credits are always accepted. A debit is accepted only if
        the resulting balance stays at or above -credit_limit.
        On acceptance the new balance and the transaction record
        are committed as one unit and the post-mutation balance
        and limit are returned.

        Raises:
            InvalidTransactionError: bad amount, kind or description
            AccountNotFoundError: no such account, nothing written
            LimitExceededError: debit rejected, nothing written
            StorageFaultError: the database failed, nothing written
        """
        kind = validate_transaction(amount, kind, description)
        delta = kind.sign * amount

        try:
            applied = self.store.atomic_apply(
                account_id, delta, guarded=kind is TransactionKind.DEBIT
            )

            if applied is None:
                exists = self.store.account_exists(account_id)
                self.db.rollback()
                if not exists:
                    raise AccountNotFoundError(account_id)
                logger.info(
                    "Rejected debit of %d on account %d: limit exceeded",
                    amount, account_id,
                )
                raise LimitExceededError(account_id, amount)

            balance, credit_limit = applied
            self.store.insert_transaction(
                account_id, amount, kind, description
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(
                "Storage failure applying %s of %d to account %d",
                kind.value, amount, account_id,
            )
            raise StorageFaultError(
                f"Could not apply transaction to account {account_id}"
            ) from e

        logger.debug(
            "Applied %s of %d to account %d, balance now %d",
            kind.value, amount, account_id, balance,
        )
        return TransactionResult(balance=balance, credit_limit=credit_limit)
