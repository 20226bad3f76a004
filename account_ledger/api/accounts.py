"""
Account API endpoints.

The API layer is thin. It handles HTTP concerns (status codes,
response formatting) and delegates all business logic to the
services. Each ledger outcome maps to exactly one status code.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from account_ledger.exceptions import (
    AccountNotFoundError,
    InvalidTransactionError,
    LimitExceededError,
    StorageFaultError,
)
from account_ledger.models.base import get_db
from account_ledger.schemas.statement import StatementResponse
from account_ledger.schemas.transaction import (
    TransactionCreate,
    TransactionResult,
)
from account_ledger.services.statement_service import StatementService
from account_ledger.services.transaction_service import TransactionService

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.get("/{account_id}/statement", response_model=StatementResponse)
def get_statement(
    account_id: int,
    db: Session = Depends(get_db),
):
    """
    Get the current balance, limit and the ten most recent
    transactions of an account, newest first.
    """
    service = StatementService(db)
    try:
        return service.statement(account_id)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageFaultError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{account_id}/transactions", response_model=TransactionResult)
def post_transaction(
    account_id: int,
    request: TransactionCreate,
    db: Session = Depends(get_db),
):
    """
    Post a credit or debit against an account.

    A debit that would take the balance below the negative
    credit limit is rejected with 422 and changes nothing.
    """
    service = TransactionService(db)
    try:
        return service.apply(
            account_id,
            request.amount,
            request.kind,
            request.description,
        )
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InvalidTransactionError, LimitExceededError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StorageFaultError as e:
        raise HTTPException(status_code=500, detail=str(e))
