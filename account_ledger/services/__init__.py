"""Business logic services."""

from account_ledger.services.ledger_store import LedgerStore
from account_ledger.services.transaction_service import TransactionService
from account_ledger.services.statement_service import StatementService

__all__ = ["LedgerStore", "TransactionService", "StatementService"]
