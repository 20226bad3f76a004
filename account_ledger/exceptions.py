"""
Ledger error taxonomy.

Every outcome other than success is one of these. The API layer
maps each class to exactly one HTTP status code.
"""


class LedgerError(ValueError):
    """Base class for all ledger failures."""


class AccountNotFoundError(LedgerError):
    """The referenced account does not exist."""

    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"Account {account_id} not found")


class InvalidTransactionError(LedgerError):
    """Malformed input, detected before touching the database."""


class LimitExceededError(LedgerError):
    """A debit would push the balance below the negative credit limit."""

    def __init__(self, account_id: int, amount: int):
        self.account_id = account_id
        self.amount = amount
        super().__init__(
            f"Debit of {amount} would exceed the credit limit "
            f"of account {account_id}"
        )


class StorageFaultError(LedgerError):
    """
    The database failed: lost connection, pool exhaustion, or a
    constraint violation the model did not anticipate.

    Never retried inside the services.
    """
