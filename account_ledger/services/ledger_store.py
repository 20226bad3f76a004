"""
Ledger store: the only code that reads or writes the
accounts and transactions tables.

The store never commits. It runs its statements on the session
it was given, so the caller decides which of them form one
atomic unit and when that unit is committed or rolled back.
"""

from sqlalchemy import select, update
from sqlalchemy.orm import Session, aliased

from account_ledger.exceptions import AccountNotFoundError
from account_ledger.models.account import Account
from account_ledger.models.transaction import Transaction
from account_ledger.models.enums import TransactionKind

RECENT_TRANSACTIONS_LIMIT = 10


class LedgerStore:

    def __init__(self, db: Session):
        self.db = db

    def get_account(self, account_id: int) -> Account:
        """Get an account by ID."""
        account = self.db.get(Account, account_id)
        if not account:
            raise AccountNotFoundError(account_id)
        return account

    def account_exists(self, account_id: int) -> bool:
        found = self.db.execute(
            select(Account.id).where(Account.id == account_id)
        ).scalar_one_or_none()
        return found is not None

    def atomic_apply(
        self, account_id: int, delta: int, guarded: bool
    ) -> tuple[int, int] | None:
        """
        Add delta to the balance in a single conditional UPDATE.

        When guarded, the row only changes if the new balance stays
        at or above the negative credit limit. The check and the
        write happen inside one statement holding the row's write
        lock, so concurrent calls on the same account always see
        each other's committed effect. Calls on other accounts
        touch other rows and are not blocked.

        Returns (new_balance, credit_limit), or None when no row
        was updated: either the account does not exist or the
        guard rejected the change.
        """
        stmt = (
            update(Account)
            .where(Account.id == account_id)
            .values(balance=Account.balance + delta)
            .returning(Account.balance, Account.credit_limit)
            .execution_options(synchronize_session=False)
        )
        if guarded:
            stmt = stmt.where(
                Account.balance + delta >= -Account.credit_limit
            )

        row = self.db.execute(stmt).one_or_none()
        if row is None:
            return None
        return row.balance, row.credit_limit

    def insert_transaction(
        self,
        account_id: int,
        amount: int,
        kind: TransactionKind,
        description: str,
    ) -> Transaction:
        """
        Append a transaction record to the current unit of work.

        Flushed but not committed: it becomes visible together
        with the balance change when the caller commits.
        """
        txn = Transaction(
            account_id=account_id,
            amount=amount,
            kind=kind,
            description=description,
        )
        self.db.add(txn)
        self.db.flush()
        return txn

    def recent_transactions(
        self, account_id: int, limit: int = RECENT_TRANSACTIONS_LIMIT
    ) -> list[Transaction]:
        """Return the newest transactions of an account, newest first."""
        txns = self.db.execute(
            select(Transaction)
            .where(Transaction.account_id == account_id)
            .order_by(Transaction.id.desc())
            .limit(limit)
        ).scalars().all()
        return list(txns)

    def snapshot(
        self, account_id: int, limit: int = RECENT_TRANSACTIONS_LIMIT
    ) -> tuple[Account, list[Transaction]]:
        """
        Read an account and its newest transactions in one query.

        A single SELECT sees a single snapshot of the database, so
        the balance returned always matches the transaction rows
        returned with it, even under read-committed isolation.
        """
        recent = (
            select(Transaction)
            .where(Transaction.account_id == account_id)
            .order_by(Transaction.id.desc())
            .limit(limit)
            .subquery()
        )
        recent_txn = aliased(Transaction, recent)

        rows = self.db.execute(
            select(Account, recent_txn)
            .outerjoin(recent_txn, recent_txn.account_id == Account.id)
            .where(Account.id == account_id)
            .order_by(recent_txn.id.desc())
            .execution_options(populate_existing=True)
        ).all()

        if not rows:
            raise AccountNotFoundError(account_id)

        account = rows[0][0]
        txns = [txn for _, txn in rows if txn is not None]
        return account, txns
