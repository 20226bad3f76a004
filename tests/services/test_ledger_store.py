"""
Tests for the LedgerStore primitives.

The store never commits, so these tests inspect state
inside the same session or commit explicitly.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from account_ledger.exceptions import AccountNotFoundError
from account_ledger.models import Account, TransactionKind
from account_ledger.services.ledger_store import LedgerStore


class TestGetAccount:

    def test_get_existing_account(self, db_session):
        account = LedgerStore(db_session).get_account(3)

        assert account.id == 3
        assert account.balance == 0
        assert account.credit_limit == 1000000

    def test_get_missing_account(self, db_session):
        with pytest.raises(AccountNotFoundError):
            LedgerStore(db_session).get_account(42)

    def test_account_exists(self, db_session):
        store = LedgerStore(db_session)

        assert store.account_exists(1) is True
        assert store.account_exists(42) is False


class TestAtomicApply:

    def test_unguarded_apply_returns_new_balance(self, db_session):
        store = LedgerStore(db_session)

        assert store.atomic_apply(1, 500, guarded=False) == (500, 100000)
        assert store.atomic_apply(1, -200, guarded=False) == (300, 100000)

    def test_guard_rejects_breach(self, db_session, make_account):
        make_account(10, credit_limit=10)
        store = LedgerStore(db_session)

        assert store.atomic_apply(10, -11, guarded=True) is None
        assert store.atomic_apply(10, -10, guarded=True) == (-10, 10)

    def test_missing_account_returns_none(self, db_session):
        assert LedgerStore(db_session).atomic_apply(
            42, 1, guarded=False
        ) is None

    def test_check_constraint_backs_up_the_guard(
        self, db_session, make_account
    ):
        make_account(10, credit_limit=10)
        store = LedgerStore(db_session)

        with pytest.raises(IntegrityError):
            store.atomic_apply(10, -11, guarded=False)


class TestTransactions:

    def test_insert_assigns_identity(self, db_session):
        store = LedgerStore(db_session)

        first = store.insert_transaction(1, 5, TransactionKind.CREDIT, "a")
        second = store.insert_transaction(1, 6, TransactionKind.DEBIT, "b")

        assert second.id > first.id

    def test_recent_transactions_newest_first_and_bounded(self, db_session):
        store = LedgerStore(db_session)
        for i in range(15):
            store.insert_transaction(2, i + 1, TransactionKind.CREDIT, f"d{i}")
        db_session.commit()

        recent = store.recent_transactions(2)

        assert len(recent) == 10
        assert [t.amount for t in recent] == list(range(15, 5, -1))

    def test_recent_transactions_custom_limit(self, db_session):
        store = LedgerStore(db_session)
        for i in range(4):
            store.insert_transaction(2, i + 1, TransactionKind.CREDIT, "x")

        assert len(store.recent_transactions(2, limit=3)) == 3

    def test_recent_transactions_empty(self, db_session):
        assert LedgerStore(db_session).recent_transactions(1) == []


class TestSnapshot:

    def test_snapshot_of_account_without_history(self, db_session):
        account, txns = LedgerStore(db_session).snapshot(5)

        assert isinstance(account, Account)
        assert account.id == 5
        assert txns == []

    def test_snapshot_matches_separate_reads(self, db_session):
        store = LedgerStore(db_session)
        for i in range(12):
            store.atomic_apply(4, i + 1, guarded=False)
            store.insert_transaction(4, i + 1, TransactionKind.CREDIT, "s")
        db_session.commit()

        account, txns = store.snapshot(4)

        assert account.balance == sum(range(1, 13))
        assert [t.id for t in txns] == [
            t.id for t in store.recent_transactions(4)
        ]

    def test_snapshot_missing_account(self, db_session):
        with pytest.raises(AccountNotFoundError):
            LedgerStore(db_session).snapshot(42)
