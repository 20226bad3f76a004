"""initial ledger schema and fixed accounts

Revision ID: 0001_initial_ledger
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial_ledger"
down_revision = None
branch_labels = None
depends_on = None

# id -> credit limit. Every account starts with a zero balance.
SEED_ACCOUNTS = {
    1: 100000,
    2: 80000,
    3: 1000000,
    4: 10000000,
    5: 500000,
}


def upgrade() -> None:
    accounts = op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("balance", sa.BigInteger(), nullable=False),
        sa.Column("credit_limit", sa.BigInteger(), nullable=False),
        sa.CheckConstraint("credit_limit >= 0", name="ck_accounts_credit_limit"),
        sa.CheckConstraint(
            "balance >= -credit_limit", name="ck_accounts_balance_within_limit"
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("account_id", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column(
            "kind",
            sa.Enum(
                "credit", "debit",
                name="transaction_kind_enum",
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("description", sa.String(length=10), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_transactions_account_id_id_desc",
        "transactions",
        ["account_id", sa.text("id DESC")],
    )

    op.bulk_insert(
        accounts,
        [
            {"id": account_id, "balance": 0, "credit_limit": limit}
            for account_id, limit in SEED_ACCOUNTS.items()
        ],
    )


def downgrade() -> None:
    op.drop_index("ix_transactions_account_id_id_desc", table_name="transactions")
    op.drop_table("transactions")
    op.drop_table("accounts")
    sa.Enum(name="transaction_kind_enum").drop(op.get_bind(), checkfirst=True)
