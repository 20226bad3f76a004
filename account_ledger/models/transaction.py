"""
Transaction model.

The append-only log of balance mutations. Each row corresponds
to exactly one successful credit or debit, written in the same
database transaction as the balance change. Rows are never
updated or deleted.
"""

from datetime import datetime

from sqlalchemy import (
    String, Integer, DateTime, ForeignKey, CheckConstraint, Index,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from account_ledger.models.base import Base
from account_ledger.models.enums import TransactionKind


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    kind: Mapped[TransactionKind] = mapped_column(
        SAEnum(
            TransactionKind,
            name="transaction_kind_enum",
            values_callable=lambda kinds: [k.value for k in kinds],
            create_constraint=True,
        ),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    account: Mapped["Account"] = relationship(back_populates="transactions")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction {self.kind.value} {self.amount} "
            f"account={self.account_id}>"
        )


# Statement lookups: newest rows of one account, bounded fetch
Index(
    "ix_transactions_account_id_id_desc",
    Transaction.account_id,
    Transaction.id.desc(),
)
