"""
Account model.

The account set is fixed and small: rows are seeded by the
initial migration and never created or deleted by the service.
Only the transaction service mutates the balance.
"""

from sqlalchemy import BigInteger, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from account_ledger.models.base import Base


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("credit_limit >= 0", name="ck_accounts_credit_limit"),
        # Last line of defence for the overdraft rule
        CheckConstraint(
            "balance >= -credit_limit", name="ck_accounts_balance_within_limit"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    balance: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0
    )
    credit_limit: Mapped[int] = mapped_column(BigInteger, nullable=False)

    transactions: Mapped[list["Transaction"]] = relationship(
        back_populates="account"
    )

    def __repr__(self) -> str:
        return (
            f"<Account {self.id} balance={self.balance} "
            f"limit={self.credit_limit}>"
        )
