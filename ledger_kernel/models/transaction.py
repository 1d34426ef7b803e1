"""
Module: ledger_kernel.models.transaction
Responsibility: ORM tables for loaded transactions and their postings.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - (txn_date, seq) gives the chronological order of transactions.
    - Postings are ordered by line_seq within a transaction.
    - Quantities are stored as exact decimal strings (DecimalString).
    - A cost lot is either fully present (number, currency, date) or absent;
      the selector rejects partial lots.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import Base, UUIDString


class LedgerTransactionModel(Base):
    """One transaction as produced by the ledger engine."""

    __tablename__ = "ledger_transactions"

    __table_args__ = (
        Index("idx_ledger_txn_date_seq", "txn_date", "seq"),
    )

    # Source order within the same date
    seq: Mapped[int] = mapped_column(nullable=False)

    txn_date: Mapped[date] = mapped_column(nullable=False)

    # TxnFlag value ("*", "!", "P", "balance")
    flag: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
    )

    payee: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )

    narration: Mapped[str] = mapped_column(
        String(4000),
        nullable=False,
        default="",
    )

    # Relationships
    postings: Mapped[list["LedgerPostingModel"]] = relationship(
        back_populates="transaction",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="LedgerPostingModel.line_seq",
    )

    def __repr__(self) -> str:
        return f"<LedgerTransactionModel {self.txn_date} {self.flag} {self.narration!r}>"


class LedgerPostingModel(Base):
    """One leg of a stored transaction."""

    __tablename__ = "ledger_postings"

    __table_args__ = (
        Index("idx_ledger_posting_txn", "transaction_id", "line_seq"),
        Index("idx_ledger_posting_account", "account"),
    )

    transaction_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("ledger_transactions.id"),
        nullable=False,
    )

    line_seq: Mapped[int] = mapped_column(nullable=False)

    account: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    number: Mapped[Decimal] = mapped_column(nullable=False)

    currency: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
    )

    # Cost lot
    cost_number: Mapped[Decimal | None] = mapped_column(nullable=True)
    cost_currency: Mapped[str | None] = mapped_column(String(32), nullable=True)
    cost_date: Mapped[date | None] = mapped_column(nullable=True)

    # Price annotation
    price_number: Mapped[Decimal | None] = mapped_column(nullable=True)
    price_currency: Mapped[str | None] = mapped_column(String(32), nullable=True)

    # Relationships
    transaction: Mapped["LedgerTransactionModel"] = relationship(
        back_populates="postings",
    )

    def __repr__(self) -> str:
        return f"<LedgerPostingModel {self.account} {self.number} {self.currency}>"
