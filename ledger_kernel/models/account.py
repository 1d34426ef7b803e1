"""
Module: ledger_kernel.models.account
Responsibility: ORM table for the ledger's account list (open/close dates).
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - name is unique; an account is closed iff close_date is set.
"""

from datetime import date

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import Base


class LedgerAccountModel(Base):
    """One account known to the ledger engine."""

    __tablename__ = "ledger_accounts"

    __table_args__ = (
        UniqueConstraint("name", name="uq_ledger_account_name"),
        Index("idx_ledger_account_close", "close_date"),
    )

    # Colon-delimited account path (e.g. "Assets:Bank:Checking")
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    open_date: Mapped[date | None] = mapped_column(
        nullable=True,
    )

    close_date: Mapped[date | None] = mapped_column(
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<LedgerAccountModel {self.name}>"
