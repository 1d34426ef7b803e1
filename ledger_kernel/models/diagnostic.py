"""
Module: ledger_kernel.models.diagnostic
Responsibility: ORM table for diagnostics emitted while the ledger was loaded.
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import Base


class LedgerDiagnosticModel(Base):
    """One loader message with its source location."""

    __tablename__ = "ledger_diagnostics"

    seq: Mapped[int] = mapped_column(nullable=False)

    # ErrorLevel value ("Error", "Warning", "Info")
    level: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
    )

    message: Mapped[str] = mapped_column(
        String(4000),
        nullable=False,
    )

    file: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
    )

    line: Mapped[int] = mapped_column(nullable=False)

    column_no: Mapped[int] = mapped_column(nullable=False)

    def __repr__(self) -> str:
        return f"<LedgerDiagnosticModel {self.level} {self.file}:{self.line}>"
