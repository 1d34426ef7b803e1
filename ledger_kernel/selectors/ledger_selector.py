"""
Module: ledger_kernel.selectors.ledger_selector
Responsibility: Loads a complete ledger snapshot (accounts, transactions,
    postings) and the loader diagnostics from the source tables and converts
    them into domain value objects.
Architecture position: Kernel > Selectors.  May import from models/, domain/
    and selectors/base.py.  MUST NOT import from outer layers.

Invariants enforced:
    - Read-only: no mutations performed on any queried data.
    - Transactions are ordered by (txn_date, seq); postings by line_seq.
    - The balance sheet is derived from the loaded postings
      (Ledger.from_transactions), never stored.

Failure modes:
    - InvalidLedgerDataError when a row holds an unknown flag or level, or a
      partial cost lot.
    - Returns an empty Ledger / empty diagnostics when tables are empty.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.ledger import Ledger
from ledger_kernel.domain.values import (
    AccountInfo,
    Amount,
    Diagnostic,
    ErrorLevel,
    Posting,
    SourceLocation,
    Transaction,
    TxnFlag,
    UnitCost,
)
from ledger_kernel.exceptions import InvalidLedgerDataError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.account import LedgerAccountModel
from ledger_kernel.models.diagnostic import LedgerDiagnosticModel
from ledger_kernel.models.transaction import (
    LedgerPostingModel,
    LedgerTransactionModel,
)
from ledger_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.ledger")


class LedgerSelector(BaseSelector[LedgerTransactionModel]):
    """
    Selector that materializes the ledger snapshot.

    Guarantees:
        - Read-only: No mutations are performed.
        - Postings are eager-loaded with the transaction (selectin).
    """

    def __init__(self, session: Session):
        super().__init__(session)

    # =========================================================================
    # Row conversion
    # =========================================================================

    def _to_posting(self, row: LedgerPostingModel) -> Posting:
        cost = None
        cost_fields = (row.cost_number, row.cost_currency, row.cost_date)
        if any(f is not None for f in cost_fields):
            if any(f is None for f in cost_fields):
                raise InvalidLedgerDataError(
                    "ledger_postings", str(row.id), "incomplete cost lot",
                )
            cost = UnitCost(Amount(row.cost_number, row.cost_currency), row.cost_date)

        price = None
        if row.price_number is not None or row.price_currency is not None:
            if row.price_number is None or row.price_currency is None:
                raise InvalidLedgerDataError(
                    "ledger_postings", str(row.id), "incomplete price",
                )
            price = Amount(row.price_number, row.price_currency)

        return Posting(
            account=row.account,
            amount=Amount(row.number, row.currency),
            cost=cost,
            price=price,
        )

    def _to_transaction(self, row: LedgerTransactionModel) -> Transaction:
        try:
            flag = TxnFlag(row.flag)
        except ValueError:
            raise InvalidLedgerDataError(
                "ledger_transactions", str(row.id), f"unknown flag {row.flag!r}",
            ) from None
        return Transaction(
            date=row.txn_date,
            flag=flag,
            payee=row.payee,
            narration=row.narration,
            postings=tuple(self._to_posting(p) for p in row.postings),
        )

    def _to_diagnostic(self, row: LedgerDiagnosticModel) -> Diagnostic:
        try:
            level = ErrorLevel(row.level)
        except ValueError:
            raise InvalidLedgerDataError(
                "ledger_diagnostics", str(row.id), f"unknown level {row.level!r}",
            ) from None
        return Diagnostic(
            level=level,
            message=row.message,
            src=SourceLocation(file=row.file, line=row.line, column=row.column_no),
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def load_accounts(self) -> list[AccountInfo]:
        """All accounts ordered by name."""
        rows = self.session.execute(
            select(LedgerAccountModel).order_by(LedgerAccountModel.name)
        ).scalars().all()
        return [
            AccountInfo(name=r.name, open_date=r.open_date, close_date=r.close_date)
            for r in rows
        ]

    def load_transactions(self) -> list[Transaction]:
        """All transactions in chronological order."""
        rows = self.session.execute(
            select(LedgerTransactionModel).order_by(
                LedgerTransactionModel.txn_date,
                LedgerTransactionModel.seq,
            )
        ).scalars().all()
        return [self._to_transaction(r) for r in rows]

    def load_ledger(self) -> Ledger:
        """Build the ledger snapshot from the source tables."""
        ledger = Ledger.from_transactions(
            self.load_transactions(),
            self.load_accounts(),
        )
        logger.debug(
            "ledger_loaded_from_database",
            extra={
                "txn_count": len(ledger.txns),
                "account_count": len(ledger.accounts),
            },
        )
        return ledger

    def load_diagnostics(self) -> tuple[Diagnostic, ...]:
        """Loader diagnostics in the order they were recorded."""
        rows = self.session.execute(
            select(LedgerDiagnosticModel).order_by(LedgerDiagnosticModel.seq)
        ).scalars().all()
        return tuple(self._to_diagnostic(r) for r in rows)

    def load_snapshot(self) -> tuple[Ledger, tuple[Diagnostic, ...]]:
        """Ledger and diagnostics together, shaped for LedgerStore.reload."""
        return self.load_ledger(), self.load_diagnostics()
