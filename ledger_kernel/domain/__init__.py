"""Pure domain layer: value objects, ledger snapshot, clock."""

from ledger_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from ledger_kernel.domain.ledger import BalanceSheet, Ledger, compute_balance_sheet
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

__all__ = [
    "AccountInfo",
    "Amount",
    "BalanceSheet",
    "Clock",
    "DeterministicClock",
    "Diagnostic",
    "ErrorLevel",
    "Ledger",
    "Posting",
    "SourceLocation",
    "SystemClock",
    "Transaction",
    "TxnFlag",
    "UnitCost",
    "compute_balance_sheet",
]
