"""ORM tables the ledger snapshot is read from."""

from ledger_kernel.models.account import LedgerAccountModel
from ledger_kernel.models.diagnostic import LedgerDiagnosticModel
from ledger_kernel.models.transaction import LedgerPostingModel, LedgerTransactionModel

__all__ = [
    "LedgerAccountModel",
    "LedgerDiagnosticModel",
    "LedgerPostingModel",
    "LedgerTransactionModel",
]
