"""
Values -- Immutable domain value objects for ledger reporting.

Responsibility:
    Provides the value types every report is computed from: Amount,
    UnitCost, Posting, Transaction, AccountInfo and the loader Diagnostic.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by the ledger snapshot, the database source and every report.

Invariants enforced:
    - All quantities are Decimal (never float); non-Decimal input is
      converted through ``str`` so binary float artifacts never leak in.
    - All value objects are frozen and hashable, so a UnitCost can key the
      balance sheet's cost-lot map.

Failure modes:
    - ValueError on construction with a non-numeric quantity.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum


def _to_decimal(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid number: {value!r}") from e


@dataclass(frozen=True, slots=True)
class Amount:
    """
    A signed quantity of one currency (or commodity).

    Contract:
        Pairs a Decimal number with its currency code.  Currency codes are
        ledger commodity names (``USD``, ``AAPL``, ``VACHR``), so no ISO 4217
        validation is applied.
    """

    number: Decimal
    currency: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "number", _to_decimal(self.number))

    def __str__(self) -> str:
        return f"{self.number} {self.currency}"


@dataclass(frozen=True, slots=True)
class UnitCost:
    """
    Cost lot attached to a holding: per-unit acquisition price and date.

    A position of ``10 AAPL {150 USD, 2024-01-02}`` carries
    ``UnitCost(Amount(150, "USD"), date(2024, 1, 2))``.
    """

    amount: Amount
    date: date

    def valuation(self, quantity: Decimal) -> Decimal:
        """Book value of ``quantity`` units in the cost currency."""
        return self.amount.number * quantity

    def __str__(self) -> str:
        return f"{{{self.amount}, {self.date.isoformat()}}}"


class TxnFlag(str, Enum):
    """Transaction flags produced by the ledger engine."""

    POSTED = "*"
    BALANCE = "balance"  # Balance assertion, never moves money
    PAD = "P"
    PENDING = "!"


@dataclass(frozen=True, slots=True)
class Posting:
    """One leg of a transaction."""

    account: str
    amount: Amount
    cost: UnitCost | None = None
    price: Amount | None = None


@dataclass(frozen=True, slots=True)
class Transaction:
    """A dated, flagged set of postings."""

    date: date
    flag: TxnFlag
    payee: str
    narration: str
    postings: tuple[Posting, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.postings, tuple):
            object.__setattr__(self, "postings", tuple(self.postings))

    def touches(self, prefix: str) -> bool:
        """True if at least one posting's account starts with ``prefix``."""
        return any(p.account.startswith(prefix) for p in self.postings)


@dataclass(frozen=True, slots=True)
class AccountInfo:
    """Open/close metadata for one account."""

    name: str
    open_date: date | None = None
    close_date: date | None = None

    @property
    def is_closed(self) -> bool:
        return self.close_date is not None


# =========================================================================
# Loader diagnostics
# =========================================================================


class ErrorLevel(str, Enum):
    """Severity of a diagnostic produced while loading the ledger."""

    ERROR = "Error"
    WARNING = "Warning"
    INFO = "Info"


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position in a ledger source file."""

    file: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A message from the ledger loader, surfaced verbatim to callers."""

    level: ErrorLevel
    message: str
    src: SourceLocation
