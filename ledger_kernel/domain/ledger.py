"""
Ledger -- Immutable in-memory snapshot consumed by every report.

Responsibility:
    Bundles the chronologically ordered transactions, the account table and
    the balance sheet (account -> currency -> cost lot -> quantity) into a
    single value that readers share under the store's read lock.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - ``txns`` is sorted ascending by date (stable, so same-day order from
      the source is preserved).
    - A snapshot is never mutated after construction; reports treat every
      mapping as read-only.
    - ``compute_balance_sheet`` ignores balance-assertion transactions:
      they record an expected amount, they do not move one.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from ledger_kernel.domain.values import AccountInfo, Transaction, TxnFlag, UnitCost

# account -> currency -> cost lot (None for plain holdings) -> quantity
BalanceSheet = dict[str, dict[str, dict[UnitCost | None, Decimal]]]


def compute_balance_sheet(txns: Iterable[Transaction]) -> BalanceSheet:
    """Sum every posting by (account, currency, cost lot)."""
    sheet: BalanceSheet = {}
    for txn in txns:
        if txn.flag == TxnFlag.BALANCE:
            continue
        for posting in txn.postings:
            lots = sheet.setdefault(posting.account, {}).setdefault(
                posting.amount.currency, {},
            )
            lots[posting.cost] = lots.get(posting.cost, Decimal("0")) + posting.amount.number
    return sheet


@dataclass(frozen=True)
class Ledger:
    """Read-only ledger snapshot."""

    txns: tuple[Transaction, ...] = ()
    accounts: Mapping[str, AccountInfo] = field(default_factory=dict)
    balance_sheet: BalanceSheet = field(default_factory=dict)

    @classmethod
    def from_transactions(
        cls,
        txns: Iterable[Transaction],
        accounts: Iterable[AccountInfo] = (),
    ) -> Ledger:
        """
        Build a snapshot whose balance sheet is derived from the postings.

        Accounts referenced by postings but absent from ``accounts`` are
        added as open accounts.
        """
        ordered = tuple(sorted(txns, key=lambda t: t.date))
        table = {a.name: a for a in accounts}
        for txn in ordered:
            for posting in txn.postings:
                table.setdefault(posting.account, AccountInfo(posting.account))
        return cls(
            txns=ordered,
            accounts=table,
            balance_sheet=compute_balance_sheet(ordered),
        )

    def is_closed(self, account: str) -> bool:
        """Unknown accounts count as open."""
        info = self.accounts.get(account)
        return info is not None and info.is_closed

    def __len__(self) -> int:
        return len(self.txns)
