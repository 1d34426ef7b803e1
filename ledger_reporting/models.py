"""
Ledger Reporting Domain Models (``ledger_reporting.models``).

Responsibility
--------------
Result types returned by the report builders: the balance trie, its
flattened table, journal pages and balance-sheet positions.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* Everything except ``TrieNode`` is frozen.  ``TrieNode`` is mutable only
  while ``build_trie`` populates it; the tree is owned by the request that
  built it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from ledger_kernel.domain.values import Transaction, UnitCost


# =========================================================================
# Balance trie
# =========================================================================


@dataclass
class TrieNode:
    """
    One account path segment and the totals of its whole subtree.

    ``nodes`` owns its children, keyed by the child's path segment.
    """

    numbers: dict[str, Decimal] = field(default_factory=dict)
    nodes: dict[str, TrieNode] = field(default_factory=dict)

    def child(self, segment: str) -> TrieNode:
        """Return the child for ``segment``, creating it on demand."""
        node = self.nodes.get(segment)
        if node is None:
            node = self.nodes[segment] = TrieNode()
        return node

    def add(self, numbers: dict[str, Decimal]) -> None:
        for currency, number in numbers.items():
            self.numbers[currency] = self.numbers.get(currency, Decimal("0")) + number

    def find(self, path: str) -> TrieNode | None:
        """Descend along a colon-delimited path; None if any segment is missing."""
        node: TrieNode | None = self
        for segment in path.split(":"):
            node = node.nodes.get(segment)
            if node is None:
                return None
        return node


@dataclass(frozen=True)
class TrieTableRow:
    """A single line of the flattened trie."""

    level: int
    name: str
    numbers: tuple[str, ...]


@dataclass(frozen=True)
class TrieTable:
    """Pre-order rows plus the currency column headers they align to."""

    rows: tuple[TrieTableRow, ...] = ()
    currencies: tuple[str, ...] = ()


# =========================================================================
# Journal
# =========================================================================


@dataclass(frozen=True)
class JournalItem:
    """
    A transaction with the account's running balance right after it.

    ``balance`` and ``changes`` are empty when the journal is not scoped to
    a single account.
    """

    txn: Transaction
    balance: dict[str, Decimal] = field(default_factory=dict)
    changes: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class JournalPage:
    """One page of journal items and the size of the filtered journal."""

    items: tuple[JournalItem, ...]
    total: int


# =========================================================================
# Positions
# =========================================================================


@dataclass(frozen=True)
class Position:
    """A nonzero holding of one currency, optionally in a cost lot."""

    currency: str
    number: Decimal
    cost: UnitCost | None = None

    @property
    def book_value(self) -> tuple[Decimal, str]:
        """Value at cost when a lot is present, else the holding itself."""
        if self.cost is None:
            return self.number, self.currency
        return self.cost.valuation(self.number), self.cost.amount.currency
