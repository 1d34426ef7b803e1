"""
Ledger Reporting Module (``ledger_reporting``).

Responsibility
--------------
Read-only reports over a ledger snapshot: the balance trie (account
hierarchy with subtree totals) and its flattened table, the paginated
journal with running per-currency balances, balance-sheet positions and
the loader diagnostics.

Architecture position
---------------------
**Modules layer** -- pure functions in ``trie.py``, ``journal.py`` and
``positions.py``; ``ReportingService`` wraps them with the snapshot store's
read lock and structured logging.

Invariants enforced
-------------------
* No report mutates the snapshot.
* Every trie node's totals equal the sum of its subtree's holdings.
* Running balances are accumulated oldest to newest regardless of the
  display order.

Failure modes
-------------
* Unknown root account -> no trie table (``None``).
* Page past the end -> empty page with the correct total.
"""

from ledger_reporting.config import ReportingConfig
from ledger_reporting.journal import paginate_journal, update_balance
from ledger_reporting.models import (
    JournalItem,
    JournalPage,
    Position,
    TrieNode,
    TrieTable,
    TrieTableRow,
)
from ledger_reporting.options import FilterKind, FilterOptions, TrieOptions, TxnFilter
from ledger_reporting.positions import balance_sheet_to_list
from ledger_reporting.render import render_json, render_to_dict, render_trie_table
from ledger_reporting.service import ReportingService
from ledger_reporting.trie import build_trie, build_trie_table, flatten_trie

__all__ = [
    # Service
    "ReportingService",
    # Config
    "ReportingConfig",
    # Options
    "FilterKind",
    "FilterOptions",
    "TrieOptions",
    "TxnFilter",
    # Models
    "JournalItem",
    "JournalPage",
    "Position",
    "TrieNode",
    "TrieTable",
    "TrieTableRow",
    # Builders
    "balance_sheet_to_list",
    "build_trie",
    "build_trie_table",
    "flatten_trie",
    "paginate_journal",
    "update_balance",
    # Rendering
    "render_json",
    "render_to_dict",
    "render_trie_table",
]
