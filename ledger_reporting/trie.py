"""
Balance trie construction and flattening.

These functions turn the ledger's balance sheet into an account hierarchy
with subtree totals, and that hierarchy into render-ready rows.
ZERO I/O. ZERO side effects.

- No database access
- No clock access
- Deterministic: same snapshot always produces the same rows
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal, localcontext

from ledger_kernel.domain.ledger import Ledger
from ledger_kernel.domain.values import UnitCost
from ledger_reporting.config import ReportingConfig
from ledger_reporting.models import TrieNode, TrieTable, TrieTableRow
from ledger_reporting.options import TrieOptions

ACCOUNT_SEPARATOR = ":"


# =========================================================================
# Helpers
# =========================================================================


def normalize_holdings(
    holdings: Mapping[str, Mapping[UnitCost | None, Decimal]],
) -> dict[str, Decimal]:
    """
    Collapse currency -> cost lot -> quantity into currency -> quantity.

    Holdings in a cost lot are valued at cost and counted in the lot's
    currency; plain holdings keep their own currency.  Zero quantities are
    skipped entirely, so their currency never shows up.
    """
    result: dict[str, Decimal] = {}
    for currency, lots in holdings.items():
        for cost, number in lots.items():
            if number.is_zero():
                continue
            if cost is not None:
                key = cost.amount.currency
                value = cost.valuation(number)
            else:
                key = currency
                value = number
            result[key] = result.get(key, Decimal("0")) + value
    return result


def format_number(number: Decimal, config: ReportingConfig | None = None) -> str:
    """Empty for exact zero, otherwise fixed-point at the display precision."""
    if number.is_zero():
        return ""
    config = config or ReportingConfig()
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the fraction
        ctx.prec = max(ctx.prec, number.adjusted() + config.display_precision + 2)
        quantized = number.quantize(config.display_quantum, rounding=config.display_rounding)
    return f"{quantized:f}"


# =========================================================================
# 1. BUILD
# =========================================================================


def build_trie(
    ledger: Ledger,
    root_account: str,
    options: TrieOptions | None = None,
    config: ReportingConfig | None = None,
) -> tuple[TrieNode, frozenset[str]]:
    """
    Build the account trie for every account under ``root_account``.

    Only accounts whose first segment equals ``root_account`` are included;
    closed accounts are skipped unless ``show_closed`` resolves true.
    Each account's normalized holdings are added to every node on its path,
    so every node carries the totals of its whole subtree.

    Returns the (unnamed) trie root and the set of currencies seen.
    """
    show_closed = (options or TrieOptions()).resolved(config)
    root = TrieNode()
    currencies: set[str] = set()

    for account, holdings in ledger.balance_sheet.items():
        if not show_closed and ledger.is_closed(account):
            continue
        segments = account.split(ACCOUNT_SEPARATOR)
        if segments[0] != root_account:
            continue

        numbers = normalize_holdings(holdings)
        currencies.update(numbers)

        node = root
        for segment in segments:
            node = node.child(segment)
            node.add(numbers)

    return root, frozenset(currencies)


# =========================================================================
# 2. FLATTEN
# =========================================================================


def _flatten(
    name: str,
    level: int,
    node: TrieNode,
    currencies: tuple[str, ...],
    config: ReportingConfig,
    rows: list[TrieTableRow],
) -> None:
    rows.append(
        TrieTableRow(
            level=level,
            name=name,
            numbers=tuple(
                format_number(node.numbers.get(c, Decimal("0")), config)
                for c in currencies
            ),
        )
    )
    for segment in sorted(node.nodes):
        _flatten(segment, level + 1, node.nodes[segment], currencies, config, rows)


def flatten_trie(
    name: str,
    node: TrieNode,
    currencies: Iterable[str],
    config: ReportingConfig | None = None,
) -> tuple[TrieTableRow, ...]:
    """
    Pre-order walk of ``node``: one row per node, children by segment name.

    ``name`` labels the starting node at level 0; the currency columns are
    taken in the given order.
    """
    rows: list[TrieTableRow] = []
    _flatten(name, 0, node, tuple(currencies), config or ReportingConfig(), rows)
    return tuple(rows)


def build_trie_table(
    ledger: Ledger,
    root_account: str,
    options: TrieOptions | None = None,
    config: ReportingConfig | None = None,
) -> TrieTable | None:
    """
    Build the trie for ``root_account`` and flatten its subtree.

    Returns None when no holdings fall under ``root_account``.
    """
    trie, currencies = build_trie(ledger, root_account, options, config)
    node = trie.nodes.get(root_account)
    if node is None:
        return None
    ordered = tuple(sorted(currencies))
    return TrieTable(
        rows=flatten_trie(root_account, node, ordered, config),
        currencies=ordered,
    )


def row_account_paths(rows: Iterable[TrieTableRow]) -> list[str]:
    """
    Rebuild the full account name for every row of a pre-order table.

    Keeps a stack of (level, segment): pop while the top is at the same or a
    deeper level than the current row, then push the row.
    """
    stack: list[tuple[int, str]] = []
    paths: list[str] = []
    for row in rows:
        while stack and stack[-1][0] >= row.level:
            stack.pop()
        stack.append((row.level, row.name))
        paths.append(ACCOUNT_SEPARATOR.join(segment for _, segment in stack))
    return paths
