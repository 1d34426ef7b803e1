"""
Paginated journal with running balances.

Pure functions over the snapshot's chronological transaction sequence.
ZERO I/O. ZERO side effects.

The running balance is an explicit accumulator: ``update_balance`` takes
the balance so far and returns the next one, so the computation is a fold
over the filtered transactions.  The hidden prefix before the visible window
is folded first, which seeds the window with the balance it would have had
if every earlier page had been shown.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from functools import reduce

from ledger_kernel.domain.values import Transaction, TxnFlag
from ledger_reporting.config import ReportingConfig
from ledger_reporting.models import JournalItem, JournalPage
from ledger_reporting.options import FilterOptions, TxnFilter

Balance = dict[str, Decimal]


def filter_transactions(
    txns: Iterable[Transaction],
    filters: Sequence[TxnFilter],
) -> list[Transaction]:
    """Transactions passing every filter, order preserved."""
    return [txn for txn in txns if all(f.matches(txn) for f in filters)]


def page_window(
    total: int,
    page: int,
    entries: int,
    old_first: bool,
) -> tuple[int, int] | None:
    """
    ``(skip, take)`` over the ascending sequence, or None past the last page.

    Oldest-first pages are cut from the start; newest-first pages are cut
    from the end, so page 1 always holds the most recent ``entries`` and the
    last page holds whatever is left at the start.
    """
    if (page - 1) * entries >= total:
        return None
    if old_first:
        skip = (page - 1) * entries
        take = min(entries, total - entries * (page - 1))
    else:
        skip = max(0, total - page * entries)
        take = (total - entries * (page - 1)) - skip
    return skip, take


def update_balance(
    txn: Transaction,
    account: str,
    balance: Mapping[str, Decimal],
) -> tuple[Balance, Balance]:
    """
    Apply one transaction to ``balance``; return ``(new_balance, changes)``.

    Changes sum, per currency, the postings whose account starts with
    ``account`` and that carry no cost lot.  Balance assertions change
    nothing.  ``balance`` itself is never modified.
    """
    if txn.flag == TxnFlag.BALANCE:
        return dict(balance), {}

    changes: Balance = {}
    for posting in txn.postings:
        if posting.cost is None and posting.account.startswith(account):
            currency = posting.amount.currency
            changes[currency] = changes.get(currency, Decimal("0")) + posting.amount.number

    new_balance = dict(balance)
    for currency, number in changes.items():
        new_balance[currency] = new_balance.get(currency, Decimal("0")) + number
    return new_balance, changes


def opening_balance(
    txns: Iterable[Transaction],
    account: str,
) -> Balance:
    """Fold ``txns`` through update_balance, discarding the changes."""
    return reduce(
        lambda balance, txn: update_balance(txn, account, balance)[0],
        txns,
        {},
    )


def journal_items(
    txns: Iterable[Transaction],
    account: str | None,
    balance: Mapping[str, Decimal] | None = None,
) -> list[JournalItem]:
    """
    Items for ``txns`` in ascending order, starting from ``balance``.

    Without an account no balance is tracked and every item carries empty
    ``balance`` and ``changes``.
    """
    if account is None:
        return [JournalItem(txn=txn) for txn in txns]

    items: list[JournalItem] = []
    running: Balance = dict(balance or {})
    for txn in txns:
        running, changes = update_balance(txn, account, running)
        items.append(JournalItem(txn=txn, balance=running, changes=changes))
    return items


def paginate_journal(
    txns: Sequence[Transaction],
    account: str | None = None,
    options: FilterOptions | None = None,
    config: ReportingConfig | None = None,
) -> JournalPage:
    """
    Filter, window and annotate one page of the journal.

    ``account`` is the route-level account: it filters the journal and, when
    present, turns on running-balance tracking.  ``options.account`` is an
    additional prefix filter only.

    Balances are always accumulated oldest to newest; newest-first pages are
    reversed only after the items are built.
    """
    options = options or FilterOptions()
    page, entries, old_first = options.resolved(config)

    filtered = filter_transactions(txns, options.filters(account))
    total = len(filtered)

    window = page_window(total, page, entries, old_first)
    if window is None:
        return JournalPage(items=(), total=total)
    skip, take = window

    start = opening_balance(filtered[:skip], account) if account is not None else {}
    items = journal_items(filtered[skip:skip + take], account, start)

    if not old_first:
        items.reverse()
    return JournalPage(items=tuple(items), total=total)
