"""Balance sheet positions as flat lists per account."""

from __future__ import annotations

from datetime import date

from ledger_kernel.domain.ledger import BalanceSheet
from ledger_reporting.models import Position


def _position_key(position: Position) -> tuple:
    cost = position.cost
    if cost is None:
        return (position.currency, 0, date.min, "", position.number)
    return (position.currency, 1, cost.date, cost.amount.currency, cost.amount.number)


def balance_sheet_to_list(sheet: BalanceSheet) -> dict[str, list[Position]]:
    """
    Every nonzero position, grouped by account.

    Accounts are ordered by name.  Within an account, positions are ordered
    by currency, plain holdings before cost lots, lots by date then cost.
    Accounts whose positions are all zero are omitted.
    """
    result: dict[str, list[Position]] = {}
    for account in sorted(sheet):
        positions = [
            Position(currency=currency, number=number, cost=cost)
            for currency, lots in sheet[account].items()
            for cost, number in lots.items()
            if not number.is_zero()
        ]
        if positions:
            result[account] = sorted(positions, key=_position_key)
    return result
