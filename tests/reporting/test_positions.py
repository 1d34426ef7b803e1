"""Tests for balance-sheet positions."""

from decimal import Decimal

from ledger_kernel.domain.ledger import Ledger
from ledger_reporting.models import Position
from ledger_reporting.positions import balance_sheet_to_list
from tests.factories import lot, posting, transfer, txn


class TestBalanceSheetToList:

    def test_sample_positions(self, sample_ledger):
        positions = balance_sheet_to_list(sample_ledger.balance_sheet)

        assert list(positions) == sorted(positions)
        assert positions["Assets:Bank"] == [Position("USD", Decimal("100"))]
        assert positions["Assets:Broker"] == [
            Position("AAPL", Decimal("10"), lot("150", "USD", "2024-01-03")),
        ]
        assert positions["Liabilities:Card"] == [Position("USD", Decimal("-30"))]

    def test_zero_positions_and_empty_accounts_omitted(self):
        ledger = Ledger.from_transactions([
            transfer("2024-01-01", "Assets:Cash", "Assets:Bank", "10"),
            transfer("2024-01-02", "Assets:Bank", "Assets:Cash", "10"),
            transfer("2024-01-03", "Assets:Bank", "Income:Salary", "3", "EUR"),
        ])
        positions = balance_sheet_to_list(ledger.balance_sheet)

        assert "Assets:Cash" not in positions
        assert positions["Assets:Bank"] == [Position("EUR", Decimal("3"))]

    def test_ordering_within_account(self):
        early = lot("100", "USD", "2024-01-01")
        late = lot("90", "USD", "2024-02-01")
        ledger = Ledger.from_transactions([
            txn(
                "2024-02-01",
                posting("Assets:Broker", "1", "AAPL", cost=late),
                posting("Assets:Broker", "5"),
                posting("Assets:Broker", "2", "AAPL", cost=early),
                posting("Assets:Broker", "4", "AAPL"),
            ),
        ])
        positions = balance_sheet_to_list(ledger.balance_sheet)["Assets:Broker"]

        assert positions == [
            Position("AAPL", Decimal("4")),
            Position("AAPL", Decimal("2"), early),
            Position("AAPL", Decimal("1"), late),
            Position("USD", Decimal("5")),
        ]

    def test_empty_sheet(self):
        assert balance_sheet_to_list({}) == {}


class TestPosition:

    def test_book_value_plain(self):
        assert Position("USD", Decimal("5")).book_value == (Decimal("5"), "USD")

    def test_book_value_at_cost(self):
        position = Position("AAPL", Decimal("10"), lot("150", "USD", "2024-01-03"))
        assert position.book_value == (Decimal("1500"), "USD")
