"""
Tests for the balance trie builder and flattener.

Pure functions -- no store, no database.
"""

from datetime import date
from decimal import Decimal

from ledger_kernel.domain.ledger import Ledger
from ledger_kernel.domain.values import AccountInfo
from ledger_reporting.config import ReportingConfig
from ledger_reporting.models import TrieNode, TrieTableRow
from ledger_reporting.options import TrieOptions
from ledger_reporting.trie import (
    build_trie,
    build_trie_table,
    flatten_trie,
    format_number,
    normalize_holdings,
    row_account_paths,
)
from tests.factories import lot, posting, transfer, txn


def _bank_and_cash() -> Ledger:
    return Ledger.from_transactions([
        transfer("2024-01-01", "Assets:Bank", "Equity:Opening", "100"),
        transfer("2024-01-02", "Assets:Cash", "Equity:Opening", "50"),
    ])


class TestBuildTrie:

    def test_every_ancestor_carries_subtree_totals(self):
        ledger = Ledger.from_transactions([
            transfer("2024-01-01", "Assets:Bank:Checking", "Equity:Opening", "70"),
            transfer("2024-01-01", "Assets:Bank:Savings", "Equity:Opening", "30"),
            transfer("2024-01-01", "Assets:Cash", "Equity:Opening", "5"),
        ])
        root, currencies = build_trie(ledger, "Assets")

        assert currencies == frozenset({"USD"})
        assert root.find("Assets").numbers == {"USD": Decimal("105")}
        assert root.find("Assets:Bank").numbers == {"USD": Decimal("100")}
        assert root.find("Assets:Bank:Savings").numbers == {"USD": Decimal("30")}
        assert root.find("Equity") is None

    def test_only_first_segment_matches_root(self):
        ledger = Ledger.from_transactions([
            transfer("2024-01-01", "AssetsOther:Bank", "Equity:Opening", "1"),
            transfer("2024-01-01", "Assets:Bank", "Equity:Opening", "2"),
        ])
        root, _ = build_trie(ledger, "Assets")
        assert set(root.nodes) == {"Assets"}

    def test_cost_lots_counted_in_cost_currency(self):
        ledger = Ledger.from_transactions([
            txn(
                "2024-01-03",
                posting("Assets:Broker", "10", "AAPL", cost=lot("150", "USD", "2024-01-03")),
                posting("Assets:Broker", "2", "AAPL", cost=lot("10", "EUR", "2024-01-04")),
                posting("Assets:Bank", "-1500"),
            ),
        ])
        root, currencies = build_trie(ledger, "Assets")

        assert currencies == frozenset({"USD", "EUR"})
        assert root.find("Assets:Broker").numbers == {
            "USD": Decimal("1500"),
            "EUR": Decimal("20"),
        }
        assert "AAPL" not in root.find("Assets").numbers
        assert root.find("Assets").numbers["USD"] == Decimal("0")

    def test_closed_accounts_hidden_by_default(self, sample_ledger):
        root, _ = build_trie(sample_ledger, "Assets")
        assert "Old" not in root.find("Assets").nodes

    def test_show_closed_option(self, sample_ledger):
        root, _ = build_trie(sample_ledger, "Assets", TrieOptions(show_closed=True))
        assert root.find("Assets:Old").numbers == {"USD": Decimal("5")}

    def test_show_closed_from_config(self, sample_ledger):
        root, _ = build_trie(sample_ledger, "Assets", config=ReportingConfig(show_closed=True))
        assert "Old" in root.find("Assets").nodes

    def test_option_overrides_config(self, sample_ledger):
        root, _ = build_trie(
            sample_ledger, "Assets",
            TrieOptions(show_closed=False), ReportingConfig(show_closed=True),
        )
        assert "Old" not in root.find("Assets").nodes

    def test_snapshot_untouched(self, sample_ledger):
        before = {a: {c: dict(lots) for c, lots in h.items()} for a, h in sample_ledger.balance_sheet.items()}
        build_trie(sample_ledger, "Assets", TrieOptions(show_closed=True))
        assert sample_ledger.balance_sheet == before


class TestNormalizeHoldings:

    def test_zero_quantities_skipped(self):
        assert normalize_holdings({"USD": {None: Decimal("0")}}) == {}

    def test_plain_and_lot_holdings_merge(self):
        holdings = {
            "USD": {None: Decimal("5")},
            "AAPL": {lot("150", "USD", "2024-01-03"): Decimal("2")},
        }
        assert normalize_holdings(holdings) == {"USD": Decimal("305")}


class TestFormatNumber:

    def test_zero_is_empty(self):
        assert format_number(Decimal("0")) == ""
        assert format_number(Decimal("-0.000")) == ""

    def test_two_fractional_digits(self):
        assert format_number(Decimal("150")) == "150.00"
        assert format_number(Decimal("-30.5")) == "-30.50"
        assert format_number(Decimal("1E+3")) == "1000.00"

    def test_half_up_rounding(self):
        assert format_number(Decimal("0.125")) == "0.13"
        assert format_number(Decimal("-0.125")) == "-0.13"

    def test_tiny_nonzero_rounds_to_zero_digits(self):
        assert format_number(Decimal("0.001")) == "0.00"

    def test_values_wider_than_default_context(self):
        assert format_number(Decimal("1e27")) == "1" + "0" * 27 + ".00"
        assert format_number(Decimal("-123456789012345678901234567890.125")) == (
            "-123456789012345678901234567890.13"
        )

    def test_configured_precision(self):
        assert format_number(Decimal("1.23456"), ReportingConfig(display_precision=4)) == "1.2346"


class TestFlattenTrie:

    def test_bank_before_cash(self):
        table = build_trie_table(_bank_and_cash(), "Assets")

        assert table.currencies == ("USD",)
        assert table.rows == (
            TrieTableRow(level=0, name="Assets", numbers=("150.00",)),
            TrieTableRow(level=1, name="Bank", numbers=("100.00",)),
            TrieTableRow(level=1, name="Cash", numbers=("50.00",)),
        )

    def test_pre_order_with_sorted_children(self):
        node = TrieNode()
        node.child("b").child("z").add({"USD": Decimal("1")})
        node.child("b").child("a").add({"USD": Decimal("2")})
        node.child("a").add({"EUR": Decimal("3")})

        rows = flatten_trie("Root", node, ["EUR", "USD"])

        assert [(r.level, r.name) for r in rows] == [
            (0, "Root"), (1, "a"), (1, "b"), (2, "a"), (2, "z"),
        ]
        assert rows[1].numbers == ("3.00", "")
        assert rows[0].numbers == ("", "")

    def test_missing_currency_renders_empty(self):
        ledger = Ledger.from_transactions([
            transfer("2024-01-01", "Assets:Bank", "Equity:Opening", "100"),
            transfer("2024-01-01", "Assets:Euro", "Equity:Opening", "40", "EUR"),
        ])
        table = build_trie_table(ledger, "Assets")

        assert table.currencies == ("EUR", "USD")
        assert [r.numbers for r in table.rows] == [
            ("40.00", "100.00"),
            ("", "100.00"),
            ("40.00", ""),
        ]

    def test_sample_ledger_table(self, sample_ledger):
        table = build_trie_table(sample_ledger, "Assets")
        assert [(r.name, r.numbers) for r in table.rows] == [
            ("Assets", ("1650.00",)),
            ("Bank", ("100.00",)),
            ("Broker", ("1500.00",)),
            ("Cash", ("50.00",)),
        ]

    def test_unknown_root_is_absent(self, sample_ledger):
        assert build_trie_table(sample_ledger, "Nowhere") is None
        assert build_trie_table(Ledger(), "Assets") is None

    def test_root_with_only_closed_accounts_is_absent(self):
        ledger = Ledger.from_transactions(
            [transfer("2024-01-01", "Archive:Old", "Equity:Opening", "1")],
            accounts=[AccountInfo("Archive:Old", close_date=date(2024, 2, 1))],
        )
        assert build_trie_table(ledger, "Archive") is None
        assert build_trie_table(ledger, "Archive", TrieOptions(show_closed=True)) is not None

    def test_flattening_is_repeatable(self, sample_ledger):
        root, currencies = build_trie(sample_ledger, "Assets")
        ordered = sorted(currencies)
        first = flatten_trie("Assets", root.find("Assets"), ordered)
        second = flatten_trie("Assets", root.find("Assets"), ordered)
        assert first == second


class TestRowAccountPaths:

    def test_paths_rebuilt_from_levels(self):
        ledger = Ledger.from_transactions([
            transfer("2024-01-01", "Assets:Bank:Checking", "Equity:Opening", "1"),
            transfer("2024-01-01", "Assets:Bank:Savings", "Equity:Opening", "1"),
            transfer("2024-01-01", "Assets:Cash", "Equity:Opening", "1"),
        ])
        table = build_trie_table(ledger, "Assets")

        assert row_account_paths(table.rows) == [
            "Assets",
            "Assets:Bank",
            "Assets:Bank:Checking",
            "Assets:Bank:Savings",
            "Assets:Cash",
        ]
