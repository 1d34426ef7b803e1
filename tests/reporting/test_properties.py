"""
Property-based tests for the trie and the journal paginator.

Ledgers are generated from a small account universe so that prefixes,
shared ancestors and multi-currency holdings show up often.
"""

from datetime import date, timedelta
from decimal import Decimal

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from ledger_kernel.domain.ledger import Ledger
from ledger_kernel.domain.values import TxnFlag
from ledger_reporting.journal import filter_transactions, paginate_journal
from ledger_reporting.options import FilterOptions
from ledger_reporting.trie import build_trie, flatten_trie, normalize_holdings
from tests.factories import posting, txn

ACCOUNTS = [
    "Assets:Bank",
    "Assets:Bank:Savings",
    "Assets:Cash",
    "AssetsOther:Misc",
    "Expenses:Food",
    "Income:Salary",
]
CURRENCIES = ["EUR", "USD"]
START = date(2024, 1, 1)

SETTINGS = settings(
    max_examples=60,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

numbers = st.decimals(min_value=-1000, max_value=1000, places=2, allow_nan=False, allow_infinity=False)

postings = st.builds(
    posting,
    st.sampled_from(ACCOUNTS),
    numbers,
    st.sampled_from(CURRENCIES),
)

transactions = st.builds(
    lambda day, legs, assertion: txn(
        START + timedelta(days=day),
        *legs,
        flag=TxnFlag.BALANCE if assertion else TxnFlag.POSTED,
    ),
    st.integers(min_value=0, max_value=30),
    st.lists(postings, min_size=1, max_size=4),
    st.booleans(),
)

ledgers = st.lists(transactions, max_size=40).map(Ledger.from_transactions)


def _walk(node, path=()):
    yield path, node
    for segment, child in node.nodes.items():
        yield from _walk(child, path + (segment,))


class TestTrieProperties:

    @SETTINGS
    @given(ledger=ledgers)
    def test_every_node_is_the_sum_of_its_accounts(self, ledger):
        root, _ = build_trie(ledger, "Assets")

        for path, node in _walk(root):
            if not path:
                continue
            prefix = list(path)
            expected: dict[str, Decimal] = {}
            for account, holdings in ledger.balance_sheet.items():
                if account.split(":")[: len(prefix)] != prefix:
                    continue
                for currency, number in normalize_holdings(holdings).items():
                    expected[currency] = expected.get(currency, Decimal("0")) + number
            assert node.numbers == expected

    @SETTINGS
    @given(ledger=ledgers)
    def test_flattening_is_deterministic(self, ledger):
        root, currencies = build_trie(ledger, "Assets")
        node = root.nodes.get("Assets")
        if node is None:
            return
        ordered = sorted(currencies)
        assert flatten_trie("Assets", node, ordered) == flatten_trie("Assets", node, ordered)


class TestJournalProperties:

    @SETTINGS
    @given(ledger=ledgers, entries=st.integers(min_value=1, max_value=15))
    def test_old_first_pages_reproduce_the_journal(self, ledger, entries):
        expected = filter_transactions(ledger.txns, FilterOptions().filters("Assets"))
        seen = []
        page_no = 1
        while True:
            page = paginate_journal(
                ledger.txns, "Assets", FilterOptions(entries=entries, page=page_no, old_first=True),
            )
            assert page.total == len(expected)
            if not page.items:
                break
            seen.extend(item.txn for item in page.items)
            page_no += 1
        assert seen == expected

    @SETTINGS
    @given(ledger=ledgers, entries=st.integers(min_value=1, max_value=15))
    def test_running_balance_continues_between_pages(self, ledger, entries):
        pages = []
        page_no = 1
        while True:
            page = paginate_journal(
                ledger.txns, "Assets:Bank",
                FilterOptions(entries=entries, page=page_no, old_first=True),
            )
            if not page.items:
                break
            pages.append(page)
            page_no += 1

        zero = Decimal("0")
        for current, following in zip(pages, pages[1:]):
            last = current.items[-1].balance
            first = following.items[0]
            for c in set(last) | set(first.balance):
                assert last.get(c, zero) == first.balance.get(c, zero) - first.changes.get(c, zero)
