"""
Reporting Service (``ledger_reporting.service``).

Responsibility
--------------
The query surface consumed by the transport layer: positions, trie tables,
paginated journals and loader diagnostics.  Each call takes a read view of
the ``LedgerStore`` for the duration of one pure computation.

Architecture position
---------------------
**Modules layer** -- thin glue between the kernel's snapshot store and the
pure builders in ``trie.py``, ``journal.py`` and ``positions.py``.
Constructor: ``store`` + ``config``.

Invariants enforced
-------------------
* Read-only -- no mutation of the snapshot.
* No I/O while the read lock is held; logging happens after release.
* All monetary amounts use ``Decimal`` -- NEVER ``float``.

Failure modes
-------------
* ``SnapshotNotLoadedError`` if the store has never been loaded.
* Unknown accounts and pages past the end -> empty results, never errors.
"""

from __future__ import annotations

from ledger_kernel.domain.values import Diagnostic
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.store import LedgerStore
from ledger_reporting.config import ReportingConfig
from ledger_reporting.journal import paginate_journal
from ledger_reporting.models import JournalPage, Position, TrieTable
from ledger_reporting.options import FilterOptions, TrieOptions
from ledger_reporting.positions import balance_sheet_to_list
from ledger_reporting.trie import build_trie_table

logger = get_logger("reporting.service")


class ReportingService:
    """
    Ledger report queries over a shared snapshot.

    Contract
    --------
    * Every public method returns a typed result (``TrieTable``,
      ``JournalPage``, ...) computed against one consistent snapshot.
    * Safe to call from many threads at once.

    Non-goals
    ---------
    * Does NOT serialize results; see ``render.py``.
    * Does NOT reload the snapshot.
    """

    def __init__(
        self,
        store: LedgerStore,
        config: ReportingConfig | None = None,
    ):
        self._store = store
        self._config = config or ReportingConfig.with_defaults()

    @property
    def config(self) -> ReportingConfig:
        return self._config

    def positions(self) -> dict[str, list[Position]]:
        """Every nonzero position per account."""
        with LogContext.for_query("positions"):
            with self._store.read() as view:
                result = balance_sheet_to_list(view.ledger.balance_sheet)
                version = view.version
            logger.info(
                "positions_listed",
                extra={"account_count": len(result), "snapshot_version": version},
            )
        return result

    def trie_table(
        self,
        root_account: str,
        options: TrieOptions | None = None,
    ) -> TrieTable | None:
        """Hierarchical balances under ``root_account``; None if it holds nothing."""
        options = options or TrieOptions()
        with LogContext.for_query("trie", root_account):
            with self._store.read() as view:
                table = build_trie_table(view.ledger, root_account, options, self._config)
                version = view.version
            logger.info(
                "trie_table_built",
                extra={
                    "found": table is not None,
                    "row_count": len(table.rows) if table is not None else 0,
                    "currencies": table.currencies if table is not None else (),
                    "show_closed": options.resolved(self._config),
                    "snapshot_version": version,
                },
            )
        return table

    def journal(
        self,
        account: str | None = None,
        options: FilterOptions | None = None,
    ) -> JournalPage:
        """
        One page of the journal.

        With ``account`` the journal is filtered to it and carries running
        balances; without it the whole journal is paged.
        """
        options = options or FilterOptions()
        page, entries, old_first = options.resolved(self._config)
        with LogContext.for_query("journal", account):
            with self._store.read() as view:
                result = paginate_journal(view.ledger.txns, account, options, self._config)
                version = view.version
            logger.info(
                "journal_page_built",
                extra={
                    "page": page,
                    "entries": entries,
                    "old_first": old_first,
                    "secondary_filter": options.account,
                    "item_count": len(result.items),
                    "total": result.total,
                    "snapshot_version": version,
                },
            )
        return result

    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """Loader diagnostics, verbatim and in load order."""
        with LogContext.for_query("diagnostics"):
            with self._store.read() as view:
                result = view.diagnostics
                version = view.version
            logger.info(
                "diagnostics_listed",
                extra={"count": len(result), "snapshot_version": version},
            )
        return result
