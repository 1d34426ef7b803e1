"""
Process wiring: configuration -> logging -> database -> populated store.

This is the only place where the three packages meet.
"""

from __future__ import annotations

from ledger_config import AppConfig
from ledger_kernel.db.engine import init_engine_from_url, read_scope
from ledger_kernel.domain.clock import Clock
from ledger_kernel.domain.ledger import Ledger
from ledger_kernel.domain.values import Diagnostic
from ledger_kernel.logging_config import configure_logging, get_logger
from ledger_kernel.selectors.ledger_selector import LedgerSelector
from ledger_kernel.store import LedgerStore
from ledger_reporting.config import ReportingConfig
from ledger_reporting.service import ReportingService

logger = get_logger("reporting.bootstrap")


def load_from_database() -> tuple[Ledger, tuple[Diagnostic, ...]]:
    """Snapshot source reading the configured database in a read-only scope."""
    with read_scope() as session:
        return LedgerSelector(session).load_snapshot()


def open_store(config: AppConfig, clock: Clock | None = None) -> LedgerStore:
    """Configure logging and the engine, then load the first snapshot."""
    configure_logging(level=config.logging.level)
    init_engine_from_url(config.database.url, echo=config.database.echo)
    store = LedgerStore(clock=clock)
    store.reload(load_from_database)
    logger.info(
        "store_opened",
        extra={"config_checksum": config.checksum},
    )
    return store


def open_service(config: AppConfig, clock: Clock | None = None) -> ReportingService:
    """
    Store plus a ReportingService configured from the ``reporting`` section.

    The section is validated before the engine is created, so a bad key
    raises ``ValueError`` without touching the database.
    """
    reporting = ReportingConfig.from_dict(dict(config.reporting))
    store = open_store(config, clock)
    return ReportingService(store, reporting)
