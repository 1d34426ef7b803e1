"""
Module: ledger_kernel.store
Responsibility: Holds the current ledger snapshot and its loader diagnostics
    behind a reader-writer lock.  Queries take a read view; reloads swap the
    snapshot under exclusive access.
Architecture position: Kernel.  May import from domain/ and logging_config.
    MUST NOT import from selectors/, db/ or outer layers -- sources are
    passed in as plain callables.

Invariants enforced:
    - Any number of readers may hold a view at once.
    - A reload never overlaps a read: the swap waits for in-flight readers,
      and readers arriving while a writer waits queue behind it.
    - Loading (I/O) happens outside the lock; only the pointer swap is done
      under exclusive access.
    - A view always exposes one consistent (ledger, diagnostics) pair.

Failure modes:
    - SnapshotNotLoadedError when read() is called before the first reload.
    - Exceptions raised by the source propagate; the previous snapshot stays
      in place.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime

from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.ledger import Ledger
from ledger_kernel.domain.values import Diagnostic
from ledger_kernel.exceptions import SnapshotNotLoadedError
from ledger_kernel.logging_config import get_logger

logger = get_logger("store")

SnapshotSource = Callable[[], tuple[Ledger, Sequence[Diagnostic]]]


class ReadWriteLock:
    """
    Writer-preferring reader-writer lock built on ``threading.Condition``.

    Not reentrant: a thread holding the read side must not request the
    write side.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @property
    def readers(self) -> int:
        with self._cond:
            return self._readers

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


@dataclass(frozen=True)
class LedgerView:
    """What a reader sees while holding the read lock."""

    ledger: Ledger
    diagnostics: tuple[Diagnostic, ...]
    loaded_at: datetime
    version: int


class LedgerStore:
    """
    Shared ledger snapshot for request-parallel queries.

    Contract:
        ``read()`` yields a LedgerView valid for the duration of the
        ``with`` block.  Callers must not perform I/O inside it.

    Guarantees:
        - ``version`` increases by one on every successful reload.
        - A failed reload leaves the previous snapshot untouched.

    Non-goals:
        - Does NOT load anything itself; sources are injected.
        - Does NOT watch files or schedule reloads.
    """

    def __init__(self, name: str = "ledger", clock: Clock | None = None):
        self._name = name
        self._clock = clock or SystemClock()
        self._lock = ReadWriteLock()
        self._view: LedgerView | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_loaded(self) -> bool:
        return self._view is not None

    @contextmanager
    def read(self) -> Iterator[LedgerView]:
        """Acquire a read view of the current snapshot."""
        with self._lock.read_locked():
            view = self._view
            if view is None:
                raise SnapshotNotLoadedError(self._name)
            yield view

    def reload(self, source: SnapshotSource) -> LedgerView:
        """
        Load a new snapshot from ``source`` and swap it in.

        ``source`` runs before the write lock is taken.
        """
        ledger, diagnostics = source()
        diagnostics = tuple(diagnostics)

        with self._lock.write_locked():
            version = self._view.version + 1 if self._view is not None else 1
            view = LedgerView(
                ledger=ledger,
                diagnostics=diagnostics,
                loaded_at=self._clock.now(),
                version=version,
            )
            self._view = view

        logger.info(
            "snapshot_reloaded",
            extra={
                "store": self._name,
                "version": view.version,
                "txn_count": len(ledger.txns),
                "account_count": len(ledger.accounts),
                "diagnostic_count": len(diagnostics),
            },
        )
        return view

    def load(
        self,
        ledger: Ledger,
        diagnostics: Sequence[Diagnostic] = (),
    ) -> LedgerView:
        """Swap in an already-built snapshot."""
        return self.reload(lambda: (ledger, diagnostics))
