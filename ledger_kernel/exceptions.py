"""
Typed Exception Hierarchy for the Ledger Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

The reporting functions themselves never fail: an unknown account, an empty
ledger or a page past the end all produce empty results.  The failures that
remain belong to the infrastructure around them (snapshot store, database
source) and callers need to tell them apart without parsing messages.

Every exception:
  1. Has its own class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes

Example:
    try:
        with store.read() as view:
            ...
    except SnapshotNotLoadedError as e:
        api_response(code=e.code)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    LedgerKernelError (base)
    |
    +-- SnapshotError
    |   +-- SnapshotNotLoadedError
    |
    +-- LedgerSourceError
        +-- InvalidLedgerDataError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category   | Code                  | When Raised
-----------|-----------------------|------------------------------------------
Snapshot   | SNAPSHOT_NOT_LOADED   | Read attempted before the first reload
-----------|-----------------------|------------------------------------------
Source     | INVALID_LEDGER_DATA   | A stored row cannot be mapped to a value
           |                       | object (unknown flag, level, bad cost)
===============================================================================
"""


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_KERNEL_ERROR"


# Snapshot store exceptions


class SnapshotError(LedgerKernelError):
    """Base exception for snapshot store errors."""

    code: str = "SNAPSHOT_ERROR"


class SnapshotNotLoadedError(SnapshotError):
    """A read view was requested before any snapshot was loaded."""

    code: str = "SNAPSHOT_NOT_LOADED"

    def __init__(self, store_name: str = "ledger"):
        self.store_name = store_name
        super().__init__(f"No snapshot loaded for store: {store_name}")


# Ledger source exceptions


class LedgerSourceError(LedgerKernelError):
    """Base exception for errors raised while loading a ledger snapshot."""

    code: str = "LEDGER_SOURCE_ERROR"


class InvalidLedgerDataError(LedgerSourceError):
    """A stored record could not be converted into a domain value."""

    code: str = "INVALID_LEDGER_DATA"

    def __init__(self, table: str, record_id: str, reason: str):
        self.table = table
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"Invalid row {record_id} in {table}: {reason}")
