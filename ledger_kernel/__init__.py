"""
Ledger Kernel

Read-only core for ledger reporting:
- Immutable ledger snapshot (transactions, accounts, balance sheet)
- Snapshot store guarded by a reader-writer lock
- Structured JSON logging
- Read-only database source for snapshots
"""

__version__ = "0.1.0"
