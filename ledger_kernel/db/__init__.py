"""Database layer - engine, base classes and portable column types."""

from ledger_kernel.db.base import Base, DecimalString, UUIDString
from ledger_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    read_scope,
)

__all__ = [
    "init_engine_from_url",
    "get_engine",
    "get_session",
    "read_scope",
    "create_tables",
    "Base",
    "DecimalString",
    "UUIDString",
]
