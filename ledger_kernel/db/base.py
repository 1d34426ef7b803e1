"""
Module: ledger_kernel.db.base
Responsibility: Declarative base and portable column types for the ORM tables
    the ledger snapshot is read from.
Architecture position: Kernel > DB.  Lowest-level import target for models/.
    MUST NOT import from models/, selectors/, domain/, or outer layers.

Invariants enforced:
    - UUID primary keys stored as String(36) for cross-database portability.
    - Decimal quantities stored as exact strings (DecimalString), never as
      floating point, so values round-trip bit-for-bit on every backend
      including SQLite.
"""

from decimal import Decimal
from typing import ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UUIDString(TypeDecorator):
    """
    UUID type stored as String(36) for cross-database portability.

    Guarantees:
        - process_bind_param: UUID -> str on INSERT/UPDATE.
        - process_result_value: str -> UUID on SELECT.
    """

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return None

    def process_result_value(self, value, dialect):
        if value is not None:
            return PyUUID(value)
        return None


class DecimalString(TypeDecorator):
    """
    Decimal type stored as its canonical string.

    Guarantees:
        - process_bind_param: Decimal -> str(value); ints and strings are
          normalized through Decimal first.
        - process_result_value: str -> Decimal, exact.
    """

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        return str(value)

    def process_result_value(self, value, dialect):
        if value is not None:
            return Decimal(value)
        return None


class Base(DeclarativeBase):
    """
    Declarative base for all ledger source tables.

    Guarantees:
        - id is always a uuid4-generated UUID stored as String(36).
        - Decimal maps to DecimalString -- exact, never float.
        - int maps to BigInteger -- safe for source sequence numbers.
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: DecimalString(),
        PyUUID: UUIDString(),
        int: BigInteger,
    }

    id: Mapped[PyUUID] = mapped_column(
        UUIDString(),
        primary_key=True,
        default=uuid4,
    )
