"""
Query options and transaction filters.

The transport hands raw query-string values to ``from_query``.  Nothing here
rejects input: unparsable numbers count as absent, out-of-range numbers are
clamped when resolved, unknown keys are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ledger_kernel.domain.values import Transaction
from ledger_reporting.config import DEFAULT_ENTRIES_PER_PAGE, ReportingConfig

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})


def _parse_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _parse_bool(value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_STRINGS


def _parse_str(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value)
    return value or None


# =========================================================================
# Filters
# =========================================================================


class FilterKind(str, Enum):
    """Kinds of transaction filter."""

    BY_PREFIX = "by_prefix"


@dataclass(frozen=True)
class TxnFilter:
    """
    A transaction predicate expressed as data.

    ``BY_PREFIX`` passes a transaction when at least one posting's account
    string starts with ``value``.  The test is on the raw string:
    ``Assets`` also matches ``AssetsOther``.
    """

    kind: FilterKind
    value: str

    @classmethod
    def by_prefix(cls, prefix: str) -> TxnFilter:
        return cls(FilterKind.BY_PREFIX, prefix)

    def matches(self, txn: Transaction) -> bool:
        if self.kind is FilterKind.BY_PREFIX:
            return txn.touches(self.value)
        raise ValueError(f"Unsupported filter kind: {self.kind}")


# =========================================================================
# Options
# =========================================================================


@dataclass(frozen=True)
class FilterOptions:
    """Journal query options.  ``None`` means "use the default"."""

    entries: int | None = None
    page: int | None = None
    old_first: bool | None = None
    account: str | None = None

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> FilterOptions:
        return cls(
            entries=_parse_int(params.get("entries")),
            page=_parse_int(params.get("page")),
            old_first=_parse_bool(params.get("old_first")),
            account=_parse_str(params.get("account")),
        )

    def resolved(self, config: ReportingConfig | None = None) -> tuple[int, int, bool]:
        """``(page, entries, old_first)`` with defaults applied and clamped to >= 1."""
        default_entries = (
            config.default_entries_per_page if config is not None
            else DEFAULT_ENTRIES_PER_PAGE
        )
        page = max(self.page if self.page is not None else 1, 1)
        entries = max(self.entries if self.entries is not None else default_entries, 1)
        old_first = bool(self.old_first) if self.old_first is not None else False
        return page, entries, old_first

    def filters(self, route_account: str | None = None) -> tuple[TxnFilter, ...]:
        """Route-level account first, then the query-level secondary filter."""
        result = []
        if route_account is not None:
            result.append(TxnFilter.by_prefix(route_account))
        if self.account is not None:
            result.append(TxnFilter.by_prefix(self.account))
        return tuple(result)


@dataclass(frozen=True)
class TrieOptions:
    """Trie table query options."""

    show_closed: bool | None = None

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> TrieOptions:
        return cls(show_closed=_parse_bool(params.get("show_closed")))

    def resolved(self, config: ReportingConfig | None = None) -> bool:
        if self.show_closed is not None:
            return self.show_closed
        return config.show_closed if config is not None else False
