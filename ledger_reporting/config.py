"""
Reporting Configuration Schema.

Defaults for journal paging, trie formatting and closed-account handling.
Loaded from the ``reporting`` section of the application YAML.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Self

from ledger_kernel.logging_config import get_logger

logger = get_logger("reporting.config")

DEFAULT_ENTRIES_PER_PAGE = 50


@dataclass(frozen=True)
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    Controls journal page size, trie number formatting and whether closed
    accounts appear in trie tables when a query does not say.
    """

    # Journal page size when the query gives none
    default_entries_per_page: int = DEFAULT_ENTRIES_PER_PAGE

    # Fractional digits in trie table cells
    display_precision: int = 2

    # Include closed accounts in trie tables by default
    show_closed: bool = False

    def __post_init__(self):
        for name in ("default_entries_per_page", "display_precision"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if not isinstance(self.show_closed, bool):
            raise ValueError(f"show_closed must be a boolean, got {self.show_closed!r}")
        if self.default_entries_per_page < 1:
            raise ValueError("default_entries_per_page must be at least 1")
        if self.display_precision < 0:
            raise ValueError("display_precision cannot be negative")

    @property
    def display_quantum(self) -> Decimal:
        """Smallest displayed unit, e.g. Decimal('0.01') for precision 2."""
        return Decimal(1).scaleb(-self.display_precision)

    @property
    def display_rounding(self) -> str:
        return ROUND_HALF_UP

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """
        Create config from dictionary.

        Raises:
            ValueError: on keys that are not config fields, or invalid values.
        """
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        unknown = set(data) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(f"Unknown reporting configuration keys: {sorted(unknown)}")
        return cls(**data)
