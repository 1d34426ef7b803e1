"""
JSON rendering of report results.

Decimals are rendered as strings so quantities round-trip exactly.
"""

from __future__ import annotations

import dataclasses
import json
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from ledger_reporting.models import JournalPage, TrieTable


def render_to_dict(obj: object) -> Any:
    """
    Convert any report value to plain JSON-safe data.

    Handles:
    - Decimal -> str (preserving precision)
    - UUID -> str
    - date -> ISO format string
    - Enum -> .value
    - JournalPage -> [items, total]
    - Nested frozen dataclasses -> nested dicts
    - Tuples -> lists
    - None preserved
    """
    if obj is None:
        return None
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, JournalPage):
        return [render_to_dict(obj.items), obj.total]
    if isinstance(obj, (list, tuple)):
        return [render_to_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): render_to_dict(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: render_to_dict(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)


def render_trie_table(table: TrieTable | None) -> dict[str, Any]:
    """A missing table renders as the empty table."""
    return render_to_dict(table if table is not None else TrieTable())


def render_json(obj: object) -> str:
    """Render to a JSON string with sorted keys."""
    return json.dumps(render_to_dict(obj), sort_keys=True)
