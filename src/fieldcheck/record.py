"""
Access to field values in caller-owned records.

A record maps field ids to whatever the extraction step produced. That may be
a bare string, ``None``, a mapping with a ``"value"`` key, or an object with a
``value`` attribute (the extraction cell also carries confidence, quote, page
and reasoning, none of which are read here).
"""
from typing import Any, Dict, Mapping, Optional


def cell_value(cell: Any) -> Optional[str]:
    """Return the raw string value held by a record entry, or None if absent."""
    if cell is None:
        return None
    if isinstance(cell, str):
        return cell
    if isinstance(cell, Mapping):
        value = cell.get("value")
    else:
        value = getattr(cell, "value", cell)
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def field_values(record: Mapping[str, Any]) -> Dict[str, Optional[str]]:
    """Flatten a record into field id -> raw value.

    The returned dict is a new object; the record itself is never modified.
    """
    return {field_id: cell_value(cell) for field_id, cell in record.items()}
