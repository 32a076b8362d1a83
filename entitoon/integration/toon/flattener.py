"""
TOON Flattener

Walks a record depth-first and collapses nested mappings into a single-level,
insertion-ordered dict keyed by composite names:

    {"vitals": {"blood_pressure": "120/80"}}  ->  {"vitalsBlood_pressure": "120/80"}

Composite keys are kept in their raw form here; camel-casing happens when the
line is encoded so the key field can still be matched by its original name.
Sequences are never descended into; they are materialised as ``[a,b,c]``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .encoder import render_sequence
from .keys import capitalize
from .values import Value, ValueKind, to_value

logger = logging.getLogger(__name__)


def composite_key(parent_key: str, key: str) -> str:
    """Join a child key onto its parent path."""
    if parent_key:
        return parent_key + capitalize(key)
    return key


def _store(result: Dict[str, Any], key: str, child: Value) -> None:
    if child.kind is ValueKind.MAPPING:
        _flatten_mapping(child, key, result)
    elif child.kind is ValueKind.SEQUENCE:
        result[key] = render_sequence(child)
    else:
        result[key] = child.scalar


def _flatten_mapping(value: Value, parent_key: str, result: Dict[str, Any]) -> None:
    for key, child in value.entries:
        _store(result, composite_key(parent_key, key), child)


def flatten(
    data: Any, parent_key: str = "", result: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Flatten ``data`` into an ordered mapping of composite key to terminal value.

    Args:
        data: Native Python data or a :class:`Value`.
        parent_key: Prefix for every produced key; empty for a whole record.
        result: Optional accumulator to merge into.

    Returns:
        The accumulator. No value in it is a mapping.
    """
    value = to_value(data)
    if result is None:
        result = {}

    if value.kind is ValueKind.MAPPING:
        _flatten_mapping(value, parent_key, result)
    elif value.kind is ValueKind.SEQUENCE:
        # Degenerate record: index positions act as keys.
        for index, item in enumerate(value.items):
            _store(result, composite_key(parent_key, str(index)), item)
    else:
        logger.debug("Scalar record has no attributes to flatten")

    return result
