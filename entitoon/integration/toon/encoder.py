"""
TOON Line Encoder

Renders one entity tag plus its flattened attributes as a single TOON line:

    #Entity[P-101]|Name:John Doe|VitalsTemperature:98.6

Values are written verbatim. The delimiter, ``:`` and ``#`` are not escaped,
so values containing them produce ambiguous lines; use
``validate_records`` to detect those inputs.
"""

from __future__ import annotations

import json
import math
from typing import Any, Dict

from .keys import to_camel_case
from .values import Value, ValueKind

DEFAULT_DELIMITER = "|"
DEFAULT_HEADER_PREFIX = "#"
ENTITY_LABEL = "Entity"
KEY_VALUE_SEPARATOR = ":"
SEQUENCE_SEPARATOR = ","


def _compact_json(obj: Any) -> str:
    """Create compact JSON representation."""
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False, default=str)


def render_scalar(value: Any) -> str:
    """Render a terminal value in its literal textual form.

    Booleans and ``None`` follow JSON spelling (``true``, ``false``,
    ``null``); integral floats drop the trailing ``.0``.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return _render_float(value)
    return str(value)


def _render_float(value: float) -> str:
    """Shortest round-trip digits, positional for 1e-7 <= |x| < 1e21.

    Outside that range the exponent form is ``1e-7`` / ``1.5e+22``.
    """
    if value == 0:
        return "0"

    text = repr(abs(value))
    mantissa, _, exponent = text.partition("e")
    whole, _, fraction = mantissa.partition(".")
    digits = whole + fraction
    # Decimal point sits after ``point`` digits: value = 0.<digits> * 10**point
    point = len(whole) + (int(exponent) if exponent else 0)

    stripped = digits.lstrip("0")
    point -= len(digits) - len(stripped)
    digits = stripped.rstrip("0")
    count = len(digits)

    if count <= point <= 21:
        body = digits + "0" * (point - count)
    elif 0 < point <= 21:
        body = digits[:point] + "." + digits[point:]
    elif -6 < point <= 0:
        body = "0." + "0" * (-point) + digits
    else:
        power = point - 1
        sign = "+" if power >= 0 else "-"
        lead = digits if count == 1 else digits[0] + "." + digits[1:]
        body = f"{lead}e{sign}{abs(power)}"

    return "-" + body if value < 0 else body


def render_element(element: Value) -> str:
    """Render one sequence element for the ``[a,b,c]`` form.

    ``None`` elements render empty, nested sequences are joined without
    brackets and mappings fall back to compact JSON.
    """
    if element.kind is ValueKind.SEQUENCE:
        return SEQUENCE_SEPARATOR.join(render_element(item) for item in element.items)
    if element.kind is ValueKind.MAPPING:
        return _compact_json(element.to_native())
    if element.scalar is None:
        return ""
    return render_scalar(element.scalar)


def render_sequence(value: Value) -> str:
    """Render a whole sequence as a single bracketed string."""
    return "[" + SEQUENCE_SEPARATOR.join(render_element(item) for item in value.items) + "]"


def entity_tag(identifier: str, header_prefix: str = DEFAULT_HEADER_PREFIX) -> str:
    return f"{header_prefix}{ENTITY_LABEL}[{identifier}]"


def encode_line(
    tag: str,
    flattened: Dict[str, Any],
    key_field: str,
    delimiter: str = DEFAULT_DELIMITER,
) -> str:
    """Append ``|CamelKey:value`` segments for every flattened attribute.

    The attribute whose raw key equals ``key_field`` is skipped since its
    value already appears in the tag. Only the exact top-level key is
    skipped, never a nested key that merely ends with the same name.
    """
    parts = [tag]
    for key, value in flattened.items():
        if key == key_field:
            continue
        parts.append(
            f"{delimiter}{to_camel_case(key)}{KEY_VALUE_SEPARATOR}{render_scalar(value)}"
        )
    return "".join(parts)
