"""
TOON value model.

Input records arrive as plain Python data (the result of ``json.load`` or
hand-built dicts). Before flattening they are wrapped once into a closed
tagged union so the flattener and encoder dispatch on ``Value.kind`` instead
of re-inspecting native types at every level.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class ValueKind(str, Enum):
    """Kinds of structured values accepted by the converter."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


@dataclass(frozen=True)
class Value:
    """A structured value: a mapping, a sequence, or a scalar leaf.

    Only one payload field is meaningful for a given kind:
    ``entries`` for MAPPING, ``items`` for SEQUENCE, ``scalar`` for SCALAR.
    """

    kind: ValueKind
    entries: Tuple[Tuple[str, "Value"], ...] = field(default=())
    items: Tuple["Value", ...] = field(default=())
    scalar: Any = None

    def to_native(self) -> Any:
        """Convert back to plain Python data."""
        if self.kind is ValueKind.MAPPING:
            return {key: child.to_native() for key, child in self.entries}
        if self.kind is ValueKind.SEQUENCE:
            return [item.to_native() for item in self.items]
        return self.scalar


def mapping(entries: Dict[str, Value]) -> Value:
    return Value(kind=ValueKind.MAPPING, entries=tuple(entries.items()))


def sequence(items: List[Value]) -> Value:
    return Value(kind=ValueKind.SEQUENCE, items=tuple(items))


def scalar(value: Any) -> Value:
    return Value(kind=ValueKind.SCALAR, scalar=value)


def is_native_sequence(data: Any) -> bool:
    """True for list-like data; strings and bytes count as scalars."""
    return isinstance(data, Sequence) and not isinstance(
        data, (str, bytes, bytearray)
    )


def to_value(data: Any) -> Value:
    """Wrap native Python data into a :class:`Value` tree.

    Mapping keys are converted with ``str()``. Already-wrapped values are
    returned unchanged.
    """
    if isinstance(data, Value):
        return data
    if isinstance(data, Mapping):
        return Value(
            kind=ValueKind.MAPPING,
            entries=tuple((str(key), to_value(child)) for key, child in data.items()),
        )
    if is_native_sequence(data):
        return Value(kind=ValueKind.SEQUENCE, items=tuple(to_value(item) for item in data))
    return scalar(data)
