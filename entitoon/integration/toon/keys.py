"""Key naming helpers for flattened TOON attributes."""

from __future__ import annotations

KEY_SEPARATORS = ("-", "_")


def _is_ascii_lower(char: str) -> bool:
    return "a" <= char <= "z"


def capitalize(key: str) -> str:
    """Upper-case the first character of ``key`` and leave the rest alone."""
    if not key:
        return key
    return key[0].upper() + key[1:]


def to_camel_case(key: str) -> str:
    """Convert a snake/kebab key into UpperCamelCase.

    A ``-`` or ``_`` directly followed by an ASCII lowercase letter is dropped
    and the letter upper-cased. Other separators are kept as-is, so
    ``a_1`` becomes ``A_1``. A lowercase first character is upper-cased last.

        >>> to_camel_case("visit_date")
        'VisitDate'
        >>> to_camel_case("vitalsBlood_pressure")
        'VitalsBloodPressure'
    """
    chars = []
    i = 0
    length = len(key)
    while i < length:
        char = key[i]
        if char in KEY_SEPARATORS and i + 1 < length and _is_ascii_lower(key[i + 1]):
            chars.append(key[i + 1].upper())
            i += 2
            continue
        chars.append(char)
        i += 1

    if chars and _is_ascii_lower(chars[0]):
        chars[0] = chars[0].upper()
    return "".join(chars)
