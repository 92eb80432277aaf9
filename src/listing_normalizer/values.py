"""JSON value type and alias/path lookup helpers."""

import math
import re
from typing import Optional, Union

Scalar = Union[None, bool, int, float, str]
Value = Union[Scalar, list["Value"], dict[str, "Value"]]

_WS = re.compile(r"\s+")


def normalize_text(value: object) -> str:
    """Collapse whitespace and strip; empty string for None."""
    if value is None:
        return ""
    return _WS.sub(" ", str(value)).strip()


def is_blank(value: Value) -> bool:
    """True for None and whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def get_path(value: Value, path: str) -> Optional[Value]:
    """
    Resolve a direct key or dotted path ("address.streetAddress") against a value.
    Returns None when any segment is missing or traverses a non-object.
    """
    if not isinstance(value, dict):
        return None
    if path in value:
        return value[path]
    if "." not in path:
        return None
    current: Value = value
    for segment in path.split("."):
        if not isinstance(current, dict) or segment not in current:
            return None
        current = current[segment]
    return current


def pick(value: Value, aliases: list[str]) -> Optional[Value]:
    """Return the first alias that yields a non-null, non-blank value."""
    for alias in aliases:
        found = get_path(value, alias)
        if not is_blank(found):
            return found
    return None


def pick_text(value: Value, aliases: list[str]) -> Optional[str]:
    """pick() for scalar text fields; containers are ignored."""
    for alias in aliases:
        found = get_path(value, alias)
        if isinstance(found, (dict, list)) or is_blank(found):
            continue
        return normalize_text(found)
    return None


def to_float(value: Value) -> Optional[float]:
    """Plain numeric coercion ("1,234.5" -> 1234.5); None when not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    try:
        num = float(value.replace(",", "").strip())
    except ValueError:
        return None
    return num if math.isfinite(num) else None


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a hash; stable across processes, unlike hash()."""
    acc = 2166136261
    for ch in text:
        acc ^= ord(ch)
        acc = (acc * 16777619) & 0xFFFFFFFF
    return acc


def address_hash_code(address_text: Optional[str]) -> Optional[str]:
    """
    Synthetic 11-digit address code for addresses without a legal-dong code.
    Whitespace is ignored so "서울 노원구" and "서울노원구" share a code.
    """
    base = _WS.sub("", normalize_text(address_text))
    if not base:
        return None
    return f"11{fnv1a_32(base) % 900000000:09d}"
