"""Floor notation parsing. Basement floors are negative."""

import math
import re
from dataclasses import dataclass
from typing import Callable, Optional

from listing_normalizer.values import Value, normalize_text


@dataclass(frozen=True)
class FloorParse:
    floor: Optional[int] = None
    total_floor: Optional[int] = None


EMPTY_FLOOR = FloorParse()

_TOTAL = re.compile(r"총\s*(\d+)\s*층")
_SINGLE = re.compile(r"(\d+)\s*층")


def _basement_level(raw: Optional[str]) -> int:
    return -max(1, int(raw or 1))


def _total_in(text: str) -> Optional[int]:
    m = _TOTAL.search(text)
    return int(m.group(1)) if m else None


def _single_floor(m: re.Match, text: str) -> FloorParse:
    # "3층 (총 5층)": the total is stripped before looking for the floor itself.
    rest = _TOTAL.sub(" ", text)
    floor = _SINGLE.search(rest)
    return FloorParse(floor=int(floor.group(1)) if floor else None, total_floor=_total_in(text))


FLOOR_RULES: tuple[tuple[str, re.Pattern, Callable[[re.Match, str], FloorParse]], ...] = (
    (
        "basement_pair",
        re.compile(r"^(?:B|지하|-)\s*(\d+)?\s*층?\s*/\s*(\d+)", re.IGNORECASE),
        lambda m, _: FloorParse(_basement_level(m.group(1)), int(m.group(2))),
    ),
    (
        "relative_pair",
        re.compile(r"^(?:고|중|저)\s*층?\s*/\s*(\d+)"),
        lambda m, _: FloorParse(None, int(m.group(1))),
    ),
    (
        "pair",
        re.compile(r"(\d+)\s*층?\s*/\s*(\d+)"),
        lambda m, _: FloorParse(int(m.group(1)), int(m.group(2))),
    ),
    (
        "basement",
        re.compile(r"지하\s*(\d+)?"),
        lambda m, text: FloorParse(_basement_level(m.group(1)), _total_in(text)),
    ),
    (
        "basement_code",
        re.compile(r"^B\s*(\d+)(?:\s*층|\s*F)?$", re.IGNORECASE),
        lambda m, _: FloorParse(_basement_level(m.group(1)), None),
    ),
    (
        "negative",
        re.compile(r"^-\s*(\d+)\s*(?:층|F)?$", re.IGNORECASE),
        lambda m, _: FloorParse(_basement_level(m.group(1)), None),
    ),
    ("single", _SINGLE, _single_floor),
    ("total_only", _TOTAL, lambda m, _: FloorParse(None, int(m.group(1)))),
    (
        "bare",
        re.compile(r"^(\d+)\s*(?:F)?$", re.IGNORECASE),
        lambda m, _: FloorParse(int(m.group(1)), None),
    ),
)


def parse_floor(value: Value) -> FloorParse:
    """
    Parse floor text into (floor, total_floor).
    "3/5" and "3층/5층" -> (3, 5); "지하1층", "B1", "-1" -> (-1, None); "B1/4" -> (-1, 4).
    Relative notations ("고/3") yield only the total; "옥탑", "저층" yield nothing.
    """
    if value is None or isinstance(value, (bool, dict, list)):
        return EMPTY_FLOOR
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return EMPTY_FLOOR
        return FloorParse(int(value), None)

    s = normalize_text(value)
    if not s:
        return EMPTY_FLOOR
    for _name, pattern, build in FLOOR_RULES:
        m = pattern.search(s)
        if m:
            return build(m, s)
    return EMPTY_FLOOR
