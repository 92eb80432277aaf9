"""Area parsing: square meters and pyeong, single values and ranges."""

import math
import re
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from listing_normalizer.values import Value, normalize_text

AreaUnit = Literal["sqm", "py"]

PYEONG_TO_SQM = 3.305785

_N = r"\d+(?:\.\d+)?"
_UNIT_ALIASES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"제곱미터|㎡|m²|m\s*\^\s*2|m2|sqm", re.IGNORECASE), "sqm"),
    (re.compile(r"평|坪|py", re.IGNORECASE), "py"),
)


@dataclass(frozen=True)
class AreaParse:
    """Parsed area. `value`/`min`/`max` are always in m²; `unit` is the unit found in the text."""

    value: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    unit: AreaUnit = "sqm"
    area_type: Literal["range", "estimated"] = "estimated"

    @property
    def is_range(self) -> bool:
        return self.area_type == "range"


EMPTY_AREA = AreaParse()


def to_sqm(amount: float, unit: str) -> Optional[float]:
    """Convert to m²; pyeong values are rounded to 3 decimals. Non-positive -> None."""
    if not math.isfinite(amount) or amount <= 0:
        return None
    if unit == "py":
        return round(amount * PYEONG_TO_SQM, 3)
    return amount


def _range(m: re.Match, default_unit: AreaUnit) -> AreaParse:
    unit = (m.group(3) or default_unit).lower()
    lo = to_sqm(float(m.group(1)), unit)
    hi = to_sqm(float(m.group(2)), unit)
    if lo is None or hi is None:
        return EMPTY_AREA
    if lo > hi:
        lo, hi = hi, lo
    return AreaParse(value=lo, min=lo, max=hi, unit=unit, area_type="range")


def _dual(m: re.Match, default_unit: AreaUnit) -> AreaParse:
    # "33㎡(10평)" or "10평(33㎡)": the m² reading is exact, the pyeong one rounded.
    if m.group(2).lower() == "sqm":
        amount, unit = m.group(1), "sqm"
    else:
        amount, unit = m.group(3), m.group(4).lower()
    return _single_value(float(amount), unit)


def _single(m: re.Match, default_unit: AreaUnit) -> AreaParse:
    return _single_value(float(m.group(1)), m.group(2).lower())


def _bare(m: re.Match, default_unit: AreaUnit) -> AreaParse:
    return _single_value(float(m.group(1)), default_unit)


def _single_value(amount: float, unit: str) -> AreaParse:
    v = to_sqm(amount, unit)
    if v is None:
        return EMPTY_AREA
    return AreaParse(value=v, min=v, max=v, unit=unit)


AREA_RULES: tuple[tuple[str, re.Pattern, Callable[[re.Match, AreaUnit], AreaParse]], ...] = (
    ("range", re.compile(rf"({_N})\s*(?:sqm|py)?\s*[~\-–]\s*({_N})\s*(sqm|py)", re.IGNORECASE), _range),
    ("dual", re.compile(rf"({_N})\s*(sqm|py)\s*[\(\[/]?\s*({_N})\s*(sqm|py)", re.IGNORECASE), _dual),
    ("single", re.compile(rf"({_N})\s*(sqm|py)", re.IGNORECASE), _single),
    ("bare_range", re.compile(rf"^({_N})\s*[~\-–]\s*({_N})()$"), _range),
    ("bare", re.compile(rf"^({_N})(?![\d.])"), _bare),
)


def _canonical_units(text: str) -> str:
    for pattern, unit in _UNIT_ALIASES:
        text = pattern.sub(unit, text)
    return text


def parse_area(value: Value, default_unit: AreaUnit = "sqm") -> AreaParse:
    """
    Parse an area value into m².
    "24.5㎡" -> 24.5, "10평" -> 33.058, "24~26㎡" -> range 24..26.
    Numbers are taken as `default_unit`. Garbled input yields an empty AreaParse.
    """
    if value is None or isinstance(value, (bool, dict, list)):
        return EMPTY_AREA
    if isinstance(value, (int, float)):
        return _single_value(float(value), default_unit)

    s = _canonical_units(normalize_text(value).replace(",", ""))
    if not s:
        return EMPTY_AREA
    for _name, pattern, build in AREA_RULES:
        m = pattern.search(s)
        if m:
            return build(m, default_unit)
    return EMPTY_AREA
