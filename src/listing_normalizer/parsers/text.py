"""Free-text normalizers: direction, building use, lease type, room counts."""

import re
from typing import Optional

from listing_normalizer.values import Value, normalize_text, to_float

# Ordered: diagonal directions must be tested before the cardinal ones they contain.
DIRECTION_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("남서향", ("남서", "서남", "southwest", "south-west")),
    ("남동향", ("남동", "동남", "southeast", "south-east")),
    ("북서향", ("북서", "서북", "northwest", "north-west")),
    ("북동향", ("북동", "동북", "northeast", "north-east")),
    ("남향", ("남향", "남쪽", "south")),
    ("북향", ("북향", "북쪽", "north")),
    ("동향", ("동향", "동쪽", "east")),
    ("서향", ("서향", "서쪽", "west")),
)

COMPASS_CODES: dict[str, str] = {
    "S": "남향",
    "N": "북향",
    "E": "동향",
    "W": "서향",
    "SE": "남동향",
    "SW": "남서향",
    "NE": "북동향",
    "NW": "북서향",
    "SSE": "남향",
    "SSW": "남향",
    "NNE": "북향",
    "NNW": "북향",
    "ENE": "동향",
    "ESE": "동향",
    "WNW": "서향",
    "WSW": "서향",
}

BUILDING_USE_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("오피스텔", ("오피스텔", "officetel")),
    ("아파트", ("아파트", "apartment")),
    ("도시형생활주택", ("도시형", "도생")),
    ("빌라/연립", ("빌라", "연립", "villa")),
    ("단독/다가구", ("단독", "다가구", "다세대", "주택")),
    ("상가/사무실", ("상가", "사무실", "근린생활", "office")),
)

LEASE_TYPE_RULES: tuple[tuple[str, re.Pattern], ...] = (
    ("매매", re.compile(r"매매|매입|\bbuy\b|\bsale\b|^a1$", re.IGNORECASE)),
    ("전세", re.compile(r"전세|jeonse|^b1$", re.IGNORECASE)),
    ("월세", re.compile(r"월세|monthly|^b2$", re.IGNORECASE)),
)
DEFAULT_LEASE_TYPE = "월세"

ROOM_NAMES: dict[str, int] = {"원룸": 1, "투룸": 2, "쓰리룸": 3, "포룸": 4}
_ROOM_NUMBER = re.compile(r"([1-9])\s*(?:룸|room|r\b)|방\s*([1-9])\s*개?", re.IGNORECASE)


def _first_rule(text: str, rules: tuple[tuple[str, tuple[str, ...]], ...]) -> Optional[str]:
    lowered = text.lower()
    for label, needles in rules:
        if any(n in lowered for n in needles):
            return label
    return None


def normalize_direction(value: Value) -> Optional[str]:
    """Map facing text ("남서쪽", "SW", "south") to one of 8 labels; unmatched text passes through."""
    text = normalize_text(value) if not isinstance(value, (dict, list)) else ""
    if not text:
        return None
    code = text.replace(" ", "").upper()
    if code in COMPASS_CODES:
        return COMPASS_CODES[code]
    return _first_rule(text, DIRECTION_RULES) or text


def normalize_building_use(value: Value) -> Optional[str]:
    """Bucket building-use text; unmatched text passes through."""
    text = normalize_text(value) if not isinstance(value, (dict, list)) else ""
    if not text:
        return None
    return _first_rule(text, BUILDING_USE_RULES) or text


def normalize_lease_type(value: Value, fallback: Value = None) -> str:
    """매매 / 전세 / 월세. Unknown or missing text defaults to 월세."""
    for candidate in (value, fallback):
        text = normalize_text(candidate) if not isinstance(candidate, (dict, list)) else ""
        if not text:
            continue
        for label, pattern in LEASE_TYPE_RULES:
            if pattern.search(text):
                return label
    return DEFAULT_LEASE_TYPE


def parse_room_count(value: Value) -> Optional[int]:
    """Room count from numbers or labels like "투룸", "3룸", "방 2개"."""
    if value is None or isinstance(value, (bool, dict, list)):
        return None
    num = to_float(value)
    if num is not None:
        return int(num) if num > 0 else None
    text = normalize_text(value)
    for name, count in ROOM_NAMES.items():
        if name in text:
            return count
    m = _ROOM_NUMBER.search(text)
    if m:
        return int(m.group(1) or m.group(2))
    return None


def parse_count(value: Value) -> Optional[int]:
    """Non-negative integer count (bathrooms); text like "2개" is accepted."""
    if value is None or isinstance(value, (bool, dict, list)):
        return None
    num = to_float(value)
    if num is None:
        m = re.search(r"\d+", normalize_text(value))
        num = float(m.group(0)) if m else None
    if num is None or num < 0:
        return None
    return int(num)
