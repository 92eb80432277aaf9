"""Korean currency grammar. All amounts are returned in 만원 (10,000 won) units."""

import math
import re
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from listing_normalizer.values import Value, normalize_text

MoneyUnit = Literal["manwon", "won"]

WON_PER_MANWON = 10000.0

_N = r"\d+(?:\.\d+)?"

# Listing sites write these instead of a price ("가격 협의", "전화 문의").
PLACEHOLDER_PATTERN = re.compile(r"협의|문의|상담|추가\s*요청|negotiable|inquire|contact", re.IGNORECASE)

# Multipliers into 만원.
UNIT_FACTORS: dict[str, float] = {"억": 10000.0, "천만": 1000.0, "천": 1000.0, "만": 1.0}

# One amount expression, used for keyword anchoring and positional extraction.
AMOUNT_PATTERN = rf"{_N}\s*억(?:\s*{_N}\s*(?:천\s*만|천|만)?)?|{_N}\s*(?:천\s*만|천|만)?"
_AMOUNT_RE = re.compile(AMOUNT_PATTERN)

_KEYWORD_FIELDS: dict[str, str] = {"월세": "rent", "보증금": "deposit", "전세": "deposit"}
_KEYWORD_BEFORE = re.compile(rf"(월세|보증금|전세)\s*[:：]?\s*({AMOUNT_PATTERN})")
_KEYWORD_AFTER = re.compile(rf"({AMOUNT_PATTERN})\s*(?:원)?\s*(월세|보증금)")


@dataclass(frozen=True)
class MoneyRule:
    """One grammar rule: first rule whose pattern matches decides the amount."""

    name: str
    pattern: re.Pattern
    convert: Callable[[re.Match], float]
    unit_bearing: bool = True


def _eok(m: re.Match) -> float:
    total = float(m.group(1)) * UNIT_FACTORS["억"]
    if m.group(2):
        unit = (m.group(3) or "만").replace(" ", "")
        total += float(m.group(2)) * UNIT_FACTORS[unit]
    return total


MONEY_RULES: tuple[MoneyRule, ...] = (
    MoneyRule("eok", re.compile(rf"({_N})\s*억(?:\s*({_N})\s*(천\s*만|천|만)?)?"), _eok),
    MoneyRule("cheonman", re.compile(rf"({_N})\s*천(?:\s*만)?"), lambda m: float(m.group(1)) * 1000.0),
    MoneyRule("man", re.compile(rf"({_N})\s*만"), lambda m: float(m.group(1))),
    MoneyRule("plain", re.compile(rf"({_N})"), lambda m: float(m.group(1)), unit_bearing=False),
)


@dataclass(frozen=True)
class MoneyPair:
    """Rent and deposit extracted from one free-text price string."""

    rent: Optional[float]
    deposit: Optional[float]
    method: Literal["split", "keyword", "positional", "none"] = "none"


def _finite(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def parse_money(value: Value, unit: MoneyUnit = "manwon") -> Optional[float]:
    """
    Parse one amount into 만원.
    "1억 500" -> 10500, "5천만" -> 5000, "300만원" -> 300, "45" -> 45.
    Placeholder text ("협의", "문의") and unparseable input yield None.
    With unit="won", bare numbers are treated as won and divided by 10,000.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = _finite(float(value))
        if num is None:
            return None
        return num / WON_PER_MANWON if unit == "won" else num
    if not isinstance(value, str):
        return None

    s = normalize_text(value).replace(",", "").lower()
    if not s or PLACEHOLDER_PATTERN.search(s):
        return None
    for rule in MONEY_RULES:
        m = rule.pattern.search(s)
        if not m:
            continue
        amount = _finite(rule.convert(m))
        if amount is not None and unit == "won" and not rule.unit_bearing:
            amount /= WON_PER_MANWON
        return amount
    return None


def _side_keyword(text: str) -> Optional[str]:
    if "보증금" in text or "전세" in text:
        return "deposit"
    if "월세" in text:
        return "rent"
    return None


def _deposit_first(left: str, right: str, prefer_deposit_first: bool) -> bool:
    """Keyword proximity wins over the platform ordering policy."""
    left_kw = _side_keyword(left)
    right_kw = _side_keyword(right)
    if left_kw == "deposit" or right_kw == "rent":
        return True
    if left_kw == "rent" or right_kw == "deposit":
        return False
    return prefer_deposit_first


def parse_money_pair(
    text: Value,
    *,
    prefer_deposit_first: bool = False,
    unit: MoneyUnit = "manwon",
) -> MoneyPair:
    """
    Extract (rent, deposit) from combined price text.
    Tried in order: slash/pipe split, keyword anchors (월세/보증금/전세),
    positional fallback over bare amounts. Which side is the deposit is
    decided by nearby keywords first, then by `prefer_deposit_first`.
    """
    if text is None or isinstance(text, (bool, dict, list)):
        return MoneyPair(None, None)
    s = normalize_text(text).replace(",", "")
    if not s:
        return MoneyPair(None, None)

    for sep in ("/", "|"):
        if sep not in s:
            continue
        left, right = s.split(sep, 1)
        left_amount = parse_money(left, unit)
        right_amount = parse_money(right, unit)
        if left_amount is None and right_amount is None:
            continue
        if _deposit_first(left, right, prefer_deposit_first):
            return MoneyPair(rent=right_amount, deposit=left_amount, method="split")
        return MoneyPair(rent=left_amount, deposit=right_amount, method="split")

    found: dict[str, Optional[float]] = {"rent": None, "deposit": None}
    for m in _KEYWORD_BEFORE.finditer(s):
        field = _KEYWORD_FIELDS[m.group(1)]
        if found[field] is None:
            found[field] = parse_money(m.group(2), unit)
    for m in _KEYWORD_AFTER.finditer(s):
        field = _KEYWORD_FIELDS[m.group(2)]
        if found[field] is None:
            found[field] = parse_money(m.group(1), unit)
    if found["rent"] is not None or found["deposit"] is not None:
        return MoneyPair(rent=found["rent"], deposit=found["deposit"], method="keyword")

    if PLACEHOLDER_PATTERN.search(s):
        return MoneyPair(None, None)
    amounts = [a for a in (parse_money(tok, unit) for tok in _AMOUNT_RE.findall(s)) if a is not None]
    if not amounts:
        return MoneyPair(None, None)
    if len(amounts) == 1:
        if prefer_deposit_first:
            return MoneyPair(rent=None, deposit=amounts[0], method="positional")
        return MoneyPair(rent=amounts[0], deposit=None, method="positional")
    first, second = amounts[0], amounts[1]
    if prefer_deposit_first:
        return MoneyPair(rent=second, deposit=first, method="positional")
    return MoneyPair(rent=first, deposit=second, method="positional")
