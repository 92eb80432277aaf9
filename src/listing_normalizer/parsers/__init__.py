"""Pure, total value parsers: money, area, floor, free text and image URLs."""

from listing_normalizer.parsers.area import PYEONG_TO_SQM, AreaParse, parse_area
from listing_normalizer.parsers.currency import MoneyPair, parse_money, parse_money_pair
from listing_normalizer.parsers.floor import FloorParse, parse_floor
from listing_normalizer.parsers.images import collect_image_urls, is_valid_image_url, normalize_image_url
from listing_normalizer.parsers.text import (
    normalize_building_use,
    normalize_direction,
    normalize_lease_type,
    parse_count,
    parse_room_count,
)

__all__ = [
    "PYEONG_TO_SQM",
    "AreaParse",
    "FloorParse",
    "MoneyPair",
    "collect_image_urls",
    "is_valid_image_url",
    "normalize_building_use",
    "normalize_direction",
    "normalize_image_url",
    "normalize_lease_type",
    "parse_area",
    "parse_count",
    "parse_floor",
    "parse_money",
    "parse_money_pair",
    "parse_room_count",
]
