"""Generic listing adapter: one raw capture record in, normalized listings out."""

import logging
import math
import re
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urljoin, urlparse

from listing_normalizer.config import AdapterOptions
from listing_normalizer.discovery import discover_candidates
from listing_normalizer.errors import SourceAccessBlockedError
from listing_normalizer.models.hints import FieldHintSchema
from listing_normalizer.models.listing import AREA_CLAIMED_VALUES, NormalizedListing
from listing_normalizer.models.platform import PlatformSpec
from listing_normalizer.models.raw import RawRecord
from listing_normalizer.models.run import RunResult
from listing_normalizer.parsers import (
    AreaParse,
    collect_image_urls,
    normalize_building_use,
    normalize_direction,
    normalize_lease_type,
    parse_area,
    parse_count,
    parse_floor,
    parse_money,
    parse_money_pair,
    parse_room_count,
)
from listing_normalizer.pipeline import NormalizationRun
from listing_normalizer.resolution import ResolvedFields, resolve_fields
from listing_normalizer.validation import validate_listing
from listing_normalizer.values import Value, address_hash_code, normalize_text, to_float

logger = logging.getLogger(__name__)

# Top-level payload keys inspected for an upstream denial.
BLOCK_MESSAGE_KEYS: tuple[str, ...] = (
    "message",
    "errorMessage",
    "messageKo",
    "errorMessageKo",
    "msg",
    "reason",
    "statusText",
    "error",
)
BLOCK_STATUS_KEYS: tuple[str, ...] = ("status", "statusCode", "status_code", "code")
BLOCK_STATUS_CODES = frozenset({401, 403, 429})
BLOCK_PATTERN = re.compile(
    r"차단|blocked|forbidden|rate\s*limit|too many requests|\blogin\b|로그인|로봇|captcha|권한|denied|unauthorized"
    r"|접근\s*(?:이\s*)?(?:제한|차단|거부)",
    re.IGNORECASE,
)


def detect_access_block(payload: Value) -> Optional[str]:
    """Reason string when the payload is an upstream denial page or error body, else None."""
    if not isinstance(payload, dict):
        return None
    for key in BLOCK_STATUS_KEYS:
        status = to_float(payload.get(key))
        if status is not None and int(status) in BLOCK_STATUS_CODES:
            return f"{key}={int(status)}"
    for key in BLOCK_MESSAGE_KEYS + BLOCK_STATUS_KEYS:
        value = payload.get(key)
        if isinstance(value, dict):
            value = value.get("message")
        if isinstance(value, str) and BLOCK_PATTERN.search(value):
            return normalize_text(value)[:120]
    return None


def _coordinate(value: Value, bound: float) -> Optional[float]:
    num = to_float(value)
    if num is None or not math.isfinite(num) or abs(num) > bound or num == 0:
        return None
    return num


def _absolute_url(value: Optional[str], base: str) -> Optional[str]:
    s = normalize_text(value)
    if not s:
        return None
    if s.startswith("//"):
        s = f"https:{s}"
    if urlparse(s).scheme in ("http", "https"):
        return s
    if urlparse(base).scheme in ("http", "https"):
        return urljoin(base, s)
    return None


class ListingAdapter:
    """
    Turns raw capture records of one platform into NormalizedListing objects.
    Holds no per-run state: one adapter may serve many normalize() calls.
    Subclasses may override post_process() for platform quirks.
    """

    def __init__(self, spec: PlatformSpec, options: Optional[AdapterOptions] = None):
        self.spec = spec
        self.options = options or AdapterOptions()

    @property
    def platform_code(self) -> str:
        return self.spec.platform_code

    @property
    def hints(self) -> FieldHintSchema:
        return self.spec.field_hints

    @property
    def prefer_deposit_first(self) -> bool:
        if self.options.prefer_deposit_first is not None:
            return self.options.prefer_deposit_first
        return self.spec.prefer_deposit_first

    @property
    def site_root(self) -> Optional[str]:
        return self.options.site_root or self.spec.site_root

    def normalize(
        self,
        path: str | Path,
        max_items: Optional[int] = None,
        include_raw: bool = False,
    ) -> RunResult:
        """Normalize a whole JSONL capture file into a run manifest."""
        return NormalizationRun(self, path, max_items=max_items, include_raw=include_raw).execute()

    def normalize_record(self, record: RawRecord) -> list[NormalizedListing]:
        """
        Listings found in one record, validated, possibly with duplicates.
        Raises SourceAccessBlockedError when the payload is a denial response.
        """
        reason = detect_access_block(record.payload)
        if reason:
            raise SourceAccessBlockedError(f"{self.platform_code}: source access blocked ({reason})")

        found = discover_candidates(
            record.payload,
            self.hints,
            max_depth=self.options.max_depth,
            max_nodes=self.options.max_nodes,
            ratio_threshold=self.options.listing_ratio_threshold,
        )
        listings: list[NormalizedListing] = []
        for candidate in found.candidates:
            listing = self.build_listing(candidate, record)
            if listing is None:
                logger.debug("Dropped candidate without listing signal: keys=%s", sorted(candidate)[:10])
                continue
            listing = self.post_process(listing, candidate, record)
            listing.validation = validate_listing(listing)
            listings.append(listing)
        return listings

    def post_process(self, listing: NormalizedListing, candidate: dict, record: RawRecord) -> NormalizedListing:
        return listing

    def build_listing(self, candidate: dict, record: RawRecord) -> Optional[NormalizedListing]:
        """Resolve, parse and assemble one candidate; None when it carries no listing signal."""
        fields = resolve_fields(candidate, self.hints, record.list_data, record.extras)

        lease_type = normalize_lease_type(fields.lease_type, fallback=fields.price_text)
        rent, deposit, price_method = self._parse_price(fields, lease_type)

        exclusive = parse_area(fields.area_exclusive)
        gross = parse_area(fields.area_gross)
        if exclusive.value is None and gross.value is None and fields.area_text is not None:
            exclusive = parse_area(fields.area_text)

        floor = parse_floor(fields.floor)
        total_floor = floor.total_floor
        if total_floor is None and fields.total_floor is not None:
            total = parse_floor(fields.total_floor)
            total_floor = total.total_floor if total.total_floor is not None else total.floor
            if total_floor is not None and total_floor <= 0:
                total_floor = None

        room_count = (
            parse_room_count(fields.room_count)
            or parse_room_count(fields.title)
            or parse_room_count(fields.raw_text)
        )

        image_urls = self._collect_images(candidate, record)

        has_signal = any(
            (
                fields.source_ref,
                fields.address,
                rent is not None,
                deposit is not None,
                exclusive.value is not None,
                gross.value is not None,
                room_count is not None,
                floor.floor is not None,
                image_urls,
            )
        )
        if not has_signal:
            return None

        raw_attrs: dict[str, Any] = {
            "title": fields.title,
            "rent_raw": fields.rent,
            "deposit_raw": fields.deposit,
            "price_text": fields.price_text,
            "price_method": price_method,
            "address_raw": fields.address,
            "address_composed": fields.address_composed or None,
            "area_unit": self._area_unit(exclusive, gross),
            "floor_raw": fields.floor,
            "direction_raw": fields.direction,
            "building_use_raw": fields.building_use,
        }

        return NormalizedListing(
            platform_code=self.platform_code,
            source_ref=fields.source_ref,
            external_id=fields.source_ref,
            source_url=self._source_url(fields, record),
            collected_at=record.collected_at,
            title=fields.title,
            address_text=fields.address,
            address_code=fields.address_code or address_hash_code(fields.address),
            address_city=fields.city,
            address_district=fields.district,
            address_neighborhood=fields.neighborhood,
            lease_type=lease_type,
            rent_amount=rent,
            deposit_amount=deposit,
            area_exclusive_m2=exclusive.value,
            area_exclusive_m2_min=exclusive.min,
            area_exclusive_m2_max=exclusive.max,
            area_gross_m2=gross.value,
            area_gross_m2_min=gross.min,
            area_gross_m2_max=gross.max,
            area_claimed=self._area_claimed(fields.area_type, exclusive, gross),
            room_count=room_count,
            bathroom_count=parse_count(fields.bathroom_count),
            floor=floor.floor,
            total_floor=total_floor,
            direction=normalize_direction(fields.direction),
            building_use=normalize_building_use(fields.building_use),
            building_name=fields.building_name,
            latitude=_coordinate(fields.latitude, 90.0),
            longitude=_coordinate(fields.longitude, 180.0),
            image_urls=image_urls,
            raw_attrs={k: v for k, v in raw_attrs.items() if v is not None},
        )

    def _parse_price(self, fields: ResolvedFields, lease_type: str) -> tuple[Optional[float], Optional[float], str]:
        unit = self.spec.money_unit
        rent = parse_money(fields.rent, unit)
        deposit = parse_money(fields.deposit, unit)
        method = "field" if rent is not None or deposit is not None else "none"
        if rent is None or deposit is None:
            for text in (fields.price_text, fields.raw_text):
                if text is None:
                    continue
                pair = parse_money_pair(text, prefer_deposit_first=self.prefer_deposit_first, unit=unit)
                if pair.rent is None and pair.deposit is None:
                    continue
                if rent is None:
                    rent = pair.rent
                if deposit is None:
                    deposit = pair.deposit
                method = pair.method
                break
        # A lone amount on a 전세/매매 listing is the deposit or sale price, never rent.
        if lease_type in ("전세", "매매") and deposit is None and rent is not None and method == "positional":
            rent, deposit = None, rent
        return rent, deposit, method

    @staticmethod
    def _area_claimed(declared: Optional[str], exclusive: AreaParse, gross: AreaParse) -> str:
        if declared and declared.lower() in AREA_CLAIMED_VALUES:
            return declared.lower()
        if exclusive.value is not None:
            return "range" if exclusive.is_range else "exclusive"
        if gross.value is not None:
            return "range" if gross.is_range else "gross"
        return "estimated"

    @staticmethod
    def _area_unit(exclusive: AreaParse, gross: AreaParse) -> Optional[str]:
        if exclusive.value is not None:
            return exclusive.unit
        if gross.value is not None:
            return gross.unit
        return None

    def _collect_images(self, candidate: dict, record: RawRecord) -> list[str]:
        site_root = self.site_root or record.base_url or None
        urls = collect_image_urls(
            candidate,
            self.hints.image_keys,
            self.hints.raw_text_keys,
            limit=self.options.image_limit,
            site_root=site_root,
        )
        if not urls and isinstance(record.list_data, dict):
            urls = collect_image_urls(
                record.list_data,
                self.hints.image_keys,
                limit=self.options.image_limit,
                site_root=site_root,
            )
        return urls

    def _source_url(self, fields: ResolvedFields, record: RawRecord) -> str:
        """Listing link on the candidate, else the canonical detail URL, else the capture URL."""
        base = record.base_url
        return (
            _absolute_url(fields.source_url, base)
            or self.spec.detail_url(fields.source_ref)
            or _absolute_url(base, "")
            or ""
        )
