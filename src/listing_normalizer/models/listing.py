"""Normalized listing and validation violation models."""

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class ViolationLevel(str, Enum):
    WARN = "WARN"
    ERROR = "ERROR"


class ViolationCode(str, Enum):
    """Stable identifiers shared by violations and record-level failures."""

    RECORD_PARSE_FAIL = "RECORD_PARSE_FAIL"
    NORMALIZE_EXCEPTION = "NORMALIZE_EXCEPTION"
    REQ_FIELD_MISSING = "REQ_FIELD_MISSING"
    ADDRESS_NORMALIZE_FAIL = "ADDRESS_NORMALIZE_FAIL"
    PRICE_PARSE_FAIL = "PRICE_PARSE_FAIL"
    AREA_PARSE_FAIL = "AREA_PARSE_FAIL"
    IMAGE_URL_INVALID = "IMAGE_URL_INVALID"
    SOURCE_ACCESS_BLOCKED = "SOURCE_ACCESS_BLOCKED"

    @classmethod
    def values(cls) -> set[str]:
        return {c.value for c in cls}


AreaClaimed = Literal["exclusive", "gross", "range", "estimated"]
AREA_CLAIMED_VALUES: tuple[str, ...] = ("exclusive", "gross", "range", "estimated")


class Violation(BaseModel):
    """Non-fatal data-quality diagnostic attached to a normalized listing."""

    level: ViolationLevel = ViolationLevel.WARN
    code: ViolationCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class NormalizedListing(BaseModel):
    """Canonical listing record produced for every platform."""

    platform_code: str = Field(..., description="Registry platform code, e.g. 'dabang'")
    source_ref: Optional[str] = Field(default=None, description="Platform-native listing id")
    external_id: Optional[str] = None
    source_url: str = ""
    collected_at: Optional[str] = None

    title: Optional[str] = None

    address_text: Optional[str] = None
    address_code: Optional[str] = None
    address_city: Optional[str] = None
    address_district: Optional[str] = None
    address_neighborhood: Optional[str] = None

    lease_type: Optional[str] = None
    rent_amount: Optional[float] = Field(default=None, description="만원")
    deposit_amount: Optional[float] = Field(default=None, description="만원")

    area_exclusive_m2: Optional[float] = None
    area_exclusive_m2_min: Optional[float] = None
    area_exclusive_m2_max: Optional[float] = None
    area_gross_m2: Optional[float] = None
    area_gross_m2_min: Optional[float] = None
    area_gross_m2_max: Optional[float] = None
    area_claimed: AreaClaimed = "estimated"

    room_count: Optional[int] = None
    bathroom_count: Optional[int] = None
    floor: Optional[int] = None
    total_floor: Optional[int] = None
    direction: Optional[str] = None
    building_use: Optional[str] = None
    building_name: Optional[str] = None

    latitude: Optional[float] = None
    longitude: Optional[float] = None

    image_urls: list[str] = Field(default_factory=list)
    raw_attrs: dict[str, Any] = Field(default_factory=dict)
    validation: list[Violation] = Field(default_factory=list)
    raw: Optional[Any] = None

    @property
    def primary_area(self) -> Optional[float]:
        """Exclusive area when known, otherwise gross area."""
        if self.area_exclusive_m2 is not None:
            return self.area_exclusive_m2
        return self.area_gross_m2

    @property
    def has_price(self) -> bool:
        return self.rent_amount is not None or self.deposit_amount is not None

    @property
    def has_area(self) -> bool:
        return self.area_exclusive_m2 is not None or self.area_gross_m2 is not None

    @property
    def has_address(self) -> bool:
        return bool((self.address_text or "").strip())
