"""Run manifest models: metadata, metrics, samples and the final result."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from listing_normalizer.models.listing import NormalizedListing


class Thresholds(BaseModel):
    """Reporting thresholds. Breaches are informational, never fatal."""

    required_fields_rate: float = 0.85
    image_valid_rate: float = 0.9
    image_presence_rate: Optional[float] = Field(
        default=None,
        description="Defaults to image_valid_rate when unset",
    )

    @property
    def effective_image_presence_rate(self) -> float:
        if self.image_presence_rate is None:
            return self.image_valid_rate
        return self.image_presence_rate


class RunMetrics(BaseModel):
    """Aggregate counts and rates for one file run."""

    raw_records: int = 0
    parsed_raw_records: int = 0
    record_parse_failures: int = Field(default=0, description="Lines that were not valid JSON")
    normalize_failures: int = Field(default=0, description="Parsed records that failed during normalization")
    parse_failure: int = 0
    unmapped_records: int = 0
    normalized_items: int = 0

    required_fields_rate: float = 0.0
    address_rate: float = 0.0
    image_rate: float = 0.0
    image_presence_rate: float = 0.0
    price_rate: float = 0.0
    area_rate: float = 0.0

    violation_code_counts: dict[str, int] = Field(default_factory=dict)
    error_counts: dict[str, int] = Field(default_factory=dict)
    threshold_breaches: list[str] = Field(default_factory=list)
    duration_ms: int = 0


class RunSample(BaseModel):
    """Preview of one record outcome, for human inspection."""

    parse_status: Literal["ok", "fail"]
    source_ref: Optional[str] = None
    address: Optional[bool] = None
    has_price: Optional[bool] = None
    has_area: Optional[bool] = None
    image_count: Optional[int] = None
    validation_count: Optional[int] = None
    line_number: Optional[int] = None
    raw_snippet: Optional[str] = None
    raw_source: Optional[str] = None
    error_code: Optional[str] = None
    error: Optional[str] = None


class RunMetadata(BaseModel):
    """Platform identity, counts, timestamps and active thresholds of a run."""

    platform_code: str
    platform_name: str
    collection_mode: str
    source_file: str
    raw_records: int = 0
    parsed_raw_records: int = 0
    parse_failure: int = 0
    unmapped_records: int = 0
    normalized_records: int = 0
    started_at: datetime
    generated_at: datetime
    duration_ms: int = 0
    thresholds: Thresholds = Field(default_factory=Thresholds)


class RunResult(BaseModel):
    """Manifest returned by ListingAdapter.normalize."""

    metadata: RunMetadata
    stats: RunMetrics
    samples: list[RunSample] = Field(default_factory=list)
    items: list[NormalizedListing] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        """JSON-ready dict; empty sample fields are dropped."""
        data = self.model_dump(mode="json", exclude={"samples"})
        data["samples"] = [s.model_dump(mode="json", exclude_none=True) for s in self.samples]
        return data
