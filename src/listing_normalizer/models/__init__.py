"""Data models for raw records, normalized listings, platforms and run manifests."""

from listing_normalizer.models.hints import FieldHintSchema
from listing_normalizer.models.listing import (
    AREA_CLAIMED_VALUES,
    NormalizedListing,
    Violation,
    ViolationCode,
    ViolationLevel,
)
from listing_normalizer.models.platform import CollectionMode, PlatformSpec
from listing_normalizer.models.raw import RawRecord
from listing_normalizer.models.run import RunMetadata, RunMetrics, RunResult, RunSample, Thresholds

__all__ = [
    "AREA_CLAIMED_VALUES",
    "CollectionMode",
    "FieldHintSchema",
    "NormalizedListing",
    "PlatformSpec",
    "RawRecord",
    "RunMetadata",
    "RunMetrics",
    "RunResult",
    "RunSample",
    "Thresholds",
    "Violation",
    "ViolationCode",
    "ViolationLevel",
]
