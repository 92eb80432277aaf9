"""Per-listing violations and per-run quality metrics."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable

from listing_normalizer.models.listing import NormalizedListing, Violation, ViolationCode, ViolationLevel
from listing_normalizer.models.run import RunMetrics, Thresholds
from listing_normalizer.parsers.images import is_valid_image_url

logger = logging.getLogger(__name__)


def validate_listing(listing: NormalizedListing) -> list[Violation]:
    """Data-quality warnings for one listing. Never raises."""
    violations: list[Violation] = []

    if not listing.has_address:
        violations.append(
            Violation(
                code=ViolationCode.ADDRESS_NORMALIZE_FAIL,
                message="주소 정규화 실패",
                detail={"address_text": listing.address_text or None},
            )
        )
    if not listing.has_price:
        violations.append(
            Violation(
                code=ViolationCode.PRICE_PARSE_FAIL,
                message="가격 파싱 실패",
                detail={"rent_amount": listing.rent_amount, "deposit_amount": listing.deposit_amount},
            )
        )
    if not listing.has_area:
        violations.append(
            Violation(
                code=ViolationCode.AREA_PARSE_FAIL,
                message="면적 파싱 실패",
                detail={"area_exclusive_m2": listing.area_exclusive_m2, "area_gross_m2": listing.area_gross_m2},
            )
        )
    if not listing.source_ref:
        violations.append(
            Violation(
                code=ViolationCode.REQ_FIELD_MISSING,
                message="source_ref 누락",
                detail={"source_ref": None},
            )
        )
    if not listing.image_urls:
        violations.append(
            Violation(
                code=ViolationCode.IMAGE_URL_INVALID,
                message="이미지 URL 미수집",
                detail={"image_urls": []},
            )
        )
    else:
        bad = [url for url in listing.image_urls if not is_valid_image_url(url)]
        if bad:
            violations.append(
                Violation(
                    code=ViolationCode.IMAGE_URL_INVALID,
                    message="이미지 URL 형식 불일치",
                    detail={"bad_urls": bad},
                )
            )
    return violations


def required_fields_pass(listing: NormalizedListing) -> bool:
    """Address, some price and some area are all present."""
    return listing.has_address and listing.has_price and listing.has_area


def has_valid_images(listing: NormalizedListing) -> bool:
    return bool(listing.image_urls) and all(is_valid_image_url(url) for url in listing.image_urls)


def rate(items: list[NormalizedListing], predicate: Callable[[NormalizedListing], bool]) -> float:
    """Share of items satisfying predicate; 0.0 for an empty run."""
    if not items:
        return 0.0
    return sum(1 for item in items if predicate(item)) / len(items)


@dataclass
class RecordCounters:
    """Record-level tallies accumulated while reading one file."""

    raw_records: int = 0
    parsed_raw_records: int = 0
    record_parse_failures: int = 0
    normalize_failures: int = 0
    unmapped_records: int = 0
    failure_codes: Counter = field(default_factory=Counter)

    @property
    def parse_failure(self) -> int:
        return self.record_parse_failures + self.normalize_failures

    def record_failure(self, code: str, *, json_error: bool = False) -> None:
        if json_error:
            self.record_parse_failures += 1
        else:
            self.normalize_failures += 1
        self.failure_codes[code] += 1


def check_thresholds(metrics: RunMetrics, thresholds: Thresholds) -> list[str]:
    """Human-readable breaches; an empty run breaches nothing."""
    if metrics.normalized_items == 0:
        return []
    checks = (
        ("required_fields_rate", metrics.required_fields_rate, thresholds.required_fields_rate),
        ("image_rate", metrics.image_rate, thresholds.image_valid_rate),
        ("image_presence_rate", metrics.image_presence_rate, thresholds.effective_image_presence_rate),
    )
    return [f"{name} {actual:.3f} < {minimum:.3f}" for name, actual, minimum in checks if actual < minimum]


def build_metrics(
    items: list[NormalizedListing],
    counters: RecordCounters,
    thresholds: Thresholds,
    duration_ms: int = 0,
) -> RunMetrics:
    """
    Aggregate the final items and record counters into RunMetrics.
    The violation histogram covers surviving items plus record-level failures;
    `error_counts` holds the ERROR-level part of it keyed as "<CODE>:ERROR".
    """
    violation_counts: Counter = Counter(counters.failure_codes)
    error_counts: Counter = Counter({f"{code}:ERROR": n for code, n in counters.failure_codes.items()})
    for item in items:
        for v in item.validation:
            violation_counts[v.code.value] += 1
            if v.level == ViolationLevel.ERROR:
                error_counts[f"{v.code.value}:ERROR"] += 1

    metrics = RunMetrics(
        raw_records=counters.raw_records,
        parsed_raw_records=counters.parsed_raw_records,
        record_parse_failures=counters.record_parse_failures,
        normalize_failures=counters.normalize_failures,
        parse_failure=counters.parse_failure,
        unmapped_records=counters.unmapped_records,
        normalized_items=len(items),
        required_fields_rate=rate(items, required_fields_pass),
        address_rate=rate(items, lambda i: i.has_address),
        image_rate=rate(items, has_valid_images),
        image_presence_rate=rate(items, lambda i: bool(i.image_urls)),
        price_rate=rate(items, lambda i: i.has_price),
        area_rate=rate(items, lambda i: i.has_area),
        violation_code_counts=dict(sorted(violation_counts.items())),
        error_counts=dict(sorted(error_counts.items())),
        duration_ms=duration_ms,
    )
    metrics.threshold_breaches = check_thresholds(metrics, thresholds)
    for breach in metrics.threshold_breaches:
        logger.warning("Quality threshold not met: %s", breach)
    return metrics
