"""Unit tests for listing validation and run metrics."""

from listing_normalizer.models.listing import NormalizedListing, ViolationCode, ViolationLevel
from listing_normalizer.models.run import RunMetrics, Thresholds
from listing_normalizer.validation import (
    RecordCounters,
    build_metrics,
    check_thresholds,
    rate,
    required_fields_pass,
    validate_listing,
)

COMPLETE = {
    "source_ref": "1",
    "address_text": "서울 노원구",
    "rent_amount": 40.0,
    "area_exclusive_m2": 33.0,
    "image_urls": ["https://a.com/x.jpg"],
}


def _listing(**kwargs) -> NormalizedListing:
    listing = NormalizedListing(platform_code="test", **kwargs)
    listing.validation = validate_listing(listing)
    return listing


class TestValidateListing:
    """Tests for validate_listing."""

    def test_empty_listing(self) -> None:
        """An empty listing gets one warning per missing concern."""
        codes = {v.code for v in _listing().validation}
        assert codes == {
            ViolationCode.ADDRESS_NORMALIZE_FAIL,
            ViolationCode.PRICE_PARSE_FAIL,
            ViolationCode.AREA_PARSE_FAIL,
            ViolationCode.REQ_FIELD_MISSING,
            ViolationCode.IMAGE_URL_INVALID,
        }
        assert all(v.level == ViolationLevel.WARN for v in _listing().validation)

    def test_complete_listing(self) -> None:
        """A complete listing has no violations."""
        assert _listing(**COMPLETE).validation == []

    def test_malformed_image_url(self) -> None:
        """Malformed URLs are reported with the offending values."""
        listing = _listing(**{**COMPLETE, "image_urls": ["https://a.com/x.jpg", "ftp://a.com/y.jpg"]})
        assert len(listing.validation) == 1
        violation = listing.validation[0]
        assert violation.code == ViolationCode.IMAGE_URL_INVALID
        assert violation.message == "이미지 URL 형식 불일치"
        assert violation.detail["bad_urls"] == ["ftp://a.com/y.jpg"]

    def test_messages_are_korean(self) -> None:
        """Address failures carry the Korean message."""
        listing = _listing(**{**COMPLETE, "address_text": None})
        assert listing.validation[0].message == "주소 정규화 실패"


class TestRates:
    """Tests for rate and required_fields_pass."""

    def test_empty_run_rate(self) -> None:
        """Rates over no items are 0."""
        assert rate([], required_fields_pass) == 0.0

    def test_required_fields(self) -> None:
        """Address, price and area are required."""
        assert required_fields_pass(_listing(**COMPLETE))
        assert not required_fields_pass(_listing(**{**COMPLETE, "rent_amount": None}))


class TestBuildMetrics:
    """Tests for build_metrics and check_thresholds."""

    def test_counts_and_histograms(self) -> None:
        """Record failures and item violations share one histogram."""
        counters = RecordCounters(raw_records=4, parsed_raw_records=3, unmapped_records=0)
        counters.record_failure(ViolationCode.RECORD_PARSE_FAIL.value, json_error=True)
        counters.record_failure(ViolationCode.SOURCE_ACCESS_BLOCKED.value)
        items = [_listing(**COMPLETE), _listing()]

        metrics = build_metrics(items, counters, Thresholds())

        assert metrics.parse_failure == 2
        assert metrics.record_parse_failures == 1
        assert metrics.normalize_failures == 1
        assert metrics.normalized_items == 2
        assert metrics.required_fields_rate == 0.5
        assert metrics.image_presence_rate == 0.5
        assert metrics.violation_code_counts["RECORD_PARSE_FAIL"] == 1
        assert metrics.violation_code_counts["SOURCE_ACCESS_BLOCKED"] == 1
        assert metrics.violation_code_counts["PRICE_PARSE_FAIL"] == 1
        assert metrics.error_counts == {"RECORD_PARSE_FAIL:ERROR": 1, "SOURCE_ACCESS_BLOCKED:ERROR": 1}
        assert list(metrics.violation_code_counts) == sorted(metrics.violation_code_counts)

    def test_breaches_reported(self) -> None:
        """Rates under thresholds are listed but nothing fails."""
        metrics = build_metrics([_listing(**COMPLETE), _listing()], RecordCounters(), Thresholds())
        assert "required_fields_rate 0.500 < 0.850" in metrics.threshold_breaches
        assert any(b.startswith("image_rate") for b in metrics.threshold_breaches)

    def test_empty_run_has_no_breaches(self) -> None:
        """An empty run breaches nothing."""
        assert check_thresholds(RunMetrics(), Thresholds()) == []

    def test_image_presence_defaults_to_image_valid_rate(self) -> None:
        """An unset presence threshold follows image_valid_rate."""
        metrics = RunMetrics(normalized_items=1, required_fields_rate=1.0, image_rate=1.0, image_presence_rate=0.5)
        assert check_thresholds(metrics, Thresholds(image_valid_rate=0.4)) == []
        assert check_thresholds(metrics, Thresholds(image_valid_rate=0.4, image_presence_rate=0.6)) == [
            "image_presence_rate 0.500 < 0.600"
        ]
