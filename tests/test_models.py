"""Unit tests for data models and errors."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from listing_normalizer.errors import (
    NormalizerError,
    RawFileNotFoundError,
    SourceAccessBlockedError,
    error_code,
)
from listing_normalizer.models.hints import FieldHintSchema
from listing_normalizer.models.listing import NormalizedListing, ViolationCode
from listing_normalizer.models.platform import PlatformSpec
from listing_normalizer.models.run import RunMetadata, RunMetrics, RunResult, RunSample


class TestNormalizedListing:
    """Tests for NormalizedListing model."""

    def test_minimal_creation(self) -> None:
        """Only platform_code is required."""
        listing = NormalizedListing(platform_code="dabang")
        assert listing.source_ref is None
        assert listing.source_url == ""
        assert listing.area_claimed == "estimated"
        assert listing.image_urls == []
        assert not listing.has_price
        assert not listing.has_area
        assert not listing.has_address

    def test_area_claimed_is_closed(self) -> None:
        """area_claimed accepts only the four labels."""
        with pytest.raises(ValidationError):
            NormalizedListing(platform_code="x", area_claimed="approx")

    def test_primary_area(self) -> None:
        """Exclusive area wins over gross area."""
        assert NormalizedListing(platform_code="x", area_gross_m2=40.0).primary_area == 40.0
        listing = NormalizedListing(platform_code="x", area_exclusive_m2=30.0, area_gross_m2=40.0)
        assert listing.primary_area == 30.0

    def test_blank_address_is_missing(self) -> None:
        """Whitespace addresses do not count."""
        assert not NormalizedListing(platform_code="x", address_text="  ").has_address


class TestViolationCode:
    """Tests for ViolationCode."""

    def test_values(self) -> None:
        """Eight stable codes."""
        assert len(ViolationCode.values()) == 8
        assert "SOURCE_ACCESS_BLOCKED" in ViolationCode.values()


class TestFieldHintSchema:
    """Tests for FieldHintSchema."""

    def test_overrides_replace_lists(self) -> None:
        """Overrides replace alias lists."""
        hints = FieldHintSchema().with_overrides(rent_keys=["monthly_fee"])
        assert hints.rent_keys == ["monthly_fee"]
        assert FieldHintSchema().rent_keys[0] == "rent"

    def test_list_hint_paths_extended(self) -> None:
        """Container paths are extended, not replaced."""
        hints = FieldHintSchema().with_overrides(list_hint_paths=["roomList", "items"])
        assert "roomList" in hints.list_hint_paths
        assert "items" in hints.list_hint_paths
        assert hints.list_hint_paths.count("items") == 1

    def test_listing_keys_use_first_path_segment(self) -> None:
        """Dotted aliases contribute their first segment."""
        hints = FieldHintSchema().with_overrides(deposit_keys=["price_info.deposit"])
        keys = hints.listing_keys()
        assert "price_info" in keys
        assert "images" not in keys


class TestPlatformSpec:
    """Tests for PlatformSpec."""

    def test_detail_url(self) -> None:
        """Detail URLs are built from the template with a quoted ref."""
        spec = PlatformSpec(
            platform_code="x",
            platform_name="X",
            detail_url_template="https://x.com/room/{ref}",
        )
        assert spec.detail_url("123") == "https://x.com/room/123"
        assert spec.detail_url("a/b") == "https://x.com/room/a%2Fb"
        assert spec.detail_url(None) is None

    def test_no_template(self) -> None:
        """Without a template there is no detail URL."""
        assert PlatformSpec(platform_code="x", platform_name="X").detail_url("1") is None


class TestRunResult:
    """Tests for RunResult serialization."""

    def test_to_json_dict_drops_empty_sample_fields(self) -> None:
        """Samples serialize without null fields; timestamps become strings."""
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        result = RunResult(
            metadata=RunMetadata(
                platform_code="x",
                platform_name="X",
                collection_mode="API",
                source_file="raw.jsonl",
                started_at=now,
                generated_at=now,
            ),
            stats=RunMetrics(),
            samples=[RunSample(parse_status="fail", line_number=2, error_code="RECORD_PARSE_FAIL")],
        )
        data = result.to_json_dict()
        assert data["samples"] == [{"parse_status": "fail", "line_number": 2, "error_code": "RECORD_PARSE_FAIL"}]
        assert isinstance(data["metadata"]["started_at"], str)
        assert data["items"] == []


class TestErrors:
    """Tests for error codes."""

    def test_error_code_mapping(self) -> None:
        """Known codes map through; anything else is NORMALIZE_EXCEPTION."""
        assert error_code(SourceAccessBlockedError("blocked")) == "SOURCE_ACCESS_BLOCKED"
        assert error_code(ValueError("boom")) == "NORMALIZE_EXCEPTION"
        assert error_code(NormalizerError("x", code="PRICE_PARSE_FAIL")) == "PRICE_PARSE_FAIL"

    def test_raw_file_not_found(self) -> None:
        """RawFileNotFoundError is a FileNotFoundError with its own code."""
        err = RawFileNotFoundError("RAW_FILE_NOT_FOUND: x")
        assert isinstance(err, FileNotFoundError)
        assert err.code == "RAW_FILE_NOT_FOUND"
        assert str(err) == "RAW_FILE_NOT_FOUND: x"
