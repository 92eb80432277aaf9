"""Unit tests for adapter options."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from listing_normalizer.config import DEFAULT_MAX_SAMPLES, MIN_SAMPLES, AdapterOptions


class TestAdapterOptions:
    """Tests for AdapterOptions."""

    def test_defaults(self) -> None:
        """Defaults match the documented values."""
        options = AdapterOptions()
        assert options.image_limit == 12
        assert options.max_samples == DEFAULT_MAX_SAMPLES
        assert options.required_fields_rate == 0.85
        assert options.image_valid_rate == 0.9
        assert options.prefer_deposit_first is None

    def test_clamps(self) -> None:
        """image_limit is clamped, max_samples is floored."""
        assert AdapterOptions(image_limit=100).image_limit == 24
        assert AdapterOptions(image_limit=0).image_limit == 1
        assert AdapterOptions(max_samples=5).max_samples == MIN_SAMPLES

    def test_max_candidates_alias(self) -> None:
        """max_candidates is accepted for max_nodes."""
        assert AdapterOptions(max_candidates=50).max_nodes == 50
        assert AdapterOptions(max_nodes=60).max_nodes == 60

    def test_non_positive_limits_rejected(self) -> None:
        """Depth and node limits must be positive."""
        with pytest.raises(ValidationError):
            AdapterOptions(max_depth=0)
        with pytest.raises(ValidationError):
            AdapterOptions(max_nodes=-1)

    def test_thresholds(self) -> None:
        """thresholds() carries the rates; presence defaults to image_valid_rate."""
        thresholds = AdapterOptions(image_valid_rate=0.7).thresholds()
        assert thresholds.image_valid_rate == 0.7
        assert thresholds.effective_image_presence_rate == 0.7


class TestAdapterOptionsFromYaml:
    """Tests for AdapterOptions.from_yaml."""

    def test_nested_layout(self, tmp_path: Path) -> None:
        """Nested thresholds and discovery sections are read."""
        path = tmp_path / "options.yaml"
        path.write_text(
            "image_limit: 5\n"
            "thresholds:\n"
            "  required_fields_rate: 0.5\n"
            "  image_presence_rate: 0.2\n"
            "discovery:\n"
            "  max_depth: 6\n"
            "  max_candidates: 300\n",
            encoding="utf-8",
        )
        options = AdapterOptions.from_yaml(path)
        assert options.image_limit == 5
        assert options.required_fields_rate == 0.5
        assert options.image_presence_rate == 0.2
        assert options.max_depth == 6
        assert options.max_nodes == 300

    def test_flat_layout(self, tmp_path: Path) -> None:
        """Top-level keys work without sections."""
        path = tmp_path / "options.yaml"
        path.write_text("image_valid_rate: 0.5\nmax_nodes: 100\nprefer_deposit_first: true\n", encoding="utf-8")
        options = AdapterOptions.from_yaml(path)
        assert options.image_valid_rate == 0.5
        assert options.max_nodes == 100
        assert options.prefer_deposit_first is True

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty file yields defaults."""
        path = tmp_path / "options.yaml"
        path.write_text("", encoding="utf-8")
        assert AdapterOptions.from_yaml(path) == AdapterOptions()
