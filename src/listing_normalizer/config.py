"""Adapter options: quality thresholds, discovery limits and per-run overrides."""

from pathlib import Path
from typing import Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for config loading. Run: pip install pyyaml"
    ) from e
from pydantic import AliasChoices, BaseModel, Field, field_validator

from listing_normalizer.discovery import DEFAULT_MAX_DEPTH, DEFAULT_MAX_NODES, LISTING_RATIO_THRESHOLD
from listing_normalizer.models.run import Thresholds
from listing_normalizer.parsers.images import DEFAULT_IMAGE_LIMIT, clamp_image_limit

CONFIG_ENV_VAR = "LISTING_NORMALIZER_CONFIG"
DEFAULT_MAX_SAMPLES = 200
MIN_SAMPLES = 20


class AdapterOptions(BaseModel):
    """Options shared by every platform adapter."""

    image_limit: int = Field(default=DEFAULT_IMAGE_LIMIT, description="Clamped to 1..24")
    max_samples: int = Field(default=DEFAULT_MAX_SAMPLES, description="Never below 20")

    required_fields_rate: float = 0.85
    image_valid_rate: float = 0.9
    image_presence_rate: Optional[float] = None

    max_depth: int = DEFAULT_MAX_DEPTH
    max_nodes: int = Field(
        default=DEFAULT_MAX_NODES,
        validation_alias=AliasChoices("max_nodes", "max_candidates"),
    )
    listing_ratio_threshold: float = LISTING_RATIO_THRESHOLD

    prefer_deposit_first: Optional[bool] = Field(
        default=None,
        description="Overrides the platform's price-pair direction when set",
    )
    site_root: Optional[str] = Field(default=None, description="Overrides the platform's site root")

    @field_validator("image_limit", mode="before")
    @classmethod
    def _clamp_image_limit(cls, v):
        return clamp_image_limit(None if v is None else int(v))

    @field_validator("max_samples", mode="before")
    @classmethod
    def _floor_max_samples(cls, v):
        if v is None:
            return DEFAULT_MAX_SAMPLES
        return max(MIN_SAMPLES, int(v))

    @field_validator("max_depth", "max_nodes", mode="before")
    @classmethod
    def _positive(cls, v):
        if v is None or int(v) < 1:
            raise ValueError("must be a positive integer")
        return int(v)

    def thresholds(self) -> Thresholds:
        return Thresholds(
            required_fields_rate=self.required_fields_rate,
            image_valid_rate=self.image_valid_rate,
            image_presence_rate=self.image_presence_rate,
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AdapterOptions":
        """Load options from YAML. Supports nested (thresholds/discovery) or flat structure."""
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        thresholds = data.get("thresholds", {}) or {}
        discovery = data.get("discovery", {}) or {}

        def _get(key: str, nested: dict, top: dict, default=None):
            return nested.get(key, top.get(key, default))

        flat: dict = {}
        for key in ("required_fields_rate", "image_valid_rate", "image_presence_rate"):
            value = _get(key, thresholds, data)
            if value is not None:
                flat[key] = value
        max_nodes = _get("max_nodes", discovery, data) or _get("max_candidates", discovery, data)
        if max_nodes is not None:
            flat["max_nodes"] = max_nodes
        for key in ("max_depth", "listing_ratio_threshold"):
            value = _get(key, discovery, data)
            if value is not None:
                flat[key] = value
        for key in ("image_limit", "max_samples", "prefer_deposit_first", "site_root"):
            if data.get(key) is not None:
                flat[key] = data[key]
        return cls.model_validate(flat)
