"""Unit tests for AdapterRegistry."""

import pytest

from listing_normalizer.adapters import AdapterRegistry, ListingAdapter
from listing_normalizer.adapters.platforms import DABANG
from listing_normalizer.config import AdapterOptions
from listing_normalizer.models.platform import CollectionMode, PlatformSpec


class TestAdapterRegistry:
    """Tests for AdapterRegistry."""

    def test_get_dabang(self, registry: AdapterRegistry) -> None:
        """Registry returns the dabang descriptor for 'dabang'."""
        assert registry.get("dabang").platform_code == "dabang"

    def test_get_case_insensitive(self, registry: AdapterRegistry) -> None:
        """Registry is case-insensitive and trims whitespace."""
        assert registry.get("Zigbang").platform_code == registry.get(" zigbang ").platform_code

    def test_aliases(self, registry: AdapterRegistry) -> None:
        """Aliases resolve to their platform."""
        assert registry.get("naver_land").platform_code == "naver"
        assert registry.get("KB").platform_code == "kbland"
        assert "naver_land" in registry

    def test_unknown_platform_raises(self, registry: AdapterRegistry) -> None:
        """Unknown platform raises ValueError listing what is available."""
        with pytest.raises(ValueError, match="Unknown platform: homes"):
            registry.get("homes")
        assert "homes" not in registry

    def test_available_platforms(self, registry: AdapterRegistry) -> None:
        """All built-in platforms are registered."""
        assert registry.available_platforms() == [
            "naver",
            "zigbang",
            "dabang",
            "r114",
            "peterpanz",
            "daangn",
            "kbland",
        ]

    def test_collection_modes(self, registry: AdapterRegistry) -> None:
        """KB is marked blocked; the others are collected by automation."""
        assert registry.get("kbland").collection_mode == CollectionMode.BLOCKED
        assert registry.get("naver").collection_mode == CollectionMode.STEALTH_AUTOMATION

    def test_describe(self, registry: AdapterRegistry) -> None:
        """describe() lists each platform with its aliases."""
        rows = {row["platform_code"]: row for row in registry.describe()}
        assert rows["naver"]["aliases"] == ["naver_land"]
        assert rows["kbland"]["collection_mode"] == "BLOCKED"
        assert rows["dabang"]["platform_name"] == "다방"

    def test_register_and_alias(self) -> None:
        """Custom platforms can be registered and aliased."""
        registry = AdapterRegistry()
        registry.register(PlatformSpec(platform_code="homes", platform_name="Homes"))
        registry.add_alias("h", "homes")
        assert registry.get("h").platform_name == "Homes"

    def test_alias_to_unknown_platform_raises(self) -> None:
        """Aliases must point at a registered platform."""
        with pytest.raises(ValueError, match="unknown platform"):
            AdapterRegistry().add_alias("x", "missing")

    def test_create_adapter(self, registry: AdapterRegistry) -> None:
        """create_adapter binds the descriptor and options."""
        options = AdapterOptions(image_limit=3)
        adapter = registry.create_adapter("dabang", options)
        assert isinstance(adapter, ListingAdapter)
        assert adapter.spec is DABANG
        assert adapter.options.image_limit == 3
        assert adapter.prefer_deposit_first is True

    def test_options_override_platform_policy(self, registry: AdapterRegistry) -> None:
        """Options override the platform's price direction and site root."""
        adapter = registry.create_adapter(
            "dabang", AdapterOptions(prefer_deposit_first=False, site_root="https://cdn.example.com")
        )
        assert adapter.prefer_deposit_first is False
        assert adapter.site_root == "https://cdn.example.com"
