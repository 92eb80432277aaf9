"""Registry mapping platform codes to platform descriptors and adapters."""

from typing import Iterable, Optional

from listing_normalizer.adapters.base import ListingAdapter
from listing_normalizer.adapters.platforms import BUILTIN_ALIASES, BUILTIN_PLATFORMS
from listing_normalizer.config import AdapterOptions
from listing_normalizer.models.platform import PlatformSpec


class AdapterRegistry:
    """
    Platform code -> PlatformSpec. Build one at startup (usually via default())
    and pass it to whatever needs adapters; there is no global instance.
    """

    def __init__(
        self,
        platforms: Iterable[PlatformSpec] = (),
        aliases: Optional[dict[str, str]] = None,
    ):
        self._platforms: dict[str, PlatformSpec] = {}
        self._aliases: dict[str, str] = {}
        for spec in platforms:
            self.register(spec)
        for alias, target in (aliases or {}).items():
            self.add_alias(alias, target)

    @classmethod
    def default(cls) -> "AdapterRegistry":
        """Registry with every built-in platform."""
        return cls(BUILTIN_PLATFORMS, BUILTIN_ALIASES)

    def register(self, spec: PlatformSpec) -> None:
        """Add or replace a platform."""
        self._platforms[spec.platform_code.lower()] = spec

    def add_alias(self, alias: str, platform_code: str) -> None:
        if platform_code.lower() not in self._platforms:
            raise ValueError(f"Cannot alias {alias!r} to unknown platform {platform_code!r}")
        self._aliases[alias.lower()] = platform_code.lower()

    def resolve_code(self, platform_code: str) -> str:
        key = (platform_code or "").strip().lower()
        return self._aliases.get(key, key)

    def get(self, platform_code: str) -> PlatformSpec:
        """Platform descriptor for a code or alias. Raises ValueError if unknown."""
        spec = self._platforms.get(self.resolve_code(platform_code))
        if spec is None:
            raise ValueError(f"Unknown platform: {platform_code}. Available: {self.available_platforms()}")
        return spec

    def __contains__(self, platform_code: str) -> bool:
        return self.resolve_code(platform_code) in self._platforms

    def available_platforms(self) -> list[str]:
        """Registered platform codes, in registration order."""
        return list(self._platforms.keys())

    def describe(self) -> list[dict]:
        """One summary row per platform, for listings and the CLI."""
        return [
            {
                "platform_code": spec.platform_code,
                "platform_name": spec.platform_name,
                "collection_mode": spec.collection_mode.value,
                "aliases": sorted(a for a, target in self._aliases.items() if target == code),
                "notes": list(spec.notes),
            }
            for code, spec in self._platforms.items()
        ]

    def create_adapter(self, platform_code: str, options: Optional[AdapterOptions] = None) -> ListingAdapter:
        """Adapter for a platform code or alias. Raises ValueError if unknown."""
        return ListingAdapter(self.get(platform_code), options)
