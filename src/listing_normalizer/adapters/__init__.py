"""Platform adapters and the platform registry."""

from listing_normalizer.adapters.base import ListingAdapter, detect_access_block
from listing_normalizer.adapters.registry import AdapterRegistry

__all__ = ["AdapterRegistry", "ListingAdapter", "detect_access_block"]
