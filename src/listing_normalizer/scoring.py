"""Completeness scoring and run-wide deduplication of normalized listings."""

import hashlib
import json
import logging
from typing import Literal, Optional

from listing_normalizer.models.listing import NormalizedListing

logger = logging.getLogger(__name__)

# Field-presence weights; a listing with images beats one without.
SCORE_WEIGHTS: dict[str, int] = {
    "address": 15,
    "rent": 20,
    "deposit": 10,
    "area_exclusive": 15,
    "area_gross": 5,
    "floor": 5,
    "images": 40,
}

OfferOutcome = Literal["added", "replaced", "duplicate", "capped"]


def score_listing(listing: NormalizedListing) -> int:
    """Weighted sum of the fields the listing actually carries."""
    present = {
        "address": listing.has_address,
        "rent": listing.rent_amount is not None,
        "deposit": listing.deposit_amount is not None,
        "area_exclusive": listing.area_exclusive_m2 is not None,
        "area_gross": listing.area_gross_m2 is not None,
        "floor": listing.floor is not None,
        "images": bool(listing.image_urls),
    }
    return sum(SCORE_WEIGHTS[name] for name, ok in present.items() if ok)


def fingerprint(listing: NormalizedListing) -> str:
    """Stable hash of the fields that identify a listing without an id."""
    key_fields = (
        listing.address_text,
        listing.address_code,
        listing.rent_amount,
        listing.deposit_amount,
        listing.primary_area,
    )
    return hashlib.sha256(json.dumps(key_fields, ensure_ascii=False).encode()).hexdigest()[:16]


def dedup_key(listing: NormalizedListing) -> str:
    """External id when present, otherwise the field fingerprint."""
    if listing.external_id:
        return f"id:{listing.external_id}"
    return f"fp:{fingerprint(listing)}"


class Deduplicator:
    """
    Keeps one listing per dedup key for a whole run.
    A later listing replaces the kept one only when it scores strictly higher,
    and takes over its slot so output order follows first appearance.
    """

    def __init__(self, max_items: Optional[int] = None):
        self.max_items = max_items
        self._slots: list[NormalizedListing] = []
        self._index: dict[str, tuple[int, int]] = {}

    def __len__(self) -> int:
        return len(self._slots)

    @property
    def items(self) -> list[NormalizedListing]:
        return list(self._slots)

    @property
    def full(self) -> bool:
        return self.max_items is not None and len(self._slots) >= self.max_items

    def offer(self, listing: NormalizedListing) -> OfferOutcome:
        key = dedup_key(listing)
        score = score_listing(listing)
        existing = self._index.get(key)
        if existing is not None:
            slot, kept_score = existing
            if score > kept_score:
                logger.debug("Replacing %s (score %d -> %d)", key, kept_score, score)
                self._slots[slot] = listing
                self._index[key] = (slot, score)
                return "replaced"
            return "duplicate"
        if self.full:
            return "capped"
        self._index[key] = (len(self._slots), score)
        self._slots.append(listing)
        return "added"
