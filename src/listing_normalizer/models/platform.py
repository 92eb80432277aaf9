"""Platform descriptor: identity, collection mode and field hints."""

from enum import Enum
from typing import Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from listing_normalizer.models.hints import FieldHintSchema
from listing_normalizer.parsers.currency import MoneyUnit


class CollectionMode(str, Enum):
    """How raw captures for a platform are obtained upstream."""

    API = "API"
    STEALTH_AUTOMATION = "STEALTH_AUTOMATION"
    BLOCKED = "BLOCKED"


class PlatformSpec(BaseModel):
    """Everything the generic adapter needs to know about one listing source."""

    model_config = ConfigDict(frozen=True)

    platform_code: str = Field(..., description="Lowercase registry key, e.g. 'zigbang'")
    platform_name: str = Field(..., description="Display name, e.g. '직방'")
    collection_mode: CollectionMode = CollectionMode.STEALTH_AUTOMATION
    field_hints: FieldHintSchema = Field(default_factory=FieldHintSchema)
    notes: list[str] = Field(default_factory=list)

    prefer_deposit_first: bool = Field(
        default=False,
        description="Read 'A/B' price pairs as deposit/rent when no keyword decides",
    )
    money_unit: MoneyUnit = Field(default="manwon", description="Unit of bare numeric prices in payloads")
    site_root: Optional[str] = Field(default=None, description="Base for relative image and detail links")
    detail_url_template: Optional[str] = Field(
        default=None,
        description="Canonical listing URL with a '{ref}' placeholder",
    )

    def detail_url(self, source_ref: Optional[str]) -> Optional[str]:
        """Canonical detail URL for a listing id, if the platform has a template."""
        if not self.detail_url_template or not source_ref:
            return None
        return self.detail_url_template.format(ref=quote(source_ref, safe=""))
