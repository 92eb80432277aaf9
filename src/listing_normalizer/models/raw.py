"""Raw capture record representation before normalization."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# Checked in order; the first key present on the line holds the capture payload.
PAYLOAD_KEYS: tuple[str, ...] = ("payload_json", "payload", "_payload", "payloadData", "data", "body")
_META_KEYS = {"platform_code", "source_url", "request_url", "collected_at", "list_data"}


class RawRecord(BaseModel):
    """
    One captured JSONL line.
    Collectors write arbitrary extra keys (e.g. 'sigungu'); they land in `extras`.
    """

    model_config = ConfigDict(frozen=True)

    platform_code: Optional[str] = None
    source_url: Optional[str] = None
    request_url: Optional[str] = None
    collected_at: Optional[str] = None
    payload: Any = None
    list_data: Any = None
    extras: dict[str, Any] = Field(default_factory=dict)

    @property
    def base_url(self) -> str:
        """URL the capture was taken from, used to resolve relative links."""
        return self.source_url or self.request_url or str(self.extras.get("url") or "")

    @classmethod
    def from_line_value(cls, value: Any) -> "RawRecord":
        """Build a record from one decoded JSON line (object or bare value)."""
        if not isinstance(value, dict):
            return cls(payload=value)
        payload_key = next((k for k in PAYLOAD_KEYS if value.get(k) is not None), None)
        if payload_key is not None:
            payload = value[payload_key]
            extras = {k: v for k, v in value.items() if k != payload_key and k not in _META_KEYS}
        else:
            payload = {k: v for k, v in value.items() if k not in _META_KEYS}
            extras = {}
        return cls(
            platform_code=_opt_str(value.get("platform_code")),
            source_url=_opt_str(value.get("source_url")),
            request_url=_opt_str(value.get("request_url")),
            collected_at=_opt_str(value.get("collected_at")),
            payload=payload,
            list_data=value.get("list_data"),
            extras=extras,
        )


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None
