"""Pytest fixtures for listing-normalizer tests."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from listing_normalizer.adapters import AdapterRegistry, ListingAdapter
from listing_normalizer.models.platform import PlatformSpec


@pytest.fixture
def write_jsonl(tmp_path: Path) -> Callable[..., Path]:
    """Write a JSONL capture file; dict lines are JSON-encoded, str lines written as-is."""

    def _write(lines: list[Any], name: str = "raw.jsonl") -> Path:
        path = tmp_path / name
        encoded = [line if isinstance(line, str) else json.dumps(line, ensure_ascii=False) for line in lines]
        path.write_text("\n".join(encoded) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def registry() -> AdapterRegistry:
    """Registry with the built-in platforms."""
    return AdapterRegistry.default()


@pytest.fixture
def generic_adapter() -> ListingAdapter:
    """Adapter using the default field hints and no platform quirks."""
    return ListingAdapter(PlatformSpec(platform_code="generic", platform_name="Generic"))


@pytest.fixture
def sample_line() -> dict:
    """Minimal capture line with one complete listing."""
    return {
        "payload_json": {
            "id": "123",
            "address": "서울 노원구 월계동",
            "rent": 40,
            "deposit": 1000,
            "area": 33.06,
        },
        "source_url": "https://x",
    }


@pytest.fixture
def dabang_line() -> dict:
    """Dabang list capture: price and area only in free text, address from dongName + sigungu."""
    return {
        "platform_code": "dabang",
        "source_url": "https://www.dabangapp.com/map/onetwo",
        "collected_at": "2025-03-01T10:00:00+09:00",
        "sigungu": "마포구",
        "payload_json": {
            "result": {
                "roomList": [
                    {
                        "id": "r1",
                        "roomTitle": "투룸 채광좋음",
                        "priceTitle": "1억5000/70",
                        "roomDesc": "고층, 10.15m², 관리비 7만",
                        "dongName": "연남동",
                        "imgUrlList": ["https://d1.cloudfront.net/room/a.jpg"],
                    },
                    {
                        "id": "r2",
                        "roomTitle": "원룸",
                        "priceTitle": "500/45",
                        "roomDesc": "저층, 19.8m²",
                        "dongName": "서교동",
                        "imgUrlList": [],
                    },
                ]
            }
        },
    }
