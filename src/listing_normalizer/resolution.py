"""Alias-based field resolution: raw values only, no parsing."""

from dataclasses import dataclass
from typing import Optional

from listing_normalizer.models.hints import FieldHintSchema
from listing_normalizer.values import Value, pick, pick_text


@dataclass(frozen=True)
class ResolvedFields:
    """Raw values resolved from one candidate, ready for the value parsers."""

    source_ref: Optional[str] = None
    title: Optional[str] = None
    address: Optional[str] = None
    address_composed: bool = False
    city: Optional[str] = None
    district: Optional[str] = None
    neighborhood: Optional[str] = None
    address_code: Optional[str] = None
    lease_type: Value = None
    rent: Value = None
    deposit: Value = None
    price_text: Value = None
    area_exclusive: Value = None
    area_gross: Value = None
    area_text: Value = None
    area_type: Optional[str] = None
    room_count: Value = None
    bathroom_count: Value = None
    floor: Value = None
    total_floor: Value = None
    direction: Value = None
    building_use: Value = None
    building_name: Optional[str] = None
    source_url: Optional[str] = None
    latitude: Value = None
    longitude: Value = None
    raw_text: Optional[str] = None


def compose_address(city: Optional[str], district: Optional[str], neighborhood: Optional[str]) -> Optional[str]:
    """Join the address components that are present, skipping repeats."""
    parts: list[str] = []
    for part in (city, district, neighborhood):
        if part and part not in parts:
            parts.append(part)
    return " ".join(parts) or None


def resolve_fields(
    candidate: Value,
    hints: FieldHintSchema,
    side_channel: Value = None,
    context: Optional[dict] = None,
) -> ResolvedFields:
    """
    Resolve each semantic field by trying its aliases in order.

    The address falls back to city/district/neighborhood composition. When the
    candidate lacks an address, price or area entirely, the same aliases are
    tried against `side_channel` (a record's `list_data`). Address components
    missing from both may come from `context` (a record's extra top-level keys,
    e.g. a collector-written 'sigungu'), but context alone never makes an address.
    """
    side = side_channel if isinstance(side_channel, dict) else None

    def text(aliases: list[str]) -> Optional[str]:
        return pick_text(candidate, aliases)

    def components(source: Value) -> list[Optional[str]]:
        return [
            pick_text(source, hints.address_city_keys),
            pick_text(source, hints.address_district_keys),
            pick_text(source, hints.address_neighborhood_keys),
        ]

    def compose(own: list[Optional[str]]) -> Optional[str]:
        fallback = components(context) if context else [None, None, None]
        return compose_address(*(mine or theirs for mine, theirs in zip(own, fallback)))

    parts = components(candidate)
    address = text(hints.address_keys)
    composed = False
    if address is None and any(parts):
        address, composed = compose(parts), True
    if address is None and side is not None:
        address = pick_text(side, hints.address_keys)
        if address is None:
            parts = [mine or theirs for mine, theirs in zip(parts, components(side))]
            if any(parts):
                address, composed = compose(parts), True
    city, district, neighborhood = parts

    rent = pick(candidate, hints.rent_keys)
    deposit = pick(candidate, hints.deposit_keys)
    price_text = pick(candidate, hints.price_text_keys)
    if side is not None and rent is None and deposit is None and price_text is None:
        rent = pick(side, hints.rent_keys)
        deposit = pick(side, hints.deposit_keys)
        price_text = pick(side, hints.price_text_keys)

    area_exclusive = pick(candidate, hints.area_exclusive_keys)
    area_gross = pick(candidate, hints.area_gross_keys)
    area_text = pick(candidate, hints.area_text_keys)
    if side is not None and area_exclusive is None and area_gross is None and area_text is None:
        area_exclusive = pick(side, hints.area_exclusive_keys)
        area_gross = pick(side, hints.area_gross_keys)
        area_text = pick(side, hints.area_text_keys)

    return ResolvedFields(
        source_ref=text(hints.source_ref_keys),
        title=text(hints.title_keys) or (pick_text(side, hints.title_keys) if side else None),
        address=address,
        address_composed=composed,
        city=city,
        district=district,
        neighborhood=neighborhood,
        address_code=text(hints.address_code_keys),
        lease_type=pick(candidate, hints.lease_type_keys),
        rent=rent,
        deposit=deposit,
        price_text=price_text,
        area_exclusive=area_exclusive,
        area_gross=area_gross,
        area_text=area_text,
        area_type=text(hints.area_type_keys),
        room_count=pick(candidate, hints.room_count_keys),
        bathroom_count=pick(candidate, hints.bathroom_count_keys),
        floor=pick(candidate, hints.floor_keys),
        total_floor=pick(candidate, hints.total_floor_keys),
        direction=pick(candidate, hints.direction_keys),
        building_use=pick(candidate, hints.building_use_keys),
        building_name=text(hints.building_name_keys),
        source_url=text(hints.source_url_keys),
        latitude=pick(candidate, hints.latitude_keys),
        longitude=pick(candidate, hints.longitude_keys),
        raw_text=text(hints.raw_text_keys),
    )
