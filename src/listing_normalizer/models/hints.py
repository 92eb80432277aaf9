"""Per-platform field alias schema consumed by discovery and resolution."""

from pydantic import BaseModel, ConfigDict, Field


def _keys(*keys: str):
    return Field(default_factory=lambda: list(keys))


class FieldHintSchema(BaseModel):
    """
    Ordered alias lists, one per semantic listing field.
    An alias is a direct key ("deposit") or a dotted path ("price_info.deposit").
    The first alias yielding a non-null, non-blank value wins.
    """

    model_config = ConfigDict(frozen=True)

    source_ref_keys: list[str] = _keys(
        "id", "article_id", "articleId", "articleNo", "atclNo", "listingId", "propertyId", "itemId", "_id"
    )
    title_keys: list[str] = _keys(
        "title", "name", "subject", "headline", "roomTitle", "article_title", "articleName", "atclNm"
    )
    address_keys: list[str] = _keys(
        "address",
        "address_text",
        "addressText",
        "address_raw",
        "addr",
        "addrText",
        "address_detail",
        "road_address",
        "roadAddress",
        "jibun_address",
        "jibunAddress",
        "fullAddress",
        "property_address",
    )
    address_city_keys: list[str] = _keys("sido", "sidoNm", "city", "city_name", "province")
    address_district_keys: list[str] = _keys("sigungu", "gu", "district", "borough", "region_name")
    address_neighborhood_keys: list[str] = _keys("dong", "dongName", "town", "neighborhood", "읍면동")
    address_code_keys: list[str] = _keys("address_code", "cortarNo", "bjdCode", "legalDongCode")
    lease_type_keys: list[str] = _keys(
        "lease_type", "leaseType", "trade_type", "tradeType", "tradeTypeName", "contract_type", "listing_type"
    )
    rent_keys: list[str] = _keys("rent", "monthly_rent", "monthlyRent", "rentPrice", "rentPrc", "월세", "월세금액")
    deposit_keys: list[str] = _keys("deposit", "depositPrice", "deposit_price", "보증금", "보증금금액")
    price_text_keys: list[str] = _keys("priceTitle", "price_text", "priceText", "dealOrWarrantPrc", "price")
    area_exclusive_keys: list[str] = _keys(
        "area_exclusive_m2",
        "areaExclusive",
        "exclusive_area",
        "exclusiveArea",
        "exclusiveAreaM2",
        "전용면적",
        "spc1",
        "area1",
        "area",
    )
    area_gross_keys: list[str] = _keys(
        "area_gross_m2", "areaGross", "gross_area", "grossArea", "supplyArea", "공급면적", "spc2", "area2"
    )
    area_text_keys: list[str] = _keys("roomDesc", "area_text", "areaText", "size_text")
    area_type_keys: list[str] = _keys("area_claimed", "area_type", "areaType")
    room_count_keys: list[str] = _keys("room_count", "roomCount", "roomCnt", "rooms", "room", "room_type")
    bathroom_count_keys: list[str] = _keys("bathroom_count", "bathroomCount", "bathroom", "bathCnt")
    floor_keys: list[str] = _keys("floor", "floorInfo", "flrInfo", "floor_text", "floorText", "current_floor")
    total_floor_keys: list[str] = _keys("total_floor", "totalFloor", "floors_total", "totalFloorCount")
    direction_keys: list[str] = _keys("direction", "direction_text", "facing", "house_facing", "houseFacing")
    building_use_keys: list[str] = _keys(
        "building_use", "buildingUse", "house_type", "houseType", "houseTypeNm", "building_type", "buildingType"
    )
    building_name_keys: list[str] = _keys("building_name", "buildingName", "complexName", "building", "complex")
    source_url_keys: list[str] = _keys(
        "source_url", "sourceUrl", "url", "link", "detail_url", "detailUrl", "articleUrl", "article_url", "href"
    )
    latitude_keys: list[str] = _keys("lat", "latitude", "위도")
    longitude_keys: list[str] = _keys("lng", "lon", "longitude", "경도")
    image_keys: list[str] = _keys(
        "images",
        "image",
        "imageList",
        "image_list",
        "img",
        "imgList",
        "imgUrlList",
        "thumb",
        "thumbnail",
        "photo",
        "photoList",
        "imageUrl",
        "image_url",
        "imgUrl",
        "representativeImgUrl",
    )
    raw_text_keys: list[str] = _keys(
        "description", "desc", "text", "comment", "detail", "detailText", "articleText", "content", "raw_text"
    )
    list_hint_paths: list[str] = _keys(
        "items",
        "itemList",
        "list",
        "lists",
        "data",
        "result",
        "results",
        "payload",
        "payload_json",
        "response",
        "body",
        "articles",
        "articleList",
        "article_list",
        "complexes",
        "complexList",
        "houses",
        "properties",
        "property_list",
    )

    def listing_keys(self) -> frozenset[str]:
        """Top-level keys whose presence makes an object look like a single listing."""
        keys: set[str] = set()
        for name in LISTING_KEY_FIELDS:
            for alias in getattr(self, name):
                keys.add(alias.split(".", 1)[0])
        return frozenset(keys)

    def with_overrides(self, **overrides: list[str]) -> "FieldHintSchema":
        """
        Return a copy with the given alias lists replaced.
        `list_hint_paths` is extended rather than replaced.
        """
        update = dict(overrides)
        extra_paths = update.pop("list_hint_paths", None)
        if extra_paths:
            merged = list(self.list_hint_paths)
            merged.extend(p for p in extra_paths if p not in merged)
            update["list_hint_paths"] = merged
        return self.model_copy(update=update)


# Alias lists that describe the listing itself; container paths, image, text and
# coordinate aliases are too generic to mark an object as listing-shaped.
LISTING_KEY_FIELDS: tuple[str, ...] = (
    "source_ref_keys",
    "title_keys",
    "address_keys",
    "lease_type_keys",
    "rent_keys",
    "deposit_keys",
    "area_exclusive_keys",
    "area_gross_keys",
    "room_count_keys",
    "floor_keys",
)
