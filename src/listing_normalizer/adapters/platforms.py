"""Built-in platform descriptors."""

from listing_normalizer.models.hints import FieldHintSchema
from listing_normalizer.models.platform import CollectionMode, PlatformSpec

_DEFAULT_HINTS = FieldHintSchema()

NAVER = PlatformSpec(
    platform_code="naver",
    platform_name="네이버 부동산",
    collection_mode=CollectionMode.STEALTH_AUTOMATION,
    prefer_deposit_first=True,
    site_root="https://landthumb-phinf.pstatic.net",
    detail_url_template="https://fin.land.naver.com/articles/{ref}",
    notes=[
        "Article list and complex article captures",
        "dealOrWarrantPrc is '보증금/월세' or a single 전세/매매 amount",
        "area1/spc1 is supply area, area2/spc2 is exclusive area",
    ],
    field_hints=_DEFAULT_HINTS.with_overrides(
        source_ref_keys=["articleNo", "atclNo", "articleId", "article_id", "id", "_id"],
        title_keys=["articleName", "atclNm", "articleTitle", "title", "name"],
        address_keys=[
            "exposureAddress",
            "atclAddr",
            "address.streetAddress",
            "streetAddress",
            "address_text",
            "roadAddress",
            "jibunAddress",
            "address",
        ],
        address_city_keys=["address.addressRegion", "addressRegion", "sido", "city"],
        address_district_keys=["address.addressLocality", "addressLocality", "sigungu", "gu", "district"],
        address_neighborhood_keys=["dong", "dongName", "town", "neighborhood"],
        lease_type_keys=["tradeTypeName", "tradTpNm", "tradeTpNm", "tradeType", "tradeTypeCode", "lease_type"],
        rent_keys=["rentPrc", "rentPrice", "monthlyRent", "rent"],
        deposit_keys=["warrantPrice", "prcDeposit", "deposit", "depositPrice"],
        price_text_keys=["dealOrWarrantPrc", "dealOrWarrantPrice", "tradePrc", "prc", "priceText"],
        area_exclusive_keys=["area2", "spc2", "exclusiveArea", "areaExcl", "area_exclusive_m2"],
        area_gross_keys=["area1", "spc1", "supplyArea", "areaGross", "area_gross_m2"],
        area_text_keys=["areaName", "area_text"],
        floor_keys=["floorInfo", "flrInfo", "floorInfoText", "floor"],
        direction_keys=["direction", "directionText", "direction_text"],
        building_use_keys=["realEstateTypeName", "rletTpNm", "realEstateTypeCode", "building_use"],
        building_name_keys=["buildingName", "complexName", "building_name"],
        image_keys=["representativeImgUrl", "repImgUrl", "imageList", "images", "thumbnail"],
        raw_text_keys=["articleFeatureDesc", "atclFetrDesc", "tagList", "description"],
        latitude_keys=["latitude", "lat"],
        longitude_keys=["longitude", "lng"],
        list_hint_paths=["articleList", "complexArticleList", "body"],
    ),
)

ZIGBANG = PlatformSpec(
    platform_code="zigbang",
    platform_name="직방",
    collection_mode=CollectionMode.STEALTH_AUTOMATION,
    site_root="https://ic.zigbang.com",
    detail_url_template="https://sp.zigbang.com/share/oneroom/{ref}",
    notes=[
        "v2/items captures; address lives under addressOrigin",
        "size_m2 is exclusive area, floor_string/building_floor hold the floors",
    ],
    field_hints=_DEFAULT_HINTS.with_overrides(
        source_ref_keys=["item_id", "itemId", "articleId", "article_id", "itemNo", "item_no", "id", "_id"],
        title_keys=["title", "itemTitle", "articleTitle", "subject", "name"],
        address_keys=[
            "addressOrigin.fullText",
            "addressOrigin.localText",
            "address",
            "address1",
            "addr",
            "addressText",
            "address_text",
            "roadAddress",
        ],
        address_city_keys=["addressOrigin.local1", "local1", "sido", "city"],
        address_district_keys=["addressOrigin.local2", "local2", "sigungu", "gu", "district"],
        address_neighborhood_keys=["addressOrigin.local3", "local3", "dong", "neighborhood"],
        lease_type_keys=["sales_type", "salesType", "sales_title", "salesTitle", "lease_type"],
        rent_keys=["rent", "rentPrice", "monthlyRent", "월세", "월세금액"],
        deposit_keys=["deposit", "depositPrice", "보증금", "보증금금액", "depositFee"],
        area_exclusive_keys=["size_m2", "전용면적.m2", "exclusiveArea", "exclusiveAreaM2", "spc1", "area"],
        area_gross_keys=["공급면적.m2", "supplyArea", "grossArea", "grossAreaM2", "spc2", "area2"],
        floor_keys=["floor_string", "floor", "floorInfo"],
        total_floor_keys=["building_floor", "buildingFloor", "total_floor", "totalFloor"],
        room_count_keys=["room_type", "roomType", "room_count", "roomCount"],
        direction_keys=["direction", "houseDirection", "buildingDirection", "roomDirection", "facing"],
        building_use_keys=["service_type", "serviceType", "house_type", "houseType", "building_use"],
        image_keys=["images_thumbnail", "imageThumbnail", "thumbnail", "thumbNail", "images", "imgList", "photo"],
        latitude_keys=["location.lat", "random_location.lat", "lat", "latitude"],
        longitude_keys=["location.lng", "random_location.lng", "lng", "longitude"],
        list_hint_paths=["sections", "item_ids"],
    ),
)

DABANG = PlatformSpec(
    platform_code="dabang",
    platform_name="다방",
    collection_mode=CollectionMode.STEALTH_AUTOMATION,
    prefer_deposit_first=True,
    site_root="https://www.dabangapp.com",
    detail_url_template="https://www.dabangapp.com/room/{ref}",
    notes=[
        "V5 list API: priceTitle is '보증금/월세' ('1억5000/70')",
        "roomDesc carries the area ('고층, 10.15m², 관리비 7만')",
        "Addresses are dongName plus the collector's sigungu",
    ],
    field_hints=_DEFAULT_HINTS.with_overrides(
        source_ref_keys=["id", "roomId", "room_id", "seq", "articleId", "listingId", "_id"],
        title_keys=["roomTitle", "title", "itemTitle", "subject", "name"],
        address_keys=["address", "roomAddress", "room_address", "address_text", "fullAddress", "roadAddress"],
        address_city_keys=["sido", "city"],
        address_district_keys=["sigungu", "gu", "district"],
        address_neighborhood_keys=["dongName", "dong", "neighborhood"],
        lease_type_keys=["priceTypeName", "price_type_name", "lease_type", "tradeType"],
        rent_keys=["price_info.monthly_rent", "price_info.rent", "rent", "rentPrice", "monthlyRent", "월세"],
        deposit_keys=["price_info.deposit", "deposit", "depositPrice", "보증금"],
        price_text_keys=["priceTitle", "price_title", "priceText"],
        area_exclusive_keys=["room_area.exclusive_m2", "exclusive_m2", "exclusiveArea", "spc1", "area"],
        area_gross_keys=["room_area.supply_m2", "supply_m2", "supplyArea", "spc2", "area2"],
        area_text_keys=["roomDesc", "room_desc", "area_text"],
        room_count_keys=["roomTypeName", "room_type", "roomType", "room_count"],
        direction_keys=["direction", "sunlight_direction", "room_direction", "roomDirection", "facing"],
        building_use_keys=["building_type_name", "building_type", "buildingType", "house_type", "useType"],
        image_keys=["imgUrlList", "imgUrl", "room_images", "images", "thumbnail", "photo"],
        list_hint_paths=["roomList", "room_list"],
    ),
)

R114 = PlatformSpec(
    platform_code="r114",
    platform_name="부동산114",
    collection_mode=CollectionMode.STEALTH_AUTOMATION,
    site_root="https://www.r114.com",
    detail_url_template="https://www.r114.com/?_c=memul&_m=p10&_a=goDetail&memulNo={ref}",
    notes=["Memul list captures; ids are memulNo"],
    field_hints=_DEFAULT_HINTS.with_overrides(
        source_ref_keys=["memulNo", "articleId", "article_id", "id", "_id", "propertyId", "listingId"],
        title_keys=["title", "articleTitle", "subject", "name", "itemTitle"],
        rent_keys=["rent", "monthlyRent", "rentPrice", "월세", "월세금액"],
        deposit_keys=["deposit", "depositPrice", "보증금", "보증금금액"],
        price_text_keys=["priceText", "price_text", "price"],
        area_exclusive_keys=["area", "exclusiveArea", "spc1", "전용면적", "areaExclusive"],
        area_gross_keys=["area2", "grossArea", "supplyArea", "spc2", "공급면적"],
        direction_keys=["direction", "direction_text", "facing", "roomDirection", "houseDirection"],
        building_use_keys=[
            "building_type",
            "buildingType",
            "house_type",
            "houseType",
            "houseTypeNm",
            "building_use",
            "propertyType",
            "property_type",
        ],
        image_keys=["thumb", "thumbnail", "images", "imgList", "imageList", "photo", "photoUrl"],
        list_hint_paths=["memulList", "memul_list"],
    ),
)

PETERPANZ = PlatformSpec(
    platform_code="peterpanz",
    platform_name="피터팬",
    collection_mode=CollectionMode.STEALTH_AUTOMATION,
    money_unit="won",
    site_root="https://www.peterpanz.com",
    detail_url_template="https://www.peterpanz.com/house/{ref}",
    notes=[
        "/houses/area/pc API: one house object per capture",
        "Prices are in won and converted to 만원",
    ],
    field_hints=_DEFAULT_HINTS.with_overrides(
        source_ref_keys=["hidx"],
        title_keys=["info.subject", "subject"],
        address_keys=["location.address.text"],
        address_city_keys=["location.address.sido", "sido"],
        address_district_keys=["location.address.sigungu", "sigungu"],
        address_neighborhood_keys=["location.address.dong", "dong"],
        lease_type_keys=["type.contract_type", "contract_type"],
        rent_keys=["price.monthly_fee", "monthly_fee"],
        deposit_keys=["price.deposit", "deposit"],
        price_text_keys=[],
        area_exclusive_keys=["info.real_size", "real_size"],
        area_gross_keys=["info.supplied_size", "supplied_size"],
        room_count_keys=["info.room_count", "room_count"],
        floor_keys=["floor.target"],
        total_floor_keys=["floor.total"],
        direction_keys=["info.direction", "info.facing", "info.houseDirection"],
        building_use_keys=["type.building_type_text", "type.buildingType", "type.house_type"],
        image_keys=["images.S", "info.thumbnail", "images", "thumbnail"],
        latitude_keys=["location.coordinate.latitude"],
        longitude_keys=["location.coordinate.longitude"],
        list_hint_paths=["houses"],
    ),
)

DAANGN = PlatformSpec(
    platform_code="daangn",
    platform_name="당근부동산",
    collection_mode=CollectionMode.STEALTH_AUTOMATION,
    site_root="https://www.daangn.com",
    notes=[
        "Listing pages expose schema.org JSON-LD (address.streetAddress, identifier)",
        "list_data carries the list-page row for each captured detail page",
    ],
    field_hints=_DEFAULT_HINTS.with_overrides(
        source_ref_keys=["id", "articleId", "article_id", "identifier", "listingId", "_id"],
        title_keys=["name", "title", "roomTitle", "subject", "headline"],
        address_keys=[
            "address.streetAddress",
            "streetAddress",
            "addressText",
            "address_text",
            "fullAddress",
            "jibunAddress",
            "roadAddress",
            "addr",
        ],
        address_city_keys=["address.addressRegion", "addressRegion", "sido", "city"],
        address_district_keys=["address.addressLocality", "addressLocality", "sigungu", "gu", "district"],
        address_neighborhood_keys=["dong", "dongName", "town", "neighborhood"],
        lease_type_keys=["lease_type", "leaseType", "trade_type", "tradeType", "contract_type", "contractType"],
        rent_keys=["rent", "monthlyRent", "월세", "월세금액", "_parsed.rent"],
        deposit_keys=["deposit", "보증금", "보증금금액", "depositPrice", "월세보증금", "_parsed.deposit"],
        area_exclusive_keys=["area", "exclusiveArea", "roomSize", "_parsed.area", "area_exclusive_m2"],
        room_count_keys=["roomCnt", "roomCount", "room_cnt"],
        bathroom_count_keys=["bathroomCnt", "bathroomCount", "bathroom_cnt"],
        floor_keys=["floor", "floorLevel", "floor_level"],
        total_floor_keys=["total_floor", "totalFloor", "topFloor", "top_floor"],
        building_use_keys=["propertyType", "building_type", "buildingType", "houseType", "house_type"],
        image_keys=["image", "image_url", "image_urls", "images", "imgUrlList", "imageUrl", "thumbnail", "photo"],
        raw_text_keys=["description", "name", "roomTitle", "subject"],
        source_url_keys=["source_url", "url", "link", "detailUrl"],
    ),
)

KBLAND = PlatformSpec(
    platform_code="kbland",
    platform_name="KB부동산",
    collection_mode=CollectionMode.BLOCKED,
    site_root="https://kbland.kr",
    notes=["Listing APIs require an authenticated session; captures are usually denial bodies"],
)

BUILTIN_PLATFORMS: tuple[PlatformSpec, ...] = (NAVER, ZIGBANG, DABANG, R114, PETERPANZ, DAANGN, KBLAND)

BUILTIN_ALIASES: dict[str, str] = {"naver_land": "naver", "kb": "kbland"}
