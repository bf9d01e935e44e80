"""
Data normalizers to ensure consistent data structure across the application.
These normalizers ensure that every Google Places record, whichever field mask
the upstream accepted, becomes the same CanonicalPlace shape.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from places_scraper.models.places import (
    CanonicalPlace,
    LatLng,
    OpeningHoursEntry,
    PlaceImage,
    PlacePhoto,
    PlaceReview,
)
from places_scraper.utils.address import parse_address_components
from places_scraper.utils.attributes_mapper import extract_business_attributes
from places_scraper.utils.review_analytics import (
    calculate_reviews_distribution,
    extract_reviews_tags,
)

UNKNOWN_NAME = "Unknown"
ADDRESS_PLACEHOLDER = "Address not available"
HOURS_PLACEHOLDER = "Hours not available"
DEFAULT_BUSINESS_STATUS = "OPERATIONAL"

MAX_PHOTOS = 10
MAX_REVIEWS = 5

PRICE_LEVELS = {
    "PRICE_LEVEL_FREE": "Free",
    "PRICE_LEVEL_INEXPENSIVE": "$",
    "PRICE_LEVEL_MODERATE": "$$",
    "PRICE_LEVEL_EXPENSIVE": "$$$",
    "PRICE_LEVEL_VERY_EXPENSIVE": "$$$$",
}


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def _int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def _localized_text(value: Any) -> Optional[str]:
    """Extract ``text`` from a Places LocalizedText object."""
    return _str(_dict(value).get("text"))


def convert_price_level(price_level: Any) -> Optional[str]:
    """Map a PRICE_LEVEL_* enum to its symbolic form. Unknown values map to None."""
    if not isinstance(price_level, str):
        return None
    return PRICE_LEVELS.get(price_level)


def parse_weekday_description(description: str) -> OpeningHoursEntry:
    """Split ``"Monday: 9:00 AM – 5:00 PM"`` on the first ``": "``."""
    day, separator, hours = description.partition(": ")
    if not separator:
        return OpeningHoursEntry(day=description, hours=HOURS_PLACEHOLDER)
    return OpeningHoursEntry(day=day, hours=hours)


def format_opening_hours(
    regular_hours: Any,
    current_hours: Any,
) -> Optional[List[OpeningHoursEntry]]:
    """Format weekday descriptions, preferring regular hours over current hours."""
    hours = regular_hours or current_hours
    descriptions = _dict(hours).get("weekdayDescriptions")
    if not isinstance(descriptions, list):
        return None

    return [
        parse_weekday_description(description)
        for description in descriptions
        if isinstance(description, str)
    ]


def _normalize_location(value: Any) -> Optional[LatLng]:
    location = _dict(value)
    lat = location.get("latitude")
    lng = location.get("longitude")
    if isinstance(lat, bool) or isinstance(lng, bool):
        return None
    if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
        return None
    return LatLng(lat=lat, lng=lng)


def _normalize_photo(photo: Dict[str, Any]) -> PlacePhoto:
    return PlacePhoto(
        name=_str(photo.get("name")) or "",
        width_px=_int(photo.get("widthPx")),
        height_px=_int(photo.get("heightPx")),
        author_attributions=[a for a in _list(photo.get("authorAttributions")) if isinstance(a, dict)],
    )


def _normalize_image(photo: Dict[str, Any]) -> PlaceImage:
    attributions = [a for a in _list(photo.get("authorAttributions")) if isinstance(a, dict)]
    author = attributions[0] if attributions else {}
    return PlaceImage(
        image_url=_str(photo.get("name")) or "",
        author_name=_str(author.get("displayName")) or "Unknown",
        author_url=_str(author.get("uri")),
    )


def _normalize_review(review: Dict[str, Any]) -> PlaceReview:
    author = _dict(review.get("authorAttribution"))
    rating = _number(review.get("rating"))
    return PlaceReview(
        name=_str(author.get("displayName")) or "Anonymous",
        text=_localized_text(review.get("text")) or "",
        publish_at=_str(review.get("relativePublishTimeDescription")),
        published_at_date=_str(review.get("publishTime")),
        review_id=_str(review.get("name")),
        reviewer_id=_str(author.get("uri")),
        reviewer_url=_str(author.get("uri")),
        reviewer_photo_url=_str(author.get("photoUri")),
        stars=rating,
        rating=rating,
    )


def normalize_place(
    raw_place: Optional[Dict[str, Any]],
    *,
    scraped_at: Optional[datetime] = None,
) -> CanonicalPlace:
    """
    Normalize one Google Places record into a CanonicalPlace.

    Accepts both full detail records and minimal search hits. Never raises on
    missing or malformed upstream fields; each one resolves to its default.

    Args:
        raw_place: Raw record from the Places API (New)
        scraped_at: Normalization timestamp, defaults to now (UTC)

    Returns:
        CanonicalPlace with every field populated
    """
    place = _dict(raw_place)

    reviews = [r for r in _list(place.get("reviews")) if isinstance(r, dict)]
    photos = [p for p in _list(place.get("photos")) if isinstance(p, dict)]
    kept_photos = photos[:MAX_PHOTOS]

    address = parse_address_components(place.get("addressComponents"))
    name = _localized_text(place.get("displayName")) or UNKNOWN_NAME
    type_display_name = _localized_text(place.get("primaryTypeDisplayName"))
    primary_type = _str(place.get("primaryType"))
    website = _str(place.get("websiteUri"))
    maps_url = _str(place.get("googleMapsUri"))
    rating = _number(place.get("rating"))
    rating_count = _int(place.get("userRatingCount"))
    types = [t for t in _list(place.get("types")) if isinstance(t, str) and t]
    business_status = _str(place.get("businessStatus")) or DEFAULT_BUSINESS_STATUS
    place_id = _str(place.get("id")) or ""
    timestamp = scraped_at or datetime.now(timezone.utc)

    return CanonicalPlace(
        # Basic Information
        id=place_id,
        place_id=place_id,
        title=name,
        name=name,
        subtitle=type_display_name,
        description=_localized_text(place.get("editorialSummary")),
        category_name=type_display_name or primary_type,
        # Address Information
        address=_str(place.get("formattedAddress")) or ADDRESS_PLACEHOLDER,
        short_formatted_address=_str(place.get("shortFormattedAddress")),
        adr_format_address=_str(place.get("adrFormatAddress")),
        street=address.street,
        neighborhood=address.neighborhood,
        city=address.city,
        postal_code=address.postal_code,
        state=address.state,
        country_code=address.country_code,
        # Location
        location=_normalize_location(place.get("location")),
        plus_code=_str(_dict(place.get("plusCode")).get("globalCode")),
        # Contact Information
        phone=_str(place.get("nationalPhoneNumber")),
        phone_unformatted=_str(place.get("internationalPhoneNumber")),
        website=website,
        google_maps_url=maps_url,
        # Business Details
        rating=rating,
        total_score=rating,
        user_rating_count=rating_count,
        reviews_count=rating_count,
        reviews_distribution=calculate_reviews_distribution(reviews),
        types=types,
        categories=list(types),
        primary_type=primary_type,
        business_status=business_status,
        permanently_closed=business_status == "CLOSED_PERMANENTLY",
        temporarily_closed=business_status == "CLOSED_TEMPORARILY",
        # Pricing
        price_level=_str(place.get("priceLevel")),
        price=convert_price_level(place.get("priceLevel")),
        # Hours
        opening_hours=format_opening_hours(
            place.get("regularOpeningHours"),
            place.get("currentOpeningHours"),
        ),
        # Images
        photos=[_normalize_photo(p) for p in kept_photos],
        images_count=len(photos),
        image_url=_str(photos[0].get("name")) if photos else None,
        images=[_normalize_image(p) for p in kept_photos],
        image_urls=[_str(p.get("name")) or "" for p in kept_photos],
        # Reviews
        reviews=[_normalize_review(r) for r in reviews[:MAX_REVIEWS]],
        reviews_tags=extract_reviews_tags(reviews),
        # Additional Business Information
        additional_info=extract_business_attributes(place),
        # Metadata
        scraped_at=timestamp.isoformat(),
        # URLs and Links
        url=maps_url,
        menu=website,
    )


def filter_by_categories(
    places: List[CanonicalPlace],
    categories: Optional[List[str]],
) -> List[CanonicalPlace]:
    """
    Keep places whose types overlap any requested category.

    Matching is a case-insensitive substring test in either direction, so
    "bar" also matches "barber_shop". An empty category list keeps everything.
    """
    wanted = [c.lower() for c in (categories or []) if c]
    if not wanted:
        return list(places)

    def _matches(place: CanonicalPlace) -> bool:
        for place_type in place.types:
            lowered = place_type.lower()
            if any(cat in lowered or lowered in cat for cat in wanted):
                return True
        return False

    return [place for place in places if _matches(place)]
