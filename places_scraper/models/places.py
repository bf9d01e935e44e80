"""Pydantic models for Places."""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any

from places_scraper.config import settings


class _CamelModel(BaseModel):
    """Base model serialized with camelCase keys for the frontend contract."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _FrozenCamelModel(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class LatLng(_FrozenCamelModel):
    """Geographic point."""
    lat: float
    lng: float


class AddressParts(_FrozenCamelModel):
    """Structured locality fields decomposed from upstream address components."""
    street: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    state: Optional[str] = None
    country_code: Optional[str] = None


class ReviewsDistribution(_FrozenCamelModel):
    """1-5 star histogram."""
    one_star: int = 0
    two_star: int = 0
    three_star: int = 0
    four_star: int = 0
    five_star: int = 0


class ReviewTag(_FrozenCamelModel):
    title: str
    count: int


class OpeningHoursEntry(_FrozenCamelModel):
    day: str
    hours: str


class PlacePhoto(_FrozenCamelModel):
    name: str = ""
    width_px: int = 0
    height_px: int = 0
    author_attributions: List[Dict[str, Any]] = Field(default_factory=list)


class PlaceImage(_FrozenCamelModel):
    image_url: str = ""
    author_name: str = "Unknown"
    author_url: Optional[str] = None
    uploaded_at: Optional[str] = None


class PlaceReview(_FrozenCamelModel):
    """A single review, shaped after the Apify Google Maps scraper output."""
    name: str = "Anonymous"
    text: str = ""
    text_translated: Optional[str] = None
    publish_at: Optional[str] = None
    published_at_date: Optional[str] = None
    likes_count: int = 0
    review_id: Optional[str] = None
    review_url: Optional[str] = None
    reviewer_id: Optional[str] = None
    reviewer_url: Optional[str] = None
    reviewer_photo_url: Optional[str] = None
    reviewer_number_of_reviews: Optional[int] = None
    is_local_guide: bool = False
    review_origin: str = "Google"
    stars: float = 0
    rating: float = 0
    response_from_owner_date: Optional[str] = None
    response_from_owner_text: Optional[str] = None
    review_image_urls: List[str] = Field(default_factory=list)
    review_context: Dict[str, Any] = Field(default_factory=dict)
    review_detailed_rating: Dict[str, Any] = Field(default_factory=dict)


class CanonicalPlace(_FrozenCamelModel):
    """
    The one fixed-shape record every upstream place is normalized into.

    Every field is always present. Missing upstream data is represented by
    None, an empty string/list/dict, zero or False, never by omission.
    """

    # Basic Information
    id: str = ""
    place_id: str = ""
    title: str = "Unknown"
    name: str = "Unknown"
    subtitle: Optional[str] = None
    description: Optional[str] = None
    category_name: Optional[str] = None

    # Address Information
    address: str = "Address not available"
    short_formatted_address: Optional[str] = None
    adr_format_address: Optional[str] = None
    street: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    state: Optional[str] = None
    country_code: Optional[str] = None

    # Location
    location: Optional[LatLng] = None
    plus_code: Optional[str] = None

    # Contact Information
    phone: Optional[str] = None
    phone_unformatted: Optional[str] = None
    website: Optional[str] = None
    google_maps_url: Optional[str] = None

    # Business Details
    rating: float = 0
    total_score: float = 0
    user_rating_count: int = 0
    reviews_count: int = 0
    reviews_distribution: ReviewsDistribution = Field(default_factory=ReviewsDistribution)
    types: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    primary_type: Optional[str] = None
    business_status: str = "OPERATIONAL"
    permanently_closed: bool = False
    temporarily_closed: bool = False

    # Pricing
    price_level: Optional[str] = None
    price: Optional[str] = None

    # Hours
    opening_hours: Optional[List[OpeningHoursEntry]] = None

    # Images
    photos: List[PlacePhoto] = Field(default_factory=list)
    images_count: int = 0
    image_url: Optional[str] = None
    images: List[PlaceImage] = Field(default_factory=list)
    image_urls: List[str] = Field(default_factory=list)

    # Reviews
    reviews: List[PlaceReview] = Field(default_factory=list)
    reviews_tags: List[ReviewTag] = Field(default_factory=list)

    # Additional Business Information
    additional_info: Dict[str, List[Dict[str, Any]]] = Field(default_factory=dict)

    # Metadata
    scraped_at: str = ""

    # URLs and Links
    url: Optional[str] = None
    menu: Optional[str] = None
    reserve_table_url: Optional[str] = None
    google_food_url: Optional[str] = None

    # Apify-compatible fields the Places API never provides
    rank: Optional[int] = None
    search_page_url: Optional[str] = None
    search_page_loaded_url: Optional[str] = None
    is_advertisement: bool = False
    located_in: Optional[str] = None
    claim_this_business: bool = False
    hotel_stars: Optional[int] = None
    hotel_description: Optional[str] = None
    check_in_date: Optional[str] = None
    check_out_date: Optional[str] = None
    similar_hotels_nearby: Optional[Any] = None
    hotel_review_summary: Optional[Any] = None
    hotel_ads: List[Any] = Field(default_factory=list)
    people_also_search: List[Any] = Field(default_factory=list)
    places_tags: List[Any] = Field(default_factory=list)
    gas_prices: List[Any] = Field(default_factory=list)
    questions_and_answers: List[Any] = Field(default_factory=list)
    updates_from_customers: Optional[Any] = None
    owner_updates: List[Any] = Field(default_factory=list)
    kgmid: Optional[str] = None
    web_results: List[Any] = Field(default_factory=list)
    parent_place_url: Optional[str] = None
    table_reservation_links: List[Any] = Field(default_factory=list)
    booking_links: List[Any] = Field(default_factory=list)
    order_by: List[Any] = Field(default_factory=list)
    user_place_note: Optional[Any] = None
    restaurant_data: Dict[str, Any] = Field(default_factory=dict)


class SearchFilters(_CamelModel):
    """Request-scoped search constraints."""
    location: Optional[LatLng] = Field(None, description="Bias circle center")
    radius: int = Field(
        default_factory=lambda: settings.default_search_radius,
        gt=0,
        le=50000,
        description="Bias radius in meters",
    )
    categories: List[str] = Field(default_factory=list, description="Post-enrichment type allow-list")
    max_results: int = Field(20, ge=1, description="Result cap, clamped to the upstream limit of 20")


class PlaceSearchRequest(SearchFilters):
    """Request model for a single text search."""
    query: Optional[str] = Field(None, description="Search query")


class BulkSearchRequest(SearchFilters):
    """Request model for a multi-query search."""
    queries: Optional[List[str]] = Field(None, description="Search queries (1-10)")


class QueryResult(_CamelModel):
    """Per-query breakdown entry of a bulk search."""
    query: str
    places: List[CanonicalPlace] = Field(default_factory=list)
    count: int = 0
    error: Optional[str] = None


class BulkSearchResult(_CamelModel):
    places: List[CanonicalPlace] = Field(default_factory=list)
    query_results: List[QueryResult] = Field(default_factory=list)
    total_queries: int = 0


class PlaceSearchResponse(_CamelModel):
    success: bool = True
    data: List[CanonicalPlace]
    count: int
    query: str
    location: Optional[LatLng] = None


class BulkSearchResponse(_CamelModel):
    success: bool = True
    data: List[CanonicalPlace]
    count: int
    query_results: List[QueryResult]
    total_queries: int


class PlaceDetailsResponse(_CamelModel):
    success: bool = True
    data: CanonicalPlace


class ExportRequest(_CamelModel):
    """Request model for CSV/JSON export of already-normalized places."""
    places: Optional[List[Dict[str, Any]]] = None
    filename: str = "google-places-export"
