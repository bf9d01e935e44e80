"""
Field-mask negotiation for the Google Places API (New).

The upstream answers HTTP 400 when a requested field mask names a field it
does not support for the key/project. Each endpoint therefore has two mask
tiers: a full one and a reduced one that is always accepted. Only a mask
rejection falls back to the reduced tier; every other failure propagates.
"""
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, Union

logger = logging.getLogger(__name__)

MASK_REJECTED_STATUS = 400


class PlacesAPIError(Exception):
    """Error surfaced to callers with the upstream message preserved."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class Accepted:
    """The upstream accepted the mask and returned a payload."""
    data: Dict[str, Any]


@dataclass(frozen=True)
class Rejected:
    """The upstream rejected the request as an invalid field mask."""
    status: int
    message: str


@dataclass(frozen=True)
class Failed:
    """Any failure a different field mask cannot fix (auth, quota, network...)."""
    error: PlacesAPIError


FetchResult = Union[Accepted, Rejected, Failed]


@dataclass(frozen=True)
class FieldMaskTiers:
    full: str
    basic: str


_SEARCH_FULL_FIELDS: Tuple[str, ...] = (
    "id",
    "displayName",
    "formattedAddress",
    "addressComponents",
    "location",
    "rating",
    "userRatingCount",
    "types",
    "nationalPhoneNumber",
    "internationalPhoneNumber",
    "websiteUri",
    "googleMapsUri",
    "businessStatus",
    "priceLevel",
    "primaryType",
    "primaryTypeDisplayName",
    "shortFormattedAddress",
    "adrFormatAddress",
    "plusCode",
    "editorialSummary",
)

_SEARCH_BASIC_FIELDS: Tuple[str, ...] = (
    "id",
    "displayName",
    "formattedAddress",
    "location",
    "rating",
    "userRatingCount",
    "types",
    "nationalPhoneNumber",
    "websiteUri",
    "googleMapsUri",
    "businessStatus",
    "priceLevel",
    "primaryType",
)

_DETAIL_FULL_FIELDS: Tuple[str, ...] = _SEARCH_FULL_FIELDS + (
    "regularOpeningHours",
    "currentOpeningHours",
    "photos",
    "reviews",
    "paymentOptions",
    "accessibilityOptions",
    "allowsDogs",
    "delivery",
    "dineIn",
    "curbsidePickup",
    "reservable",
    "servesBreakfast",
    "servesLunch",
    "servesDinner",
    "servesBrunch",
    "servesBeer",
    "servesWine",
    "servesVegetarianFood",
    "takeout",
    "goodForChildren",
)

_DETAIL_BASIC_FIELDS: Tuple[str, ...] = (
    "id",
    "displayName",
    "formattedAddress",
    "addressComponents",
    "location",
    "rating",
    "userRatingCount",
    "types",
    "nationalPhoneNumber",
    "internationalPhoneNumber",
    "websiteUri",
    "googleMapsUri",
    "businessStatus",
    "priceLevel",
    "primaryType",
    "primaryTypeDisplayName",
    "regularOpeningHours",
    "photos",
)


def _mask(fields: Tuple[str, ...], prefix: str = "") -> str:
    return ",".join(f"{prefix}{field}" for field in fields)


# Text search responses nest each place under `places`.
SEARCH_FIELD_MASKS = FieldMaskTiers(
    full=_mask(_SEARCH_FULL_FIELDS, "places."),
    basic=_mask(_SEARCH_BASIC_FIELDS, "places."),
)

DETAIL_FIELD_MASKS = FieldMaskTiers(
    full=_mask(_DETAIL_FULL_FIELDS),
    basic=_mask(_DETAIL_BASIC_FIELDS),
)


async def negotiate(
    attempt: Callable[[str], Awaitable[FetchResult]],
    tiers: FieldMaskTiers,
    operation: str,
) -> Dict[str, Any]:
    """
    Run ``attempt`` with the full mask, falling back once to the basic mask.

    Args:
        attempt: Performs one upstream call with the given field mask
        tiers: Full and basic masks for the endpoint
        operation: Label used in log and error messages ("search", "detail")

    Returns:
        The accepted payload

    Raises:
        PlacesAPIError: on any non-mask failure, or when both tiers fail
    """
    result = await attempt(tiers.full)

    if isinstance(result, Accepted):
        return result.data
    if isinstance(result, Failed):
        raise result.error

    logger.warning(
        f"Full {operation} field mask rejected ({result.status}: {result.message}), "
        f"retrying with basic field mask"
    )

    fallback = await attempt(tiers.basic)

    if isinstance(fallback, Accepted):
        return fallback.data
    if isinstance(fallback, Failed):
        logger.error(f"Both {operation} field masks failed: {fallback.error.message}")
        raise fallback.error

    logger.error(f"Both {operation} field masks rejected: {fallback.message}")
    raise PlacesAPIError(fallback.message, status_code=fallback.status)
