"""
Business Attributes Mapper Utility
Maps Google Places capability flags to grouped, human-labeled attribute categories.
"""
from typing import Any, Dict, List, Tuple


# (label, field) pairs included only when the flag is truthy: the listing
# advertises the service.
SERVICE_OPTIONS: List[Tuple[str, str]] = [
    ("Takeout", "takeout"),
    ("Delivery", "delivery"),
    ("Dine-in", "dineIn"),
    ("Curbside pickup", "curbsidePickup"),
]

DINING_OPTIONS: List[Tuple[str, str]] = [
    ("Breakfast", "servesBreakfast"),
    ("Lunch", "servesLunch"),
    ("Dinner", "servesDinner"),
    ("Brunch", "servesBrunch"),
]

OFFERINGS: List[Tuple[str, str]] = [
    ("Vegetarian options", "servesVegetarianFood"),
    ("Beer", "servesBeer"),
    ("Wine", "servesWine"),
]

# (label, field) pairs included whenever the flag is present, true or false.
ACCESSIBILITY_OPTIONS: List[Tuple[str, str]] = [
    ("Wheelchair accessible entrance", "wheelchairAccessibleEntrance"),
    ("Wheelchair accessible parking lot", "wheelchairAccessibleParking"),
    ("Wheelchair accessible restroom", "wheelchairAccessibleRestroom"),
    ("Wheelchair accessible seating", "wheelchairAccessibleSeating"),
]

CHILDREN_OPTIONS: List[Tuple[str, str]] = [
    ("Good for kids", "goodForChildren"),
]

PAYMENT_OPTIONS: List[Tuple[str, str]] = [
    ("Credit cards", "acceptsCreditCards"),
    ("Debit cards", "acceptsDebitCards"),
    ("NFC mobile payments", "acceptsNfc"),
]

PLANNING_OPTIONS: List[Tuple[str, str]] = [
    ("Accepts reservations", "reservable"),
]


def _advertised(source: Dict[str, Any], options: List[Tuple[str, str]]) -> List[Dict[str, Any]]:
    return [{label: source[field]} for label, field in options if source.get(field)]


def _defined(source: Any, options: List[Tuple[str, str]]) -> List[Dict[str, Any]]:
    if not isinstance(source, dict):
        return []
    return [
        {label: source[field]}
        for label, field in options
        if source.get(field) is not None
    ]


def extract_business_attributes(place_data: Dict[str, Any]) -> Dict[str, List[Dict[str, Any]]]:
    """
    Group capability flags into labeled categories.

    Args:
        place_data: Raw Google Places record

    Returns:
        Mapping of category label to an ordered list of single-key
        ``{label: value}`` entries. Categories with no entries are omitted,
        meaning the listing does not advertise that attribute.
    """
    if not isinstance(place_data, dict):
        return {}

    groups = [
        ("Service options", _advertised(place_data, SERVICE_OPTIONS)),
        ("Dining options", _advertised(place_data, DINING_OPTIONS)),
        ("Offerings", _advertised(place_data, OFFERINGS)),
        ("Accessibility", _defined(place_data.get("accessibilityOptions"), ACCESSIBILITY_OPTIONS)),
        ("Children", _defined(place_data, CHILDREN_OPTIONS)),
        ("Payments", _defined(place_data.get("paymentOptions"), PAYMENT_OPTIONS)),
        ("Planning", _defined(place_data, PLANNING_OPTIONS)),
    ]

    return {label: entries for label, entries in groups if entries}
