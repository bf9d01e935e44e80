"""
Address decomposition.
Maps Google Places `addressComponents` into structured locality fields.
"""
from typing import Any, Dict, List, Optional

from places_scraper.models.places import AddressParts


STREET_TYPES = ("street_number", "route")
NEIGHBORHOOD_TYPES = ("neighborhood", "sublocality")
CITY_TYPES = ("locality", "administrative_area_level_2")


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _component_text(component: Dict[str, Any]) -> Optional[str]:
    return _text(component.get("longText")) or _text(component.get("shortText"))


def parse_address_components(address_components: Optional[List[Dict[str, Any]]]) -> AddressParts:
    """
    Decompose typed address components in a single pass.

    Street number and route components accumulate into one space-joined
    street; the remaining fields are last-wins. The country is kept in its
    short (ISO) form. Missing or malformed input yields an all-null result.
    """
    if not address_components or not isinstance(address_components, list):
        return AddressParts()

    street_parts: List[str] = []
    fields: Dict[str, Optional[str]] = {}

    for component in address_components:
        if not isinstance(component, dict):
            continue
        types = component.get("types")
        if not isinstance(types, list):
            types = []

        if any(t in types for t in STREET_TYPES):
            text = _component_text(component)
            if text:
                street_parts.append(text)

        if any(t in types for t in NEIGHBORHOOD_TYPES):
            fields["neighborhood"] = _component_text(component)

        if any(t in types for t in CITY_TYPES):
            fields["city"] = _component_text(component)

        if "postal_code" in types:
            fields["postal_code"] = _component_text(component)

        if "administrative_area_level_1" in types:
            fields["state"] = _component_text(component)

        if "country" in types:
            fields["country_code"] = _text(component.get("shortText"))

    if street_parts:
        fields["street"] = " ".join(street_parts)

    return AddressParts(**fields)
