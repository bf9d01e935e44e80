"""Export helpers for serialized (camelCase) place records."""
import csv
import io
from datetime import datetime, timezone
from typing import Any, Dict, List

CSV_COLUMNS = [
    ("name", "Business Name"),
    ("address", "Address"),
    ("phone", "Phone Number"),
    ("website", "Website"),
    ("rating", "Rating"),
    ("review_count", "Review Count"),
    ("primary_type", "Primary Type"),
    ("types", "All Types"),
    ("business_status", "Business Status"),
    ("price_level", "Price Level"),
    ("latitude", "Latitude"),
    ("longitude", "Longitude"),
    ("google_maps_url", "Google Maps URL"),
    ("opening_hours", "Opening Hours"),
]

# Spreadsheet apps evaluate cells starting with these as formulas.
FORMULA_PREFIXES = ("=", "+", "-", "@")


def _format_opening_hours(opening_hours: Any) -> str:
    if not isinstance(opening_hours, list):
        return ""
    parts = []
    for entry in opening_hours:
        if isinstance(entry, dict):
            parts.append(f"{entry.get('day', '')}: {entry.get('hours', '')}")
        elif entry:
            parts.append(str(entry))
    return "; ".join(parts)


def _csv_row(place: Dict[str, Any]) -> Dict[str, Any]:
    location = place.get("location") if isinstance(place.get("location"), dict) else {}
    types = place.get("types")
    return {
        "name": place.get("name"),
        "address": place.get("address"),
        "phone": place.get("phone") or "",
        "website": place.get("website") or "",
        "rating": place.get("rating") or 0,
        "review_count": place.get("userRatingCount") or 0,
        "primary_type": place.get("primaryType") or "",
        "types": "; ".join(str(t) for t in types if t is not None) if isinstance(types, list) else "",
        "business_status": place.get("businessStatus"),
        "price_level": place.get("priceLevel") or "",
        "latitude": location.get("lat", ""),
        "longitude": location.get("lng", ""),
        "google_maps_url": place.get("googleMapsUrl") or "",
        "opening_hours": _format_opening_hours(place.get("openingHours")),
    }


def _sanitize_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    text = str(value)
    if text.startswith(FORMULA_PREFIXES):
        text = "'" + text
    return text


def generate_csv(places: List[Dict[str, Any]]) -> str:
    """Render places as a CSV document with every cell quoted."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([title for _, title in CSV_COLUMNS])
    for place in places:
        row = _csv_row(place)
        writer.writerow([_sanitize_cell(row[key]) for key, _ in CSV_COLUMNS])
    return buf.getvalue()


def build_json_export(places: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Wrap places in the JSON export envelope."""
    return {
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "total_places": len(places),
        "places": places,
    }
