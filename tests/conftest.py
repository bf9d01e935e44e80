import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path for direct pytest runs
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def detail_payload() -> dict:
    """A Places API (New) detail record returned for the full field mask."""
    return {
        "id": "ChIJ-cafe",
        "displayName": {"text": "Cafe Lumen", "languageCode": "en"},
        "formattedAddress": "12 Rue Oberkampf, 75011 Paris, France",
        "shortFormattedAddress": "12 Rue Oberkampf, Paris",
        "addressComponents": [
            {"longText": "12", "shortText": "12", "types": ["street_number"]},
            {"longText": "Rue Oberkampf", "shortText": "Rue Oberkampf", "types": ["route"]},
            {"longText": "Folie-Méricourt", "shortText": "Folie-Méricourt", "types": ["neighborhood", "political"]},
            {"longText": "Paris", "shortText": "Paris", "types": ["locality", "political"]},
            {"longText": "Île-de-France", "shortText": "IDF", "types": ["administrative_area_level_1", "political"]},
            {"longText": "France", "shortText": "FR", "types": ["country", "political"]},
            {"longText": "75011", "shortText": "75011", "types": ["postal_code"]},
        ],
        "location": {"latitude": 48.8647, "longitude": 2.3752},
        "plusCode": {"globalCode": "8FW4V942+V3"},
        "rating": 4.5,
        "userRatingCount": 321,
        "types": ["cafe", "coffee_shop", "food", "establishment"],
        "nationalPhoneNumber": "01 43 55 00 00",
        "internationalPhoneNumber": "+33 1 43 55 00 00",
        "websiteUri": "https://cafelumen.example",
        "googleMapsUri": "https://maps.google.com/?cid=1",
        "businessStatus": "OPERATIONAL",
        "priceLevel": "PRICE_LEVEL_MODERATE",
        "primaryType": "cafe",
        "primaryTypeDisplayName": {"text": "Café"},
        "editorialSummary": {"text": "Bright corner café."},
        "regularOpeningHours": {
            "weekdayDescriptions": [
                "Monday: 8:00 AM – 6:00 PM",
                "Tuesday: Closed",
            ]
        },
        "photos": [
            {
                "name": f"places/ChIJ-cafe/photos/{i}",
                "widthPx": 800,
                "heightPx": 600,
                "authorAttributions": [{"displayName": "Ana", "uri": "https://maps.google.com/ana"}],
            }
            for i in range(12)
        ],
        "reviews": [
            {
                "name": "places/ChIJ-cafe/reviews/1",
                "rating": 5,
                "text": {"text": "Great coffee, great pastries."},
                "relativePublishTimeDescription": "a week ago",
                "publishTime": "2026-10-01T10:00:00Z",
                "authorAttribution": {
                    "displayName": "Louis",
                    "uri": "https://maps.google.com/louis",
                    "photoUri": "https://lh3.example/louis.png",
                },
            },
            {"rating": 4, "text": {"text": "Coffee was great and friendly staff."}},
            {"rating": 2, "text": {"text": "Slow service."}},
        ],
        "takeout": True,
        "dineIn": True,
        "delivery": False,
        "servesBreakfast": True,
        "accessibilityOptions": {"wheelchairAccessibleEntrance": True, "wheelchairAccessibleRestroom": False},
        "paymentOptions": {"acceptsCreditCards": True},
        "reservable": False,
    }
