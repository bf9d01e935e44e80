"""Dependencies for FastAPI routes."""
from functools import lru_cache

from places_scraper.services.google_places import GooglePlacesClient
from places_scraper.services.places_search import PlacesSearchService


@lru_cache()
def get_places_service() -> PlacesSearchService:
    """
    Shared search service built from the global settings.

    Routes depend on this so tests can swap in a service with a stubbed client.
    """
    return PlacesSearchService(GooglePlacesClient())
