"""
Search and enrichment orchestration.

A text search returns minimal hits; each hit is enriched with one place
details call, all running concurrently. A hit whose enrichment fails is kept
as a degraded record built from the search payload alone.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from places_scraper.config import settings
from places_scraper.models.places import (
    BulkSearchResult,
    CanonicalPlace,
    QueryResult,
    SearchFilters,
)
from places_scraper.services.field_masks import (
    DETAIL_FIELD_MASKS,
    SEARCH_FIELD_MASKS,
    PlacesAPIError,
    negotiate,
)
from places_scraper.services.google_places import GooglePlacesClient
from places_scraper.utils.normalizers import filter_by_categories, normalize_place

logger = logging.getLogger(__name__)


class PlacesSearchService:
    """Runs searches against the Places API and returns CanonicalPlace lists."""

    def __init__(
        self,
        client: GooglePlacesClient,
        *,
        max_results_cap: Optional[int] = None,
        query_delay: Optional[float] = None,
        max_queries: Optional[int] = None,
    ) -> None:
        self.client = client
        self.max_results_cap = max_results_cap if max_results_cap is not None else settings.max_results_cap
        self.query_delay = query_delay if query_delay is not None else settings.bulk_query_delay_seconds
        self.max_queries = max_queries if max_queries is not None else settings.bulk_max_queries

    def _build_search_body(self, query: str, filters: SearchFilters) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "textQuery": query,
            "maxResultCount": min(filters.max_results, self.max_results_cap),
        }
        if filters.location is not None:
            body["locationBias"] = {
                "circle": {
                    "center": {
                        "latitude": filters.location.lat,
                        "longitude": filters.location.lng,
                    },
                    "radius": filters.radius,
                }
            }
        return body

    async def _fetch_details(self, place_id: str) -> Dict[str, Any]:
        return await negotiate(
            lambda mask: self.client.get_place(place_id, mask),
            DETAIL_FIELD_MASKS,
            "detail",
        )

    async def _enrich(self, hit: Dict[str, Any]) -> CanonicalPlace:
        place_id = hit.get("id")
        if not place_id:
            logger.warning("Search hit without an id, keeping search payload only")
            return normalize_place(hit)
        try:
            return normalize_place(await self._fetch_details(place_id))
        except Exception as exc:
            logger.warning(f"Failed to get details for place {place_id}: {exc}")
            return normalize_place(hit)

    async def search(self, query: str, filters: Optional[SearchFilters] = None) -> List[CanonicalPlace]:
        """
        Text search followed by per-hit detail enrichment.

        Args:
            query: Free-text search query
            filters: Optional bias circle, category allow-list and result cap

        Returns:
            Enriched places in upstream order, filtered by category when requested

        Raises:
            PlacesAPIError: if the text search itself fails
        """
        filters = filters or SearchFilters()
        body = self._build_search_body(query, filters)

        try:
            payload = await negotiate(
                lambda mask: self.client.search_text(body, mask),
                SEARCH_FIELD_MASKS,
                "search",
            )
        except PlacesAPIError as exc:
            raise PlacesAPIError(f"Places API error: {exc.message}", exc.status_code) from exc

        raw_hits = payload.get("places")
        if not isinstance(raw_hits, list):
            raw_hits = []
        hits = [hit for hit in raw_hits if isinstance(hit, dict)][:body["maxResultCount"]]

        # _enrich never raises, so one failed hit cannot cancel its siblings.
        places = await asyncio.gather(*(self._enrich(hit) for hit in hits))
        places = filter_by_categories(list(places), filters.categories)

        logger.info(f"Search '{query}': {len(hits)} hits, {len(places)} places returned")
        return places

    async def get_details(self, place_id: str) -> CanonicalPlace:
        """
        Fetch and normalize one place.

        Raises:
            PlacesAPIError: if both field masks are rejected or any other error occurs
        """
        try:
            payload = await self._fetch_details(place_id)
        except PlacesAPIError as exc:
            raise PlacesAPIError(f"Place Details API error: {exc.message}", exc.status_code) from exc
        return normalize_place(payload)

    async def bulk_search(
        self,
        queries: List[str],
        filters: Optional[SearchFilters] = None,
    ) -> BulkSearchResult:
        """
        Run several searches one after another.

        Queries are serialized with a pause between them to stay under the
        upstream rate limit. A failing query is recorded with its error and
        does not abort the remaining ones.
        """
        if not queries:
            raise ValueError("Queries array is required")
        if len(queries) > self.max_queries:
            raise ValueError(f"Maximum {self.max_queries} queries allowed per bulk search")

        filters = filters or SearchFilters()
        query_results: List[QueryResult] = []

        pending = [query.strip() for query in queries if query and query.strip()]
        for index, query in enumerate(pending):
            if index > 0 and self.query_delay > 0:
                await asyncio.sleep(self.query_delay)
            try:
                places = await self.search(query, filters)
            except Exception as exc:
                logger.error(f"Bulk search error for query '{query}': {exc}")
                query_results.append(QueryResult(query=query, places=[], count=0, error=str(exc)))
                continue
            query_results.append(QueryResult(query=query, places=places, count=len(places)))

        return BulkSearchResult(
            places=[place for result in query_results for place in result.places],
            query_results=query_results,
            total_queries=len(queries),
        )
