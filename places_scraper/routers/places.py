"""Places API router backed by the Google Places search service."""
import json
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from places_scraper.config import settings
from places_scraper.dependencies import get_places_service
from places_scraper.models.places import (
    BulkSearchRequest,
    BulkSearchResponse,
    ExportRequest,
    PlaceDetailsResponse,
    PlaceSearchRequest,
    PlaceSearchResponse,
    SearchFilters,
)
from places_scraper.services.field_masks import PlacesAPIError
from places_scraper.services.places_search import PlacesSearchService
from places_scraper.utils.exporters import build_json_export, generate_csv

router = APIRouter(prefix="/places", tags=["places"])
logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _filters(request: SearchFilters) -> SearchFilters:
    return SearchFilters(
        location=request.location,
        radius=request.radius,
        categories=request.categories,
        max_results=request.max_results,
    )


@router.post("/search", response_model=PlaceSearchResponse)
async def search_places(
    request: PlaceSearchRequest,
    service: PlacesSearchService = Depends(get_places_service),
):
    """
    Text search with per-result detail enrichment.

    Per-place enrichment failures degrade that place only; a failure of the
    search call itself is returned as a 500 with the upstream message.
    """
    query = (request.query or "").strip()
    if not query:
        return _error(400, "Search query is required")

    try:
        places = await service.search(query, _filters(request))
    except PlacesAPIError as exc:
        logger.error(f"Search error: {exc}")
        return _error(500, str(exc))

    return PlaceSearchResponse(
        data=places,
        count=len(places),
        query=query,
        location=request.location,
    )


@router.post("/bulk-search", response_model=BulkSearchResponse)
async def bulk_search_places(
    request: BulkSearchRequest,
    service: PlacesSearchService = Depends(get_places_service),
):
    """Run up to `bulk_max_queries` searches sequentially and combine the results."""
    if not request.queries:
        return _error(400, "Queries array is required")
    if len(request.queries) > settings.bulk_max_queries:
        return _error(400, f"Maximum {settings.bulk_max_queries} queries allowed per bulk search")

    result = await service.bulk_search(request.queries, _filters(request))

    return BulkSearchResponse(
        data=result.places,
        count=len(result.places),
        query_results=result.query_results,
        total_queries=result.total_queries,
    )


@router.get("/details/{place_id}", response_model=PlaceDetailsResponse)
async def get_place_details(
    place_id: str,
    service: PlacesSearchService = Depends(get_places_service),
):
    """Fetch and normalize a single place."""
    try:
        place = await service.get_details(place_id)
    except PlacesAPIError as exc:
        logger.error(f"Place details error: {exc}")
        return _error(500, str(exc))

    return PlaceDetailsResponse(data=place)


@router.post("/export/csv")
async def export_csv(request: ExportRequest):
    """Export already-normalized places as a CSV attachment."""
    if not request.places:
        return _error(400, "Places data is required for export")

    try:
        csv_data = generate_csv(request.places)
    except (TypeError, ValueError) as exc:
        logger.error(f"CSV export error: {exc}")
        return _error(500, "Failed to export CSV")

    return Response(
        content=csv_data,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{request.filename}.csv"'},
    )


@router.post("/export/json")
async def export_json(request: ExportRequest):
    """Export already-normalized places as a JSON attachment."""
    if not request.places:
        return _error(400, "Places data is required for export")

    return Response(
        content=json.dumps(build_json_export(request.places)),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{request.filename}.json"'},
    )
