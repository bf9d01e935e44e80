"""Client for the Google Places API (New)."""
import logging
from typing import Any, Dict, Optional

import httpx

from places_scraper.config import settings
from places_scraper.services.field_masks import (
    MASK_REJECTED_STATUS,
    Accepted,
    Failed,
    FetchResult,
    PlacesAPIError,
    Rejected,
)

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Extract ``error.message`` from a Google API error body."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or "Unknown error"
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return "Unknown error"


class GooglePlacesClient:
    """
    HTTP client wrapper for Places text search and place details.

    Each call is a single attempt that never raises; the outcome comes back
    as Accepted, Rejected (mask refused) or Failed.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.google_places_api_key
        self.base_url = (base_url or settings.google_places_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.google_places_timeout
        self._transport = transport

        if not self.api_key:
            logger.warning("GOOGLE_PLACES_API_KEY not set. API calls will fail.")

    def _headers(self, field_mask: str) -> Dict[str, str]:
        return {
            "X-Goog-Api-Key": self.api_key or "",
            "X-Goog-FieldMask": field_mask,
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _send(self, method: str, url: str, field_mask: str, **kwargs: Any) -> FetchResult:
        try:
            async with self._client() as client:
                response = await client.request(method, url, headers=self._headers(field_mask), **kwargs)
        except httpx.RequestError as exc:
            logger.error(f"Failed to reach Places API: {exc}")
            return Failed(PlacesAPIError(f"Failed to reach Places API: {exc}"))

        if response.status_code == MASK_REJECTED_STATUS:
            return Rejected(status=response.status_code, message=_error_message(response))

        if response.is_error:
            message = _error_message(response)
            logger.error(f"Places API error {response.status_code}: {message}")
            return Failed(PlacesAPIError(message, status_code=response.status_code))

        try:
            payload = response.json()
        except ValueError:
            return Failed(PlacesAPIError("Places API returned an invalid JSON body", response.status_code))
        if not isinstance(payload, dict):
            return Failed(PlacesAPIError("Places API returned an unexpected payload", response.status_code))

        return Accepted(payload)

    async def search_text(self, body: Dict[str, Any], field_mask: str) -> FetchResult:
        """One `places:searchText` attempt with the given field mask."""
        return await self._send("POST", f"{self.base_url}/places:searchText", field_mask, json=body)

    async def get_place(self, place_id: str, field_mask: str) -> FetchResult:
        """One place details attempt with the given field mask."""
        return await self._send("GET", f"{self.base_url}/places/{place_id}", field_mask)
