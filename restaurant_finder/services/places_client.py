"""
Client for the Google Places API (New)

Runs rectangle-restricted category searches and reports a status for
every search instead of raising.
"""

import logging
import httpx
from typing import Optional

from restaurant_finder.config import PlacesConfig
from restaurant_finder.schemas import PlacesSearchResult, PlacesStatus, SearchRequest

logger = logging.getLogger(__name__)

# Only the place id is requested
FIELD_MASK = "places.id"

_HTTP_STATUS_MAP = {
    400: PlacesStatus.INVALID_REQUEST,
    401: PlacesStatus.REQUEST_DENIED,
    403: PlacesStatus.REQUEST_DENIED,
    429: PlacesStatus.OVER_QUERY_LIMIT,
}


class PlacesClient:
    """Async client for the places:searchText endpoint."""

    def __init__(self, config: PlacesConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.client = client
        logger.info(f"Initializing PlacesClient with base URL: {self.base_url}")

    async def _get_client(self):
        """Get or create an HTTP client."""
        if self.client is None:
            self.client = httpx.AsyncClient(timeout=self.config.timeout)
        return self.client

    async def close(self):
        """Close the HTTP client connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.info("Closed places client connection")

    async def search(self, request: SearchRequest) -> PlacesSearchResult:
        """
        Search for places of the request's category inside its quadrant.

        Args:
            request: The quadrant and category to search

        Returns:
            A PlacesSearchResult; non-OK statuses carry no place ids
        """
        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.config.api_key,
            "X-Goog-FieldMask": FIELD_MASK,
        }
        try:
            client = await self._get_client()
            response = await client.post(
                f"{self.base_url}/places:searchText",
                json=request.to_payload(page_size=self.config.page_size),
                headers=headers,
            )
        except httpx.RequestError as e:
            logger.error(f"Request error during places search: {e}")
            return PlacesSearchResult(status=PlacesStatus.UNKNOWN_ERROR)

        if response.status_code != 200:
            status = _HTTP_STATUS_MAP.get(response.status_code, PlacesStatus.UNKNOWN_ERROR)
            logger.error(f"Places API returned {response.status_code} ({status.value}): {response.text}")
            return PlacesSearchResult(status=status)

        places = response.json().get("places", [])
        place_ids = [place["id"] for place in places if place.get("id")]
        if not place_ids:
            return PlacesSearchResult(status=PlacesStatus.ZERO_RESULTS)
        return PlacesSearchResult(status=PlacesStatus.OK, place_ids=place_ids)
