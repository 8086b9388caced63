"""
Client for the Bounding Box Store

Reads bounding box rows from a Supabase table through its PostgREST API.
"""

import logging
import httpx
from typing import List, Optional
from urllib.parse import quote

from restaurant_finder.config import SupabaseConfig
from restaurant_finder.errors import BoundingBoxStoreError
from restaurant_finder.schemas import BoundingBox

logger = logging.getLogger(__name__)


class BoundingBoxStore:
    """
    Client for the hosted bounding box table.

    One instance is shared by the whole process; the HTTP client is
    created on first use and must be released with ``close()``.
    """

    def __init__(self, config: SupabaseConfig, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the store client.

        Args:
            config: Supabase connection settings
            client: Optional preconfigured HTTP client (used by tests)
        """
        self.config = config
        self.base_url = config.url.rstrip("/")
        self.client = client
        logger.info(f"Initializing BoundingBoxStore for table '{config.table}' at {self.base_url}")

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
            logger.info("Closed bounding box store connection")

    @property
    def _headers(self):
        return {
            "apikey": self.config.private_key,
            "Authorization": f"Bearer {self.config.private_key}",
            "Accept": "application/json",
        }

    async def fetch_bounding_boxes(self, state: str, limit: int = 1) -> List[BoundingBox]:
        """
        Fetch the bounding boxes whose state column matches ``state``.

        The match is a case-insensitive pattern match (``ilike``) and the
        state string is used as the pattern as-is.

        Args:
            state: State name or pattern
            limit: Maximum number of rows to return

        Returns:
            The matching rows, possibly empty

        Raises:
            BoundingBoxStoreError: If the store could not be queried
        """
        params = {
            "select": "*",
            self.config.state_column: f"ilike.{state}",
            "limit": limit,
        }
        try:
            client = await self._get_client()
            response = await client.get(
                f"{self.base_url}/rest/v1/{quote(self.config.table)}",
                params=params,
                headers=self._headers,
            )
            response.raise_for_status()
            rows = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error querying bounding boxes: {e.response.text}")
            raise BoundingBoxStoreError(f"Bounding box store returned error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Request error querying bounding boxes: {e}")
            raise BoundingBoxStoreError(f"Could not connect to bounding box store: {e}") from e

        return [BoundingBox.model_validate(row) for row in rows]
