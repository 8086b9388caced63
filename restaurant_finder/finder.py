import asyncio
import logging
from typing import List, Optional, Protocol, Sequence

from restaurant_finder.config import AppConfig
from restaurant_finder.errors import (
    InvalidStateError,
    LookupExhaustedError,
    NoBoundingBoxDataError,
    NullBoundingBoxError,
    RetryExhaustedError,
)
from restaurant_finder.geometry import subdivide
from restaurant_finder.retry import RetryPolicy
from restaurant_finder.schemas import (
    BoundingBox,
    PlacesSearchResult,
    PlacesStatus,
    Quadrant,
    SearchRequest,
)
from restaurant_finder.services import BoundingBoxStore, PlacesClient

# Configure logging
logger = logging.getLogger(__name__)


class BoundingBoxSource(Protocol):
    async def fetch_bounding_boxes(self, state: str, limit: int = 1) -> List[BoundingBox]:
        ...


class PlacesSearcher(Protocol):
    async def search(self, request: SearchRequest) -> PlacesSearchResult:
        ...


class BoundingBoxLookup:
    """Fetches the bounding box of a state, retrying failed or empty queries."""

    def __init__(self, store: BoundingBoxSource, retry_policy: Optional[RetryPolicy] = None):
        self.store = store
        self.retry_policy = retry_policy or RetryPolicy()

    async def lookup(self, state: str) -> BoundingBox:
        """
        Return the first bounding box matching ``state``.

        Raises:
            InvalidStateError: If ``state`` is empty or blank
            LookupExhaustedError: If every attempt errored or found nothing
            NullBoundingBoxError: If no box was obtained despite a successful attempt
        """
        if not state or not state.strip():
            raise InvalidStateError(state)

        async def attempt_query(attempt: int) -> Optional[BoundingBox]:
            logger.info(f"Attempt {attempt}: Querying bounding boxes for state: {state}")
            boxes = await self.store.fetch_bounding_boxes(state, limit=1)
            logger.info(f"Attempt {attempt}: Query result: {boxes}")
            if not boxes:
                logger.warning(f"Attempt {attempt}: No bounding boxes found for state: {state}")
                raise NoBoundingBoxDataError(state)
            return boxes[0]

        try:
            box = await self.retry_policy.run(attempt_query, description=f"bounding box lookup for {state}")
        except RetryExhaustedError as e:
            raise LookupExhaustedError(state, e.attempts, e.last_error) from e.last_error

        if box is None:
            raise NullBoundingBoxError(state)
        return box


class RegionSearch:
    """Scatter-gather search over quadrants with per-quadrant soft failure."""

    def __init__(self, places: PlacesSearcher, category: str = "restaurant"):
        self.places = places
        self.category = category

    async def search_quadrant(self, quadrant: Quadrant) -> List[str]:
        """Search one quadrant; failures and empty results become []."""
        result = await self.places.search(SearchRequest(quadrant=quadrant, category=self.category))
        if result.status != PlacesStatus.OK or not result.place_ids:
            if result.status == PlacesStatus.ZERO_RESULTS:
                logger.info(f"No places found in {quadrant.position} quadrant")
            else:
                logger.error(f"Error searching for places: {result.status.value}")
            return []
        return list(result.place_ids)

    async def search(self, quadrants: Sequence[Quadrant]) -> List[str]:
        """
        Search all quadrants concurrently and flatten the results.

        Order follows the quadrants, then the provider's order within each
        quadrant. Duplicates across quadrants are kept.
        """
        results = await asyncio.gather(
            *(self.search_quadrant(quadrant) for quadrant in quadrants),
            return_exceptions=True,
        )

        place_ids: List[str] = []
        for quadrant, result in zip(quadrants, results):
            if isinstance(result, Exception):
                logger.error(f"Search failed for {quadrant.position} quadrant: {result}")
                continue
            if isinstance(result, BaseException):
                raise result
            place_ids.extend(result)
        return place_ids


class RestaurantFinder:
    """State name in, restaurant place ids out."""

    def __init__(self, lookup: BoundingBoxLookup, region_search: RegionSearch):
        self.lookup = lookup
        self.region_search = region_search

    @classmethod
    def from_config(cls, config: AppConfig) -> "RestaurantFinder":
        """Build a finder backed by the real store and Places clients."""
        store = BoundingBoxStore(config.supabase)
        places = PlacesClient(config.places)
        return cls(
            BoundingBoxLookup(store, RetryPolicy(max_attempts=config.lookup.max_attempts)),
            RegionSearch(places, category=config.places.category),
        )

    async def find_restaurants_by_state(self, state: str) -> List[str]:
        """
        Look up the state's bounding box, split it into quadrants and search
        each quadrant for restaurants.

        Only a failed lookup raises; search failures degrade to fewer results.
        """
        box = await self.lookup.lookup(state)
        quadrants = subdivide(box)
        logger.info(f"Searching {len(quadrants)} quadrants for state: {state}")
        place_ids = await self.region_search.search(quadrants)
        logger.info(f"Found {len(place_ids)} place ids for state: {state}")
        return place_ids

    async def close(self):
        """Release the collaborators' HTTP clients."""
        for collaborator in (self.lookup.store, self.region_search.places):
            close = getattr(collaborator, "close", None)
            if close is not None:
                await close()
