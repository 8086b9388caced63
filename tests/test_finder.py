"""
Tests for the bounding box lookup, the quadrant search and their composition.
"""

import asyncio
import pytest

from conftest import FakePlaces, FakeStore, ok
from restaurant_finder.errors import (
    BoundingBoxStoreError,
    InvalidStateError,
    LookupExhaustedError,
    NoBoundingBoxDataError,
    NullBoundingBoxError,
)
from restaurant_finder.finder import BoundingBoxLookup, RegionSearch, RestaurantFinder
from restaurant_finder.geometry import subdivide
from restaurant_finder.schemas import BoundingBox, PlacesSearchResult, PlacesStatus


def make_finder(store, places):
    return RestaurantFinder(BoundingBoxLookup(store), RegionSearch(places))


@pytest.mark.asyncio
async def test_lookup_succeeds_on_third_attempt(california_box):
    store = FakeStore([BoundingBoxStoreError("down"), [], [california_box]])

    box = await BoundingBoxLookup(store).lookup("california")

    assert box == california_box
    assert store.calls == ["california"] * 3


@pytest.mark.asyncio
async def test_lookup_fails_after_three_empty_results():
    store = FakeStore([[]])

    with pytest.raises(LookupExhaustedError) as exc_info:
        await BoundingBoxLookup(store).lookup("california")

    error = exc_info.value
    assert len(store.calls) == 3
    assert error.attempts == 3
    assert error.state == "california"
    assert error.no_data
    assert isinstance(error.last_error, NoBoundingBoxDataError)
    assert "california" in str(error)
    assert "3 attempts" in str(error)


@pytest.mark.asyncio
async def test_lookup_surfaces_last_transport_error():
    store = FakeStore([[], [], BoundingBoxStoreError("connection refused")])

    with pytest.raises(LookupExhaustedError) as exc_info:
        await BoundingBoxLookup(store).lookup("texas")

    assert not exc_info.value.no_data
    assert "connection refused" in str(exc_info.value)


@pytest.mark.asyncio
async def test_lookup_null_row_is_reported_separately():
    store = FakeStore([[None]])

    with pytest.raises(NullBoundingBoxError):
        await BoundingBoxLookup(store).lookup("california")
    assert len(store.calls) == 1


@pytest.mark.asyncio
async def test_lookup_rejects_empty_state():
    store = FakeStore([[]])
    with pytest.raises(InvalidStateError):
        await BoundingBoxLookup(store).lookup("  ")
    assert store.calls == []


@pytest.mark.asyncio
async def test_region_search_tolerates_failures(california_box):
    places = FakePlaces({
        "south-west": ok("a", "b"),
        "south-east": PlacesSearchResult(status=PlacesStatus.REQUEST_DENIED),
        "north-west": ok("c"),
        "north-east": PlacesSearchResult(status=PlacesStatus.ZERO_RESULTS),
    })

    place_ids = await RegionSearch(places).search(subdivide(california_box))

    assert place_ids == ["a", "b", "c"]
    assert len(places.requests) == 4
    assert {r.category for r in places.requests} == {"restaurant"}


@pytest.mark.asyncio
async def test_region_search_survives_client_exceptions(california_box):
    places = FakePlaces({
        "south-west": RuntimeError("socket closed"),
        "north-east": ok("z"),
    })

    assert await RegionSearch(places).search(subdivide(california_box)) == ["z"]


@pytest.mark.asyncio
async def test_region_search_keeps_duplicates(california_box):
    places = FakePlaces({"south-west": ok("edge"), "south-east": ok("edge")})

    assert await RegionSearch(places).search(subdivide(california_box)) == ["edge", "edge"]


@pytest.mark.asyncio
async def test_find_restaurants_end_to_end(california_box):
    store = FakeStore([[california_box]])
    places = FakePlaces({"south-west": ok("sw1"), "north-east": ok("ne1", "ne2")})

    place_ids = await make_finder(store, places).find_restaurants_by_state("california")

    assert place_ids == ["sw1", "ne1", "ne2"]
    windows = {r.quadrant.position: r.quadrant for r in places.requests}
    assert windows["south-west"].north_east == (pytest.approx(37.25), pytest.approx(-119.25))
    assert windows["north-east"].south_west == (pytest.approx(37.25), pytest.approx(-119.25))


@pytest.mark.asyncio
async def test_find_restaurants_all_searches_failed_is_empty_success(california_box):
    store = FakeStore([[california_box]])
    places = FakePlaces({
        position: PlacesSearchResult(status=PlacesStatus.UNKNOWN_ERROR)
        for position in ("south-west", "south-east", "north-west", "north-east")
    })

    assert await make_finder(store, places).find_restaurants_by_state("california") == []


@pytest.mark.asyncio
async def test_find_restaurants_incomplete_box_searches_nothing():
    store = FakeStore([[BoundingBox(y_min=1.0, y_max=2.0, x_min=None, x_max=4.0)]])
    places = FakePlaces()

    assert await make_finder(store, places).find_restaurants_by_state("nowhere") == []
    assert places.requests == []


class GatedPlaces:
    """Answers only once every quadrant search has started."""

    def __init__(self, expected: int):
        self.expected = expected
        self.in_flight = 0
        self.all_started = asyncio.Event()

    async def search(self, request):
        self.in_flight += 1
        if self.in_flight == self.expected:
            self.all_started.set()
        await asyncio.wait_for(self.all_started.wait(), timeout=1.0)
        return ok(request.quadrant.position)


@pytest.mark.asyncio
async def test_region_search_runs_quadrants_concurrently(california_box):
    places = GatedPlaces(expected=4)

    place_ids = await RegionSearch(places).search(subdivide(california_box))

    assert place_ids == ["south-west", "south-east", "north-west", "north-east"]
    assert places.in_flight == 4
