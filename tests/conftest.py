"""
Pytest configuration and shared fakes.
"""

import os
import sys
import pytest
from typing import Dict, List, Optional, Sequence, Union

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.append(project_root)

from restaurant_finder.schemas import BoundingBox, PlacesSearchResult, PlacesStatus, SearchRequest


CALIFORNIA_ROW = {
    "STATE_NAME": "California",
    "COUNTY_NAME": None,
    "y_min": 32.5,
    "y_max": 42.0,
    "x_min": -124.4,
    "x_max": -114.1,
}


class FakeStore:
    """Replays a script of responses; an exception in the script is raised."""

    def __init__(self, script: Sequence[Union[List[BoundingBox], Exception]]):
        self.script = list(script)
        self.calls: List[str] = []

    async def fetch_bounding_boxes(self, state: str, limit: int = 1) -> List[BoundingBox]:
        self.calls.append(state)
        response = self.script[min(len(self.calls), len(self.script)) - 1]
        if isinstance(response, Exception):
            raise response
        return response


class FakePlaces:
    """Answers searches by quadrant position."""

    def __init__(self, by_position: Optional[Dict[str, Union[PlacesSearchResult, Exception]]] = None):
        self.by_position = by_position or {}
        self.requests: List[SearchRequest] = []

    async def search(self, request: SearchRequest) -> PlacesSearchResult:
        self.requests.append(request)
        response = self.by_position.get(
            request.quadrant.position,
            PlacesSearchResult(status=PlacesStatus.ZERO_RESULTS)
        )
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def california_box():
    return BoundingBox.model_validate(CALIFORNIA_ROW)


def ok(*place_ids):
    return PlacesSearchResult(status=PlacesStatus.OK, place_ids=list(place_ids))
