from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from typing_extensions import Literal
from pydantic import BaseModel, ConfigDict, Field


class BoundingBox(BaseModel):
    """A row of the bounding box table. Any bound may be missing."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    y_min: Optional[float] = Field(default=None, description="Minimum latitude")
    y_max: Optional[float] = Field(default=None, description="Maximum latitude")
    x_min: Optional[float] = Field(default=None, description="Minimum longitude")
    x_max: Optional[float] = Field(default=None, description="Maximum longitude")
    county_name: Optional[str] = Field(default=None, alias="COUNTY_NAME")
    state_name: Optional[str] = Field(default=None, alias="STATE_NAME")

    @property
    def is_complete(self) -> bool:
        """True when all four bounds are known."""
        return None not in (self.y_min, self.y_max, self.x_min, self.x_max)


QuadrantPosition = Literal["south-west", "south-east", "north-west", "north-east"]


class Quadrant(BoundingBox):
    """One quarter of a complete bounding box."""
    y_min: float
    y_max: float
    x_min: float
    x_max: float
    position: QuadrantPosition

    @property
    def south_west(self) -> Tuple[float, float]:
        return (self.y_min, self.x_min)

    @property
    def north_east(self) -> Tuple[float, float]:
        return (self.y_max, self.x_max)


class SearchRequest(BaseModel):
    """A geo-windowed category search over a single quadrant."""
    quadrant: Quadrant
    category: str = "restaurant"

    def to_payload(self, page_size: int = 20) -> Dict[str, Any]:
        """Render the request as a Places API searchText body."""
        low_lat, low_lng = self.quadrant.south_west
        high_lat, high_lng = self.quadrant.north_east
        return {
            "textQuery": self.category,
            "includedType": self.category,
            "strictTypeFiltering": True,
            "pageSize": page_size,
            "locationRestriction": {
                "rectangle": {
                    "low": {"latitude": low_lat, "longitude": low_lng},
                    "high": {"latitude": high_lat, "longitude": high_lng},
                }
            },
        }


class PlacesStatus(str, Enum):
    OK = "OK"
    ZERO_RESULTS = "ZERO_RESULTS"
    INVALID_REQUEST = "INVALID_REQUEST"
    REQUEST_DENIED = "REQUEST_DENIED"
    OVER_QUERY_LIMIT = "OVER_QUERY_LIMIT"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class PlacesSearchResult(BaseModel):
    """Status and place ids returned for one search."""
    status: PlacesStatus
    place_ids: List[str] = Field(default_factory=list)


class BoundingBoxInput(BaseModel):
    """Input for the BoundingBoxesTool."""
    state: str = Field(
        description="The state to filter bounding boxes by",
        min_length=1
    )
