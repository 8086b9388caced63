import logging
from typing import Iterable, List

from restaurant_finder.schemas import BoundingBox, Quadrant

logger = logging.getLogger(__name__)


def subdivide(box: BoundingBox) -> List[Quadrant]:
    """
    Split a bounding box into four equal quadrants at its midpoint.

    Quadrants come back in a fixed order: south-west, south-east,
    north-west, north-east. A box with any missing bound yields no
    quadrants.
    """
    if not box.is_complete:
        logger.warning(f"Skipping incomplete bounding box: {box.model_dump()}")
        return []

    y_mid = (box.y_min + box.y_max) / 2
    x_mid = (box.x_min + box.x_max) / 2
    label = box.county_name

    return [
        Quadrant(position="south-west", county_name=label,
                 y_min=box.y_min, y_max=y_mid, x_min=box.x_min, x_max=x_mid),
        Quadrant(position="south-east", county_name=label,
                 y_min=box.y_min, y_max=y_mid, x_min=x_mid, x_max=box.x_max),
        Quadrant(position="north-west", county_name=label,
                 y_min=y_mid, y_max=box.y_max, x_min=box.x_min, x_max=x_mid),
        Quadrant(position="north-east", county_name=label,
                 y_min=y_mid, y_max=box.y_max, x_min=x_mid, x_max=box.x_max),
    ]


def subdivide_all(boxes: Iterable[BoundingBox]) -> List[Quadrant]:
    """Subdivide every box, dropping the incomplete ones."""
    return [quadrant for box in boxes for quadrant in subdivide(box)]
