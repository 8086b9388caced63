"""
Restaurant Finder

A LangChain agent with one tool: given a US state, find the place ids of
restaurants inside the state's bounding box.
"""

from .finder import BoundingBoxLookup, RegionSearch, RestaurantFinder
from .geometry import subdivide, subdivide_all
from .retry import RetryPolicy
