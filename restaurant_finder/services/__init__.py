"""
Services Package

Clients for the external collaborators of the restaurant finder:
- Bounding box store (Supabase table)
- Google Places search
"""

from .bounding_box_store import BoundingBoxStore
from .places_client import PlacesClient
