"""
Engine module - pairwise intersection and distance dispatch.

Importing the package registers every pairwise routine.
"""

from v3d.engine import distance, intersection
from v3d.engine.batch import intersects_all, intersects_any, min_distance_squared
from v3d.engine.dispatch import get_distance, get_distance_squared, get_intersection, intersects

__all__ = [
    "distance",
    "intersection",
    # Queries
    "get_distance",
    "get_distance_squared",
    "get_intersection",
    "intersects",
    # Batch
    "intersects_all",
    "intersects_any",
    "min_distance_squared",
]
