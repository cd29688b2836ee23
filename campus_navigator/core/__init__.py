"""Core foundation classes for geodesic calculations.

This module provides the mathematical backbone for campus routing:
- GeoCalculator: Geodesic calculations (distances, ring centroids)
"""

from campus_navigator.core.geo_calculator import Coordinate, GeoCalculator

__all__ = [
    "Coordinate",
    "GeoCalculator",
]
