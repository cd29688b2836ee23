"""Geodesic calculations on Earth's surface.

Provides geographic helper functions for campus routing:
- Distance calculation (Haversine formula)
- Vertex centroid of polygon rings

All calculations use WGS84 spherical Earth approximation (R = 6,371 km).
Coordinates are (lon, lat) pairs in GeoJSON order unless stated otherwise.
"""

from collections.abc import Sequence
from math import atan2, cos, radians, sin, sqrt

import numpy as np

from campus_navigator.constants import RoutingConfig

# Earth's radius in meters (WGS84 spherical approximation)
EARTH_RADIUS_M = RoutingConfig.EARTH_RADIUS_M

Coordinate = tuple[float, float]


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    All methods use WGS84 spherical Earth model (R = 6,371 km).
    Coordinates are in decimal degrees (WGS84).
    Distances are in meters.
    """

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lon1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lon2: Longitude of second point (decimal degrees)

        Returns:
            Distance in meters.
        """
        dlat = radians(lat2 - lat1)
        dlon = radians(lon2 - lon1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
        return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def distance_m(a: Sequence[float], b: Sequence[float]) -> float:
        """Haversine distance between two (lon, lat) coordinates in meters."""
        return GeoCalculator.haversine_distance_m(lat1=a[1], lon1=a[0], lat2=b[1], lon2=b[0])

    @staticmethod
    def path_length_m(coordinates: Sequence[Sequence[float]]) -> float:
        """Sum of haversine distances along consecutive (lon, lat) coordinates."""
        return sum(GeoCalculator.distance_m(p1, p2) for p1, p2 in zip(coordinates, coordinates[1:]))

    @staticmethod
    def ring_centroid(ring: Sequence[Sequence[float]]) -> Coordinate | None:
        """Arithmetic mean of a closed ring's vertices.

        The ring is closed per GeoJSON convention (first == last), so the last
        vertex is excluded. A ring consisting of a single vertex returns that
        vertex.

        Args:
            ring: Sequence of (lon, lat) positions

        Returns:
            (lon, lat) centroid, or None for an empty ring.
        """
        if len(ring) == 0:
            return None
        if len(ring) == 1:
            return (float(ring[0][0]), float(ring[0][1]))

        vertices = np.asarray([(p[0], p[1]) for p in ring[:-1]], dtype=float)
        lon, lat = vertices.mean(axis=0)
        return (float(lon), float(lat))
