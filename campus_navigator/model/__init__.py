"""Data model classes for campus navigation.

Follows the separation of Data (what the campus looks like) vs Derived (how to walk it):
- CampusFeature: One GeoJSON feature (building, POI, path), frozen
- FeatureCollection: The campus document, load/save and location catalog
- RouteGraph: Quantized-coordinate graph derived from path features
- RouteResult / RouteFailure: Tagged outcome of a navigation request
- Message: User-facing toasts and inline messages
"""

from campus_navigator.model.feature import (
    CampusFeature,
    FeatureCollection,
    InvalidFeatureCollectionError,
)
from campus_navigator.model.route_graph import (
    GraphEdge,
    RouteGraph,
    coordinate_to_key,
    key_to_coordinate,
)
from campus_navigator.model.route_result import (
    RouteFailure,
    RouteFailureReason,
    RouteOutcome,
    RouteResult,
)

__all__ = [
    "CampusFeature",
    "FeatureCollection",
    "InvalidFeatureCollectionError",
    "GraphEdge",
    "RouteGraph",
    "coordinate_to_key",
    "key_to_coordinate",
    "RouteFailure",
    "RouteFailureReason",
    "RouteOutcome",
    "RouteResult",
]
