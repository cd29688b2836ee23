"""RouteResult and RouteFailure - outcomes of a navigation request.

Routing never raises for expected conditions. Every request produces either a
RouteResult (walking path between two endpoint centroids) or a RouteFailure
tagged with the reason, so the UI can show a specific message and stay in a
consistent state.
"""

from dataclasses import dataclass
from enum import Enum

from shapely.geometry import LineString, mapping

from campus_navigator.core.geo_calculator import Coordinate, GeoCalculator


class RouteFailureReason(Enum):
    """Why a route could not be produced."""

    EMPTY_GRAPH = "empty_graph"  # No path geometry, nothing to snap to
    NODE_NOT_FOUND = "node_not_found"  # Start/end key absent from the graph
    NO_PATH_FOUND = "no_path_found"  # Endpoints in disconnected clusters
    NO_CENTROID = "no_centroid"  # Endpoint feature is not a usable area


_FAILURE_MESSAGES = {
    RouteFailureReason.EMPTY_GRAPH: "Could not find nearest node: no walkable paths are loaded",
    RouteFailureReason.NODE_NOT_FOUND: "Route endpoint is not part of the path network",
    RouteFailureReason.NO_PATH_FOUND: "No path found between these locations",
    RouteFailureReason.NO_CENTROID: "Could not compute centroid: location has no building outline",
}
assert set(_FAILURE_MESSAGES.keys()) == set(RouteFailureReason)


@dataclass(frozen=True)
class RouteFailure:
    """A routing request that ended without a path.

    Attributes:
        reason: Failure category
        detail: Diagnostic detail (which endpoint, which node key)
    """

    reason: RouteFailureReason
    detail: str = ""

    @property
    def message(self) -> str:
        """User-facing message for this failure."""
        return _FAILURE_MESSAGES[self.reason]


@dataclass(frozen=True)
class RouteResult:
    """Walking route between two locations.

    coordinates always begin with the origin centroid and end with the
    destination centroid; the graph path sits in between.

    Attributes:
        coordinates: Ordered (lon, lat) positions
        from_name: Display name of the origin
        to_name: Display name of the destination
    """

    coordinates: tuple[Coordinate, ...]
    from_name: str
    to_name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", tuple(tuple(c) for c in self.coordinates))

    @property
    def start(self) -> Coordinate:
        return self.coordinates[0]

    @property
    def end(self) -> Coordinate:
        return self.coordinates[-1]

    @property
    def path(self) -> tuple[Coordinate, ...]:
        """Graph portion of the route (without the centroid connectors)."""
        return self.coordinates[1:-1]

    @property
    def length_m(self) -> float:
        """Total walking distance including the centroid connectors."""
        return GeoCalculator.path_length_m(coordinates=self.coordinates)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(min_lon, min_lat, max_lon, max_lat) of the route."""
        return LineString(self.coordinates).bounds

    def to_geojson(self) -> dict:
        """GeoJSON LineString Feature with "from"/"to" properties."""
        return {
            "type": "Feature",
            "geometry": mapping(LineString(self.coordinates)),
            "properties": {"from": self.from_name, "to": self.to_name},
        }


RouteOutcome = RouteResult | RouteFailure
