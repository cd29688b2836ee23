"""Route assembly: building-to-building walking routes.

Steps for one navigation request:
1. Centroid of each endpoint feature's outer ring
2. Snap each centroid to its nearest graph node
3. A* between the two nodes
4. Route = [start centroid] + graph path + [end centroid]

Each step reports its own failure reason; nothing is retried.
"""

import logging

from campus_navigator.constants import NavigationConfig
from campus_navigator.core.geo_calculator import Coordinate, GeoCalculator
from campus_navigator.model.feature import CampusFeature
from campus_navigator.model.route_graph import RouteGraph
from campus_navigator.model.route_result import RouteFailure, RouteFailureReason, RouteOutcome, RouteResult
from campus_navigator.routing.astar import a_star
from campus_navigator.routing.nearest_node import find_nearest_node

logger = logging.getLogger(__name__)


def compute_centroid(feature: CampusFeature) -> Coordinate | None:
    """Vertex centroid of a Polygon / MultiPolygon feature.

    Uses the exterior ring (first polygon for MultiPolygon) and excludes the
    closing vertex, which duplicates the first one.

    Returns:
        (lon, lat) centroid, or None for non-area or empty geometry.
    """
    ring = feature.exterior_ring
    if ring is None:
        return None
    return GeoCalculator.ring_centroid(ring=ring)


def find_route(start_feature: CampusFeature, end_feature: CampusFeature, graph: RouteGraph) -> RouteOutcome:
    """Find a walking route between two area features.

    Args:
        start_feature: Origin building or POI
        end_feature: Destination building or POI
        graph: Routing graph built from the same feature collection

    Returns:
        RouteResult on success, otherwise a RouteFailure tagged
        NO_CENTROID, EMPTY_GRAPH, NODE_NOT_FOUND or NO_PATH_FOUND.
    """
    start_centroid = compute_centroid(feature=start_feature)
    end_centroid = compute_centroid(feature=end_feature)
    if start_centroid is None or end_centroid is None:
        which = [f.id or repr(f) for f, c in ((start_feature, start_centroid), (end_feature, end_centroid)) if c is None]
        logger.warning(f"Could not compute centroid for {', '.join(which)}")
        return RouteFailure(reason=RouteFailureReason.NO_CENTROID, detail=", ".join(which))

    start_node = find_nearest_node(point=start_centroid, graph=graph)
    end_node = find_nearest_node(point=end_centroid, graph=graph)
    if start_node is None or end_node is None:
        logger.warning("Could not find nearest nodes: routing graph is empty")
        return RouteFailure(reason=RouteFailureReason.EMPTY_GRAPH, detail="graph has no nodes")

    path = a_star(graph=graph, start=start_node, end=end_node)
    if isinstance(path, RouteFailure):
        return path

    route = RouteResult(
        coordinates=(start_centroid, *path, end_centroid),
        from_name=start_feature.name or NavigationConfig.DEFAULT_START_LABEL,
        to_name=end_feature.name or NavigationConfig.DEFAULT_END_LABEL,
    )
    logger.info(f"Route {route.from_name} -> {route.to_name}: {len(route.coordinates)} points, {route.length_m:.0f}m")
    return route
