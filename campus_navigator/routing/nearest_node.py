"""Nearest-node lookup: snap an arbitrary coordinate onto the routing graph."""

import logging
from collections.abc import Sequence

from campus_navigator.core.geo_calculator import GeoCalculator
from campus_navigator.model.route_graph import RouteGraph

logger = logging.getLogger(__name__)


def find_nearest_node(point: Sequence[float], graph: RouteGraph) -> str | None:
    """Find the graph node closest to a (lon, lat) point.

    Linear scan in node insertion order; the first node at the minimum
    distance wins ties. O(N) per call, fine for campus-scale graphs.

    Args:
        point: Target (lon, lat) coordinate
        graph: Routing graph to search

    Returns:
        Key of the nearest node, or None if the graph has no nodes.
    """
    best_dist = float("inf")
    best_key = None

    for key in graph:
        dist = GeoCalculator.distance_m(a=point, b=graph.coordinate(key=key))
        if dist < best_dist:
            best_dist = dist
            best_key = key

    if best_key is not None:
        logger.debug(f"Nearest node to ({point[0]:.6f}, {point[1]:.6f}): {best_key} at {best_dist:.1f}m")
    return best_key
