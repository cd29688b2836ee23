"""Graph Builder - Routing graph from campus path geometry.

Every LineString feature contributes one undirected edge per consecutive
coordinate pair, weighted by the haversine distance between the two raw
positions. Endpoints are quantized into node keys, so independently authored
paths meeting at the same vertex (to 7 decimals) share a node.

All other geometries (buildings, POIs, areas) are skipped silently; they are
routing endpoints, not part of the network.
"""

import logging
from collections.abc import Iterable

from campus_navigator.constants import RoutingConfig
from campus_navigator.core.geo_calculator import GeoCalculator
from campus_navigator.model.feature import CampusFeature
from campus_navigator.model.route_graph import RouteGraph

logger = logging.getLogger(__name__)


def build_graph(
    features: Iterable[CampusFeature],
    decimals: int = RoutingConfig.NODE_KEY_DECIMALS,
) -> RouteGraph:
    """Build the routing graph from a feature collection.

    Pure function of its input: features are read, never modified, and a
    fresh graph is returned on every call.

    Args:
        features: Campus features in any order (only paths are used)
        decimals: Node key quantization precision

    Returns:
        RouteGraph; empty if no path features are present.
    """
    graph = RouteGraph(decimals=decimals)
    path_count = 0

    for feature in features:
        if not feature.is_path:
            continue
        path_count += 1

        coords = feature.coordinates
        for p1, p2 in zip(coords, coords[1:]):
            graph.add_edge(
                key_a=graph.key_for(coordinate=p1),
                key_b=graph.key_for(coordinate=p2),
                cost_m=GeoCalculator.distance_m(a=p1, b=p2),
            )

    if graph.is_empty:
        logger.info("Routing graph is empty: no path geometry in feature collection")
    else:
        logger.info(f"Routing graph built from {path_count} paths: {len(graph)} nodes, {graph.edge_count} edges")
    return graph
