"""Routing algorithms for campus navigation.

- build_graph: Routing graph from LineString path features
- find_nearest_node: Snap a coordinate onto the graph
- a_star: Shortest path between two graph nodes
- find_route / compute_centroid: Building-to-building route assembly
"""

from campus_navigator.routing.astar import a_star
from campus_navigator.routing.graph_builder import build_graph
from campus_navigator.routing.nearest_node import find_nearest_node
from campus_navigator.routing.route_finder import compute_centroid, find_route

__all__ = [
    "a_star",
    "build_graph",
    "compute_centroid",
    "find_nearest_node",
    "find_route",
]
