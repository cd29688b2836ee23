"""A* shortest-path search over the routing graph.

Algorithm:
    g(n) = best known walking distance from start to n
    h(n) = haversine(n, end) on the quantized node coordinates
    f(n) = g(n) + h(n)

Edge costs are measured between the raw path positions while h uses the
node coordinates rounded to the key precision. h is therefore a lower bound
on the remaining walk only to within that rounding (about 1 cm per node at
7 decimals), and a returned path is optimal to the same tolerance.

The frontier is a binary heap of (f, sequence, g, key) entries. The
sequence number increases with every push, so entries with equal f pop in
insertion order and results are reproducible for a given graph.

A node is pushed again whenever a cheaper path to it is found. Older entries
for that node stay in the heap and are discarded when popped (their g no
longer matches the best known g). There is no closed set: a node can be
expanded again if a cheaper route to it turns up later.
"""

import heapq
import logging

from campus_navigator.core.geo_calculator import Coordinate, GeoCalculator
from campus_navigator.model.route_graph import RouteGraph
from campus_navigator.model.route_result import RouteFailure, RouteFailureReason

logger = logging.getLogger(__name__)


def a_star(graph: RouteGraph, start: str, end: str) -> list[Coordinate] | RouteFailure:
    """Find the shortest path between two graph nodes.

    Args:
        graph: Routing graph
        start: Key of the start node
        end: Key of the end node

    Returns:
        Node coordinates from start to end (inclusive), or a RouteFailure
        with NODE_NOT_FOUND / NO_PATH_FOUND.
    """
    missing = [key for key in (start, end) if key not in graph]
    if missing:
        logger.warning(f"Start or end node not in graph: {', '.join(missing)}")
        return RouteFailure(reason=RouteFailureReason.NODE_NOT_FOUND, detail=", ".join(missing))

    end_coord = graph.coordinate(key=end)

    def heuristic(key: str) -> float:
        return GeoCalculator.distance_m(a=graph.coordinate(key=key), b=end_coord)

    g_score: dict[str, float] = {start: 0.0}
    came_from: dict[str, str] = {}
    sequence = 0
    frontier: list[tuple[float, int, float, str]] = [(heuristic(start), sequence, 0.0, start)]
    expanded = 0

    while frontier:
        _, _, g_current, current = heapq.heappop(frontier)
        if g_current > g_score[current]:
            continue  # Stale entry, a cheaper path was pushed later

        if current == end:
            path = _reconstruct_path(graph=graph, came_from=came_from, end=end)
            logger.info(f"A* found path: {len(path)} nodes, {g_current:.1f}m, {expanded} expansions")
            return path

        expanded += 1
        for edge in graph.neighbors(key=current):
            tentative_g = g_current + edge.cost_m
            if tentative_g < g_score.get(edge.neighbor, float("inf")):
                g_score[edge.neighbor] = tentative_g
                came_from[edge.neighbor] = current
                sequence += 1
                heapq.heappush(frontier, (tentative_g + heuristic(edge.neighbor), sequence, tentative_g, edge.neighbor))

    logger.warning(f"No path found from {start} to {end} after {expanded} expansions")
    return RouteFailure(reason=RouteFailureReason.NO_PATH_FOUND, detail=f"{start} -> {end}")


def _reconstruct_path(graph: RouteGraph, came_from: dict[str, str], end: str) -> list[Coordinate]:
    """Follow came_from links back from end and return coordinates start-first."""
    keys = [end]
    while keys[-1] in came_from:
        keys.append(came_from[keys[-1]])
    keys.reverse()
    return [graph.coordinate(key=key) for key in keys]
