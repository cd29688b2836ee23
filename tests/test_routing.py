"""Tests for campus_navigator routing.

Tests: build_graph, find_nearest_node, a_star, compute_centroid, find_route
Focus: Node coalescing, shortest paths, failure tagging, determinism

Property-based tests compare A* against scipy's Dijkstra on random graphs.
"""

import copy

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import dijkstra

from campus_navigator.core.geo_calculator import GeoCalculator
from campus_navigator.model.feature import CampusFeature, FeatureCollection
from campus_navigator.model.route_graph import RouteGraph, coordinate_to_key
from campus_navigator.model.route_result import RouteFailure, RouteFailureReason, RouteResult
from campus_navigator.routing.astar import a_star
from campus_navigator.routing.graph_builder import build_graph
from campus_navigator.routing.nearest_node import find_nearest_node
from campus_navigator.routing.route_finder import compute_centroid, find_route


def _edge_costs(graph: RouteGraph, key_a: str, key_b: str) -> list[float]:
    """Costs of all parallel edges from key_a to key_b."""
    return [edge.cost_m for edge in graph.neighbors(key=key_a) if edge.neighbor == key_b]


def _cost(graph: RouteGraph, path: list) -> float:
    """Walking cost of a node path using the cheapest parallel edge per step."""
    keys = [graph.key_for(c) for c in path]
    return sum(min(_edge_costs(graph, a, b)) for a, b in zip(keys, keys[1:]))


# =============================================================================
# GRAPH BUILDER
# =============================================================================


class TestBuildGraph:
    """build_graph - routing graph from LineString features."""

    def test_single_segment(self, make_path) -> None:
        graph = build_graph(features=[make_path([(0.0, 0.0), (0.0, 1.0)])])
        assert list(graph) == ["0.0000000,0.0000000", "0.0000000,1.0000000"]
        [cost] = _edge_costs(graph, "0.0000000,0.0000000", "0.0000000,1.0000000")
        assert cost == pytest.approx(GeoCalculator.distance_m(a=(0.0, 0.0), b=(0.0, 1.0)))

    def test_edge_cost_is_haversine_of_raw_positions(self, make_path) -> None:
        p1, p2 = (74.40981234567, 31.47050000001), (74.4100, 31.4710)
        graph = build_graph(features=[make_path([p1, p2])])
        [cost] = _edge_costs(graph, coordinate_to_key(p1), coordinate_to_key(p2))
        assert cost == GeoCalculator.distance_m(a=p1, b=p2)

    def test_shared_vertex_merges_paths(self, make_path) -> None:
        """Two paths meeting within 1e-7 degrees share a node: 3 nodes, 2 edges."""
        graph = build_graph(
            features=[
                make_path([(0.0, 0.0), (0.001, 0.001)], feature_id="way/1"),
                make_path([(0.00100000004, 0.00100000003), (0.002, 0.0)], feature_id="way/2"),
            ]
        )
        assert len(graph) == 3
        assert graph.edge_count == 2

    def test_near_miss_does_not_merge(self, make_path) -> None:
        """Endpoints straddling a rounding boundary stay separate clusters."""
        graph = build_graph(
            features=[
                make_path([(0.0, 0.0), (0.00100004, 0.0)], feature_id="way/1"),
                make_path([(0.00100006, 0.0), (0.002, 0.0)], feature_id="way/2"),
            ]
        )
        assert len(graph) == 4
        result = a_star(graph=graph, start="0.0000000,0.0000000", end="0.0020000,0.0000000")
        assert isinstance(result, RouteFailure)
        assert result.reason == RouteFailureReason.NO_PATH_FOUND

    def test_non_path_features_skipped(self, make_building, point_poi: CampusFeature) -> None:
        graph = build_graph(features=[make_building((0.0, 0.0)), point_poi])
        assert graph.is_empty

    def test_single_position_line_skipped(self, make_path) -> None:
        graph = build_graph(features=[make_path([(0.0, 0.0)])])
        assert graph.is_empty

    @pytest.mark.parametrize("coordinates", [[0, 0], [[0, 0], ["a", 1]], [[0, 0], [1]]])
    def test_malformed_line_skipped(self, make_path, coordinates: list) -> None:
        """Lines with non-numeric positions are ignored; valid lines still build."""
        broken = CampusFeature(geometry_type="LineString", coordinates=coordinates, properties={"@id": "way/broken"})
        graph = build_graph(features=[broken, make_path([(0.0, 0.0), (0.0, 0.001)])])
        assert len(graph) == 2
        assert graph.edge_count == 1

    def test_custom_decimals(self, make_path) -> None:
        """Coarser precision merges vertices 1e-4 apart."""
        features = [
            make_path([(0.0, 0.0), (0.001, 0.0)], feature_id="way/1"),
            make_path([(0.00101, 0.0), (0.002, 0.0)], feature_id="way/2"),
        ]
        assert len(build_graph(features=features)) == 4
        assert len(build_graph(features=features, decimals=3)) == 3

    def test_every_edge_has_reverse(self, grid_graph: RouteGraph) -> None:
        for key in grid_graph:
            for edge in grid_graph.neighbors(key=key):
                assert edge.cost_m in _edge_costs(grid_graph, edge.neighbor, key)

    def test_input_not_mutated(self, grid_campus: FeatureCollection) -> None:
        before = copy.deepcopy(grid_campus.to_dict())
        build_graph(features=grid_campus.features)
        assert grid_campus.to_dict() == before

    def test_deterministic(self, grid_campus: FeatureCollection) -> None:
        first = build_graph(features=grid_campus.features)
        second = build_graph(features=grid_campus.features)
        assert first.to_adjacency() == second.to_adjacency()


# =============================================================================
# NEAREST NODE
# =============================================================================


class TestFindNearestNode:
    """find_nearest_node - linear scan, first wins ties."""

    def test_empty_graph(self) -> None:
        assert find_nearest_node(point=(0.0, 0.0), graph=RouteGraph()) is None

    def test_nearest(self, grid_graph: RouteGraph) -> None:
        assert find_nearest_node(point=(0.0019, 0.0001), graph=grid_graph) == "0.0020000,0.0000000"

    def test_exact_node(self, grid_graph: RouteGraph) -> None:
        assert find_nearest_node(point=(0.001, 0.001), graph=grid_graph) == "0.0010000,0.0010000"

    def test_tie_returns_first_inserted(self, make_path) -> None:
        """(0,0) is equidistant from (-1,0) and (1,0); (-1,0) was inserted first."""
        graph = build_graph(features=[make_path([(-1.0, 0.0), (1.0, 0.0)])])
        assert find_nearest_node(point=(0.0, 0.0), graph=graph) == "-1.0000000,0.0000000"

    def test_tie_follows_insertion_order(self, make_path) -> None:
        graph = build_graph(features=[make_path([(1.0, 0.0), (-1.0, 0.0)])])
        assert find_nearest_node(point=(0.0, 0.0), graph=graph) == "1.0000000,0.0000000"


# =============================================================================
# A* SEARCH
# =============================================================================


class TestAStar:
    """a_star - shortest path between two nodes."""

    def test_start_equals_end(self, grid_graph: RouteGraph) -> None:
        assert a_star(graph=grid_graph, start="0.0000000,0.0000000", end="0.0000000,0.0000000") == [(0.0, 0.0)]

    def test_prefers_direct_path(self, grid_graph: RouteGraph) -> None:
        path = a_star(graph=grid_graph, start="0.0000000,0.0000000", end="0.0020000,0.0000000")
        assert path == [(0.0, 0.0), (0.001, 0.0), (0.002, 0.0)]

    def test_missing_node(self, grid_graph: RouteGraph) -> None:
        result = a_star(graph=grid_graph, start="0.0000000,0.0000000", end="9.0000000,9.0000000")
        assert isinstance(result, RouteFailure)
        assert result.reason == RouteFailureReason.NODE_NOT_FOUND
        assert "9.0000000,9.0000000" in result.detail

    def test_disconnected(self, disconnected_campus: FeatureCollection) -> None:
        graph = build_graph(features=disconnected_campus.features)
        result = a_star(graph=graph, start="0.0000000,0.0000000", end="0.0110000,0.0000000")
        assert isinstance(result, RouteFailure)
        assert result.reason == RouteFailureReason.NO_PATH_FOUND

    def test_relaxation_finds_cheaper_detour(self) -> None:
        """Direct S-A edge is expensive; S-B-A is cheaper and must win."""
        graph = RouteGraph()
        s, a, b = "0.0000000,0.0000000", "0.0010000,0.0000000", "0.0005000,0.0001000"
        graph.add_edge(key_a=s, key_b=a, cost_m=1000.0)
        graph.add_edge(key_a=s, key_b=b, cost_m=60.0)
        graph.add_edge(key_a=b, key_b=a, cost_m=60.0)
        assert a_star(graph=graph, start=s, end=a) == [(0.0, 0.0), (0.0005, 0.0001), (0.001, 0.0)]

    def test_parallel_edges_use_cheapest(self) -> None:
        graph = RouteGraph()
        s, g = "0.0000000,0.0000000", "0.0010000,0.0000000"
        graph.add_edge(key_a=s, key_b=g, cost_m=500.0)
        graph.add_edge(key_a=s, key_b=g, cost_m=120.0)
        graph.add_edge(key_a=s, key_b="0.0005000,0.0005000", cost_m=100.0)
        graph.add_edge(key_a="0.0005000,0.0005000", key_b=g, cost_m=100.0)
        assert a_star(graph=graph, start=s, end=g) == [(0.0, 0.0), (0.001, 0.0)]

    def test_symmetric_cost(self, grid_graph: RouteGraph) -> None:
        keys = list(grid_graph)
        for u in keys:
            for v in keys:
                forward = a_star(graph=grid_graph, start=u, end=v)
                backward = a_star(graph=grid_graph, start=v, end=u)
                assert _cost(grid_graph, forward) == pytest.approx(_cost(grid_graph, backward))

    def test_path_uses_existing_edges(self, grid_graph: RouteGraph) -> None:
        path = a_star(graph=grid_graph, start="0.0010000,0.0010000", end="0.0010000,0.0000000")
        keys = [grid_graph.key_for(c) for c in path]
        assert keys[0] == "0.0010000,0.0010000" and keys[-1] == "0.0010000,0.0000000"
        assert all(_edge_costs(grid_graph, a, b) for a, b in zip(keys, keys[1:]))

    @pytest.mark.parametrize("first_branch", ["north", "south"])
    def test_equal_cost_tie_is_deterministic(self, make_path, first_branch: str) -> None:
        """Diamond with mirror-image branches: the first inserted branch wins every time."""
        north = make_path([(0.0, 0.0), (0.001, 0.001), (0.002, 0.0)], feature_id="way/north")
        south = make_path([(0.0, 0.0), (0.001, -0.001), (0.002, 0.0)], feature_id="way/south")
        features = [north, south] if first_branch == "north" else [south, north]
        middle = (0.001, 0.001) if first_branch == "north" else (0.001, -0.001)

        results = [
            a_star(graph=build_graph(features=features), start="0.0000000,0.0000000", end="0.0020000,0.0000000")
            for _ in range(3)
        ]
        assert all(r == [(0.0, 0.0), middle, (0.002, 0.0)] for r in results)


class TestAStarMatchesDijkstra:
    """a_star cost equals scipy Dijkstra on random graphs (admissible heuristic)."""

    @given(
        points=st.lists(
            st.tuples(st.integers(min_value=0, max_value=20), st.integers(min_value=0, max_value=20)),
            min_size=2,
            max_size=12,
            unique=True,
        ),
        edge_picks=st.lists(
            st.tuples(st.integers(min_value=0, max_value=11), st.integers(min_value=0, max_value=11)),
            max_size=30,
        ),
        endpoints=st.tuples(st.integers(min_value=0, max_value=11), st.integers(min_value=0, max_value=11)),
    )
    @settings(max_examples=50, deadline=None)
    def test_optimal_cost(
        self,
        points: list[tuple[int, int]],
        edge_picks: list[tuple[int, int]],
        endpoints: tuple[int, int],
    ) -> None:
        coords = [(ix * 0.0001, iy * 0.0001) for ix, iy in points]
        n = len(coords)
        segments = [(coords[i % n], coords[j % n]) for i, j in edge_picks if i % n != j % n]
        features = [
            CampusFeature(geometry_type="LineString", coordinates=segment, properties={"@id": f"way/{k}"})
            for k, segment in enumerate(segments)
        ]
        graph = build_graph(features=features)

        # Every point becomes a node so unconnected endpoints are still in the graph
        keys = [coordinate_to_key(c) for c in coords]
        for key in keys:
            graph.add_node(key=key)
        index = {key: i for i, key in enumerate(keys)}

        weights = np.full((n, n), np.inf)
        for key, edges in graph.adjacency.items():
            for edge in edges:
                i, j = index[key], index[edge.neighbor]
                weights[i, j] = min(weights[i, j], edge.cost_m)
        weights[np.isinf(weights)] = 0.0
        distances = dijkstra(csr_matrix(weights), directed=False)

        src, dst = endpoints[0] % n, endpoints[1] % n
        result = a_star(graph=graph, start=keys[src], end=keys[dst])

        if np.isinf(distances[src, dst]):
            assert isinstance(result, RouteFailure)
            assert result.reason == RouteFailureReason.NO_PATH_FOUND
        else:
            assert not isinstance(result, RouteFailure)
            assert _cost(graph, result) == pytest.approx(distances[src, dst], rel=1e-9, abs=1e-9)


# =============================================================================
# ROUTE ASSEMBLY
# =============================================================================


class TestComputeCentroid:
    """compute_centroid - outer ring vertex mean."""

    def test_unit_square(self) -> None:
        square = CampusFeature(geometry_type="Polygon", coordinates=[[[0, 0], [0, 1], [1, 1], [1, 0], [0, 0]]])
        assert compute_centroid(feature=square) == (0.5, 0.5)

    def test_multipolygon_first_polygon(self) -> None:
        feature = CampusFeature(
            geometry_type="MultiPolygon",
            coordinates=[[[[0, 0], [0, 2], [2, 2], [2, 0], [0, 0]]], [[[10, 10], [11, 10], [11, 11], [10, 10]]]],
        )
        assert compute_centroid(feature=feature) == (1.0, 1.0)

    def test_point_has_no_centroid(self, point_poi: CampusFeature) -> None:
        assert compute_centroid(feature=point_poi) is None

    @pytest.mark.parametrize("coordinates", [[0, 0], [[1, 2]], [[["a", 0], [1, 1]]]])
    def test_malformed_polygon_has_no_centroid(self, coordinates: list) -> None:
        feature = CampusFeature(geometry_type="Polygon", coordinates=coordinates)
        assert compute_centroid(feature=feature) is None


class TestFindRoute:
    """find_route - centroid + snapped graph path + centroid."""

    def test_single_line_route(self, single_line_campus: FeatureCollection) -> None:
        """Route is [start centroid, (0,0), (0,1), end centroid]."""
        graph = build_graph(features=single_line_campus.features)
        south = single_line_campus.find(feature_id="way/south")
        north = single_line_campus.find(feature_id="way/north")

        route = find_route(start_feature=south, end_feature=north, graph=graph)

        assert isinstance(route, RouteResult)
        assert len(route.coordinates) == 4
        assert route.path == ((0.0, 0.0), (0.0, 1.0))
        assert route.start == pytest.approx((0.0, -0.01))
        assert route.end == pytest.approx((0.0, 1.01))
        assert route.from_name == "South Hall"
        assert route.to_name == "North Hall"

    def test_route_bookends_are_centroids(self, grid_campus: FeatureCollection, grid_graph: RouteGraph) -> None:
        west = grid_campus.find(feature_id="way/west")
        east = grid_campus.find(feature_id="way/east")
        route = find_route(start_feature=west, end_feature=east, graph=grid_graph)
        assert route.start == compute_centroid(feature=west)
        assert route.end == compute_centroid(feature=east)
        assert route.path == ((0.0, 0.0), (0.001, 0.0), (0.002, 0.0))

    def test_unnamed_endpoints_use_default_labels(self, make_building, make_path) -> None:
        start = make_building((-0.0002, 0.0), name=None, feature_id="way/a")
        end = make_building((0.0012, 0.0), name=None, feature_id="way/b")
        graph = build_graph(features=[make_path([(0.0, 0.0), (0.001, 0.0)])])
        route = find_route(start_feature=start, end_feature=end, graph=graph)
        assert (route.from_name, route.to_name) == ("Start", "End")

    def test_same_nearest_node(self, make_building, make_path) -> None:
        """Both centroids snap to one node: route is centroid, node, centroid."""
        graph = build_graph(features=[make_path([(0.0, 0.0), (0.01, 0.0)])])
        a = make_building((0.0, 0.0002), name="A", feature_id="way/a")
        b = make_building((0.0, -0.0002), name="B", feature_id="way/b")
        route = find_route(start_feature=a, end_feature=b, graph=graph)
        assert route.path == ((0.0, 0.0),)
        assert len(route.coordinates) == 3

    def test_no_centroid(self, point_poi: CampusFeature, make_building, grid_graph: RouteGraph) -> None:
        result = find_route(start_feature=point_poi, end_feature=make_building((0.0, 0.0)), graph=grid_graph)
        assert isinstance(result, RouteFailure)
        assert result.reason == RouteFailureReason.NO_CENTROID
        assert "node/gate" in result.detail

    def test_empty_graph(self, make_building) -> None:
        result = find_route(
            start_feature=make_building((0.0, 0.0), feature_id="way/a"),
            end_feature=make_building((0.001, 0.0), feature_id="way/b"),
            graph=RouteGraph(),
        )
        assert isinstance(result, RouteFailure)
        assert result.reason == RouteFailureReason.EMPTY_GRAPH

    def test_disconnected(self, disconnected_campus: FeatureCollection) -> None:
        graph = build_graph(features=disconnected_campus.features)
        result = find_route(
            start_feature=disconnected_campus.find(feature_id="way/west"),
            end_feature=disconnected_campus.find(feature_id="way/far"),
            graph=graph,
        )
        assert isinstance(result, RouteFailure)
        assert result.reason == RouteFailureReason.NO_PATH_FOUND

    def test_idempotent(self, grid_campus: FeatureCollection, grid_graph: RouteGraph) -> None:
        west = grid_campus.find(feature_id="way/west")
        east = grid_campus.find(feature_id="way/east")
        first = find_route(start_feature=west, end_feature=east, graph=grid_graph)
        second = find_route(start_feature=west, end_feature=east, graph=grid_graph)
        assert first == second
