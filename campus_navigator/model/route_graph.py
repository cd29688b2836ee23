"""RouteGraph - Undirected weighted graph of the walkable campus paths.

Nodes are identified by string keys derived from coordinates quantized to a
fixed number of decimal places (default 7, ≈1.1 cm). Path segments authored
independently coalesce into a shared node when their endpoints agree to that
precision. Edges carry the haversine length of the segment in meters and are
stored in both adjacency lists. Parallel edges are kept; the search simply
ignores the costlier duplicates.

The graph is derived data: rebuilt from scratch whenever the feature
collection changes, never persisted.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from campus_navigator.constants import RoutingConfig
from campus_navigator.core.geo_calculator import Coordinate


def coordinate_to_key(coordinate: Sequence[float], decimals: int = RoutingConfig.NODE_KEY_DECIMALS) -> str:
    """Quantize a (lon, lat) coordinate into a node key.

    Fixed-point formatting (never scientific notation). Negative zero is
    normalized so jitter around 0.0 does not split a node.

    Example:
        coordinate_to_key((74.40981234567, 31.4705)) == "74.4098123,31.4705000"
    """
    lon = round(float(coordinate[0]), decimals) + 0.0
    lat = round(float(coordinate[1]), decimals) + 0.0
    return f"{lon:.{decimals}f},{lat:.{decimals}f}"


def key_to_coordinate(key: str) -> Coordinate:
    """Parse a node key back into its (lon, lat) coordinate."""
    lon, lat = key.split(",")
    return (float(lon), float(lat))


@dataclass(frozen=True)
class GraphEdge:
    """Directed half of an undirected edge, stored in the source node's adjacency list."""

    neighbor: str
    cost_m: float


class RouteGraph:
    """Adjacency-list graph keyed by quantized coordinates.

    Node order is insertion order, which makes nearest-node lookups and
    search tie-breaks reproducible for a given feature order.

    Example:
        graph = RouteGraph()
        graph.add_edge(key_a, key_b, cost_m=12.5)
        graph.neighbors(key_a)  # [GraphEdge(neighbor=key_b, cost_m=12.5)]
    """

    def __init__(self, decimals: int = RoutingConfig.NODE_KEY_DECIMALS) -> None:
        """Initialize empty graph.

        Args:
            decimals: Quantization precision used for node keys
        """
        self.decimals = decimals
        self.adjacency: dict[str, list[GraphEdge]] = {}
        self._coordinates: dict[str, Coordinate] = {}

    def __contains__(self, key: object) -> bool:
        return key in self.adjacency

    def __len__(self) -> int:
        return len(self.adjacency)

    def __iter__(self) -> Iterator[str]:
        return iter(self.adjacency)

    @property
    def is_empty(self) -> bool:
        return not self.adjacency

    @property
    def edge_count(self) -> int:
        """Number of undirected edges (parallel edges counted individually)."""
        return sum(len(edges) for edges in self.adjacency.values()) // 2

    # =========================================================================
    # Construction
    # =========================================================================

    def key_for(self, coordinate: Sequence[float]) -> str:
        """Node key for a coordinate at this graph's precision."""
        return coordinate_to_key(coordinate=coordinate, decimals=self.decimals)

    def add_node(self, key: str) -> None:
        """Register a node (no-op if it already exists)."""
        if key not in self.adjacency:
            self.adjacency[key] = []
            self._coordinates[key] = key_to_coordinate(key=key)

    def add_edge(self, key_a: str, key_b: str, cost_m: float) -> None:
        """Insert an undirected edge; the same cost is stored in both directions."""
        self.add_node(key=key_a)
        self.add_node(key=key_b)
        self.adjacency[key_a].append(GraphEdge(neighbor=key_b, cost_m=cost_m))
        self.adjacency[key_b].append(GraphEdge(neighbor=key_a, cost_m=cost_m))

    # =========================================================================
    # Queries
    # =========================================================================

    def coordinate(self, key: str) -> Coordinate:
        """(lon, lat) of a node.

        Raises:
            KeyError: If the node is not in the graph.
        """
        return self._coordinates[key]

    def neighbors(self, key: str) -> list[GraphEdge]:
        """Outgoing edges of a node, empty for unknown nodes."""
        return self.adjacency.get(key, [])

    def to_adjacency(self) -> dict[str, list[tuple[str, float]]]:
        """Plain mapping form: {node_key: [(neighbor_key, cost_m), ...]}."""
        return {key: [(e.neighbor, e.cost_m) for e in edges] for key, edges in self.adjacency.items()}

    def __repr__(self) -> str:
        return f"RouteGraph(nodes={len(self)}, edges={self.edge_count})"
