"""Shared pytest fixtures for campus_navigator tests.

Provides feature factories and reusable campus layouts for all tests.
All fixtures use explicit values with documented rationale.

COORDINATE SYSTEM:
    Tests use coordinates near the equator (lat~0) and prime meridian (lon~0)
    where the math is simple: 1 degree ≈ 111,195 meters in both directions
    (haversine with R = 6,371 km), so 0.001° ≈ 111m.
"""

from collections.abc import Callable, Sequence

import pytest

from campus_navigator.model.feature import CampusFeature, FeatureCollection
from campus_navigator.model.route_graph import RouteGraph
from campus_navigator.routing.graph_builder import build_graph

PathFactory = Callable[..., CampusFeature]
BuildingFactory = Callable[..., CampusFeature]


def _path(coords: Sequence[Sequence[float]], feature_id: str = "way/path") -> CampusFeature:
    return CampusFeature.from_dict(
        {
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": [list(c) for c in coords]},
            "properties": {"@id": feature_id, "highway": "footway"},
        }
    )


def _building(
    center: Sequence[float],
    name: str | None = "Building",
    feature_id: str = "way/building",
    half_size: float = 0.0001,
    levels: int | None = None,
) -> CampusFeature:
    """Square building around center; vertex centroid equals center."""
    lon, lat = center
    ring = [
        [lon - half_size, lat - half_size],
        [lon + half_size, lat - half_size],
        [lon + half_size, lat + half_size],
        [lon - half_size, lat + half_size],
        [lon - half_size, lat - half_size],
    ]
    properties = {"@id": feature_id, "building": "yes"}
    if name is not None:
        properties["name"] = name
    if levels is not None:
        properties["building:levels"] = levels
    return CampusFeature.from_dict(
        {"type": "Feature", "geometry": {"type": "Polygon", "coordinates": [ring]}, "properties": properties}
    )


# =============================================================================
# FEATURE FACTORIES
# =============================================================================


@pytest.fixture
def make_path() -> PathFactory:
    """Factory for LineString path features: make_path(coords, feature_id=...)."""
    return _path


@pytest.fixture
def make_building() -> BuildingFactory:
    """Factory for square Polygon buildings: make_building(center, name=..., feature_id=...)."""
    return _building


@pytest.fixture
def point_poi() -> CampusFeature:
    """Point-only POI: a valid location without any area geometry."""
    return CampusFeature.from_dict(
        {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [0.0, 0.0]},
            "properties": {"@id": "node/gate", "poi": "gate", "name": "Main Gate"},
        }
    )


# =============================================================================
# CAMPUS LAYOUTS
# =============================================================================


@pytest.fixture
def single_line_campus() -> FeatureCollection:
    """One path (0,0) -> (0,1) with a building just beyond each end.

    Buildings sit 0.01° (≈1.1km) outside the path ends so each snaps to
    the nearer path endpoint.
    """
    return FeatureCollection(
        features=(
            _path([(0.0, 0.0), (0.0, 1.0)], feature_id="way/1"),
            _building((0.0, -0.01), name="South Hall", feature_id="way/south"),
            _building((0.0, 1.01), name="North Hall", feature_id="way/north"),
        )
    )


@pytest.fixture
def grid_campus() -> FeatureCollection:
    """Two routes between (0,0) and (0.002,0).

    Direct path:  (0,0) -> (0.001,0) -> (0.002,0)          ≈ 222m
    Detour path:  (0,0) -> (0.001,0.001) -> (0.002,0)      ≈ 314m

    Buildings sit 0.0002° west of the start and east of the end.
    """
    return FeatureCollection(
        features=(
            _path([(0.0, 0.0), (0.001, 0.001), (0.002, 0.0)], feature_id="way/detour"),
            _path([(0.0, 0.0), (0.001, 0.0), (0.002, 0.0)], feature_id="way/direct"),
            _building((-0.0002, 0.0), name="West Hall", feature_id="way/west"),
            _building((0.0022, 0.0), name="East Hall", feature_id="way/east"),
        )
    )


@pytest.fixture
def disconnected_campus() -> FeatureCollection:
    """Two path clusters 0.01° (≈1.1km) apart with one building beside each."""
    return FeatureCollection(
        features=(
            _path([(0.0, 0.0), (0.001, 0.0)], feature_id="way/a"),
            _path([(0.01, 0.0), (0.011, 0.0)], feature_id="way/b"),
            _building((-0.0002, 0.0), name="West Hall", feature_id="way/west"),
            _building((0.0112, 0.0), name="Far Hall", feature_id="way/far"),
        )
    )


@pytest.fixture
def grid_graph(grid_campus: FeatureCollection) -> RouteGraph:
    """Routing graph of grid_campus: 4 nodes, 4 edges."""
    return build_graph(features=grid_campus.features)
