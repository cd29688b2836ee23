"""Shared pytest fixtures for campus_navigator workflow tests.

Workflow tests run against the bundled sample campus in data/campus.json.
Keep this file minimal.

SAMPLE CAMPUS:
    Main network: Main Walk (4 nodes, east-west) joined by Library Lane
    (north, 2 more nodes). Sports Track is a separate 2-node island.
    8 nodes, 6 edges in total.
"""

import pytest

from campus_navigator.constants import CAMPUS_DATA_PATH
from campus_navigator.model.feature import FeatureCollection
from campus_navigator.model.route_graph import RouteGraph
from campus_navigator.routing.graph_builder import build_graph


@pytest.fixture(scope="session")
def campus() -> FeatureCollection:
    """Sample campus loaded from disk once per session (immutable)."""
    return FeatureCollection.load(path=CAMPUS_DATA_PATH)


@pytest.fixture
def campus_graph(campus: FeatureCollection) -> RouteGraph:
    return build_graph(features=campus.features)
