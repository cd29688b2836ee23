"""NavigationController - start/destination selection and route requests.

Holds the navigation selection for one UI session and the routing graph
derived from the current feature collection. The graph is rebuilt in full
whenever a new collection is set; it is never patched incrementally.

Every request returns a ToastMessage describing the outcome, so the UI
only has to display it. Failed requests leave no route behind.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from campus_navigator.model.feature import FeatureCollection
from campus_navigator.model.message import (
    LocationNotFoundMessage,
    RouteFailureMessage,
    RouteFoundMessage,
    RoutingGraphNotReadyMessage,
    SameLocationMessage,
    SelectBothLocationsMessage,
    ToastMessage,
)
from campus_navigator.model.route_graph import RouteGraph
from campus_navigator.model.route_result import RouteFailure, RouteResult
from campus_navigator.routing.graph_builder import build_graph
from campus_navigator.routing.route_finder import find_route

logger = logging.getLogger(__name__)


@dataclass
class NavigationSelection:
    """Current start/destination feature ids ("" = nothing selected)."""

    start_id: str = ""
    end_id: str = ""


class NavigationController:
    """Navigation state for one session.

    Example:
        controller = NavigationController(collection=collection)
        controller.select_start(feature_id="way/1")
        controller.select_end(feature_id="way/2")
        toast = controller.start_navigation()
        controller.route  # RouteResult or None
    """

    def __init__(self, collection: FeatureCollection | None = None) -> None:
        self.selection = NavigationSelection()
        self.route: Optional[RouteResult] = None
        self._collection = FeatureCollection()
        self._graph: Optional[RouteGraph] = None
        self.set_collection(collection=collection or FeatureCollection())

    @property
    def collection(self) -> FeatureCollection:
        return self._collection

    @property
    def graph(self) -> Optional[RouteGraph]:
        """Routing graph of the current collection, None when no data is loaded."""
        return self._graph

    def set_collection(self, collection: FeatureCollection) -> None:
        """Replace the campus data and rebuild the routing graph from scratch."""
        self._collection = collection
        if len(collection) == 0:
            self._graph = None
            return
        self._graph = build_graph(features=collection.features)

    def select_start(self, feature_id: str) -> None:
        self.selection.start_id = feature_id or ""

    def select_end(self, feature_id: str) -> None:
        self.selection.end_id = feature_id or ""

    def start_navigation(self) -> ToastMessage:
        """Validate the selection and compute a route.

        Returns:
            RouteFoundMessage on success, otherwise the message explaining why
            no route is shown.
        """
        start_id, end_id = self.selection.start_id, self.selection.end_id
        if not start_id or not end_id:
            return SelectBothLocationsMessage()
        if start_id == end_id:
            return SameLocationMessage()

        start_feature = self._collection.find(feature_id=start_id)
        end_feature = self._collection.find(feature_id=end_id)
        if start_feature is None or end_feature is None:
            self.route = None
            return LocationNotFoundMessage(feature_id=start_id if start_feature is None else end_id)

        if self._graph is None:
            logger.warning("Routing graph not ready")
            self.route = None
            return RoutingGraphNotReadyMessage()

        outcome = find_route(start_feature=start_feature, end_feature=end_feature, graph=self._graph)
        if isinstance(outcome, RouteFailure):
            self.route = None
            return RouteFailureMessage(failure=outcome)

        self.route = outcome
        return RouteFoundMessage(route=outcome)

    def reset(self) -> None:
        """Clear the selection and the displayed route."""
        self.selection = NavigationSelection()
        self.route = None
