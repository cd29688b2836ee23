"""Message - User-facing messages for the campus navigator UI.

Architecture:
- LEFT (sidebar): ONE blue info message with campus data stats
- CENTER (under map): Route banner once a route is shown
- Toasts: Transient feedback for navigation requests (validation, failures, success)

Messages are plain frozen dataclasses; Streamlit is imported lazily in
display() so the model stays importable without a running app.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from campus_navigator.model.route_result import RouteFailure, RouteFailureReason, RouteResult


class MessageLevel(Enum):
    """Display level for UI messages."""

    INFO = "info"  # Blue - context/status
    WARNING = "warning"  # Yellow - action instructions
    ERROR = "error"  # Red - failures
    SUCCESS = "success"  # Green - route shown


@dataclass(frozen=True)
class Message(ABC):
    """Abstract base class for user-facing messages displayed inline (sidebars/panels)."""

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for display in Streamlit."""
        raise NotImplementedError

    @property
    @abstractmethod
    def level(self) -> MessageLevel:
        """Display level."""
        raise NotImplementedError

    def display(self) -> None:
        """Render this message using the appropriate Streamlit function."""
        import streamlit as st

        render_fn = {
            MessageLevel.INFO: st.info,
            MessageLevel.WARNING: st.warning,
            MessageLevel.ERROR: st.error,
            MessageLevel.SUCCESS: st.success,
        }[self.level]
        render_fn(self.message)


@dataclass(frozen=True)
class ToastMessage(ABC):
    """Abstract base class for transient popup notifications.

    Good for: validation failures, routing failures, quick confirmations
    Bad for: context messages, status displays
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for the toast notification."""
        raise NotImplementedError

    @property
    @abstractmethod
    def icon(self) -> str:
        """Icon to show in toast. Override in subclasses."""
        raise NotImplementedError

    @property
    def is_error(self) -> bool:
        """Whether the message reports a request that did not produce a route."""
        return True

    def display(self) -> None:
        """Show this message as a toast notification and log it."""
        import streamlit as st

        logger = logging.getLogger(__name__)
        logger.info(f"[TOAST] {self.icon} {self.message}")
        st.toast(f"{self.icon} {self.message}")


# =============================================================================
# TOAST MESSAGES - Navigation request feedback
# =============================================================================


@dataclass(frozen=True)
class SelectBothLocationsMessage(ToastMessage):
    """Navigate pressed without both start and destination selected."""

    @property
    def icon(self) -> str:
        return "⚠️"

    @property
    def message(self) -> str:
        return "Select both Start and Destination"


@dataclass(frozen=True)
class SameLocationMessage(ToastMessage):
    """Start and destination are the same feature."""

    @property
    def icon(self) -> str:
        return "⚠️"

    @property
    def message(self) -> str:
        return "Must be different locations"


@dataclass(frozen=True)
class LocationNotFoundMessage(ToastMessage):
    """Selected feature id no longer exists in the campus data."""

    feature_id: str

    @property
    def icon(self) -> str:
        return "🔍"

    @property
    def message(self) -> str:
        return f"Location not found — {self.feature_id}"


@dataclass(frozen=True)
class RoutingGraphNotReadyMessage(ToastMessage):
    """Navigation requested before any campus data is loaded."""

    @property
    def icon(self) -> str:
        return "⏳"

    @property
    def message(self) -> str:
        return "Routing graph not ready — no campus data loaded"


@dataclass(frozen=True)
class RouteFailureMessage(ToastMessage):
    """Routing finished without a path."""

    failure: RouteFailure

    @property
    def icon(self) -> str:
        return {
            RouteFailureReason.NO_CENTROID: "🏢",
            RouteFailureReason.EMPTY_GRAPH: "🗺️",
        }.get(self.failure.reason, "🚫")

    @property
    def message(self) -> str:
        return self.failure.message


@dataclass(frozen=True)
class RouteFoundMessage(ToastMessage):
    """Route computed and shown on the map."""

    route: RouteResult

    @property
    def icon(self) -> str:
        return "🧭"

    @property
    def is_error(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return f"Route: {self.route.from_name} → {self.route.to_name} ({self.route.length_m:.0f}m)"


@dataclass(frozen=True)
class FileLoadErrorMessage(ToastMessage):
    """User uploaded an invalid campus file."""

    error: str

    @property
    def icon(self) -> str:
        return "📁"

    @property
    def message(self) -> str:
        return f"Load Failed — {self.error}"


# =============================================================================
# INLINE MESSAGES
# =============================================================================


@dataclass(frozen=True)
class CampusContextMessage(Message):
    """LEFT panel: campus data statistics."""

    location_count: int
    node_count: int
    edge_count: int

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        if self.node_count == 0:
            return f"🏫 **{self.location_count} locations** — no walkable paths loaded, navigation unavailable."
        return (
            f"🏫 **{self.location_count} locations** — "
            f"path network with {self.node_count} nodes and {self.edge_count} segments."
        )


@dataclass(frozen=True)
class RouteBannerMessage(Message):
    """CENTER: confirmation banner for the active route."""

    route: RouteResult

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.SUCCESS

    @property
    def message(self) -> str:
        return f"🚶 **{self.route.from_name}** → **{self.route.to_name}** — {self.route.length_m:.0f}m walk"
