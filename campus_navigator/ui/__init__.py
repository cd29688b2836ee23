"""User interface components for the campus navigator.

File Structure (layout-based naming):
- center_map.py: Pydeck map with buildings, paths and the active route
- navigation.py: NavigationController (selection, graph rebuild, route requests)
"""

from campus_navigator.ui.center_map import CampusMapRenderer
from campus_navigator.ui.navigation import NavigationController, NavigationSelection

__all__ = [
    "CampusMapRenderer",
    "NavigationController",
    "NavigationSelection",
]
