"""Configuration constants for Campus Navigator.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: UI application settings
    GeometryTypes: GeoJSON geometry type names
    PropertyKeys: Feature property names used by the campus data
    RoutingConfig: Graph construction and distance parameters
    NavigationConfig: Labels for route endpoints and locations
    MapConfig: Default map view parameters
    StyleConfig: Visual colors and styling
"""

from pathlib import Path

# Package root directory (where campus_navigator/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of campus_navigator/)
PROJECT_ROOT = PACKAGE_DIR.parent

# Data directory outside package (campus document is edited separately)
DATA_DIR = PROJECT_ROOT / "data"

# Single JSON document holding the campus feature collection
CAMPUS_DATA_PATH = DATA_DIR / "campus.json"


class AppConfig:
    """UI application settings."""

    TITLE = "Campus Navigator"
    ICON = "🧭"
    LAYOUT = "wide"


class GeometryTypes:
    """GeoJSON geometry type names."""

    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"

    # Geometries that can serve as routing endpoints (centroid source)
    AREAS = (POLYGON, MULTI_POLYGON)


class PropertyKeys:
    """Feature property names used by the campus data (OpenStreetMap tags)."""

    ID = "@id"
    NAME = "name"
    ROOM_NAME = "room_name"
    ROOM_NUMBER = "room_number"
    BUILDING = "building"
    POI = "poi"
    LEVELS = "building:levels"
    HEIGHT = "height"


class RoutingConfig:
    """Graph construction and distance parameters."""

    # Node identity = coordinate rounded to this many decimal places.
    # 7 decimals of a degree ≈ 1.1 cm at the equator. Shared path vertices
    # authored further apart than that do NOT connect.
    NODE_KEY_DECIMALS = 7

    # Earth's radius in meters (WGS84 spherical approximation)
    EARTH_RADIUS_M = 6_371_000


class NavigationConfig:
    """Labels for route endpoints and location lists."""

    DEFAULT_START_LABEL = "Start"
    DEFAULT_END_LABEL = "End"
    ROOM_LABEL_PREFIX = "Room"


class MapConfig:
    """Default map view parameters."""

    # Initial center: LUMS campus, Lahore
    START_CENTER_LON = 74.4098
    START_CENTER_LAT = 31.4705

    DEFAULT_ZOOM = 17
    ROUTE_ZOOM = 17
    DEFAULT_PITCH = 60
    DEFAULT_BEARING = -20.8

    # Extrusion height per building level (meters)
    METERS_PER_LEVEL = 3.5
    # Height for buildings without levels or explicit height
    DEFAULT_BUILDING_HEIGHT_M = 5.0


class StyleConfig:
    """Visual colors and styling."""

    BUILDING_COLOR = "#3B82F6"  # blue-500
    BUILDING_TALL_COLOR = "#1E3A8A"  # blue-900
    BUILDING_HIGHLIGHT_COLOR = "#FFFFFF"
    # Buildings with at least this many levels use BUILDING_TALL_COLOR
    TALL_BUILDING_LEVELS = 3

    PATH_COLOR = "#9CA3AF"  # gray-400
    PATH_WIDTH_PX = 2

    ROUTE_COLOR = "#EF4444"  # red-500
    ROUTE_WIDTH_PX = 4
    ROUTE_GLOW_WIDTH_PX = 12
    ROUTE_GLOW_ALPHA = 100

    START_MARKER_COLOR = "#22C55E"  # green-500
    END_MARKER_COLOR = "#EF4444"  # red-500
    MARKER_RADIUS_M = 4
