"""CampusMapRenderer - Pydeck map rendering for the campus navigator.

Renders campus elements on an interactive 3D map using deck.gl:
- Buildings as extruded polygons (PolygonLayer), height from levels
- Walkable paths as thin lines (PathLayer)
- Active route as a glowing red line (PathLayer x2)
- Route start/end markers (ScatterplotLayer)

Pydeck conventions:
- Uses [lon, lat] coordinate order (GeoJSON standard)
- Colors as RGBA lists [R, G, B, A] (0-255)
- Data prepared as list[dict] for GPU streaming
"""

import logging
from dataclasses import dataclass, field

import pydeck as pdk

from campus_navigator.constants import GeometryTypes, MapConfig, StyleConfig
from campus_navigator.model.feature import FeatureCollection, is_ring, thaw
from campus_navigator.model.route_result import RouteResult

logger = logging.getLogger(__name__)


def hex_to_rgba(hex_color: str, alpha: int = 255) -> list[int]:
    """Convert hex color to a Pydeck RGBA list."""
    hex_color = hex_color.lstrip("#")
    r = int(hex_color[0:2], 16)
    g = int(hex_color[2:4], 16)
    b = int(hex_color[4:6], 16)
    return [r, g, b, alpha]


@dataclass
class LayerCollection:
    """Manages Pydeck layers with correct z-ordering.

    Z-order (back to front): paths → buildings → route → markers
    """

    paths: list[pdk.Layer] = field(default_factory=list)
    buildings: list[pdk.Layer] = field(default_factory=list)
    route: list[pdk.Layer] = field(default_factory=list)
    markers: list[pdk.Layer] = field(default_factory=list)

    def get_ordered_layers(self) -> list[pdk.Layer]:
        """Return all layers in correct z-order (back to front)."""
        return self.paths + self.buildings + self.route + self.markers


class CampusMapRenderer:
    """Renders campus features and the active route on a Pydeck map.

    Example:
        renderer = CampusMapRenderer(collection=collection)
        renderer.fit_route(route=route)
        st.pydeck_chart(renderer.render(route=route))
    """

    def __init__(
        self,
        collection: FeatureCollection | None = None,
        center_lat: float = MapConfig.START_CENTER_LAT,
        center_lon: float = MapConfig.START_CENTER_LON,
        zoom: int = MapConfig.DEFAULT_ZOOM,
        pitch: float = MapConfig.DEFAULT_PITCH,
        bearing: float = MapConfig.DEFAULT_BEARING,
    ) -> None:
        """Initialize map renderer.

        Args:
            collection: Campus features to render (can set later)
            center_lat: Initial map center latitude
            center_lon: Initial map center longitude
            zoom: Initial zoom level
            pitch: 3D tilt angle (0=top-down, 60=angled)
            bearing: Map rotation (0=north up)
        """
        self.collection = collection
        self.center_lat = center_lat
        self.center_lon = center_lon
        self.zoom = zoom
        self.pitch = pitch
        self.bearing = bearing

    def get_view_state(self) -> pdk.ViewState:
        """Create Pydeck ViewState from current settings."""
        return pdk.ViewState(
            latitude=self.center_lat,
            longitude=self.center_lon,
            zoom=self.zoom,
            pitch=self.pitch,
            bearing=self.bearing,
        )

    def fit_route(self, route: RouteResult) -> None:
        """Center the view on the route's bounding box."""
        min_lon, min_lat, max_lon, max_lat = route.bounds
        self.center_lon = (min_lon + max_lon) / 2
        self.center_lat = (min_lat + max_lat) / 2
        self.zoom = MapConfig.ROUTE_ZOOM

    def render(
        self,
        route: RouteResult | None = None,
        highlight_ids: list[str] | None = None,
        show_paths: bool = True,
    ) -> pdk.Deck:
        """Render complete map with all layers.

        Args:
            route: Active route to draw on top of the campus
            highlight_ids: Feature ids drawn in the highlight color (selected endpoints)
            show_paths: Whether to show the walkable path network

        Returns:
            pdk.Deck object ready for display.
        """
        layer_collection = LayerCollection()

        if self.collection:
            if show_paths:
                layer_collection.paths.append(self._create_path_layer())
            layer_collection.buildings.append(self._create_building_layer(highlight_ids=highlight_ids or []))

        if route is not None:
            layer_collection.route.extend(self._create_route_layers(route=route))
            layer_collection.markers.append(self._create_endpoint_layer(route=route))

        return pdk.Deck(
            initial_view_state=self.get_view_state(),
            layers=layer_collection.get_ordered_layers(),
            tooltip=self._create_tooltip_config(),
        )

    # =========================================================================
    # CAMPUS LAYERS
    # =========================================================================

    def _create_building_layer(self, highlight_ids: list[str]) -> pdk.Layer:
        """Extruded polygons for every area feature (outer rings only)."""
        building_data = []
        for feature in self.collection.area_features:
            if feature.geometry_type == GeometryTypes.POLYGON:
                polygons = (feature.coordinates,)
            else:
                polygons = feature.coordinates
            if not isinstance(polygons, tuple):
                continue

            if feature.id in highlight_ids:
                color = hex_to_rgba(StyleConfig.BUILDING_HIGHLIGHT_COLOR)
            elif feature.levels >= StyleConfig.TALL_BUILDING_LEVELS:
                color = hex_to_rgba(StyleConfig.BUILDING_TALL_COLOR, alpha=230)
            else:
                color = hex_to_rgba(StyleConfig.BUILDING_COLOR, alpha=230)

            for rings in polygons:
                if not isinstance(rings, tuple) or not rings or not is_ring(rings[0]):
                    continue
                building_data.append(
                    {
                        "id": feature.id,
                        "name": feature.display_name or "",
                        "polygon": thaw(rings[0]),
                        "height": feature.height_m,
                        "color": color,
                    }
                )

        return pdk.Layer(
            "PolygonLayer",
            building_data,
            get_polygon="polygon",
            get_elevation="height",
            get_fill_color="color",
            extruded=True,
            pickable=True,
            auto_highlight=True,
            id="buildings",
        )

    def _create_path_layer(self) -> pdk.Layer:
        path_data = [
            {"id": f.id, "name": f.display_name or "", "path": thaw(f.coordinates)}
            for f in self.collection.path_features
        ]
        return pdk.Layer(
            "PathLayer",
            path_data,
            get_path="path",
            get_color=hex_to_rgba(StyleConfig.PATH_COLOR),
            width_min_pixels=StyleConfig.PATH_WIDTH_PX,
            pickable=False,
            id="paths",
        )

    # =========================================================================
    # ROUTE LAYERS
    # =========================================================================

    def _create_route_layers(self, route: RouteResult) -> list[pdk.Layer]:
        """Glow underlay plus solid route line."""
        route_data = [
            {
                "name": f"{route.from_name} → {route.to_name}",
                "path": [list(c) for c in route.coordinates],
            }
        ]
        return [
            pdk.Layer(
                "PathLayer",
                route_data,
                get_path="path",
                get_color=hex_to_rgba(StyleConfig.ROUTE_COLOR, alpha=StyleConfig.ROUTE_GLOW_ALPHA),
                width_min_pixels=StyleConfig.ROUTE_GLOW_WIDTH_PX,
                joint_rounded=True,
                cap_rounded=True,
                id="route-glow",
            ),
            pdk.Layer(
                "PathLayer",
                route_data,
                get_path="path",
                get_color=hex_to_rgba(StyleConfig.ROUTE_COLOR),
                width_min_pixels=StyleConfig.ROUTE_WIDTH_PX,
                joint_rounded=True,
                cap_rounded=True,
                pickable=True,
                id="route-line",
            ),
        ]

    def _create_endpoint_layer(self, route: RouteResult) -> pdk.Layer:
        marker_data = [
            {"name": route.from_name, "position": list(route.start), "color": hex_to_rgba(StyleConfig.START_MARKER_COLOR)},
            {"name": route.to_name, "position": list(route.end), "color": hex_to_rgba(StyleConfig.END_MARKER_COLOR)},
        ]
        return pdk.Layer(
            "ScatterplotLayer",
            marker_data,
            get_position="position",
            get_fill_color="color",
            get_radius=StyleConfig.MARKER_RADIUS_M,
            radius_min_pixels=5,
            stroked=True,
            get_line_color=[255, 255, 255, 255],
            line_width_min_pixels=2,
            pickable=True,
            id="route-endpoints",
        )

    def _create_tooltip_config(self) -> dict[str, str | dict[str, str]]:
        """Create Pydeck tooltip configuration - name only."""
        return {
            "html": "<b>{name}</b>",
            "style": {
                "backgroundColor": "rgba(255, 255, 255, 0.95)",
                "color": "#333",
                "padding": "6px 10px",
                "borderRadius": "4px",
            },
        }
