"""CampusFeature and FeatureCollection - the campus GeoJSON document.

A CampusFeature is an immutable view of one GeoJSON feature: a geometry type,
its nested coordinates (frozen to tuples) and a read-only properties mapping.
The routing core only ever reads features, so freezing them guarantees that
graph construction and search never mutate the caller's data.

FeatureCollection wraps the features of the single JSON document the campus
backend stores. Validation is structural only: the document must be a
mapping with a "type" and a "features" list, and every feature (and its
geometry, when present) must be a mapping. Coordinates are not validated up
front; geometry whose positions are not numeric pairs is treated as unusable
by is_path / exterior_ring and skipped by routing and rendering.
"""

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from campus_navigator.constants import GeometryTypes, MapConfig, NavigationConfig, PropertyKeys

logger = logging.getLogger(__name__)


class InvalidFeatureCollectionError(ValueError):
    """Raised when a document is not a feature-collection wrapper around a features array."""


def freeze(value: Any) -> Any:
    """Recursively convert nested lists into tuples."""
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Recursively convert nested tuples back into JSON lists."""
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


def is_position(value: Any) -> bool:
    """True for a frozen position: a tuple starting with finite lon and lat numbers."""
    if not isinstance(value, tuple) or len(value) < 2:
        return False
    return all(isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v) for v in value[:2])


def is_ring(value: Any) -> bool:
    """True for a tuple of positions (an empty ring included)."""
    return isinstance(value, tuple) and all(is_position(p) for p in value)


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class CampusFeature:
    """A single campus GeoJSON feature.

    Attributes:
        geometry_type: GeoJSON geometry type ("Point", "LineString", ...) or None
        coordinates: Nested coordinate tuples, (lon, lat) order
        properties: Read-only feature properties (OSM tags plus "@id")

    Example:
        feature = CampusFeature.from_dict({
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": [[0, 0], [0, 1]]},
            "properties": {"@id": "way/1", "highway": "footway"},
        })
        feature.is_path  # True
    """

    geometry_type: str | None
    coordinates: tuple = ()
    properties: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Freeze coordinates and properties so callers cannot mutate them."""
        object.__setattr__(self, "coordinates", freeze(self.coordinates))
        if not isinstance(self.properties, MappingProxyType):
            object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    # =========================================================================
    # Identity and labels
    # =========================================================================

    @property
    def id(self) -> str | None:
        """Unique identifier from the "@id" property."""
        return self.properties.get(PropertyKeys.ID)

    @property
    def name(self) -> str | None:
        """Plain "name" property as text, None if absent or empty."""
        return _text(self.properties.get(PropertyKeys.NAME))

    @property
    def display_name(self) -> str | None:
        """Human-readable label: name, room name, or "Room <number>"."""
        room_name = _text(self.properties.get(PropertyKeys.ROOM_NAME))
        room_number = self.properties.get(PropertyKeys.ROOM_NUMBER)
        if self.name:
            return self.name
        if room_name:
            return room_name
        if room_number:
            return f"{NavigationConfig.ROOM_LABEL_PREFIX} {room_number}"
        return None

    @property
    def levels(self) -> int:
        """Above-ground floor count ("building:levels"), 0 if unknown."""
        return self._int_property(PropertyKeys.LEVELS)

    @property
    def height_m(self) -> float:
        """Extrusion height: explicit "height", else levels * 3.5m, else default."""
        height = self.properties.get(PropertyKeys.HEIGHT)
        if height is not None:
            try:
                return float(height)
            except (TypeError, ValueError):
                logger.debug(f"Ignoring non-numeric height {height!r} on {self.id}")
        if self.levels > 0:
            return self.levels * MapConfig.METERS_PER_LEVEL
        return MapConfig.DEFAULT_BUILDING_HEIGHT_M

    def _int_property(self, key: str) -> int:
        value = self.properties.get(key)
        if value is None:
            return 0
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0

    # =========================================================================
    # Geometry classification
    # =========================================================================

    @property
    def is_path(self) -> bool:
        """True for walkable LineString geometry with at least two valid positions."""
        return (
            self.geometry_type == GeometryTypes.LINE_STRING
            and is_ring(self.coordinates)
            and len(self.coordinates) >= 2
        )

    @property
    def is_area(self) -> bool:
        """True for Polygon or MultiPolygon geometry."""
        return self.geometry_type in GeometryTypes.AREAS

    @property
    def is_location(self) -> bool:
        """True for features offered as navigation endpoints.

        A location needs a display name, an "@id", and a building or poi tag.
        """
        has_tag = bool(self.properties.get(PropertyKeys.BUILDING) or self.properties.get(PropertyKeys.POI))
        return bool(self.display_name) and bool(self.id) and has_tag

    @property
    def exterior_ring(self) -> tuple | None:
        """Outer ring of a Polygon, or of the first polygon of a MultiPolygon.

        Returns:
            Ring coordinates, or None for non-area, empty or malformed geometry.
        """
        if self.geometry_type == GeometryTypes.POLYGON:
            rings = self.coordinates
        elif self.geometry_type == GeometryTypes.MULTI_POLYGON:
            polygons = self.coordinates
            rings = polygons[0] if isinstance(polygons, tuple) and polygons else ()
        else:
            return None
        if not isinstance(rings, tuple) or not rings or not is_ring(rings[0]):
            return None
        return rings[0]

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict:
        """Serialize to a GeoJSON Feature dict."""
        geometry = None
        if self.geometry_type is not None:
            geometry = {"type": self.geometry_type, "coordinates": thaw(self.coordinates)}
        return {"type": "Feature", "geometry": geometry, "properties": dict(self.properties)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CampusFeature":
        """Create CampusFeature from a GeoJSON Feature dict.

        Raises:
            InvalidFeatureCollectionError: If the feature, its geometry or its
                properties are present but not mappings.
        """
        if not isinstance(data, Mapping):
            raise InvalidFeatureCollectionError(f"Invalid feature: expected an object, got {type(data).__name__}")
        geometry = data.get("geometry") or {}
        properties = data.get("properties") or {}
        if not isinstance(geometry, Mapping):
            raise InvalidFeatureCollectionError(f"Invalid geometry: expected an object, got {type(geometry).__name__}")
        if not isinstance(properties, Mapping):
            raise InvalidFeatureCollectionError(
                f"Invalid properties: expected an object, got {type(properties).__name__}"
            )
        return cls(
            geometry_type=geometry.get("type"),
            coordinates=geometry.get("coordinates") or (),
            properties=properties,
        )

    def __repr__(self) -> str:
        return f"CampusFeature({self.id}, {self.geometry_type}, {self.display_name!r})"


@dataclass(frozen=True)
class FeatureCollection:
    """Immutable campus feature collection.

    Any edit produces a new collection; consumers rebuild derived data
    (e.g. the routing graph) from the new value.

    Example:
        collection = FeatureCollection.load(path=CAMPUS_DATA_PATH)
        library = collection.find(feature_id="way/123")
    """

    features: tuple[CampusFeature, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "features", tuple(self.features))

    def __len__(self) -> int:
        return len(self.features)

    def find(self, feature_id: str) -> CampusFeature | None:
        """Return the first feature whose "@id" matches, None otherwise."""
        for feature in self.features:
            if feature.id == feature_id:
                return feature
        return None

    @property
    def path_features(self) -> list[CampusFeature]:
        """Walkable LineString features."""
        return [f for f in self.features if f.is_path]

    @property
    def area_features(self) -> list[CampusFeature]:
        """Polygon and MultiPolygon features."""
        return [f for f in self.features if f.is_area]

    def locations(self) -> list[CampusFeature]:
        """Navigation endpoints (buildings and POIs) sorted by display name."""
        return sorted(
            (f for f in self.features if f.is_location),
            key=lambda f: (f.display_name or "").casefold(),
        )

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict:
        """Serialize to a GeoJSON FeatureCollection dict."""
        return {"type": "FeatureCollection", "features": [f.to_dict() for f in self.features]}

    @classmethod
    def from_dict(cls, data: Any) -> "FeatureCollection":
        """Create FeatureCollection from a GeoJSON dict.

        Raises:
            InvalidFeatureCollectionError: If data lacks a "type" or a "features" list.
        """
        if not isinstance(data, Mapping) or not data.get("type") or not isinstance(data.get("features"), list):
            raise InvalidFeatureCollectionError("Invalid GeoJSON structure: expected a type and a features array")
        return cls(features=tuple(CampusFeature.from_dict(data=f) for f in data["features"]))

    @classmethod
    def load(cls, path: Path) -> "FeatureCollection":
        """Load a feature collection from a JSON file.

        Raises:
            InvalidFeatureCollectionError: If the file is not UTF-8 JSON or has the wrong shape.
        """
        with open(path, "rb") as f:
            collection = cls.from_json(content=f.read(), source=Path(path).name)
        logger.info(f"Loaded campus data: {len(collection)} features from {Path(path).name}")
        return collection

    @classmethod
    def from_json(cls, content: str | bytes, source: str = "upload") -> "FeatureCollection":
        """Parse a feature collection from JSON text or UTF-8 bytes.

        Raises:
            InvalidFeatureCollectionError: If the content is not UTF-8 JSON or has the wrong shape.
        """
        try:
            if isinstance(content, bytes):
                content = content.decode("utf-8")
            data = json.loads(content)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidFeatureCollectionError(f"Invalid JSON data in {source}: {e}") from e
        return cls.from_dict(data=data)

    def save(self, path: Path) -> None:
        """Write the collection as pretty-printed JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Campus data saved: {len(self)} features to {path.name}")
