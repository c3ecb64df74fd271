"""
Typed GeoJSON input for district analysis.

Only what the analysis needs is modelled: a FeatureCollection of Features
whose geometry is a Polygon. Unknown members are ignored. The geometry
kernel never sees these models; callers extract a plain point ring with
``exterior_ring`` first.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gerryaway.exceptions import GeoJSONParseError, UnsupportedGeometryError
from gerryaway.geometry import Point

logger = logging.getLogger(__name__)


class Geometry(BaseModel):
    """A GeoJSON geometry object; coordinates are kept raw."""

    model_config = ConfigDict(extra="ignore")

    type: str
    coordinates: Any = None


class Feature(BaseModel):
    """A GeoJSON feature with free-form properties."""

    model_config = ConfigDict(extra="ignore")

    type: Literal["Feature"] = "Feature"
    id: Union[str, int, float, None] = None
    properties: dict[str, Any] | None = None
    geometry: Geometry | None = None


class FeatureCollection(BaseModel):
    """Top-level GeoJSON FeatureCollection."""

    model_config = ConfigDict(extra="ignore")

    type: Literal["FeatureCollection"]
    features: List[Feature] = Field(default_factory=list)


def parse_feature_collection(payload: dict[str, Any]) -> FeatureCollection:
    """
    Parse a decoded GeoJSON document into a FeatureCollection.

    Args:
        payload: Decoded JSON object

    Returns:
        Validated FeatureCollection

    Raises:
        GeoJSONParseError: If the payload is not a FeatureCollection
    """
    try:
        return FeatureCollection.model_validate(payload)
    except ValidationError as e:
        raise GeoJSONParseError(
            f"Failed to parse FeatureCollection: {e}"
        ) from e


def load_feature_collection(path: Union[str, Path]) -> FeatureCollection:
    """
    Read and parse a GeoJSON FeatureCollection from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        GeoJSONParseError: If the file is not valid JSON or not a
            FeatureCollection
    """
    path = Path(path)
    content = path.read_text(encoding="utf-8")
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        raise GeoJSONParseError(f"{path} is not valid JSON: {e}") from e

    collection = parse_feature_collection(payload)
    logger.debug(
        "Loaded %d features from %s", len(collection.features), path
    )
    return collection


def exterior_ring(geometry: Geometry) -> List[Point]:
    """
    Extract the exterior ring of a Polygon as a list of points.

    Positions with fewer than two values are dropped and any altitude is
    ignored. The closing position that repeats the first one is removed,
    since polygons are implicitly closed. Holes are not read.

    Raises:
        UnsupportedGeometryError: If the geometry is not a Polygon
        GeoJSONParseError: If the coordinates are malformed or not finite
    """
    if geometry.type != "Polygon":
        raise UnsupportedGeometryError(
            f"Expected Polygon geometry, got {geometry.type}"
        )
    if not geometry.coordinates:
        return []

    try:
        ring = [
            (float(position[0]), float(position[1]))
            for position in geometry.coordinates[0]
            if len(position) >= 2
        ]
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise GeoJSONParseError(f"Malformed Polygon coordinates: {e}") from e

    for x, y in ring:
        if not (math.isfinite(x) and math.isfinite(y)):
            raise GeoJSONParseError(
                f"Non-finite Polygon coordinate: ({x}, {y})"
            )

    if len(ring) > 1 and ring[0] == ring[-1]:
        ring.pop()
    return ring


def feature_matches(feature: Feature, property_name: str, value: Any) -> bool:
    """True when the feature has ``property_name`` equal to ``value``."""
    properties = feature.properties or {}
    if property_name not in properties:
        return False
    return properties[property_name] == value


def district_id(feature: Feature, id_property: str, index: int) -> str:
    """
    Identifier used to report a feature.

    Falls back to the feature ``id`` and then to its position in the
    collection when the id property is missing.
    """
    properties = feature.properties or {}
    if properties.get(id_property) is not None:
        return str(properties[id_property])
    if feature.id is not None:
        return str(feature.id)
    logger.warning(
        "Feature %d has no %r property or id; using its index",
        index,
        id_property,
    )
    return f"feature-{index}"
