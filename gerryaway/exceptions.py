"""Custom exceptions for the gerryaway package."""


class GerryAwayError(Exception):
    """Base exception for all gerryaway errors."""


# Geometry kernel exceptions
class GeometryError(GerryAwayError):
    """Base exception for geometry kernel failures."""


class UndefinedAspectRatioError(GeometryError):
    """
    Raised when no aspect ratio exists for a shape.

    This happens when the convex hull has fewer than two distinct points, or
    when the minimum-area bounding rectangle has a zero-length side (all
    points collinear).
    """


# GeoJSON input exceptions
class GeoJSONError(GerryAwayError):
    """Base exception for GeoJSON input handling."""


class GeoJSONParseError(GeoJSONError):
    """Raised when a document is not valid JSON or not a FeatureCollection."""


class UnsupportedGeometryError(GeoJSONError):
    """Raised when a feature geometry is not a Polygon."""
