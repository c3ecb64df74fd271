"""
GerryAway - shape compactness metrics for voting districts.

The geometry kernel (convex hull, polygon area and minimum-area bounding
rectangle) works on plain (x, y) point sequences. The analysis layer reads
GeoJSON districts and flags the ones whose shape is irregular.

Example:
    ```python
    from gerryaway import convex_hull, min_bounding_rectangle, polygon_area

    ring = [(0, 0), (4, 0), (4, 1), (0, 1)]
    polygon_area(ring)  # 4.0
    min_bounding_rectangle(ring).aspect_ratio  # 4.0
    ```
"""

from gerryaway.analysis import (
    AnalysisReport,
    DistrictMetrics,
    DistrictResult,
    analyze_features,
    classify_district,
    measure_district,
)
from gerryaway.config import AnalysisConfig, get_config
from gerryaway.constants import FailureReason
from gerryaway.exceptions import (
    GeoJSONError,
    GeoJSONParseError,
    GeometryError,
    GerryAwayError,
    UndefinedAspectRatioError,
    UnsupportedGeometryError,
)
from gerryaway.geometry import (
    BoundingRectangle,
    Point,
    convex_hull,
    min_bounding_rectangle,
    min_bounding_rectangle_aspect_ratio,
    polygon_area,
    signed_area,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisConfig",
    "AnalysisReport",
    "BoundingRectangle",
    "DistrictMetrics",
    "DistrictResult",
    "FailureReason",
    "GeoJSONError",
    "GeoJSONParseError",
    "GeometryError",
    "GerryAwayError",
    "Point",
    "UndefinedAspectRatioError",
    "UnsupportedGeometryError",
    "analyze_features",
    "classify_district",
    "convex_hull",
    "get_config",
    "measure_district",
    "min_bounding_rectangle",
    "min_bounding_rectangle_aspect_ratio",
    "polygon_area",
    "signed_area",
]
