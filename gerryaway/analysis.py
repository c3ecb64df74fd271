"""
District compactness analysis built on the geometry kernel.

Each selected feature is reduced to three numbers: the area of its exterior
ring, the area of that ring's convex hull and the aspect ratio of its
minimum-area bounding rectangle. A district fails when the hull is much
larger than the district itself, or (optionally) when the district is too
elongated.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from gerryaway.config import AnalysisConfig, get_config
from gerryaway.constants import FailureReason
from gerryaway.exceptions import GeoJSONError, UndefinedAspectRatioError
from gerryaway.geojson import (
    FeatureCollection,
    district_id,
    exterior_ring,
    feature_matches,
)
from gerryaway.geometry import (
    convex_hull,
    min_bounding_rectangle,
    polygon_area,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistrictMetrics:
    """
    Shape measurements for a single district.

    Attributes:
        district_id: Identifier used in reports
        area: Area of the district's exterior ring
        hull_area: Area of the ring's convex hull
        aspect_ratio: Long / short side of the minimum-area bounding
            rectangle, or None when it is undefined (collinear or
            single-point rings)
    """

    district_id: str
    area: float
    hull_area: float
    aspect_ratio: Optional[float]

    @property
    def hull_area_ratio(self) -> Optional[float]:
        """Hull area divided by district area; None for zero-area rings."""
        if self.area == 0.0:
            return None
        return self.hull_area / self.area


@dataclass(frozen=True)
class DistrictResult:
    """Classification outcome for one district."""

    metrics: DistrictMetrics
    failed: bool
    reasons: Tuple[FailureReason, ...] = ()

    @property
    def district_id(self) -> str:
        return self.metrics.district_id


@dataclass(frozen=True)
class AnalysisReport:
    """
    Results for every analyzed district, ordered by district id.

    ``skipped`` lists districts that matched the filter but had no usable
    Polygon geometry.
    """

    results: Tuple[DistrictResult, ...]
    skipped: Tuple[str, ...] = ()

    @property
    def failed(self) -> List[str]:
        return [r.district_id for r in self.results if r.failed]

    @property
    def passed(self) -> List[str]:
        return [r.district_id for r in self.results if not r.failed]


def measure_district(
    name: str, ring: Sequence[Sequence[float]]
) -> DistrictMetrics:
    """
    Compute area, hull area and aspect ratio for a district ring.

    Args:
        name: District identifier
        ring: Exterior ring as (x, y) pairs, without a closing point

    Returns:
        DistrictMetrics: The measurements. ``aspect_ratio`` is None when the
            ring is too degenerate to have one.
    """
    hull = convex_hull(ring)
    area = polygon_area(ring)
    hull_area = polygon_area(hull)

    aspect_ratio: Optional[float]
    try:
        rect = min_bounding_rectangle(hull)
        logger.debug(
            "District %s bounding rectangle %.6g x %.6g at %.1f degrees",
            name,
            rect.width,
            rect.height,
            rect.angle_degrees,
        )
        aspect_ratio = rect.aspect_ratio
    except UndefinedAspectRatioError as e:
        logger.debug("District %s has no aspect ratio: %s", name, e)
        aspect_ratio = None

    return DistrictMetrics(
        district_id=name,
        area=area,
        hull_area=hull_area,
        aspect_ratio=aspect_ratio,
    )


def classify_district(
    metrics: DistrictMetrics, config: AnalysisConfig
) -> DistrictResult:
    """
    Decide whether a district fails the compactness checks.

    A district fails when its hull-area ratio exceeds
    ``config.hull_area_ratio_threshold``, when its area is zero, or, if
    ``config.aspect_ratio_threshold`` is set, when its aspect ratio exceeds
    that threshold.
    """
    reasons: List[FailureReason] = []

    ratio = metrics.hull_area_ratio
    if ratio is None:
        reasons.append(FailureReason.ZERO_AREA)
    elif ratio > config.hull_area_ratio_threshold:
        reasons.append(FailureReason.HULL_AREA_RATIO)

    if (
        config.aspect_ratio_threshold is not None
        and metrics.aspect_ratio is not None
        and metrics.aspect_ratio > config.aspect_ratio_threshold
    ):
        reasons.append(FailureReason.ASPECT_RATIO)

    return DistrictResult(
        metrics=metrics, failed=bool(reasons), reasons=tuple(reasons)
    )


def analyze_features(
    collection: FeatureCollection,
    property_name: str,
    value: Any,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisReport:
    """
    Measure and classify every feature whose ``property_name`` equals
    ``value``.

    Features without geometry, with a geometry other than Polygon, or with
    malformed coordinates are logged and reported as skipped. When two
    features share a district id the later one replaces the earlier.

    Args:
        collection: Parsed FeatureCollection
        property_name: Property used to select features
        value: Required value of that property
        config: Thresholds to apply; defaults to ``get_config()``

    Returns:
        AnalysisReport: Results ordered by district id
    """
    if config is None:
        config = get_config()

    results: Dict[str, DistrictResult] = {}
    skipped: List[str] = []

    for index, feature in enumerate(collection.features):
        if not feature_matches(feature, property_name, value):
            continue

        name = district_id(feature, config.id_property, index)
        logger.info("Analyzing district: %s", name)

        if feature.geometry is None:
            logger.warning("Skipping district %s: no geometry", name)
            skipped.append(name)
            continue
        try:
            ring = exterior_ring(feature.geometry)
        except GeoJSONError as e:
            logger.warning("Skipping district %s: %s", name, e)
            skipped.append(name)
            continue

        result = classify_district(measure_district(name, ring), config)
        if name in results:
            logger.warning(
                "Duplicate district id %s; replacing earlier result", name
            )
        results[name] = result

    logger.info(
        "Analyzed %d districts (%d skipped)", len(results), len(skipped)
    )
    return AnalysisReport(
        results=tuple(results[name] for name in sorted(results)),
        skipped=tuple(skipped),
    )
