"""Command line entry point: analyze districts in a GeoJSON file."""

import argparse
import logging
from typing import List, Optional

from pydantic import ValidationError

from gerryaway.analysis import AnalysisReport, analyze_features
from gerryaway.config import AnalysisConfig, get_config
from gerryaway.exceptions import GeoJSONError
from gerryaway.geojson import load_feature_collection

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="gerryaway",
        description=(
            "Flag irregularly shaped districts by comparing each district's "
            "area with the area of its convex hull."
        ),
    )
    ap.add_argument("json_path", help="GeoJSON FeatureCollection of districts")
    ap.add_argument(
        "property_to_filter", help="Feature property used to select districts"
    )
    ap.add_argument("filter", help="Required value of that property")
    ap.add_argument(
        "--hull-ratio-threshold",
        type=float,
        default=None,
        help="Fail districts whose hull area / area exceeds this (default 1.4)",
    )
    ap.add_argument(
        "--aspect-ratio-threshold",
        type=float,
        default=None,
        help="Also fail districts whose aspect ratio exceeds this",
    )
    ap.add_argument(
        "--id-property",
        default=None,
        help="Property holding the district identifier (default OFFICE_ID)",
    )
    ap.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return ap


def _format_optional(value: Optional[float]) -> str:
    return "undefined" if value is None else f"{value}"


def format_report(report: AnalysisReport) -> str:
    """
    Render an analysis report as plain text lines.

    District ids are printed bare and the failed and passed lists are
    comma-separated, rather than as quoted JSON strings and debug-style
    lists.
    """
    lines = []
    for result in report.results:
        metrics = result.metrics
        lines.append(f"District: {metrics.district_id}, Area: {metrics.area}")
        lines.append(
            f"District: {metrics.district_id}, QH_Area: {metrics.hull_area}"
        )
        lines.append(
            f"District: {metrics.district_id}, Aspect ratio: "
            f"{_format_optional(metrics.aspect_ratio)}"
        )
    if report.skipped:
        lines.append(f"Skipped districts: {', '.join(report.skipped)}")
    lines.append(f"Failed districts: {', '.join(report.failed)}")
    lines.append(f"Passed districts: {', '.join(report.passed)}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    overrides = {
        key: val
        for key, val in (
            ("hull_area_ratio_threshold", args.hull_ratio_threshold),
            ("aspect_ratio_threshold", args.aspect_ratio_threshold),
            ("id_property", args.id_property),
        )
        if val is not None
    }
    try:
        config = AnalysisConfig(**overrides) if overrides else get_config()
    except ValidationError as e:
        ap.error(f"invalid option: {e}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    logger.info("Initializing GerryAway on file %s", args.json_path)

    try:
        collection = load_feature_collection(args.json_path)
        report = analyze_features(
            collection, args.property_to_filter, args.filter, config
        )
    except (OSError, GeoJSONError) as e:
        logger.error("Could not analyze %s: %s", args.json_path, e)
        return 1

    print(format_report(report))
    return 0
