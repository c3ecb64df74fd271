"""
This module defines the standardized enums used when reporting district
classification results.
"""

from enum import Enum


class FailureReason(str, Enum):
    """Why a district was flagged as non-compact."""

    HULL_AREA_RATIO = "HULL_AREA_RATIO"  # Hull area / area above threshold
    ASPECT_RATIO = "ASPECT_RATIO"  # Bounding rectangle too elongated
    ZERO_AREA = "ZERO_AREA"  # Degenerate ring, ratio undefined
