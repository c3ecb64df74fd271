"""Planar geometry kernel: convex hull, polygon area, minimum-area rectangle.

Everything here is a pure function over in-memory point sequences. Points
are ``(x, y)`` tuples of floats; any 2-item numeric sequence is accepted on
input (GeoJSON positions are lists) and normalized.
"""

from dataclasses import dataclass
from math import atan2, degrees, hypot
from typing import List, Optional, Sequence, Tuple, Union

from gerryaway.exceptions import UndefinedAspectRatioError

Point = Tuple[float, float]


def _as_points(points: Sequence[Sequence[float]]) -> List[Point]:
    return [(float(p[0]), float(p[1])) for p in points]


def _which_side(a: Point, b: Point, p: Point) -> float:
    """
    Cross product of (b - a) and (p - a).

    Positive when p lies to the left of the directed line a -> b, negative
    when it lies to the right, zero when the three points are collinear.
    """
    return (b[0] - a[0]) * (p[1] - a[1]) - (b[1] - a[1]) * (p[0] - a[0])


def _distance_squared_to_line(a: Point, b: Point, p: Point) -> float:
    """
    Squared perpendicular distance from p to the line through a and b.

    Returns 0.0 when a and b coincide.
    """
    ab_x = b[0] - a[0]
    ab_y = b[1] - a[1]
    length_sq = ab_x * ab_x + ab_y * ab_y
    if length_sq == 0.0:
        return 0.0
    cross = ab_x * (p[1] - a[1]) - ab_y * (p[0] - a[0])
    return cross * cross / length_sq


def _projection(a: Point, b: Point, p: Point) -> float:
    """Dot product of (b - a) and (p - a)."""
    return (b[0] - a[0]) * (p[0] - a[0]) + (b[1] - a[1]) * (p[1] - a[1])


def _find_extremes(points: List[Point]) -> Tuple[int, int]:
    """
    Indices of the first minimum-x and first maximum-x points.

    When every point shares one x coordinate the y coordinate decides
    instead, so a vertical run of points still has two distinct extremes.
    """
    min_idx = max_idx = 0
    for i in range(1, len(points)):
        if points[i][0] < points[min_idx][0]:
            min_idx = i
        if points[i][0] > points[max_idx][0]:
            max_idx = i

    if points[min_idx][0] == points[max_idx][0]:
        min_idx = max_idx = 0
        for i in range(1, len(points)):
            if points[i][1] < points[min_idx][1]:
                min_idx = i
            if points[i][1] > points[max_idx][1]:
                max_idx = i

    return min_idx, max_idx


def _hull_fragment(
    points: List[Point], candidates: List[int], a: int, b: int
) -> List[int]:
    """
    Hull vertex indices strictly between ``a`` and ``b``, in order.

    Every candidate must lie strictly to the left of a -> b. The result is
    ``left + [farthest] + right`` where ``left`` and ``right`` are the
    fragments for a -> farthest and farthest -> b. Work is driven by an
    explicit stack, so nearly collinear inputs cannot hit the interpreter
    recursion limit.
    """
    fragment: List[int] = []
    # Items are either a pending segment (a, b, candidates) or a resolved
    # vertex index waiting to be emitted.
    stack: List[Union[int, Tuple[int, int, List[int]]]] = [(a, b, candidates)]

    while stack:
        item = stack.pop()
        if isinstance(item, int):
            fragment.append(item)
            continue

        seg_a, seg_b, seg_points = item
        if not seg_points:
            continue

        pa = points[seg_a]
        pb = points[seg_b]

        # Equally distant candidates lie on one line parallel to a -> b;
        # taking the one furthest along a -> b keeps F an end of that run.
        farthest = seg_points[0]
        max_dist = _distance_squared_to_line(pa, pb, points[farthest])
        max_along = _projection(pa, pb, points[farthest])
        for idx in seg_points[1:]:
            dist = _distance_squared_to_line(pa, pb, points[idx])
            if dist < max_dist:
                continue
            along = _projection(pa, pb, points[idx])
            if dist > max_dist or along > max_along:
                max_dist = dist
                max_along = along
                farthest = idx

        pf = points[farthest]
        left: List[int] = []
        right: List[int] = []
        for idx in seg_points:
            if idx == farthest:
                continue
            if _which_side(pa, pf, points[idx]) > 0:
                left.append(idx)
            elif _which_side(pf, pb, points[idx]) > 0:
                right.append(idx)

        # LIFO: push in reverse so the left side is emitted first.
        stack.append((farthest, seg_b, right))
        stack.append(farthest)
        stack.append((seg_a, farthest, left))

    return fragment


def convex_hull(points: Sequence[Sequence[float]]) -> List[Point]:
    """
    Compute the convex hull of a set of 2D points using QuickHull.

    The hull starts at the minimum-x point and runs clockwise (in a y-up
    frame) over the side left of the min-x -> max-x baseline, through the
    maximum-x point and back along the other side. Ties between extreme
    points go to the first occurrence in input order. Points collinear with
    a hull edge are not kept as vertices, except the extreme points
    themselves.

    Args:
        points: Sequence of (x, y) pairs.

    Returns:
        List[Point]: Hull vertices, a subset of the input. Inputs of zero or
            one point are returned as given; identical points collapse to a
            single vertex.
    """
    pts = _as_points(points)
    if len(pts) <= 1:
        return pts

    min_idx, max_idx = _find_extremes(pts)
    a = pts[min_idx]
    b = pts[max_idx]
    if a == b:
        return [a]

    side1: List[int] = []
    side2: List[int] = []
    for i, p in enumerate(pts):
        if i == min_idx or i == max_idx:
            continue
        side = _which_side(a, b, p)
        if side > 0:
            side1.append(i)
        elif side < 0:
            side2.append(i)

    hull_indices = (
        [min_idx]
        + _hull_fragment(pts, side1, min_idx, max_idx)
        + [max_idx]
        + _hull_fragment(pts, side2, max_idx, min_idx)
    )
    return [pts[i] for i in hull_indices]


def signed_area(points: Sequence[Sequence[float]]) -> float:
    """
    Signed area of a closed polygon by the shoelace formula.

    Positive for counter-clockwise vertex order in a y-up frame, negative
    for clockwise. Polygons with fewer than 3 vertices have zero area.
    """
    pts = _as_points(points)
    n = len(pts)
    if n < 3:
        return 0.0

    total = 0.0
    for i in range(n):
        y_next = pts[(i + 1) % n][1]
        y_prev = pts[i - 1][1]
        total += pts[i][0] * (y_next - y_prev)
    return total / 2.0


def polygon_area(points: Sequence[Sequence[float]]) -> float:
    """Unsigned area of a closed polygon (convex or not)."""
    return abs(signed_area(points))


@dataclass(frozen=True)
class BoundingRectangle:
    """
    Immutable rectangle aligned to one edge of a convex hull.

    Attributes:
        corners: Four corners in the edge frame, ordered (min, min),
            (max, min), (max, max), (min, max) along (edge, normal).
        width: Extent along the hull edge direction.
        height: Extent along the edge normal.
        angle_degrees: Direction of the aligning hull edge, measured from
            the positive x axis.
    """

    corners: Tuple[Point, Point, Point, Point]
    width: float
    height: float
    angle_degrees: float

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def is_degenerate(self) -> bool:
        """True when one side has zero length (collinear input)."""
        return min(self.width, self.height) == 0.0

    @property
    def aspect_ratio(self) -> float:
        """
        Longer side divided by shorter side; always >= 1.

        Raises:
            UndefinedAspectRatioError: If either side has zero length.
        """
        short_side = min(self.width, self.height)
        if short_side == 0.0:
            raise UndefinedAspectRatioError(
                f"rectangle has a zero-length side "
                f"(width={self.width}, height={self.height})"
            )
        return max(self.width, self.height) / short_side


def min_bounding_rectangle(
    points: Sequence[Sequence[float]],
) -> BoundingRectangle:
    """
    Compute the minimum-area bounding rectangle using rotating calipers.

    The rectangle is searched over the convex hull of ``points``: for each
    hull edge, every hull vertex is projected onto the edge direction and its
    normal, and the extents give a candidate rectangle. The first edge with
    the smallest area wins. Zero-length edges (repeated hull vertices) are
    skipped.

    Args:
        points: Sequence of (x, y) pairs.

    Returns:
        BoundingRectangle: The minimum-area rectangle. It may be degenerate
            (zero height) when every point is collinear.

    Raises:
        UndefinedAspectRatioError: If the hull has fewer than two distinct
            points, so no rectangle direction exists.
    """
    hull = convex_hull(points)
    n = len(hull)

    min_area = float("inf")
    best: Optional[BoundingRectangle] = None

    for i in range(n):
        x0, y0 = hull[i]
        x1, y1 = hull[(i + 1) % n]
        edge_x = x1 - x0
        edge_y = y1 - y0

        length = hypot(edge_x, edge_y)
        if length == 0.0:
            continue

        dir_x = edge_x / length
        dir_y = edge_y / length
        perp_x = -dir_y
        perp_y = dir_x

        along_dir = [px * dir_x + py * dir_y for px, py in hull]
        along_perp = [px * perp_x + py * perp_y for px, py in hull]
        min_dir, max_dir = min(along_dir), max(along_dir)
        min_perp, max_perp = min(along_perp), max(along_perp)

        width = max_dir - min_dir
        height = max_perp - min_perp
        area = width * height

        if area < min_area:
            min_area = area

            def corner(d: float, p: float) -> Point:
                return (d * dir_x + p * perp_x, d * dir_y + p * perp_y)

            best = BoundingRectangle(
                corners=(
                    corner(min_dir, min_perp),
                    corner(max_dir, min_perp),
                    corner(max_dir, max_perp),
                    corner(min_dir, max_perp),
                ),
                width=width,
                height=height,
                angle_degrees=degrees(atan2(dir_y, dir_x)),
            )

    if best is None:
        raise UndefinedAspectRatioError(
            f"convex hull has fewer than 2 distinct points ({n} vertices)"
        )
    return best


def min_bounding_rectangle_aspect_ratio(
    points: Sequence[Sequence[float]],
) -> float:
    """
    Aspect ratio (long side / short side) of the minimum-area rectangle.

    Raises:
        UndefinedAspectRatioError: If the hull has fewer than two distinct
            points or all points are collinear.
    """
    return min_bounding_rectangle(points).aspect_ratio
