"""Turn edge control points into smooth renderable paths."""

import math
from typing import List, Sequence

import numpy as np

from .models import BezierCurve, Point


def _as_point(values: np.ndarray) -> Point:
    return (float(values[0]), float(values[1]))


def build_edge_curves(points: Sequence[Point]) -> List[BezierCurve]:
    """Build a uniform cubic B-spline through the control points.

    The curve starts and ends on the first and last point and is pulled
    towards the points in between. Two points give a single straight segment.

    Args:
        points: Control points in pixel space.

    Returns:
        List of curves, or an empty list for degenerate input.
    """
    if len(points) < 2:
        return []
    if any(not (math.isfinite(x) and math.isfinite(y)) for x, y in points):
        return []

    start = (float(points[0][0]), float(points[0][1]))
    if len(points) == 2:
        end = (float(points[1][0]), float(points[1][1]))
        return [BezierCurve.line(start, end)]

    pts = [np.array(p, dtype=float) for p in points]
    curves: List[BezierCurve] = []

    # Lead-in from the first point to the first spline knot
    cursor = _as_point((5 * pts[0] + pts[1]) / 6)
    curves.append(BezierCurve.line(start, cursor))

    # The last point is repeated so the spline lands back on it
    extended = pts + [pts[-1]]
    for k in range(2, len(extended)):
        x0, x1, x = extended[k - 2], extended[k - 1], extended[k]
        p1 = _as_point((2 * x0 + x1) / 3)
        p2 = _as_point((x0 + 2 * x1) / 3)
        p3 = _as_point((x0 + 4 * x1 + x) / 6)
        curves.append(BezierCurve(cursor, p1, p2, p3))
        cursor = p3

    curves.append(BezierCurve.line(cursor, _as_point(pts[-1])))
    return curves


def _fmt(point: Point) -> str:
    return f"{point[0]:.2f},{point[1]:.2f}"


def curves_to_path(curves: Sequence[BezierCurve]) -> str:
    """Format curves as SVG path data.

    Coordinates are rounded to two decimals so equal geometry always gives the
    same string.
    """
    if not curves:
        return ""
    parts = [f"M{_fmt(curves[0].p0)}"]
    for curve in curves:
        if curve.is_line:
            parts.append(f"L{_fmt(curve.p3)}")
        else:
            parts.append(f"C{_fmt(curve.p1)},{_fmt(curve.p2)},{_fmt(curve.p3)}")
    return "".join(parts)


def rectangle_path(width: float, height: float) -> str:
    """Closed outline of the whole puzzle."""
    return f"M{_fmt((0.0, 0.0))}L{_fmt((width, 0.0))}L{_fmt((width, height))}L{_fmt((0.0, height))}Z"


def sample_curves(curves: Sequence[BezierCurve], points_per_curve: int = 20) -> List[Point]:
    """Sample a polyline along consecutive curves.

    Args:
        curves: Curves that join end to start.
        points_per_curve: Number of points to sample from each Bezier curve.

    Returns:
        List of (x, y) points.
    """
    polyline: List[Point] = []
    for curve in curves:
        points = curve.get_points(points_per_curve)
        # Skip the first point of every curve after the first to avoid duplicates
        start = 1 if polyline else 0
        polyline.extend((float(x), float(y)) for x, y in points[start:])
    return polyline
