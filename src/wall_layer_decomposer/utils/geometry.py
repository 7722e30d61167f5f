# File: src/wall_layer_decomposer/utils/geometry.py

"""Curve and vector primitives for wall axis geometry.

Points and vectors are plain (x, y, z) tuples, lines are immutable
`Line` objects between two points. Wall axes live in a horizontal plane,
so intersections are solved in XY and the Z of the first line is kept.

All measurements are in millimetres.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

Point3 = Tuple[float, float, float]
Vector3 = Tuple[float, float, float]

ZERO_LENGTH = 1e-9


# =============================================================================
# Vector Utilities
# =============================================================================


def add(a: Point3, b: Vector3) -> Point3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def subtract(a: Point3, b: Point3) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(v: Vector3, factor: float) -> Vector3:
    return (v[0] * factor, v[1] * factor, v[2] * factor)


def dot(a: Vector3, b: Vector3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def vector_length(v: Vector3) -> float:
    return math.sqrt(dot(v, v))


def distance(p1: Point3, p2: Point3) -> float:
    """Euclidean distance between two 3D points."""
    return vector_length(subtract(p1, p2))


def normalize(v: Vector3) -> Vector3:
    """Return the unit vector of v.

    Raises:
        ValueError: If v has zero length.
    """
    length = vector_length(v)
    if length < ZERO_LENGTH:
        raise ValueError("Cannot normalize a zero-length vector")
    return (v[0] / length, v[1] / length, v[2] / length)


def in_plane_normal(direction: Vector3) -> Vector3:
    """Horizontal normal of a wall direction: (dir.y, -dir.x, 0), unitized.

    This is the only normal convention used by the decomposer. Layer
    offsets grow from the exterior face towards +normal.
    """
    return normalize((direction[1], -direction[0], 0.0))


def format_point(point: Point3) -> str:
    """Format a point for log messages, one decimal per coordinate."""
    return f"({point[0]:.1f}, {point[1]:.1f}, {point[2]:.1f})"


# =============================================================================
# Line
# =============================================================================


@dataclass(frozen=True)
class Line:
    """Bounded straight segment from `start` to `end`."""

    start: Point3
    end: Point3

    @property
    def length(self) -> float:
        return distance(self.start, self.end)

    @property
    def plan_length(self) -> float:
        """Length of the line projected on the XY plane."""
        return math.hypot(self.end[0] - self.start[0], self.end[1] - self.start[1])

    @property
    def direction(self) -> Vector3:
        """Unit direction from start to end.

        Raises:
            ValueError: If the line is degenerate.
        """
        return normalize(subtract(self.end, self.start))

    def is_degenerate(self, tolerance: float = ZERO_LENGTH) -> bool:
        return self.length < tolerance

    def point_at(self, t: float) -> Point3:
        """Point at normalized parameter t (0 = start, 1 = end)."""
        return add(self.start, scale(subtract(self.end, self.start), t))

    def translated(self, offset: Vector3) -> "Line":
        return Line(add(self.start, offset), add(self.end, offset))

    def with_start(self, point: Point3) -> "Line":
        return Line(point, self.end)

    def with_end(self, point: Point3) -> "Line":
        return Line(self.start, point)

    def extended(self, margin: float) -> "Line":
        """Lengthen both ends by `margin` along the line direction."""
        d = self.direction
        return Line(
            subtract(self.start, scale(d, margin)),
            add(self.end, scale(d, margin)),
        )

    def to_dict(self) -> dict:
        return {
            "start": {"x": self.start[0], "y": self.start[1], "z": self.start[2]},
            "end": {"x": self.end[0], "y": self.end[1], "z": self.end[2]},
        }


# =============================================================================
# Projection / Intersection
# =============================================================================


def project_point_on_line(point: Point3, line: Line) -> Point3:
    """Project a point onto the infinite line through `line`'s endpoints."""
    d = line.direction
    t = dot(subtract(point, line.start), d)
    return add(line.start, scale(d, t))


def intersect_lines(
    line_a: Line,
    line_b: Line,
    bounded: bool = True,
    tolerance: float = 1e-9,
) -> Optional[Point3]:
    """Intersection point of two lines in the XY plane.

    Args:
        line_a: First line; the result takes its Z.
        line_b: Second line.
        bounded: If True, the point must lie on both segments.
        tolerance: Parameter slack for the bounded check.

    Returns:
        The intersection point, or None for parallel/collinear lines or
        when a bounded intersection falls outside either segment.
    """
    ax, ay = line_a.start[0], line_a.start[1]
    rx, ry = line_a.end[0] - ax, line_a.end[1] - ay
    bx, by = line_b.start[0], line_b.start[1]
    sx, sy = line_b.end[0] - bx, line_b.end[1] - by

    denom = rx * sy - ry * sx
    scale_ab = math.hypot(rx, ry) * math.hypot(sx, sy)
    if scale_ab < ZERO_LENGTH or abs(denom) <= 1e-12 * scale_ab:
        return None

    qx, qy = bx - ax, by - ay
    t = (qx * sy - qy * sx) / denom
    u = (qx * ry - qy * rx) / denom

    if bounded and not (
        -tolerance <= t <= 1.0 + tolerance and -tolerance <= u <= 1.0 + tolerance
    ):
        return None

    return line_a.point_at(t)
