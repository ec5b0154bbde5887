"""
Geometry primitives for the layout simulation.

Provides the 2D vector used throughout the force math and the line segment
intersection test used for edge crossing detection.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = ["Vector2D", "segment_intersection"]


@dataclass
class Vector2D:
    """Position, velocity or force in the layout plane."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2D:
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vector2D:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vector2D:
        return Vector2D(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vector2D:
        return Vector2D(-self.x, -self.y)

    def cross(self, other: Vector2D) -> float:
        """Z component of the 3D cross product; its sign gives the turn direction."""
        return self.x * other.y - self.y * other.x

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vector2D:
        """Unit vector in the same direction; zero for a (near) zero vector."""
        length = self.magnitude()
        if length < 1e-10:
            return Vector2D(0.0, 0.0)
        return self / length

    def is_finite(self) -> bool:
        """True if neither component is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


def segment_intersection(
    p0: Vector2D, p1: Vector2D, p2: Vector2D, p3: Vector2D
) -> Vector2D | None:
    """
    Intersect segment p0-p1 with segment p2-p3.

    Solves ``p0 + t*(p1 - p0) == p2 + s*(p3 - p2)`` for ``s`` and ``t``.
    The segments intersect iff both parameters lie in ``[0, 1]``.

    Parallel and coincident segments have a zero denominator and are
    reported as not intersecting.

    Returns:
        Intersection point, or None
    """
    s1 = p1 - p0
    s2 = p3 - p2

    denom = s1.cross(s2)
    if denom == 0.0:
        return None

    diff = p0 - p2
    s = s1.cross(diff) / denom
    t = s2.cross(diff) / denom

    if 0.0 <= s <= 1.0 and 0.0 <= t <= 1.0:
        return p0 + s1 * t
    return None
