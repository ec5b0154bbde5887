"""
Pairwise force model.

All functions return the force acting on the first node; the second node of
a pair receives the negation. Forces are returned unclamped; clamping
happens when they are accumulated (see ``Node.apply_force``).

Two models are provided:

- Banded (neighbor-aware): pairs closer than ``close_distance`` push apart,
  neighbor pairs farther than ``far_distance`` pull together, everything in
  between exerts no force.
- Classic: spring attraction along edges plus inverse-square repulsion
  between every pair.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from force_graph.exceptions import NonFiniteValueError
from force_graph.geometry import Vector2D

if TYPE_CHECKING:
    from force_graph.config import SimulationParameters
    from force_graph.nodes import Node

__all__ = [
    "attraction",
    "repulsion",
    "pairwise_force",
    "escape_force",
    "clamp_force",
    "separation",
]


def separation(p1: Vector2D, p2: Vector2D) -> tuple[Vector2D, float]:
    """
    Unit direction from p1 to p2 and the distance between them.

    Coincident points report a distance of 1.0 and a zero direction so
    callers never divide by zero.

    Raises:
        NonFiniteValueError: If either point is not finite
    """
    delta = p2 - p1
    if delta.x == 0.0 and delta.y == 0.0:
        return Vector2D(0.0, 0.0), 1.0
    distance = delta.magnitude()
    if not math.isfinite(distance):
        raise NonFiniteValueError(
            "Non-finite distance between points",
            context={"p1": p1.as_tuple(), "p2": p2.as_tuple()},
        )
    return delta.normalized(), distance


def _checked(force: Vector2D, p1: Vector2D, p2: Vector2D, what: str) -> Vector2D:
    if not force.is_finite():
        raise NonFiniteValueError(
            f"Non-finite {what} force",
            context={"p1": p1.as_tuple(), "p2": p2.as_tuple(), "force": force.as_tuple()},
        )
    return force


def attraction(n1: Node, n2: Node, params: SimulationParameters) -> Vector2D:
    """
    Spring force pulling n1 toward n2.

    Grows linearly with distance; it does not vanish at the ideal distance.
    """
    p1, p2 = n1.position(), n2.position()
    direction, distance = separation(p1, p2)
    strength = params.force_spring * distance * 0.5
    return _checked(direction * strength, p1, p2, "attraction")


def repulsion(n1: Node, n2: Node, params: SimulationParameters) -> Vector2D:
    """Inverse-square charge force pushing n1 away from n2."""
    p1, p2 = n1.position(), n2.position()
    direction, distance = separation(p1, p2)
    strength = -params.force_charge * (n1.mass * n2.mass) / (distance * distance)
    return _checked(direction * strength, p1, p2, "repulsion")


def pairwise_force(
    n1: Node, n2: Node, neighbors: bool, params: SimulationParameters
) -> Vector2D:
    """
    Banded force on n1 from n2.

    Args:
        n1: Node receiving the force
        n2: Other node of the pair
        neighbors: Whether an edge joins the two nodes
        params: Simulation parameters

    Returns:
        Force on n1: repulsive below the close distance, attractive beyond the
        far distance for neighbors, zero otherwise.
    """
    p1, p2 = n1.position(), n2.position()
    direction, distance = separation(p1, p2)

    if distance < params.close_distance:
        sign = -1.0
    elif distance > params.far_distance and neighbors:
        sign = 1.0
    else:
        return Vector2D(0.0, 0.0)

    effective = max(distance, params.really_close_distance)
    strength = params.force_charge * n1.mass * n2.mass * effective**params.distance_factor
    return _checked(direction * (sign * strength), p1, p2, "pairwise")


def escape_force(node: Node, point: Vector2D, params: SimulationParameters) -> Vector2D:
    """
    Force moving a node away from an edge crossing at ``point``.

    The crossing is treated as a charge of the node's own mass; the result
    is scaled by ``escape_intensity``.
    """
    p = node.position()
    direction, distance = separation(p, point)
    strength = -params.force_charge * (node.mass * node.mass) / (distance * distance)
    return _checked(direction * (strength * params.escape_intensity), p, point, "escape")


def clamp_force(force: Vector2D, params: SimulationParameters) -> Vector2D:
    """Clamp each component to ``[-force_max, force_max]``."""
    limit = params.force_max
    return Vector2D(
        max(-limit, min(limit, force.x)),
        max(-limit, min(limit, force.y)),
    )
