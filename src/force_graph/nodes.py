"""
Node and edge model classes for the force simulation.

``NodeData`` and ``EdgeData`` are the user-visible payloads. ``Node`` wraps a
``NodeData`` with the physics state the engine integrates every step.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from force_graph.exceptions import NonFiniteValueError
from force_graph.forces import clamp_force
from force_graph.geometry import Vector2D

if TYPE_CHECKING:
    from force_graph.config import SimulationParameters
    from force_graph.graph import NodeId

__all__ = ["NodeData", "EdgeData", "Node"]

N = TypeVar("N")
E = TypeVar("E")


@dataclass
class NodeData(Generic[N]):
    """
    Data associated with a node that can be modified by the user.

    Attributes:
        x: Horizontal position
        y: Vertical position
        mass: Increasing the mass increases the force with which the node
            repels other nearby nodes
        is_anchor: Anchored nodes are never moved by forces, only by
            explicit position overrides
        user_data: Arbitrary payload, never inspected by the engine
    """

    x: float = 0.0
    y: float = 0.0
    mass: float = 10.0
    is_anchor: bool = False
    user_data: N | None = None


@dataclass
class EdgeData(Generic[E]):
    """Data associated with an edge. Edges carry no physical state."""

    user_data: E | None = None


@dataclass
class Node(Generic[N]):
    """
    A simulated point mass.

    The physics fields are owned by the engine; callers read them through
    the properties and may overwrite ``data.x`` / ``data.y`` between steps
    (e.g. while dragging).
    """

    data: NodeData[N] = field(default_factory=NodeData)

    # Physics state
    vx: float = 0.0  # Velocity
    vy: float = 0.0
    ax: float = 0.0  # Acceleration accumulated during the current step
    ay: float = 0.0

    _index: NodeId | None = field(default=None, repr=False)

    @property
    def x(self) -> float:
        """The horizontal position of the node."""
        return self.data.x

    @property
    def y(self) -> float:
        """The vertical position of the node."""
        return self.data.y

    @property
    def mass(self) -> float:
        return self.data.mass

    @property
    def is_anchor(self) -> bool:
        return self.data.is_anchor

    @property
    def user_data(self) -> N | None:
        return self.data.user_data

    @property
    def index(self) -> NodeId:
        """The id used to reference the node in the graph."""
        if self._index is None:
            raise RuntimeError("Node has not been registered with a graph")
        return self._index

    def position(self) -> Vector2D:
        """Get position as Vector2D."""
        return Vector2D(self.data.x, self.data.y)

    def velocity(self) -> Vector2D:
        return Vector2D(self.vx, self.vy)

    def is_stable(self, epsilon: float) -> bool:
        """True when both velocity components are within ``epsilon`` of zero."""
        return abs(self.vx) <= epsilon and abs(self.vy) <= epsilon

    def apply_force(self, force: Vector2D, dt: float, params: SimulationParameters) -> None:
        """Accumulate a force, clamped per component, scaled by the step length."""
        clamped = clamp_force(force, params)
        self.ax += clamped.x * dt
        self.ay += clamped.y * dt

    def integrate(
        self, dt: float, params: SimulationParameters
    ) -> tuple[float, float, float, float]:
        """
        Compute the velocity and position after integrating the accumulator.

        Node state is not modified; pass the result to :meth:`commit`.

        Returns:
            New ``(vx, vy, x, y)``

        Raises:
            NonFiniteValueError: If the new state would not be finite
        """
        scale = dt * params.node_speed
        vx = (self.vx + self.ax * scale) * params.damping_factor
        vy = (self.vy + self.ay * scale) * params.damping_factor
        x = self.data.x + vx * dt
        y = self.data.y + vy * dt

        if not all(math.isfinite(v) for v in (vx, vy, x, y)):
            raise NonFiniteValueError(
                "Integration produced a non-finite node state",
                context={
                    "node": self._index,
                    "position": (self.data.x, self.data.y),
                    "velocity": (self.vx, self.vy),
                    "acceleration": (self.ax, self.ay),
                    "dt": dt,
                },
            )
        return vx, vy, x, y

    def commit(self, state: tuple[float, float, float, float]) -> None:
        """Store a state computed by :meth:`integrate` and reset the accumulator."""
        self.vx, self.vy, self.data.x, self.data.y = state
        self.ax = 0.0
        self.ay = 0.0

    def reset_acceleration(self) -> None:
        self.ax = 0.0
        self.ay = 0.0
