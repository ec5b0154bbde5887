"""
Force-directed graph layout engine.

Provides the ForceGraph class that owns a graph of simulated nodes and
advances their positions one step per ``update(dt)`` call. Connected nodes
attract, all nodes repel at close range, coincident nodes are bounced apart
and edge crossings around settled nodes are resolved by escape impulses.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

import numpy as np

from force_graph.config import SimulationParameters
from force_graph.exceptions import NonFiniteValueError, SimulationError
from force_graph.forces import attraction, escape_force, pairwise_force, repulsion
from force_graph.geometry import Vector2D
from force_graph.graph import EdgeId, Graph, NodeId
from force_graph.intersections import (
    IntersectionInfo,
    find_intersections,
    find_node_intersections,
)
from force_graph.nodes import EdgeData, Node, NodeData

__all__ = ["ForceGraph"]

logger = logging.getLogger(__name__)

N = TypeVar("N")
E = TypeVar("E")


class ForceGraph(Generic[N, E]):
    """
    Graph layout driven by a physics simulation.

    The caller owns the frame loop: it calls :meth:`update` with the elapsed
    time, then reads node and edge positions through the visitors. Dragging
    a node is done by writing ``node.data.x`` / ``node.data.y`` from
    :meth:`visit_nodes_mut` (or :meth:`get_node`) between updates.

    Example::

        graph = ForceGraph()
        a = graph.add_node(NodeData(x=0.0, y=0.0))
        b = graph.add_node(NodeData(x=100.0, y=0.0))
        graph.add_edge(a, b)

        for _ in range(1000):
            graph.update(0.016)

        graph.visit_nodes(lambda node: print(node.x, node.y))
    """

    def __init__(
        self,
        parameters: SimulationParameters | None = None,
        rng: np.random.Generator | None = None,
    ):
        """
        Initialize the engine.

        Args:
            parameters: Simulation parameters (validated)
            rng: Random source for the coincident-node bounce. Pass a seeded
                generator for reproducible runs.
        """
        self._parameters = (parameters or SimulationParameters()).validate()
        self._graph: Graph[Node[N], EdgeData[E]] = Graph()
        # Insertion-ordered set of live node ids
        self._node_ids: dict[NodeId, None] = {}
        self._rng = rng if rng is not None else np.random.default_rng()

        self.steps = 0
        self.bounce_count = 0
        self.escape_count = 0

    # ------------------------------------------------------------------
    # Configuration and raw access
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> SimulationParameters:
        return self._parameters

    @parameters.setter
    def parameters(self, value: SimulationParameters) -> None:
        self._parameters = value.validate()

    @property
    def graph(self) -> Graph[Node[N], EdgeData[E]]:
        """The underlying graph store, for read access."""
        return self._graph

    @property
    def node_count(self) -> int:
        return self._graph.node_count

    @property
    def edge_count(self) -> int:
        return self._graph.edge_count

    def node_ids(self) -> Iterator[NodeId]:
        """Iterate the active node ids in simulation order."""
        return iter(list(self._node_ids))

    def get_node(self, node_id: NodeId) -> Node[N]:
        return self._graph.node(node_id)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_node(self, data: NodeData[N] | None = None) -> NodeId:
        """Add a node and return the id used to reference it."""
        node: Node[N] = Node(data=data if data is not None else NodeData())
        node_id = self._graph.add_node(node)
        node._index = node_id
        self._node_ids[node_id] = None
        return node_id

    def remove_node(self, node_id: NodeId) -> NodeData[N]:
        """
        Remove a node and its incident edges.

        Raises:
            NodeNotFoundError: If the node does not exist
        """
        node = self._graph.remove_node(node_id)
        del self._node_ids[node_id]
        return node.data

    def add_edge(self, n1: NodeId, n2: NodeId, data: EdgeData[E] | None = None) -> EdgeId:
        """
        Add an edge between two nodes, or update the payload of the existing one.

        Raises:
            NodeNotFoundError: If either node does not exist
        """
        return self._graph.add_edge(n1, n2, data if data is not None else EdgeData())

    def remove_edge(self, edge_id: EdgeId) -> EdgeData[E]:
        """
        Remove an edge; both endpoint nodes are kept.

        Raises:
            EdgeNotFoundError: If the edge does not exist
        """
        return self._graph.remove_edge(edge_id)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def update(self, dt: float) -> None:
        """
        Apply the next step of the simulation.

        Args:
            dt: Seconds elapsed since the previous update. Zero is a no-op.

        Raises:
            SimulationError: If dt is negative or not finite
            NonFiniteValueError: If a force or the integrated state is not
                finite; no node state is written and accumulated forces
                are discarded
        """
        if not math.isfinite(dt) or dt < 0:
            raise SimulationError(
                "Time step must be finite and non-negative",
                context={"dt": dt},
            )
        if dt == 0 or not self._node_ids:
            return

        params = self._parameters
        ids = list(self._node_ids)

        nodes = [self._graph.node(node_id) for node_id in ids]

        # Every new state is checked before any is written
        try:
            bounced = self._accumulate_forces(ids, dt, params)
            states = [
                None if node.is_anchor else node.integrate(dt, params) for node in nodes
            ]
        except NonFiniteValueError:
            for node in nodes:
                node.reset_acceleration()
            raise

        for node, state in zip(nodes, states):
            if state is None:
                node.reset_acceleration()
            else:
                node.commit(state)

        if bounced is not None:
            self._bounce(bounced, params)

        self.steps += 1

    def _accumulate_forces(
        self, ids: list[NodeId], dt: float, params: SimulationParameters
    ) -> Node[N] | None:
        """
        Accumulate this step's forces on every node.

        Returns:
            The node to bounce if a nearly coincident pair stopped the scan
        """
        graph = self._graph

        for i, id1 in enumerate(ids):
            n1 = graph.node(id1)

            if (
                params.escape_enabled
                and not n1.is_anchor
                and n1.is_stable(params.stability_epsilon)
            ):
                force = self._escape_force(n1, params)
                if force is not None:
                    n1.apply_force(force, dt, params)
                    self.escape_count += 1
                    logger.debug(f"Escape impulse on {id1}: ({force.x:.3f}, {force.y:.3f})")
                    return None

            if not params.neighbor_aware and not n1.is_anchor:
                for id2 in graph.neighbors(id1):
                    n1.apply_force(attraction(n1, graph.node(id2), params), dt, params)

            for id2 in ids[i + 1 :]:
                n2 = graph.node(id2)
                if n1.is_anchor and n2.is_anchor:
                    continue

                distance = (n2.position() - n1.position()).magnitude()
                if distance < params.really_close_distance:
                    logger.debug(f"Nodes {id1} and {id2} nearly coincide ({distance:.3g})")
                    return n2 if n1.is_anchor else n1

                if params.neighbor_aware:
                    force = pairwise_force(n1, n2, graph.are_neighbors(id1, id2), params)
                else:
                    force = repulsion(n1, n2, params)

                if not n1.is_anchor:
                    n1.apply_force(force, dt, params)
                if not n2.is_anchor:
                    n2.apply_force(-force, dt, params)

        return None

    def _escape_force(self, node: Node[N], params: SimulationParameters) -> Vector2D | None:
        """Escape force from the first edge crossing not already at the node."""
        position = node.position()
        for info in find_node_intersections(self._graph, node.index):
            point = info.point()
            if (point - position).magnitude() > params.really_close_distance:
                return escape_force(node, point, params)
        return None

    def _bounce(self, node: Node[N], params: SimulationParameters) -> None:
        """Move a node by a random vector of length ``really_close_distance``."""
        d = params.really_close_distance
        r = float(self._rng.random())
        node.data.x += r * d
        node.data.y += math.sqrt(1.0 - r * r) * d
        self.bounce_count += 1

    def run(
        self,
        steps: int = 1000,
        dt: float = 0.016,
        callback: Callable[[int], None] | None = None,
        stop_when_stable: bool = False,
    ) -> int:
        """
        Run several simulation steps.

        Args:
            steps: Maximum number of steps
            dt: Time step size
            callback: Optional function called after each step with its index
            stop_when_stable: Stop early once every free node is stable

        Returns:
            Number of steps run
        """
        for i in range(steps):
            self.update(dt)
            if callback:
                callback(i)
            if stop_when_stable and self.is_stable():
                return i + 1
        return steps

    def is_stable(self) -> bool:
        """True when every non-anchored node has negligible velocity."""
        epsilon = self._parameters.stability_epsilon
        return all(
            node.is_anchor or node.is_stable(epsilon) for _, node in self._graph.nodes()
        )

    # ------------------------------------------------------------------
    # Visitors
    # ------------------------------------------------------------------

    def visit_nodes(self, cb: Callable[[Node[N]], None]) -> None:
        """Process each node with a callback."""
        for _, node in self._graph.nodes():
            cb(node)

    def visit_nodes_mut(self, cb: Callable[[Node[N]], None]) -> None:
        """
        Mutate each node with a callback.

        Position overrides written here (``node.data.x`` / ``node.data.y``)
        take effect at the next :meth:`update`.
        """
        for _, node in self._graph.nodes():
            cb(node)

    def visit_edges(self, cb: Callable[[Node[N], Node[N], EdgeData[E]], None]) -> None:
        """Process each edge with its two endpoint nodes."""
        self._graph.visit_edges(lambda _, n1, n2, data: cb(n1, n2, data))

    def visit_intersections(self, cb: Callable[[IntersectionInfo], None]) -> None:
        """Process every crossing between two edges."""
        for info in find_intersections(self._graph):
            cb(info)

    def visit_neighbor_intersections(
        self, node_id: NodeId, cb: Callable[[IntersectionInfo], None]
    ) -> None:
        """
        Process the crossings involving the edges incident to one node.

        Raises:
            NodeNotFoundError: If the node does not exist
        """
        for info in find_node_intersections(self._graph, node_id):
            cb(info)
