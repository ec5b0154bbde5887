"""
Edge crossing detection.

Edges are straight segments between their endpoint positions. Two detection
modes are provided:

- Global: every unordered pair of edges, O(E^2).
- Local: the edges incident to one node against every edge not touching it,
  O(deg * E). Used to untangle the layout around a single node.

Edges sharing an endpoint always meet at that endpoint and are never
reported.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from force_graph.geometry import Vector2D, segment_intersection

if TYPE_CHECKING:
    from force_graph.graph import Graph, NodeId
    from force_graph.nodes import Node

__all__ = [
    "IntersectionInfo",
    "segment_intersection",
    "find_intersections",
    "find_node_intersections",
]


@dataclass(frozen=True)
class IntersectionInfo:
    """
    One detected crossing between two edges.

    Attributes:
        x: Horizontal position of the crossing
        y: Vertical position of the crossing
        edge1: Endpoint ids of the first edge
        edge2: Endpoint ids of the second edge
    """

    x: float
    y: float
    edge1: tuple[NodeId, NodeId]
    edge2: tuple[NodeId, NodeId]

    def point(self) -> Vector2D:
        return Vector2D(self.x, self.y)


def _segment(graph: Graph[Node, object], n1: NodeId, n2: NodeId) -> tuple[Vector2D, Vector2D]:
    return graph.node(n1).position(), graph.node(n2).position()


def _shares_endpoint(a: tuple[NodeId, NodeId], b: tuple[NodeId, NodeId]) -> bool:
    return a[0] in b or a[1] in b


def _crossing(
    graph: Graph[Node, object], e1: tuple[NodeId, NodeId], e2: tuple[NodeId, NodeId]
) -> IntersectionInfo | None:
    p0, p1 = _segment(graph, *e1)
    p2, p3 = _segment(graph, *e2)
    hit = segment_intersection(p0, p1, p2, p3)
    if hit is None:
        return None
    return IntersectionInfo(x=hit.x, y=hit.y, edge1=e1, edge2=e2)


def find_intersections(graph: Graph[Node, object]) -> Iterator[IntersectionInfo]:
    """
    Yield every crossing between two edges of the graph.

    Each unordered pair of edges is tested once.
    """
    edges = [(n1, n2) for _, n1, n2, _ in graph.edges()]

    for i, e1 in enumerate(edges):
        for e2 in edges[i + 1 :]:
            if _shares_endpoint(e1, e2):
                continue
            info = _crossing(graph, e1, e2)
            if info is not None:
                yield info


def find_node_intersections(
    graph: Graph[Node, object], node_id: NodeId
) -> Iterator[IntersectionInfo]:
    """
    Yield the crossings involving an edge incident to ``node_id``.

    ``edge1`` of each result is the incident edge, oriented so that
    ``edge1[0] == node_id``.

    Raises:
        NodeNotFoundError: If the node does not exist
    """
    incident = [(node_id, other) for other in graph.neighbors(node_id)]
    if not incident:
        return

    others = [
        (n1, n2) for _, n1, n2, _ in graph.edges() if n1 != node_id and n2 != node_id
    ]

    for e1 in incident:
        for e2 in others:
            if _shares_endpoint(e1, e2):
                continue
            info = _crossing(graph, e1, e2)
            if info is not None:
                yield info
