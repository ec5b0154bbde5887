"""
Arena-backed undirected graph store.

Nodes and edges live in slot arrays and are referenced by ``NodeId`` /
``EdgeId`` handles carrying the slot index and its generation. Removing an
item bumps the slot generation, so handles to removed items are rejected
instead of silently resolving to whatever reuses the slot.

The store knows nothing about physics; payloads are opaque.

Example::

    graph: Graph[str, None] = Graph()
    a = graph.add_node("a")
    b = graph.add_node("b")
    e = graph.add_edge(a, b, None)
    list(graph.neighbors(a))  # [b]
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from force_graph.exceptions import EdgeNotFoundError, NodeNotFoundError

__all__ = ["Graph", "NodeId", "EdgeId"]

N = TypeVar("N")
E = TypeVar("E")
T = TypeVar("T")


@dataclass(frozen=True, order=True)
class NodeId:
    """Stable handle to a node slot."""

    index: int
    generation: int = 0

    def __repr__(self) -> str:
        return f"NodeId({self.index}v{self.generation})"


@dataclass(frozen=True, order=True)
class EdgeId:
    """Stable handle to an edge slot."""

    index: int
    generation: int = 0

    def __repr__(self) -> str:
        return f"EdgeId({self.index}v{self.generation})"


@dataclass
class _Slot(Generic[T]):
    generation: int = 0
    value: T | None = None
    occupied: bool = False


@dataclass
class _EdgeEntry(Generic[E]):
    n1: NodeId
    n2: NodeId
    data: E


class _Arena(Generic[T]):
    """Slot array with a free list and per-slot generations."""

    def __init__(self) -> None:
        self._slots: list[_Slot[T]] = []
        self._free: list[int] = []
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def insert(self, value: T) -> tuple[int, int]:
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
        else:
            index = len(self._slots)
            slot = _Slot()
            self._slots.append(slot)
        slot.value = value
        slot.occupied = True
        self._count += 1
        return index, slot.generation

    def get(self, index: int, generation: int) -> T | None:
        if 0 <= index < len(self._slots):
            slot = self._slots[index]
            if slot.occupied and slot.generation == generation:
                return slot.value
        return None

    def contains(self, index: int, generation: int) -> bool:
        if 0 <= index < len(self._slots):
            slot = self._slots[index]
            return slot.occupied and slot.generation == generation
        return False

    def remove(self, index: int, generation: int) -> T:
        slot = self._slots[index]
        value = slot.value
        slot.value = None
        slot.occupied = False
        slot.generation = generation + 1
        self._free.append(index)
        self._count -= 1
        return value  # type: ignore[return-value]

    def items(self) -> Iterator[tuple[int, int, T]]:
        for index, slot in enumerate(self._slots):
            if slot.occupied:
                yield index, slot.generation, slot.value  # type: ignore[misc]


@dataclass
class Graph(Generic[N, E]):
    """
    Undirected graph with at most one edge per node pair.

    Enumeration order is slot order, which equals insertion order until
    slots freed by removals get reused.
    """

    _nodes: _Arena[N] = field(default_factory=_Arena)
    _edges: _Arena[_EdgeEntry[E]] = field(default_factory=_Arena)
    _adjacency: dict[NodeId, dict[NodeId, EdgeId]] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def add_node(self, data: N) -> NodeId:
        """Insert a node and return its handle."""
        index, generation = self._nodes.insert(data)
        node_id = NodeId(index, generation)
        self._adjacency[node_id] = {}
        return node_id

    def remove_node(self, node_id: NodeId) -> N:
        """Remove a node and every edge incident to it; return its payload."""
        self._check_node(node_id)
        for edge_id in list(self._adjacency[node_id].values()):
            self.remove_edge(edge_id)
        del self._adjacency[node_id]
        return self._nodes.remove(node_id.index, node_id.generation)

    def contains_node(self, node_id: NodeId) -> bool:
        return self._nodes.contains(node_id.index, node_id.generation)

    def node(self, node_id: NodeId) -> N:
        """Return the payload of a live node."""
        self._check_node(node_id)
        return self._nodes.get(node_id.index, node_id.generation)  # type: ignore[return-value]

    def __getitem__(self, node_id: NodeId) -> N:
        return self.node(node_id)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    def node_ids(self) -> Iterator[NodeId]:
        for index, generation, _ in self._nodes.items():
            yield NodeId(index, generation)

    def nodes(self) -> Iterator[tuple[NodeId, N]]:
        for index, generation, data in self._nodes.items():
            yield NodeId(index, generation), data

    def neighbors(self, node_id: NodeId) -> Iterator[NodeId]:
        """Iterate the nodes sharing an edge with ``node_id``."""
        self._check_node(node_id)
        yield from list(self._adjacency[node_id])

    def are_neighbors(self, n1: NodeId, n2: NodeId) -> bool:
        adjacent = self._adjacency.get(n1)
        return adjacent is not None and n2 in adjacent

    def degree(self, node_id: NodeId) -> int:
        self._check_node(node_id)
        return len(self._adjacency[node_id])

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def add_edge(self, n1: NodeId, n2: NodeId, data: E) -> EdgeId:
        """
        Connect two nodes.

        If the pair is already connected the existing edge's payload is
        replaced and its handle returned.

        Raises:
            NodeNotFoundError: If either endpoint is not a live node
        """
        self._check_node(n1)
        self._check_node(n2)

        existing = self._adjacency[n1].get(n2)
        if existing is not None:
            entry = self._edges.get(existing.index, existing.generation)
            entry.data = data  # type: ignore[union-attr]
            return existing

        index, generation = self._edges.insert(_EdgeEntry(n1, n2, data))
        edge_id = EdgeId(index, generation)
        self._adjacency[n1][n2] = edge_id
        self._adjacency[n2][n1] = edge_id
        return edge_id

    def remove_edge(self, edge_id: EdgeId) -> E:
        """Remove an edge and return its payload; endpoints are kept."""
        entry = self._edge_entry(edge_id)
        self._adjacency[entry.n1].pop(entry.n2, None)
        self._adjacency[entry.n2].pop(entry.n1, None)
        self._edges.remove(edge_id.index, edge_id.generation)
        return entry.data

    def contains_edge(self, edge_id: EdgeId) -> bool:
        return self._edges.contains(edge_id.index, edge_id.generation)

    def edge(self, edge_id: EdgeId) -> E:
        return self._edge_entry(edge_id).data

    def edge_endpoints(self, edge_id: EdgeId) -> tuple[NodeId, NodeId]:
        entry = self._edge_entry(edge_id)
        return entry.n1, entry.n2

    def find_edge(self, n1: NodeId, n2: NodeId) -> EdgeId | None:
        adjacent = self._adjacency.get(n1)
        if adjacent is None:
            return None
        return adjacent.get(n2)

    def incident_edges(self, node_id: NodeId) -> Iterator[EdgeId]:
        self._check_node(node_id)
        yield from list(self._adjacency[node_id].values())

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def edge_ids(self) -> Iterator[EdgeId]:
        for index, generation, _ in self._edges.items():
            yield EdgeId(index, generation)

    def edges(self) -> Iterator[tuple[EdgeId, NodeId, NodeId, E]]:
        for index, generation, entry in self._edges.items():
            yield EdgeId(index, generation), entry.n1, entry.n2, entry.data

    # ------------------------------------------------------------------
    # Visitors
    # ------------------------------------------------------------------

    def visit_nodes(self, cb: Callable[[NodeId, N], None]) -> None:
        for node_id, data in self.nodes():
            cb(node_id, data)

    def visit_edges(self, cb: Callable[[EdgeId, N, N, E], None]) -> None:
        for edge_id, n1, n2, data in self.edges():
            cb(edge_id, self.node(n1), self.node(n2), data)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _check_node(self, node_id: NodeId) -> None:
        if not self._nodes.contains(node_id.index, node_id.generation):
            raise NodeNotFoundError(
                "Node does not exist",
                context={"node": node_id},
                suggestions=["Node ids become invalid once the node is removed"],
            )

    def _edge_entry(self, edge_id: EdgeId) -> _EdgeEntry[E]:
        entry = self._edges.get(edge_id.index, edge_id.generation)
        if entry is None:
            raise EdgeNotFoundError(
                "Edge does not exist",
                context={"edge": edge_id},
                suggestions=["Edge ids become invalid once the edge or an endpoint is removed"],
            )
        return entry
