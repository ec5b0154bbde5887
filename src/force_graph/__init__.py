"""
force-graph: 2D force-directed graph layout.

Computes node positions for an arbitrary graph by simulating spring
attraction along edges, charge-like repulsion between nodes and local
collision avoidance. The caller drives the simulation one frame at a time
and renders the result through visitor callbacks.

Modules:
    engine: ForceGraph simulation facade
    graph: Arena-backed graph store with stable node/edge ids
    forces: Pairwise force model
    intersections: Edge crossing detection
    config: Simulation parameters and TOML configuration
    cli: Headless command-line runner

Quick Start::

    from force_graph import ForceGraph, NodeData

    graph = ForceGraph()
    hub = graph.add_node(NodeData(x=500.0, y=500.0))
    for x, y in [(250.0, 250.0), (750.0, 250.0), (250.0, 750.0), (750.0, 750.0)]:
        graph.add_edge(hub, graph.add_node(NodeData(x=x, y=y)))

    # Once per frame
    graph.update(0.016)
    graph.visit_edges(lambda n1, n2, edge: draw_line(n1.x, n1.y, n2.x, n2.y))
"""

__version__ = "0.1.0"

from force_graph.config import SimulationParameters, load_parameters
from force_graph.engine import ForceGraph
from force_graph.exceptions import (
    ConfigError,
    EdgeNotFoundError,
    FileFormatError,
    ForceGraphError,
    GraphError,
    NodeNotFoundError,
    NonFiniteValueError,
    SimulationError,
)
from force_graph.geometry import Vector2D
from force_graph.graph import EdgeId, Graph, NodeId
from force_graph.intersections import IntersectionInfo
from force_graph.logging import disable_verbose, enable_verbose
from force_graph.nodes import EdgeData, Node, NodeData

__all__ = [
    "__version__",
    # Engine
    "ForceGraph",
    "SimulationParameters",
    "load_parameters",
    # Model
    "Node",
    "NodeData",
    "EdgeData",
    "IntersectionInfo",
    "Vector2D",
    # Graph store
    "Graph",
    "NodeId",
    "EdgeId",
    # Errors
    "ForceGraphError",
    "ConfigError",
    "FileFormatError",
    "GraphError",
    "NodeNotFoundError",
    "EdgeNotFoundError",
    "SimulationError",
    "NonFiniteValueError",
    # Logging
    "enable_verbose",
    "disable_verbose",
]
