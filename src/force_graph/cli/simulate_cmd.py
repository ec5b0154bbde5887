"""simulate CLI command: run the layout on a graph description and print the result.

Graph files are JSON::

    {
      "nodes": [
        {"id": "hub", "x": 500, "y": 500},
        {"id": "leaf", "x": 250, "y": 250, "mass": 5, "anchor": true}
      ],
      "edges": [["hub", "leaf"]]
    }

Only ``id`` is required for a node; the other fields default to the
``NodeData`` defaults.

Usage:
    force-graph simulate
    force-graph simulate graph.json --steps 2000 --seed 1
    force-graph simulate graph.json --format json
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

import numpy as np
from rich.console import Console
from rich.table import Table

from force_graph.config import load_parameters, load_parameters_file
from force_graph.engine import ForceGraph
from force_graph.exceptions import FileFormatError
from force_graph.graph import NodeId
from force_graph.logging import enable_verbose
from force_graph.nodes import NodeData

logger = logging.getLogger(__name__)

# Star graph: four corners joined to a center node
DEMO_NODES = [
    ("n1", 250.0, 250.0),
    ("n2", 750.0, 250.0),
    ("n3", 250.0, 750.0),
    ("n4", 750.0, 750.0),
    ("n5", 500.0, 500.0),
]
DEMO_EDGES = [("n1", "n5"), ("n2", "n5"), ("n3", "n5"), ("n4", "n5")]


def build_demo_graph(engine: ForceGraph[str, None]) -> dict[str, NodeId]:
    """Populate ``engine`` with the built-in star graph."""
    ids = {name: engine.add_node(NodeData(x=x, y=y, user_data=name)) for name, x, y in DEMO_NODES}
    for a, b in DEMO_EDGES:
        engine.add_edge(ids[a], ids[b])
    return ids


def load_graph_file(path: Path, engine: ForceGraph[str, None]) -> dict[str, NodeId]:
    """
    Populate ``engine`` from a JSON graph description.

    Returns:
        Mapping from the file's node names to engine node ids

    Raises:
        FileFormatError: If the file is unreadable or malformed
    """
    try:
        data = json.loads(path.read_text())
    except OSError as e:
        raise FileFormatError(f"Cannot read graph file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise FileFormatError(
            f"Invalid JSON in graph file {path}: {e}",
            context={"file": str(path), "line": e.lineno},
        ) from e

    if not isinstance(data, dict) or not isinstance(data.get("nodes"), list):
        raise FileFormatError(
            "Graph file must be an object with a 'nodes' list",
            context={"file": str(path)},
            suggestions=['Use {"nodes": [{"id": "a"}], "edges": [["a", "b"]]}'],
        )

    ids: dict[str, NodeId] = {}
    for entry in data["nodes"]:
        name, node_data = _parse_node(entry, path)
        if name in ids:
            raise FileFormatError(
                f"Duplicate node id: {name}",
                context={"file": str(path)},
            )
        ids[name] = engine.add_node(node_data)

    for entry in data.get("edges", []):
        if not isinstance(entry, list) or len(entry) != 2:
            raise FileFormatError(
                "Edges must be [source, target] pairs",
                context={"file": str(path), "edge": entry},
            )
        a, b = (str(v) for v in entry)
        missing = [n for n in (a, b) if n not in ids]
        if missing:
            raise FileFormatError(
                f"Edge references unknown node(s): {', '.join(missing)}",
                context={"file": str(path), "edge": entry},
            )
        engine.add_edge(ids[a], ids[b])

    logger.info(f"Loaded {len(ids)} nodes and {engine.edge_count} edges from {path}")
    return ids


def _parse_node(entry: Any, path: Path) -> tuple[str, NodeData[str]]:
    if not isinstance(entry, dict) or "id" not in entry:
        raise FileFormatError(
            "Each node must be an object with an 'id'",
            context={"file": str(path), "node": entry},
        )
    name = str(entry["id"])
    defaults = NodeData()
    try:
        node_data = NodeData(
            x=float(entry.get("x", defaults.x)),
            y=float(entry.get("y", defaults.y)),
            mass=float(entry.get("mass", defaults.mass)),
            is_anchor=bool(entry.get("anchor", defaults.is_anchor)),
            user_data=name,
        )
    except (TypeError, ValueError) as e:
        raise FileFormatError(
            f"Invalid value for node {name}: {e}",
            context={"file": str(path), "node": entry},
        ) from e
    return name, node_data


def _count_intersections(engine: ForceGraph) -> int:
    found: list[Any] = []
    engine.visit_intersections(found.append)
    return len(found)


def _output_json(engine: ForceGraph[str, None], steps: int) -> None:
    nodes = []
    engine.visit_nodes(
        lambda node: nodes.append(
            {
                "id": node.user_data,
                "x": node.x,
                "y": node.y,
                "vx": node.vx,
                "vy": node.vy,
                "anchor": node.is_anchor,
            }
        )
    )
    output = {
        "nodes": nodes,
        "summary": {
            "steps": steps,
            "bounces": engine.bounce_count,
            "escapes": engine.escape_count,
            "intersections": _count_intersections(engine),
            "stable": engine.is_stable(),
        },
    }
    print(json.dumps(output, indent=2))


def _output_table(engine: ForceGraph[str, None], steps: int) -> None:
    console = Console()

    table = Table(title="Node Positions")
    table.add_column("Node")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    table.add_column("VX", justify="right", style="dim")
    table.add_column("VY", justify="right", style="dim")
    table.add_column("Anchor")

    engine.visit_nodes(
        lambda node: table.add_row(
            str(node.user_data),
            f"{node.x:.2f}",
            f"{node.y:.2f}",
            f"{node.vx:.3g}",
            f"{node.vy:.3g}",
            "yes" if node.is_anchor else "",
        )
    )
    console.print(table)

    summary_table = Table(title="Summary", show_header=False)
    summary_table.add_column("Metric", style="dim")
    summary_table.add_column("Value")
    summary_table.add_row("Steps", str(steps))
    summary_table.add_row("Bounces", str(engine.bounce_count))
    summary_table.add_row("Escapes", str(engine.escape_count))
    intersections = _count_intersections(engine)
    summary_table.add_row(
        "Intersections",
        f"[yellow]{intersections}[/yellow]" if intersections else "[green]0[/green]",
    )
    summary_table.add_row("Stable", "[green]yes[/green]" if engine.is_stable() else "no")
    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for simulate command."""
    parser = argparse.ArgumentParser(
        prog="force-graph simulate",
        description="Run the force-directed layout and print node positions",
    )
    parser.add_argument("graph", nargs="?", help="Path to graph .json file")
    parser.add_argument("--steps", type=int, default=1000)
    parser.add_argument("--dt", type=float, default=0.016)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--config", help="Path to a TOML config file")
    parser.add_argument("--until-stable", action="store_true")
    parser.add_argument("--format", choices=["table", "json"], default="table")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    if args.verbose:
        enable_verbose("INFO")

    if args.config:
        params = load_parameters_file(Path(args.config))
    else:
        params = load_parameters()

    engine: ForceGraph[str, None] = ForceGraph(params, rng=np.random.default_rng(args.seed))

    if args.graph:
        load_graph_file(Path(args.graph), engine)
    else:
        build_demo_graph(engine)

    steps = engine.run(args.steps, args.dt, stop_when_stable=args.until_stable)
    logger.info(
        f"Ran {steps} steps: {engine.bounce_count} bounces, {engine.escape_count} escapes"
    )

    if args.format == "json":
        _output_json(engine, steps)
    else:
        _output_table(engine, steps)

    return 0
