"""
Custom exception hierarchy for force-graph.

All exceptions carry optional context (offending ids, operands, file paths)
and suggestions, and format them into the message.

Example::

    from force_graph.exceptions import NodeNotFoundError

    raise NodeNotFoundError(
        "Node does not exist",
        context={"node": node_id},
        suggestions=["The node may have been removed"],
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

__all__ = [
    "ForceGraphError",
    "ConfigError",
    "FileFormatError",
    "GraphError",
    "NodeNotFoundError",
    "EdgeNotFoundError",
    "SimulationError",
    "NonFiniteValueError",
]


class ForceGraphError(Exception):
    """
    Base exception for all force-graph errors.

    Attributes:
        context: Dictionary of contextual information
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ConfigError(ForceGraphError):
    """Invalid simulation parameters or unreadable configuration file."""

    pass


class FileFormatError(ForceGraphError):
    """
    Graph description file not readable or malformed.

    Example::

        raise FileFormatError(
            "Edge references unknown node(s): c",
            context={"file": "graph.json", "edge": ["a", "c"]},
        )
    """

    pass


class GraphError(ForceGraphError):
    """
    Graph store operation failed.

    Raised by the graph collaborator when a caller breaks its contract,
    e.g. by referencing a node or edge that does not exist.
    """

    pass


class NodeNotFoundError(GraphError, LookupError):
    """
    Node identifier is unknown or refers to a removed node.

    Example::

        raise NodeNotFoundError(
            "Node does not exist",
            context={"node": "NodeId(3v1)"},
            suggestions=["Node ids become invalid once the node is removed"],
        )
    """

    pass


class EdgeNotFoundError(GraphError, LookupError):
    """Edge identifier is unknown or refers to a removed edge."""

    pass


class SimulationError(ForceGraphError):
    """
    Simulation step could not be performed.

    Raised for invalid step arguments (negative or non-finite ``dt``).
    """

    pass


class NonFiniteValueError(SimulationError):
    """
    A force, velocity or position became NaN or infinite.

    This is an internal consistency violation. The step is aborted before
    the corrupted value is written into node state.

    Example::

        raise NonFiniteValueError(
            "Non-finite force between nodes",
            context={"n1": (0.0, 0.0), "n2": (nan, 0.0), "force": (nan, nan)},
        )
    """

    pass
