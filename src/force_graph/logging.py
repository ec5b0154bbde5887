"""
Logging configuration for force-graph.

Every module logs through ``logging.getLogger(__name__)`` below the
``force_graph`` logger, which is silent unless verbose output is enabled.
What gets logged:

- DEBUG (``force_graph.engine``): each coincident-pair bounce and each
  edge-crossing escape impulse, with the node ids involved
- INFO (``force_graph.cli.simulate_cmd``): graph file loading and the run
  summary, shown by ``force-graph simulate -v``
"""

import logging

_logger = logging.getLogger("force_graph")
_logger.addHandler(logging.NullHandler())  # Default: no output

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def enable_verbose(level: str = "INFO", format: str = None) -> None:
    """Send force-graph log records to stderr.

    Calling it again replaces the previous handler.

    Args:
        level: Logging level - "DEBUG", "INFO", "WARNING", "ERROR"
        format: Optional custom format string

    Example:
        # Trace why a layout keeps jittering
        enable_verbose("DEBUG")
        graph.run(200)
        print(graph.bounce_count, graph.escape_count)
        disable_verbose()
    """
    numeric_level = getattr(logging, level.upper())
    _logger.setLevel(numeric_level)
    _remove_stream_handlers()

    handler = logging.StreamHandler()
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(format or DEFAULT_FORMAT))
    _logger.addHandler(handler)


def disable_verbose() -> None:
    """Silence force-graph logging again."""
    _logger.setLevel(logging.WARNING)
    _remove_stream_handlers()


def _remove_stream_handlers() -> None:
    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)
