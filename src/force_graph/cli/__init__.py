"""
Command-line interface for force-graph.

Provides a headless runner via the `force-graph` command:

    force-graph simulate [graph.json]   - Run the layout and print positions
    force-graph config                  - Show or generate configuration

Examples:
    force-graph simulate
    force-graph simulate graph.json --steps 2000 --dt 0.016 --seed 7
    force-graph simulate graph.json --format json
    force-graph config --show
    force-graph config --template > .force-graph.toml
"""

import argparse
import sys
from typing import List, Optional

from force_graph import __version__
from force_graph.exceptions import ForceGraphError

__all__ = ["main"]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for force-graph CLI."""
    parser = argparse.ArgumentParser(
        prog="force-graph",
        description="Force-directed graph layout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"force-graph {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Simulate subcommand
    simulate_parser = subparsers.add_parser("simulate", help="Run the layout simulation")
    simulate_parser.add_argument(
        "graph", nargs="?", help="Path to graph .json file (default: built-in star graph)"
    )
    simulate_parser.add_argument("--steps", type=int, default=1000, help="Number of steps")
    simulate_parser.add_argument("--dt", type=float, default=0.016, help="Seconds per step")
    simulate_parser.add_argument("--seed", type=int, help="Seed for the bounce random source")
    simulate_parser.add_argument("--config", help="Path to a TOML config file")
    simulate_parser.add_argument(
        "--until-stable", action="store_true", help="Stop early once all nodes are stable"
    )
    simulate_parser.add_argument("--format", choices=["table", "json"], default="table")
    simulate_parser.add_argument("-v", "--verbose", action="store_true")

    # Config subcommand
    config_parser = subparsers.add_parser("config", help="Show or generate configuration")
    config_group = config_parser.add_mutually_exclusive_group()
    config_group.add_argument(
        "--show", action="store_true", help="Show effective simulation parameters"
    )
    config_group.add_argument(
        "--template", action="store_true", help="Print a documented template config"
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "simulate":
            return _run_simulate_command(args)
        elif args.command == "config":
            return _run_config_command(args)
    except ForceGraphError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 1


def _run_simulate_command(args) -> int:
    """Handle simulate command."""
    from .simulate_cmd import main as simulate_main

    sub_argv = []
    if args.graph:
        sub_argv.append(args.graph)
    sub_argv.extend(["--steps", str(args.steps), "--dt", str(args.dt)])
    if args.seed is not None:
        sub_argv.extend(["--seed", str(args.seed)])
    if args.config:
        sub_argv.extend(["--config", args.config])
    if args.until_stable:
        sub_argv.append("--until-stable")
    if args.format != "table":
        sub_argv.extend(["--format", args.format])
    if args.verbose:
        sub_argv.append("--verbose")
    return simulate_main(sub_argv)


def _run_config_command(args) -> int:
    """Handle config command."""
    from .config_cmd import main as config_main

    sub_argv = []
    if args.template:
        sub_argv.append("--template")
    else:
        sub_argv.append("--show")
    return config_main(sub_argv)


if __name__ == "__main__":
    sys.exit(main())
