"""
Config command for force-graph CLI.

Usage:
    force-graph config --show       Show effective simulation parameters
    force-graph config --template   Print a documented template config
"""

import argparse

from rich.console import Console
from rich.table import Table

from force_graph.config import generate_template, load_parameters


def main(argv: list[str] | None = None) -> int:
    """Main entry point for config command."""
    parser = argparse.ArgumentParser(
        prog="force-graph config",
        description="Show or generate force-graph configuration",
    )
    action_group = parser.add_mutually_exclusive_group()
    action_group.add_argument("--show", action="store_true")
    action_group.add_argument("--template", action="store_true")

    args = parser.parse_args(argv)

    if args.template:
        print(generate_template(), end="")
        return 0

    params = load_parameters()

    table = Table(title="Simulation Parameters")
    table.add_column("Key", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in params.to_dict().items():
        table.add_row(key, str(value))
    Console().print(table)
    return 0
