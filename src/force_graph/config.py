"""
Simulation parameters and configuration file support.

Parameters can be built in code or loaded hierarchically from:
1. Project config: .force-graph.toml or force-graph.toml in project root
2. User config: ~/.config/force-graph/config.toml

Project config overrides user config; both override the defaults.
Only the ``[simulation]`` table is read.
"""

from __future__ import annotations

import math
import sys
import warnings
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

from force_graph.exceptions import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

__all__ = [
    "SimulationParameters",
    "CONFIG_FILENAMES",
    "USER_CONFIG_PATH",
    "load_parameters",
    "generate_template",
]

# Config file names to search for in project directories
CONFIG_FILENAMES = [".force-graph.toml", "force-graph.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "force-graph" / "config.toml"

KNOWN_SECTIONS = {"simulation"}

# Smallest representable step in single precision; velocities below it are noise
F32_EPSILON = 1.1920929e-07


@dataclass(frozen=True)
class SimulationParameters:
    """Parameters controlling the force simulation."""

    # Repulsion (charge) and attraction (spring) coefficients
    force_charge: float = 3000.0
    force_spring: float = 0.3
    force_max: float = 280.0  # Per-component force clamp

    # Integrator
    node_speed: float = 1000.0  # Scales accumulated acceleration into velocity
    damping_factor: float = 0.9  # Velocity retained per step, in (0, 1]

    # Distance bands, relative to ideal_distance
    ideal_distance: float = 45.0
    close_factor: float = 0.9  # Below ideal * close_factor: push apart
    far_factor: float = 1.5  # Above ideal * far_factor: neighbors pull together
    distance_factor: float = -2.0  # Exponent of the banded force law

    # Collision handling
    really_close_distance: float = 1.0  # Coincidence threshold and distance floor
    escape_intensity: float = 2.0  # Scale of the edge-crossing escape impulse
    stability_epsilon: float = F32_EPSILON  # Max |v| component of a stable node

    # Model switches
    neighbor_aware: bool = True  # Banded model; False selects the classic model
    escape_enabled: bool = True

    @property
    def close_distance(self) -> float:
        """Distance below which pairs are pushed apart."""
        return self.ideal_distance * self.close_factor

    @property
    def far_distance(self) -> float:
        """Distance above which neighbor pairs are pulled together."""
        return self.ideal_distance * self.far_factor

    def validate(self) -> SimulationParameters:
        """
        Check the parameters for values the simulation cannot work with.

        Returns:
            self, to allow chaining

        Raises:
            ConfigError: If any parameter is out of range
        """
        errors: list[str] = []

        for name in ("ideal_distance", "force_max", "node_speed", "really_close_distance"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                errors.append(f"{name} must be finite and positive, got {value}")

        for name in (
            "force_charge",
            "force_spring",
            "close_factor",
            "far_factor",
            "distance_factor",
            "escape_intensity",
            "stability_epsilon",
        ):
            value = getattr(self, name)
            if not math.isfinite(value):
                errors.append(f"{name} must be finite, got {value}")

        if not 0.0 < self.damping_factor <= 1.0:
            errors.append(f"damping_factor must be in (0, 1], got {self.damping_factor}")
        if self.close_factor >= self.far_factor:
            errors.append(
                f"close_factor ({self.close_factor}) must be below far_factor ({self.far_factor})"
            )
        if self.escape_intensity < 0:
            errors.append(f"escape_intensity must not be negative, got {self.escape_intensity}")
        if self.stability_epsilon < 0:
            errors.append(f"stability_epsilon must not be negative, got {self.stability_epsilon}")

        if errors:
            raise ConfigError(
                "Invalid simulation parameters:\n" + "\n".join(f"  - {e}" for e in errors),
                context={"parameters": self},
            )
        return self

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "<dict>") -> SimulationParameters:
        """
        Build parameters from a mapping, e.g. a parsed ``[simulation]`` table.

        Unknown keys are reported with a warning and ignored.
        """
        return cls().merged(data, source)

    def merged(self, data: dict[str, Any], source: str = "<dict>") -> SimulationParameters:
        """Return a copy with the keys of ``data`` overriding these values."""
        known = {f.name: f for f in fields(self)}
        updates: dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                warnings.warn(f"Unknown config key 'simulation.{key}' in {source}", stacklevel=3)
                continue
            if known[key].type == "bool":
                if not isinstance(value, bool):
                    raise ConfigError(
                        f"Config key 'simulation.{key}' must be a boolean",
                        context={"file": source, "value": value},
                    )
                updates[key] = value
            else:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ConfigError(
                        f"Config key 'simulation.{key}' must be a number",
                        context={"file": source, "value": value},
                    )
                updates[key] = float(value)

        return replace(self, **updates)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_parameters(start_dir: Path | None = None) -> SimulationParameters:
    """
    Load parameters with precedence: project > user > defaults.

    Args:
        start_dir: Directory to start searching from (default: current directory)

    Returns:
        Validated simulation parameters
    """
    if start_dir is None:
        start_dir = Path.cwd()

    params = SimulationParameters()

    # Load user config first (lower precedence)
    if USER_CONFIG_PATH.exists():
        params = _apply_file(params, USER_CONFIG_PATH)

    # Load project config (higher precedence)
    project_config = _find_project_config(start_dir)
    if project_config:
        params = _apply_file(params, project_config)

    return params.validate()


def load_parameters_file(path: Path) -> SimulationParameters:
    """Load parameters from one explicit TOML file on top of the defaults."""
    return _apply_file(SimulationParameters(), path).validate()


def _apply_file(params: SimulationParameters, path: Path) -> SimulationParameters:
    data = _load_toml_file(path)
    for key in data:
        if key not in KNOWN_SECTIONS:
            warnings.warn(f"Unknown config section '{key}' in {path}", stacklevel=3)
    section = data.get("simulation")
    if section is None:
        return params
    if not isinstance(section, dict):
        raise ConfigError(
            "Config key 'simulation' must be a table",
            context={"file": str(path)},
        )
    return params.merged(section, str(path))


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# force-graph configuration file
# Place as .force-graph.toml in project root or ~/.config/force-graph/config.toml

[simulation]
# Repulsion coefficient between node pairs
# force_charge = 3000.0

# Spring coefficient along edges (classic model)
# force_spring = 0.3

# Each force component is clamped to [-force_max, force_max]
# force_max = 280.0

# Scale applied to accumulated acceleration when updating velocity
# node_speed = 1000.0

# Fraction of velocity kept after every step, in (0, 1]
# damping_factor = 0.9

# Target separation between nodes
# ideal_distance = 45.0

# Pairs closer than ideal_distance * close_factor are pushed apart
# close_factor = 0.9

# Neighbors farther than ideal_distance * far_factor are pulled together
# far_factor = 1.5

# Exponent of the banded force law (negative: force falls off with distance)
# distance_factor = -2.0

# Pairs closer than this are bounced apart instead of computing a force
# really_close_distance = 1.0

# Strength of the impulse that moves a node away from an edge crossing
# escape_intensity = 2.0

# Nodes whose velocity components are below this are considered stable
# stability_epsilon = 1.1920929e-07

# Use the three-band neighbor-aware model (false: classic spring + charge)
# neighbor_aware = true

# Resolve edge crossings around stable nodes
# escape_enabled = true
"""
