"""Pytest fixtures for force-graph tests."""

import numpy as np
import pytest

from force_graph import ForceGraph, NodeData, SimulationParameters
from force_graph import config as config_module


@pytest.fixture
def params():
    """Default simulation parameters."""
    return SimulationParameters()


@pytest.fixture
def engine():
    """Empty engine with a seeded random source."""
    return ForceGraph(rng=np.random.default_rng(0))


@pytest.fixture
def star_graph(engine):
    """Four corner nodes joined to a center node."""
    center = engine.add_node(NodeData(x=500.0, y=500.0, user_data="center"))
    corners = []
    for x, y in [(250.0, 250.0), (750.0, 250.0), (250.0, 750.0), (750.0, 750.0)]:
        corner = engine.add_node(NodeData(x=x, y=y))
        engine.add_edge(corner, center)
        corners.append(corner)
    return engine, center, corners


@pytest.fixture
def crossing_graph(engine):
    """Two edges crossing at the origin: a-b horizontal, c-d vertical."""
    a = engine.add_node(NodeData(x=-50.0, y=0.0, user_data="a"))
    b = engine.add_node(NodeData(x=50.0, y=0.0, user_data="b"))
    c = engine.add_node(NodeData(x=0.0, y=-50.0, user_data="c"))
    d = engine.add_node(NodeData(x=0.0, y=50.0, user_data="d"))
    engine.add_edge(a, b)
    engine.add_edge(c, d)
    return engine, (a, b, c, d)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Working directory and user config path with no config files in them."""
    (tmp_path / ".git").mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "USER_CONFIG_PATH", tmp_path / "no-user-config.toml")
    return tmp_path
