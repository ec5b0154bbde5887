"""Tests for the pairwise force model."""

import math

import pytest

from force_graph.config import SimulationParameters
from force_graph.exceptions import NonFiniteValueError
from force_graph.forces import (
    attraction,
    clamp_force,
    escape_force,
    pairwise_force,
    repulsion,
    separation,
)
from force_graph.geometry import Vector2D
from force_graph.nodes import Node, NodeData


def make_node(x, y, mass=10.0):
    return Node(data=NodeData(x=x, y=y, mass=mass))


class TestSeparation:
    """Direction and distance between two points."""

    def test_unit_direction(self):
        direction, distance = separation(Vector2D(0.0, 0.0), Vector2D(3.0, 4.0))
        assert distance == 5.0
        assert direction.x == pytest.approx(0.6)
        assert direction.y == pytest.approx(0.8)

    def test_coincident_points(self):
        direction, distance = separation(Vector2D(2.0, 2.0), Vector2D(2.0, 2.0))
        assert direction == Vector2D(0.0, 0.0)
        assert distance == 1.0

    def test_non_finite_point(self):
        with pytest.raises(NonFiniteValueError):
            separation(Vector2D(0.0, 0.0), Vector2D(math.nan, 0.0))


class TestBandedForce:
    """Three-band neighbor-aware force law."""

    def test_close_pair_pushed_apart(self, params):
        n1 = make_node(0.0, 0.0)
        n2 = make_node(10.0, 0.0)
        force = pairwise_force(n1, n2, False, params)
        assert force.x < 0
        assert force.y == 0.0

    def test_close_force_decreases_with_distance(self, params):
        """Repulsion weakens monotonically across the close band."""
        n1 = make_node(0.0, 0.0)
        magnitudes = []
        d = params.really_close_distance
        while d < params.close_distance:
            force = pairwise_force(n1, make_node(d, 0.0), False, params)
            magnitudes.append(force.magnitude())
            d += 0.5
        assert len(magnitudes) > 10
        assert all(a > b for a, b in zip(magnitudes, magnitudes[1:]))

    def test_close_force_same_for_neighbors(self, params):
        n1 = make_node(0.0, 0.0)
        n2 = make_node(20.0, 0.0)
        assert pairwise_force(n1, n2, True, params) == pairwise_force(n1, n2, False, params)

    def test_far_neighbors_attract(self, params):
        n1 = make_node(0.0, 0.0)
        n2 = make_node(100.0, 0.0)
        force = pairwise_force(n1, n2, True, params)
        assert force.x > 0
        # 3000 * 10 * 10 * 100^-2
        assert force.x == pytest.approx(30.0)

    def test_far_non_neighbors_ignore_each_other(self, params):
        n1 = make_node(0.0, 0.0)
        n2 = make_node(100.0, 0.0)
        assert pairwise_force(n1, n2, False, params) == Vector2D(0.0, 0.0)

    def test_comfort_band_is_neutral(self, params):
        n1 = make_node(0.0, 0.0)
        n2 = make_node(params.ideal_distance, 0.0)
        assert pairwise_force(n1, n2, True, params) == Vector2D(0.0, 0.0)
        assert pairwise_force(n1, n2, False, params) == Vector2D(0.0, 0.0)

    def test_antisymmetric(self, params):
        n1 = make_node(0.0, 0.0)
        n2 = make_node(12.0, 5.0)
        f12 = pairwise_force(n1, n2, False, params)
        f21 = pairwise_force(n2, n1, False, params)
        assert f12.x == pytest.approx(-f21.x)
        assert f12.y == pytest.approx(-f21.y)

    def test_distance_floor(self, params):
        """Below really_close_distance the force stops growing."""
        n1 = make_node(0.0, 0.0)
        at_floor = pairwise_force(n1, make_node(params.really_close_distance, 0.0), False, params)
        below = pairwise_force(n1, make_node(0.25, 0.0), False, params)
        assert below.magnitude() == pytest.approx(at_floor.magnitude())

    def test_mass_scales_force(self, params):
        light = pairwise_force(make_node(0.0, 0.0), make_node(10.0, 0.0), False, params)
        heavy = pairwise_force(
            make_node(0.0, 0.0, mass=20.0), make_node(10.0, 0.0), False, params
        )
        assert heavy.x == pytest.approx(2 * light.x)

    def test_coincident_nodes_give_finite_zero_force(self, params):
        force = pairwise_force(make_node(5.0, 5.0), make_node(5.0, 5.0), True, params)
        assert force.is_finite()
        assert force.magnitude() == 0.0

    def test_non_finite_mass_raises(self, params):
        with pytest.raises(NonFiniteValueError):
            pairwise_force(make_node(0.0, 0.0, mass=math.nan), make_node(10.0, 0.0), False, params)

    def test_non_finite_position_raises(self, params):
        with pytest.raises(NonFiniteValueError):
            pairwise_force(make_node(0.0, 0.0), make_node(math.inf, 0.0), True, params)


class TestClassicForces:
    """Spring attraction and inverse-square repulsion."""

    def test_attraction_grows_with_distance(self, params):
        n1 = make_node(0.0, 0.0)
        force = attraction(n1, make_node(100.0, 0.0), params)
        # 0.3 * 100 * 0.5
        assert force.x == pytest.approx(15.0)
        assert force.y == 0.0
        farther = attraction(n1, make_node(200.0, 0.0), params)
        assert farther.x > force.x

    def test_repulsion(self, params):
        force = repulsion(make_node(0.0, 0.0), make_node(100.0, 0.0), params)
        # -3000 * 10 * 10 / 100^2
        assert force.x == pytest.approx(-30.0)
        assert force.y == 0.0

    def test_repulsion_coincident_nodes(self, params):
        force = repulsion(make_node(1.0, 1.0), make_node(1.0, 1.0), params)
        assert force.is_finite()
        assert force.magnitude() == 0.0

    def test_repulsion_non_finite_mass_raises(self, params):
        with pytest.raises(NonFiniteValueError):
            repulsion(make_node(0.0, 0.0, mass=math.inf), make_node(0.0, 1.0, mass=0.0), params)


class TestEscapeForce:
    """Impulse away from an edge crossing."""

    def test_points_away_from_crossing(self, params):
        force = escape_force(make_node(0.0, 0.0), Vector2D(10.0, 0.0), params)
        # -3000 * 10 * 10 / 10^2 * 2
        assert force.x == pytest.approx(-6000.0)
        assert force.y == 0.0

    def test_scaled_by_intensity(self):
        weak = SimulationParameters(escape_intensity=1.0)
        strong = SimulationParameters(escape_intensity=3.0)
        node = make_node(0.0, 0.0)
        point = Vector2D(0.0, 20.0)
        assert escape_force(node, point, strong).y == pytest.approx(
            3 * escape_force(node, point, weak).y
        )


class TestClampForce:
    """Per-component force clamp."""

    def test_within_limit_unchanged(self, params):
        force = Vector2D(10.0, -20.0)
        assert clamp_force(force, params) == force

    def test_components_clamped_independently(self, params):
        clamped = clamp_force(Vector2D(1000.0, -5000.0), params)
        assert clamped == Vector2D(params.force_max, -params.force_max)

    def test_direction_not_preserved(self, params):
        clamped = clamp_force(Vector2D(1000.0, 10.0), params)
        assert clamped.x == params.force_max
        assert clamped.y == 10.0
