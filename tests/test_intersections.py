"""Tests for edge crossing detection."""

import pytest

from force_graph import ForceGraph, NodeData
from force_graph.exceptions import NodeNotFoundError
from force_graph.intersections import (
    IntersectionInfo,
    find_intersections,
    find_node_intersections,
)


class TestGlobalIntersections:
    """Crossings between any two edges."""

    def test_single_crossing(self, crossing_graph):
        engine, (a, b, c, d) = crossing_graph
        found = list(find_intersections(engine.graph))
        assert len(found) == 1
        info = found[0]
        assert info.x == pytest.approx(0.0)
        assert info.y == pytest.approx(0.0)
        assert info.edge1 == (a, b)
        assert info.edge2 == (c, d)

    def test_no_edges(self, engine):
        engine.add_node(NodeData(x=0.0, y=0.0))
        assert list(find_intersections(engine.graph)) == []

    def test_shared_endpoint_not_reported(self, engine):
        """Edges meeting at a common node touch but do not cross."""
        a = engine.add_node(NodeData(x=0.0, y=0.0))
        b = engine.add_node(NodeData(x=10.0, y=10.0))
        c = engine.add_node(NodeData(x=10.0, y=0.0))
        engine.add_edge(a, b)
        engine.add_edge(a, c)
        assert list(find_intersections(engine.graph)) == []

    def test_star_graph_has_no_crossings(self, star_graph):
        engine, _, _ = star_graph
        assert list(find_intersections(engine.graph)) == []

    def test_each_pair_reported_once(self, engine):
        """Three segments through a common region give three crossings."""
        ends = [
            ((-10.0, 0.0), (10.0, 1.0)),
            ((0.0, -10.0), (1.0, 10.0)),
            ((-10.0, -10.0), (10.0, 9.0)),
        ]
        for (x1, y1), (x2, y2) in ends:
            engine.add_edge(
                engine.add_node(NodeData(x=x1, y=y1)), engine.add_node(NodeData(x=x2, y=y2))
            )
        assert len(list(find_intersections(engine.graph))) == 3


class TestNodeIntersections:
    """Crossings involving the edges of one node."""

    def test_oriented_from_node(self, crossing_graph):
        engine, (a, b, c, d) = crossing_graph
        found = list(find_node_intersections(engine.graph, b))
        assert len(found) == 1
        assert found[0].edge1 == (b, a)
        assert found[0].edge2 == (c, d)

    def test_isolated_node(self, crossing_graph):
        engine, _ = crossing_graph
        lone = engine.add_node(NodeData(x=500.0, y=500.0))
        assert list(find_node_intersections(engine.graph, lone)) == []

    def test_no_crossing(self, star_graph):
        engine, center, corners = star_graph
        assert list(find_node_intersections(engine.graph, center)) == []
        assert list(find_node_intersections(engine.graph, corners[0])) == []

    def test_unknown_node(self, crossing_graph):
        engine, (a, _, _, _) = crossing_graph
        engine.remove_node(a)
        with pytest.raises(NodeNotFoundError):
            list(find_node_intersections(engine.graph, a))


class TestIntersectionInfo:
    def test_point(self, crossing_graph):
        engine, (a, b, c, d) = crossing_graph
        info = IntersectionInfo(x=1.0, y=2.0, edge1=(a, b), edge2=(c, d))
        assert info.point().as_tuple() == (1.0, 2.0)


class TestEngineVisitors:
    """Intersection visitors on the engine."""

    def test_visit_intersections(self, crossing_graph):
        engine, _ = crossing_graph
        found = []
        engine.visit_intersections(found.append)
        assert len(found) == 1

    def test_visit_neighbor_intersections(self, crossing_graph):
        engine, (a, b, c, d) = crossing_graph
        found = []
        engine.visit_neighbor_intersections(c, found.append)
        assert len(found) == 1
        assert found[0].edge1 == (c, d)
        assert found[0].edge2 == (a, b)

    def test_removed_edge_no_longer_crosses(self):
        engine = ForceGraph()
        a = engine.add_node(NodeData(x=-50.0, y=0.0))
        b = engine.add_node(NodeData(x=50.0, y=0.0))
        c = engine.add_node(NodeData(x=0.0, y=-50.0))
        d = engine.add_node(NodeData(x=0.0, y=50.0))
        engine.add_edge(a, b)
        cd = engine.add_edge(c, d)
        engine.remove_edge(cd)
        found = []
        engine.visit_intersections(found.append)
        assert found == []
