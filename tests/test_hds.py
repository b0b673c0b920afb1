import numpy as np
import pytest

from deltri.hds import INVALID
from deltri.hds import Mesh
from deltri.hds import TopologyError


@pytest.fixture
def triangle():
    """ Single counter-clockwise triangle with three boundary halfedges.
    """
    mesh = Mesh()

    v0 = mesh.new_vertex((0.0, 0.0))
    v1 = mesh.new_vertex((1.0, 0.0))
    v2 = mesh.new_vertex((0.0, 1.0))

    h = [mesh.new_halfedge(v) for v in (v0, v1, v1, v2, v2, v0)]

    mesh.new_edge(h[0], h[1])
    mesh.new_edge(h[2], h[3])
    mesh.new_edge(h[4], h[5])
    mesh.new_triangle(h[0], h[2], h[4])

    return mesh


def test_empty_mesh():
    mesh = Mesh()

    assert mesh.size == (0, 0, 0, 0)
    assert mesh.points.shape == (0, 2)
    assert list(mesh) == []

    mesh.check()


def test_new_vertex():
    mesh = Mesh()

    assert mesh.new_vertex((1.5, 2.5)) == 0
    assert mesh.new_vertex(np.array([3.0, 4.0])) == 1

    assert mesh.point(0) == (1.5, 2.5)
    assert mesh.point(1) == (3.0, 4.0)
    assert mesh.halfedge(0) == INVALID

    assert np.array_equal(mesh.points, [[1.5, 2.5], [3.0, 4.0]])


def test_new_halfedge_sets_anchor():
    mesh = Mesh()
    v = mesh.new_vertex((0.0, 0.0))

    h1 = mesh.new_halfedge(v)
    assert mesh.halfedge(v) == h1

    # Last writer wins.
    h2 = mesh.new_halfedge(v)
    assert mesh.halfedge(v) == h2

    assert mesh.origin(h1) == v
    assert mesh.edge(h1) == INVALID
    assert mesh.triangle(h1) == INVALID
    assert mesh.next(h1) == INVALID


def test_triangle_wiring(triangle):
    mesh = triangle

    assert mesh.size == (3, 6, 3, 1)
    assert list(mesh) == [0]

    h0, h1, h2 = mesh.triangle_halfedges(0)

    assert (h0, h1, h2) == (0, 2, 4)
    assert mesh.next(h0) == h1
    assert mesh.next(h1) == h2
    assert mesh.next(h2) == h0
    assert all(mesh.triangle(h) == 0 for h in (h0, h1, h2))
    assert all(mesh.triangle(h) == INVALID for h in (1, 3, 5))

    assert mesh.triangle_vertices(0) == (0, 1, 2)

    mesh.check()


def test_mate_and_target(triangle):
    mesh = triangle

    for e in range(3):
        h1, h2 = mesh.halfedges(e)

        assert mesh.mate(h1) == h2
        assert mesh.mate(h2) == h1
        assert mesh.edge(h1) == mesh.edge(h2) == e
        assert mesh.target(h1) == mesh.origin(h2)
        assert mesh.is_boundary(e)


def test_rewire_edge(triangle):
    mesh = triangle

    v = mesh.new_vertex((1.0, 1.0))
    h = mesh.new_halfedge(v)

    mesh.rewire_edge(0, 0, h)

    assert mesh.halfedges(0) == (0, h)
    assert mesh.edge(h) == 0
    assert mesh.mate(0) == h


def test_rewire_triangle(triangle):
    mesh = triangle

    mesh.rewire_triangle(0, 2, 4, 0)

    assert mesh.triangle_halfedges(0) == (2, 4, 0)
    assert mesh.triangle_vertices(0) == (1, 2, 0)
    assert mesh.next(0) == 2

    mesh.check()


def test_retarget_and_set_halfedge(triangle):
    mesh = triangle

    mesh.retarget_halfedge(1, 2)
    assert mesh.origin(1) == 2

    mesh.set_halfedge(2, 1)
    assert mesh.halfedge(2) == 1


def test_check_detects_corruption(triangle):
    mesh = triangle

    # Origin no longer matches the outgoing halfedge of vertex 1.
    mesh.retarget_halfedge(2, 0)

    with pytest.raises(TopologyError):
        mesh.check()


def test_check_detects_broken_loop(triangle):
    mesh = triangle
    mesh._hnext[4] = 2

    with pytest.raises(TopologyError):
        mesh.check()


def test_repr(triangle):
    assert repr(triangle) == \
        'Mesh(vertices=3, halfedges=6, edges=3, triangles=1)'
