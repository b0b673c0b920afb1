import pytest

import deltri.queries as queries

from deltri.delaunay import Delaunay
from deltri.hds import INVALID


@pytest.fixture
def seeded():
    """ Builder seeded for the unit square, bounding vertices only.
    """
    return Delaunay([(0, 0), (1, 0), (1, 1), (0, 1)])


def edge_vertices(mesh, edges):
    return {frozenset(mesh.origin(h) for h in mesh.halfedges(e))
            for e in edges}


def test_mate(seeded):
    mesh = seeded.mesh

    for e in range(3):
        h1, h2 = mesh.halfedges(e)
        assert queries.mate(mesh, h1) == h2
        assert queries.mate(mesh, h2) == h1


def test_incident_edges_walks_mates(seeded, monkeypatch):
    seeded.insert((0.5, 0.4))
    mesh = seeded.mesh
    v0, _, _ = seeded.bounds

    calls = []
    mate = queries.mate

    def spy(mesh, halfedge):
        calls.append(halfedge)
        return mate(mesh, halfedge)

    monkeypatch.setattr(queries, 'mate', spy)

    assert len(queries.incident_edges(mesh, v0)) == 3
    assert calls


def test_incident_edges_seed(seeded):
    mesh = seeded.mesh
    v0, v1, v2 = seeded.bounds

    # Vertex v0 starts out with a boundary halfedge as outgoing halfedge.
    assert mesh.triangle(mesh.halfedge(v0)) == INVALID

    for v in (v0, v1, v2):
        edges = queries.incident_edges(mesh, v)

        assert len(edges) == 2
        assert all(v in pair for pair in edge_vertices(mesh, edges))

    assert sorted(queries.incident_edges(mesh, v0, v1, v2)) == \
        [0, 0, 1, 1, 2, 2]


def test_incident_edges_interior_vertex(seeded):
    p = seeded.insert((0.5, 0.4))
    mesh = seeded.mesh

    edges = queries.incident_edges(mesh, p)

    # The new vertex is connected to the three bounding vertices.
    assert len(edges) == 3
    assert edge_vertices(mesh, edges) == \
        {frozenset((p, v)) for v in seeded.bounds}


def test_incident_edges_boundary_vertex(seeded):
    seeded.insert((0.5, 0.4))
    mesh = seeded.mesh
    v0, v1, v2 = seeded.bounds

    for v in (v0, v1, v2):
        edges = queries.incident_edges(mesh, v)
        assert len(edges) == 3
        assert len(set(edges)) == 3


def test_incident_edges_any_anchor(seeded):
    seeded.insert((0.5, 0.4))
    seeded.insert((0.2, 0.7))
    mesh = seeded.mesh

    nv, nh, _, _ = mesh.size

    for v in range(nv):
        expected = set(queries.incident_edges(mesh, v))

        # The walk does not depend on which outgoing halfedge is stored.
        for h in range(nh):
            if mesh.origin(h) == v:
                mesh.set_halfedge(v, h)
                assert set(queries.incident_edges(mesh, v)) == expected


def test_locate_edge(seeded):
    mesh = seeded.mesh
    v0, v1, _ = seeded.bounds

    p0, p1 = mesh.point(v0), mesh.point(v1)
    mid = ((p0[0] + p1[0]) / 2, (p0[1] + p1[1]) / 2)

    e = queries.locate_edge(mesh, mid)

    assert e != INVALID
    assert edge_vertices(mesh, [e]) == {frozenset((v0, v1))}

    assert queries.locate_edge(mesh, (0.5, 0.5)) == INVALID


def test_locate_edge_collinear_outside(seeded):
    mesh = seeded.mesh
    v0, v1, _ = seeded.bounds

    p0, p1 = mesh.point(v0), mesh.point(v1)

    # On the line through a boundary edge, beyond its endpoint.
    beyond = (2*p1[0] - p0[0], 2*p1[1] - p0[1])

    assert queries.locate_edge(mesh, beyond) == INVALID
    assert queries.locate_triangle(mesh, beyond) == INVALID


def test_locate_triangle(seeded):
    mesh = seeded.mesh

    assert queries.locate_triangle(mesh, (0.5, 0.5)) == 0
    assert queries.locate_triangle(mesh, (100.0, 100.0)) == INVALID

    # Vertices are not inside any triangle.
    assert queries.locate_triangle(mesh, mesh.point(0)) == INVALID
