# Copyright 2024, m3shware
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.

""" Mesh queries.

Neighborhood traversal and point location built on top of the read
primitives of :class:`~deltri.hds.Mesh`. Point location is a linear
scan over the arenas.
"""

from deltri.geometry import point_in_triangle
from deltri.geometry import point_on_edge
from deltri.hds import INVALID


def mate(mesh, halfedge):
    """ Other halfedge of the edge of `halfedge`.
    """
    return mesh.mate(halfedge)


def incident_edges(mesh, *vertices):
    """ Vertex star edges.

    Collects the edges incident to each of the given vertices. The
    walk around a vertex starts at its outgoing halfedge and rotates
    from triangle to triangle until it either comes back to the first
    edge (interior vertex) or runs into the boundary. In the latter case
    a second walk from the mate of the first halfedge covers the other
    side of the fan.

    Parameters
    ----------
    mesh : Mesh
        The mesh to query.
    *vertices
        Vertex handles.

    Returns
    -------
    list[int]
        Edge handles. An edge incident to two of the given vertices is
        listed twice.
    """
    edges = []

    for v in vertices:
        h0 = mesh.halfedge(v)

        if h0 == INVALID:
            continue

        first = mesh.edge(h0)
        edges.append(first)

        # Outgoing halfedge h, its predecessor in the triangle comes in
        # to v. The mate of the predecessor leaves v again one triangle
        # further around.
        h = h0
        closed = False

        while mesh.triangle(h) != INVALID:
            h = mesh.next(mesh.next(h))

            if mesh.edge(h) == first:
                closed = True
                break

            edges.append(mesh.edge(h))
            h = mate(mesh, h)

        if closed:
            continue

        # Boundary vertex. Incoming halfedge h, its successor in the
        # triangle leaves v.
        h = mate(mesh, h0)

        while mesh.triangle(h) != INVALID:
            h = mesh.next(h)
            edges.append(mesh.edge(h))
            h = mate(mesh, h)

    return edges


def locate_edge(mesh, point):
    """ Edge point location.

    Parameters
    ----------
    mesh : Mesh
        The mesh to query.
    point : array_like, shape (2, )
        Query point.

    Returns
    -------
    int
        The first edge that contains `point` strictly between its
        endpoints or :data:`~deltri.hds.INVALID`.
    """
    for e in range(mesh.size[2]):
        h1, h2 = mesh.halfedges(e)

        if point_on_edge(mesh.point(mesh.origin(h1)),
                         mesh.point(mesh.origin(h2)), point):
            return e

    return INVALID


def locate_triangle(mesh, point):
    """ Triangle point location.

    Parameters
    ----------
    mesh : Mesh
        The mesh to query.
    point : array_like, shape (2, )
        Query point.

    Returns
    -------
    int
        The first triangle that contains `point` in its interior or
        :data:`~deltri.hds.INVALID`.

    Note
    ----
    Points on an edge are not found. Callers check edges first with
    :func:`locate_edge`.
    """
    for t in mesh:
        p0, p1, p2 = (mesh.point(v) for v in mesh.triangle_vertices(t))

        if point_in_triangle(p0, p1, p2, point):
            return t

    return INVALID
