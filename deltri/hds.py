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

""" Halfedge data structure.

A planar triangle mesh is described by four growable containers, called
arenas:

    - vertices (a point and one outgoing halfedge),
    - halfedges (origin vertex, edge, triangle and next halfedge),
    - edges (a pair of mate halfedges),
    - and triangles (three halfedges forming a boundary loop).

Mesh items are addressed by integer handles, their position in the
respective arena. The sentinel :data:`INVALID` marks unset references.
A halfedge on the mesh boundary has no triangle and no next halfedge.

Mesh items are never removed. Handles are stable once issued, mutation
primitives rewire existing items in place.

Note
----
To ease debugging, this module relies on assertions which can slow down
script execution. You can disable assertions by running in optimized mode
via the "-O" command line argument.
"""

import numpy as np

import deltri.obj as obj


INVALID = -1
""" Handle of a missing mesh item. """


class Mesh:
    """ Mesh kernel.

    Owns the vertex, halfedge, edge and triangle arenas. Vertex
    coordinates are kept in a single :obj:`~numpy.ndarray` of shape
    ``(n, 2)``, topological references in plain lists of handles.

    Operations trust their handle arguments. Passing a handle that was
    not issued by this mesh is a programming error and ends in an
    :class:`IndexError` (or corrupts the mesh).
    """

    def __init__(self):
        self._points = np.empty((0, 2))

        # Vertex arena: outgoing halfedge of each vertex.
        self._vhed = []

        # Halfedge arena, one list per attribute.
        self._horig = []
        self._hedge = []
        self._htri = []
        self._hnext = []

        # Edge and triangle arenas. Entries are mutable lists so that
        # rewiring does not allocate.
        self._edges = []
        self._tris = []

    def __iter__(self):
        """ Triangle iterator.

        Yields
        ------
        int
            Triangle handles in order of creation.
        """
        return iter(range(len(self._tris)))

    def __repr__(self):
        v, h, e, t = self.size
        return f'Mesh(vertices={v}, halfedges={h}, edges={e}, triangles={t})'

    @property
    def points(self):
        """ Vertex coordinate array.

        Direct access to the coordinate array. Adding a vertex resizes
        the array **in place**, views taken before are invalidated.

        :type: ~numpy.ndarray
        """
        return self._points

    @property
    def size(self):
        """ Arena sizes.

        The number of vertices, halfedges, edges and triangles.

        :type: (int, int, int, int)
        """
        assert len(self._hedge) == 2*len(self._edges)

        return (len(self._vhed), len(self._horig),
                len(self._edges), len(self._tris))

    def new_vertex(self, point):
        """ Create and add new vertex.

        Parameters
        ----------
        point : array_like, shape (2, )
            Vertex coordinates.

        Returns
        -------
        int
            Handle of the new vertex. Its outgoing halfedge is unset.
        """
        self._points = obj._array_append(self._points, point[:2])
        self._vhed.append(INVALID)

        return len(self._vhed) - 1

    def new_halfedge(self, vertex):
        """ Create and add new halfedge.

        The new halfedge becomes the outgoing halfedge of `vertex`,
        replacing any previous one.

        Parameters
        ----------
        vertex : int
            Origin vertex.

        Returns
        -------
        int
            Handle of the new halfedge.
        """
        self._horig.append(vertex)
        self._hedge.append(INVALID)
        self._htri.append(INVALID)
        self._hnext.append(INVALID)

        h = len(self._horig) - 1
        self._vhed[vertex] = h

        return h

    def new_edge(self, h1, h2):
        """ Create and add new edge.

        Parameters
        ----------
        h1, h2 : int
            Mate halfedges, one per side.

        Returns
        -------
        int
            Handle of the new edge.
        """
        self._edges.append([INVALID, INVALID])
        e = len(self._edges) - 1

        self.rewire_edge(e, h1, h2)

        return e

    def new_triangle(self, h0, h1, h2):
        """ Create and add new triangle.

        Parameters
        ----------
        h0, h1, h2 : int
            Boundary halfedges in counter-clockwise order.

        Returns
        -------
        int
            Handle of the new triangle.
        """
        self._tris.append([INVALID, INVALID, INVALID])
        t = len(self._tris) - 1

        self.rewire_triangle(t, h0, h1, h2)

        return t

    def rewire_triangle(self, tri, h0, h1, h2):
        """ Replace the boundary loop of a triangle.

        Sets the triangle of the given halfedges to `tri` and links
        them into the loop ``h0 -> h1 -> h2 -> h0``.
        """
        self._tris[tri][:] = (h0, h1, h2)

        for h, n in ((h0, h1), (h1, h2), (h2, h0)):
            self._htri[h] = tri
            self._hnext[h] = n

    def rewire_edge(self, edge, h1, h2):
        """ Replace the halfedges of an edge.

        Both halfedges get `edge` assigned as their edge.
        """
        assert h1 != h2

        self._edges[edge][:] = (h1, h2)
        self._hedge[h1] = edge
        self._hedge[h2] = edge

    def retarget_halfedge(self, halfedge, vertex):
        """ Change the origin vertex of a halfedge.

        The outgoing halfedge of the previous origin is **not** updated.
        """
        self._horig[halfedge] = vertex

    def set_halfedge(self, vertex, halfedge):
        """ Change the outgoing halfedge of a vertex.
        """
        assert self._horig[halfedge] == vertex

        self._vhed[vertex] = halfedge

    def point(self, vertex):
        """ Vertex coordinates.

        Returns
        -------
        tuple(float, float)
            A copy of the coordinates of `vertex`.
        """
        x, y = self._points[vertex]
        return (float(x), float(y))

    def halfedge(self, vertex):
        """ Outgoing halfedge of a vertex, :data:`INVALID` if isolated.
        """
        return self._vhed[vertex]

    def origin(self, halfedge):
        """ Origin vertex of a halfedge.
        """
        return self._horig[halfedge]

    def target(self, halfedge):
        """ Target vertex of a halfedge.

        The origin of the mate, which also works for boundary halfedges
        without a next halfedge.
        """
        return self._horig[self.mate(halfedge)]

    def edge(self, halfedge):
        """ Edge of a halfedge.
        """
        return self._hedge[halfedge]

    def triangle(self, halfedge):
        """ Triangle of a halfedge, :data:`INVALID` on the boundary.
        """
        return self._htri[halfedge]

    def next(self, halfedge):
        """ Next halfedge in the boundary loop of the triangle.
        """
        return self._hnext[halfedge]

    def mate(self, halfedge):
        """ Other halfedge of the same edge.
        """
        h1, h2 = self._edges[self._hedge[halfedge]]
        return h2 if halfedge == h1 else h1

    def halfedges(self, edge):
        """ The two halfedges of an edge.

        Returns
        -------
        tuple(int, int)
        """
        h1, h2 = self._edges[edge]
        return (h1, h2)

    def is_boundary(self, edge):
        """ Topological state.

        An edge is a boundary edge if one of its halfedges has no
        triangle.

        :rtype: bool
        """
        h1, h2 = self._edges[edge]
        return self._htri[h1] == INVALID or self._htri[h2] == INVALID

    def triangle_halfedges(self, tri):
        """ The three boundary halfedges of a triangle.

        Returns
        -------
        tuple(int, int, int)
        """
        h0, h1, h2 = self._tris[tri]
        return (h0, h1, h2)

    def triangle_vertices(self, tri):
        """ Corners of a triangle in counter-clockwise order.

        Returns
        -------
        tuple(int, int, int)
            Origins of the three boundary halfedges.
        """
        return tuple(self._horig[h] for h in self._tris[tri])

    def check(self):
        """ Perform sanity checks.

        Verifies the cross references between all mesh items.

        Raises
        ------
        TopologyError
            On the first inconsistency found.
        """
        nv, nh, ne, nt = self.size

        if len(self._points) != nv:
            raise TopologyError('coordinate array and vertex arena differ')

        for v, h in enumerate(self._vhed):
            if h != INVALID and self._horig[h] != v:
                msg = f'outgoing halfedge #{h} does not start at vertex #{v}'
                raise TopologyError(msg)

        for e, (h1, h2) in enumerate(self._edges):
            if self._hedge[h1] != e or self._hedge[h2] != e:
                raise TopologyError(f'edge #{e} and its halfedges disagree')

            if self._horig[h1] == self._horig[h2]:
                raise TopologyError(f'edge #{e} is a loop')

            if self._htri[h1] == INVALID and self._htri[h2] == INVALID:
                raise TopologyError(f'edge #{e} has no triangle')

        for h in range(nh):
            if self._hedge[h] == INVALID:
                raise TopologyError(f'halfedge #{h} has no edge')

            t = self._htri[h]

            if t == INVALID:
                continue

            if h not in self._tris[t]:
                msg = f'triangle #{t} does not contain halfedge #{h}'
                raise TopologyError(msg)

            n = self._hnext[h]

            if self._htri[n] != t or self._hnext[self._hnext[n]] != h:
                raise TopologyError(f'halfedge #{h} loop is broken')

            if self._horig[n] != self.target(h):
                msg = f'halfedge #{h} and its successor are not linked'
                raise TopologyError(msg)

        for t, (h0, h1, h2) in enumerate(self._tris):
            if (self._hnext[h0], self._hnext[h1], self._hnext[h2]) \
                    != (h1, h2, h0):
                raise TopologyError(f'triangle #{t} loop is broken')


class TopologyError(Exception):
    """ Topology exception base class.

    Raised if the cross references of a mesh are inconsistent or an
    operation would break them.
    """

    pass
