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

""" Incremental Delaunay triangulation.

Points are inserted one at a time into a mesh that is seeded with a
triangle containing all of them. Each insertion splits the edge or the
triangle that contains the new point, then restores the Delaunay property
by Lawson flips. Finally the three seed vertices and every triangle
touching them are excluded from the result.

>>> dt = triangulate([(0, 0), (1, 0), (1, 1), (0, 1)])
>>> points, faces = dt.points, dt.faces

The builder moves through the states of :class:`~deltri.flags.State`.
"""

from pathlib import Path
from time import time

import numpy as np

import deltri.obj as obj
import deltri.queries as queries
import deltri.script as script

from deltri.flags import State
from deltri.geometry import bounding_triangle
from deltri.geometry import circumcircle
from deltri.geometry import is_convex_quad
from deltri.hds import INVALID
from deltri.hds import Mesh
from deltri.hds import TopologyError


CBOLD = '\33[1m'
CEND = '\33[0m'


class Delaunay:
    """ Triangulation builder.

    Seeds a mesh with the bounding triangle of `points`. The points
    themselves are **not** inserted, see :meth:`insert` and
    :func:`triangulate`.

    Parameters
    ----------
    points : array_like, shape (n, 2)
        The points to be triangulated (or a superset).
    rtol : float, optional
        Relative tolerance used to detect cocircular points.
    quiet : bool, optional
        Pass :obj:`False` to report progress on standard output.

    Raises
    ------
    ValueError
        If `points` is empty or has zero extent.
    """

    def __init__(self, points, *, rtol=1e-9, quiet=True):
        self.rtol = rtol
        self.quiet = quiet
        self.flips = 0

        self._mesh = Mesh()
        self._state = State.SEEDED

        self._verts_final = None
        self._tris_final = None

        p0, p1, p2 = bounding_triangle(points)

        v0 = self._mesh.new_vertex(p0)
        v1 = self._mesh.new_vertex(p1)
        v2 = self._mesh.new_vertex(p2)

        self._bounds = (v0, v1, v2)

        h1e0 = self._mesh.new_halfedge(v0)
        h2e0 = self._mesh.new_halfedge(v1)
        h1e1 = self._mesh.new_halfedge(v1)
        h2e1 = self._mesh.new_halfedge(v2)
        h1e2 = self._mesh.new_halfedge(v2)
        h2e2 = self._mesh.new_halfedge(v0)

        self._mesh.new_edge(h1e0, h2e0)
        self._mesh.new_edge(h1e1, h2e1)
        self._mesh.new_edge(h1e2, h2e2)

        # The ghost container, excluded by finalize().
        self._mesh.new_triangle(h1e0, h1e1, h1e2)

    def __repr__(self):
        return f'Delaunay({self._state.name}, {self._mesh!r})'

    @property
    def mesh(self):
        """ Underlying halfedge mesh.

        Includes the bounding vertices and all triangles touching them.

        :type: Mesh
        """
        return self._mesh

    @property
    def state(self):
        """ Builder state.

        :type: State
        """
        return self._state

    @property
    def bounds(self):
        """ Handles of the three bounding triangle vertices.

        :type: (int, int, int)
        """
        return self._bounds

    @property
    def vertices(self):
        """ Finalized vertices.

        Maps vertex handles to coordinates. Does not contain the
        bounding vertices.

        :type: dict[int, tuple(float, float)]
        """
        self._require_final()
        return self._verts_final

    @property
    def triangles(self):
        """ Finalized triangles.

        Maps triangle handles to their three vertex handles (counter-
        clockwise). Triangles touching a bounding vertex are excluded.

        :type: dict[int, tuple(int, int, int)]
        """
        self._require_final()
        return self._tris_final

    @property
    def points(self):
        """ Compact vertex coordinate array.

        Finalized vertices in order of ascending handles.

        :type: ~numpy.ndarray, shape (n, 2)
        """
        self._require_final()
        return np.array(list(self._verts_final.values()),
                        dtype=float).reshape(-1, 2)

    @property
    def faces(self):
        """ Compact face array.

        Finalized triangles with 0-based indices into :attr:`points`.

        :type: ~numpy.ndarray, shape (m, 3)
        """
        self._require_final()
        index = {v: i for i, v in enumerate(self._verts_final)}

        return np.array([[index[v] for v in tri]
                         for tri in self._tris_final.values()],
                        dtype=int).reshape(-1, 3)

    def insert(self, point):
        """ Insert a point.

        The point is located on an edge first, then inside a triangle.
        The containing item is split and the Delaunay property restored.

        Parameters
        ----------
        point : array_like, shape (2, )
            Point inside the bounding triangle.

        Raises
        ------
        RuntimeError
            If the triangulation is finalized.
        LocationError
            If the point is neither on an interior edge nor inside a
            triangle. This includes points outside the bounding triangle
            and duplicates of existing vertices.

        Returns
        -------
        int
            Handle of the new vertex.
        """
        if self._state is State.FINALIZED:
            raise RuntimeError('cannot insert into a finalized triangulation')

        pt = (float(point[0]), float(point[1]))

        edge = queries.locate_edge(self._mesh, pt)

        if edge != INVALID:
            v = self.split_edge(edge, pt)
        else:
            tri = queries.locate_triangle(self._mesh, pt)

            if tri == INVALID:
                raise LocationError(f'no edge or triangle contains {pt}')

            v = self.split_triangle(tri, pt)

        self._state = State.INSERTING

        return v

    def split_edge(self, edge, point):
        """ Split an interior edge.

        The two triangles sharing `edge` are replaced by four triangles
        around the new vertex. Both triangle slots are reused, two new
        ones are allocated.

        Parameters
        ----------
        edge : int
            Edge to split, incident to two triangles.
        point : array_like, shape (2, )
            Coordinates of the new vertex, on `edge`.

        Raises
        ------
        LocationError
            If `edge` is a boundary edge.

        Returns
        -------
        int
            Handle of the new vertex.
        """
        mesh = self._mesh

        if mesh.is_boundary(edge):
            raise LocationError(f'point {tuple(point)} on boundary edge')

        # Halfedge h1 runs from a to b in triangle (a, b, c), its mate
        # h2 from b to a in triangle (b, a, d).
        h1, h2 = mesh.halfedges(edge)
        t1, t2 = mesh.triangle(h1), mesh.triangle(h2)

        n1 = mesh.next(h1)
        nn1 = mesh.next(n1)
        n2 = mesh.next(h2)
        nn2 = mesh.next(n2)

        c = mesh.origin(nn1)
        d = mesh.origin(nn2)

        p = mesh.new_vertex(point)

        pa = mesh.new_halfedge(p)
        pb = mesh.new_halfedge(p)
        pc = mesh.new_halfedge(p)
        pd = mesh.new_halfedge(p)
        cp = mesh.new_halfedge(c)
        dp = mesh.new_halfedge(d)

        # h1 and h2 keep their origins and now end at p.
        mesh.rewire_edge(edge, h1, pa)
        mesh.new_edge(h2, pb)
        mesh.new_edge(pc, cp)
        mesh.new_edge(pd, dp)

        mesh.rewire_triangle(t1, h1, pc, nn1)
        mesh.new_triangle(pb, n1, cp)
        mesh.rewire_triangle(t2, h2, pd, nn2)
        mesh.new_triangle(pa, n2, dp)

        self.legalize(c, d)

        return p

    def split_triangle(self, tri, point):
        """ Split a triangle.

        The triangle is replaced by three triangles, each pairing the
        new vertex with one of its edges. The triangle slot is reused,
        two new ones are allocated.

        Parameters
        ----------
        tri : int
            Triangle to split.
        point : array_like, shape (2, )
            Coordinates of the new vertex, inside `tri`.

        Returns
        -------
        int
            Handle of the new vertex.
        """
        mesh = self._mesh

        h0, h1, h2 = mesh.triangle_halfedges(tri)
        a, b, c = mesh.triangle_vertices(tri)

        p = mesh.new_vertex(point)

        pa = mesh.new_halfedge(p)
        pb = mesh.new_halfedge(p)
        pc = mesh.new_halfedge(p)
        ap = mesh.new_halfedge(a)
        bp = mesh.new_halfedge(b)
        cp = mesh.new_halfedge(c)

        mesh.new_edge(pa, ap)
        mesh.new_edge(pb, bp)
        mesh.new_edge(pc, cp)

        mesh.rewire_triangle(tri, h0, bp, pa)
        mesh.new_triangle(h1, cp, pb)
        mesh.new_triangle(h2, ap, pc)

        self.legalize(a, b, c)

        return p

    def legalize(self, *vertices):
        """ Restore the Delaunay property around vertices.

        Every edge incident to one of the given vertices is tested and
        flipped if illegal. A flip immediately legalizes the endpoints of
        the new diagonal before any other edge is looked at.

        Parameters
        ----------
        *vertices
            Vertex handles.

        Raises
        ------
        RuntimeError
            If the triangulation is finalized.

        Returns
        -------
        int
            The number of flips performed, including nested ones.
        """
        if self._state is State.FINALIZED:
            raise RuntimeError('cannot modify a finalized triangulation')

        count = 0

        for v in vertices:
            for e in queries.incident_edges(self._mesh, v):
                if not self.is_legal(e):
                    count += self.flip(e)

        return count

    def is_legal(self, edge):
        """ Delaunay edge test.

        Boundary edges are legal. So are edges whose two triangles form
        a quadrilateral that is not strictly convex, flipping them would
        fold the mesh. Otherwise the edge is illegal iff each diagonal's
        circumcircle contains the opposite corner.

        If one of the corners is cocircular (see :attr:`rtol`) the edge is
        legal iff it is incident to the lexicographically smallest of the
        four corners. Both diagonals of a quadrilateral agree on this.

        The bounding vertices are treated as if they were infinitely far
        away, the lexicographically larger ones farther out. Their actual
        coordinates only enter the convexity test. With one bounding
        corner the edge is legal iff that corner is an apex, with two iff
        the edge holds the lexicographically smaller one. This keeps every
        hull edge of the input in the mesh.

        Parameters
        ----------
        edge : int
            Edge handle.

        Returns
        -------
        bool
        """
        mesh = self._mesh

        if mesh.is_boundary(edge):
            return True

        h1, h2 = mesh.halfedges(edge)

        # Counter-clockwise quadrilateral a, d, b, c around the edge a-b.
        va = mesh.origin(h1)
        vd = mesh.origin(mesh.next(mesh.next(h2)))
        vb = mesh.origin(h2)
        vc = mesh.origin(mesh.next(mesh.next(h1)))

        a, d, b, c = (mesh.point(v) for v in (va, vd, vb, vc))

        if not is_convex_quad(a, d, b, c):
            return True

        bounds = [v for v in (va, vd, vb, vc) if v in self._bounds]

        # Bounding vertices lie outside every circle through input points.
        if len(bounds) == 1:
            return bounds[0] not in (va, vb)

        if bounds:
            return min(bounds, key=mesh.point) in (va, vb)

        circle_adb = circumcircle(a, d, b)
        circle_abc = circumcircle(a, b, c)

        if (circle_adb.on_boundary(c, self.rtol) or
                circle_abc.on_boundary(d, self.rtol)):
            return min(a, b) < min(c, d)

        if not circle_adb.contains(c):
            return True

        if not circle_abc.contains(d):
            return True

        return False

    def flip(self, edge):
        """ Flip an edge.

        The two triangles sharing `edge` are re-triangulated along the
        other diagonal of their union. All items are rewired in place, then
        the endpoints of the new diagonal are legalized.

        Parameters
        ----------
        edge : int
            Interior edge handle.

        Raises
        ------
        TopologyError
            If `edge` is a boundary edge.

        Returns
        -------
        int
            The number of flips performed, at least one.
        """
        mesh = self._mesh

        if mesh.is_boundary(edge):
            raise TopologyError(f'boundary edge #{edge} cannot be flipped')

        h1, h2 = mesh.halfedges(edge)
        t1, t2 = mesh.triangle(h1), mesh.triangle(h2)

        n1 = mesh.next(h1)
        nn1 = mesh.next(n1)
        n2 = mesh.next(h2)
        nn2 = mesh.next(n2)

        # The endpoints of the edge lose h1 and h2 as outgoing halfedges.
        a = mesh.origin(h1)
        b = mesh.origin(h2)

        if mesh.halfedge(a) == h1:
            mesh.set_halfedge(a, n2)

        if mesh.halfedge(b) == h2:
            mesh.set_halfedge(b, n1)

        c = mesh.origin(nn1)
        d = mesh.origin(nn2)

        mesh.retarget_halfedge(h1, c)
        mesh.retarget_halfedge(h2, d)

        mesh.rewire_triangle(t1, h1, nn2, n1)
        mesh.rewire_triangle(t2, h2, nn1, n2)

        self.flips += 1

        return 1 + self.legalize(c, d)

    def finalize(self):
        """ Exclude the bounding triangle.

        Collects every triangle incident to an edge of a bounding vertex.
        The finalized vertex and triangle sets are filtered views of the
        arenas, the mesh itself is left untouched.

        Raises
        ------
        RuntimeError
            If the triangulation is already finalized.
        """
        if self._state is State.FINALIZED:
            raise RuntimeError('triangulation is already finalized')

        mesh = self._mesh

        ignore = set()

        for e in queries.incident_edges(mesh, *self._bounds):
            ignore.update(mesh.triangle(h) for h in mesh.halfedges(e))

        ignore.discard(INVALID)

        nv, _, _, nt = mesh.size

        self._verts_final = {v: mesh.point(v) for v in range(nv)
                             if v not in self._bounds}
        self._tris_final = {t: mesh.triangle_vertices(t) for t in range(nt)
                            if t not in ignore}

        self._state = State.FINALIZED

        if not self.quiet:
            print(f'\t├─ {len(ignore)} bounding triangles excluded')

    def write(self, filename, quiet=True):
        """ Write to file.

        The file format is derived from the suffix of `filename`: '.obj'
        (vertices with z = 0 and faces), '.m' (MATLAB script) or '.scr'
        (AutoCAD script).

        Parameters
        ----------
        filename : str
            Name of the output file.
        quiet : bool, optional
            Pass :obj:`False` to report progress.

        Raises
        ------
        ValueError
            If the suffix is not supported.
        """
        self._require_final()

        start = time()

        if not quiet:
            print(f'writing {CBOLD}{Path(filename).name}{CEND}', end=' ...')

        if Path(filename).suffix.lower() == '.obj':
            points = self.points
            points = np.hstack((points, np.zeros((len(points), 1))))

            obj.write(filename, v=points, f=self.faces)
        else:
            script.write(filename, self)

        if not quiet:
            print(f' done ({time()-start:.3f} sec)')

    def _require_final(self):
        if self._state is not State.FINALIZED:
            raise RuntimeError('triangulation is not finalized')


class LocationError(Exception):
    """ Point location failure.

    Raised when a point presented for insertion is contained in neither
    an interior edge nor a triangle of the current mesh.
    """

    pass


def triangulate(points, *, shuffle=True, seed=None, rtol=1e-9, quiet=True):
    """ Delaunay triangulation of a point set.

    Parameters
    ----------
    points : array_like, shape (n, 2)
        Input points. Needs at least three points that are not collinear.
    shuffle : bool, optional
        Insert points in random order. Pass :obj:`False` to keep the
        given order.
    seed : int, optional
        Seed of the random generator used for shuffling.
    rtol : float, optional
        Relative tolerance used to detect cocircular points.
    quiet : bool, optional
        Pass :obj:`False` to report progress on standard output.

    Returns
    -------
    Delaunay
        The finalized triangulation.

    Note
    ----
    Exact duplicates are dropped, only the first occurrence of a point
    is inserted.
    """
    pts = list(dict.fromkeys((float(p[0]), float(p[1])) for p in points))

    if shuffle:
        rng = np.random.default_rng(seed)
        pts = [pts[i] for i in rng.permutation(len(pts))]

    start = time()

    if not quiet:
        print(f'triangulating {CBOLD}{len(pts)}{CEND} points', end=' ...')

    dt = Delaunay(pts, rtol=rtol, quiet=quiet)

    for pt in pts:
        dt.insert(pt)

    if not quiet:
        print(f' done ({time()-start:.3f} sec, {shuffle=})')

    dt.finalize()

    if not quiet:
        print(f'\t├─ {dt.flips} flips')
        print(f'\t└─ {len(dt.triangles)} triangles')

    return dt


def _main():
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument('file', type=str, help='OBJ or text point file')
    parser.add_argument('--seed', type=int, default=None,
                        help='seed of the insertion order shuffle')
    parser.add_argument('--no-shuffle', action='store_true',
                        help='insert points in file order')
    parser.add_argument('--obj', type=str, help='OBJ output file')
    parser.add_argument('--matlab', type=str, help='MATLAB output file')
    parser.add_argument('--autocad', type=str, help='AutoCAD output file')
    parser.add_argument('--show', action='store_true', help='show result')
    parser.add_argument('--verbose', action='store_true')

    args = parser.parse_args()
    quiet = not args.verbose

    dt = triangulate(obj.read_points(args.file), shuffle=not args.no_shuffle,
                     seed=args.seed, quiet=quiet)

    if args.obj:
        dt.write(args.obj, quiet=quiet)

    if args.matlab:
        script.write(args.matlab, dt, format='matlab')

    if args.autocad:
        script.write(args.autocad, dt, format='autocad')

    if args.show:
        import deltri.vis as vis
        vis.show(dt, title=args.file)


if __name__ == '__main__':
    _main()
