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

""" Geometric predicates.

Pure functions over planar points. This is the only place where floating
point decisions are made; the mesh and the triangulation builder only act
on the answers. Ordinary floating point arithmetic is used throughout, so
nearly degenerate configurations may be classified either way.

Points are any :term:`array_like` objects with two entries.
"""

import math

import deltri.math as vmath

from deltri.flags import Orientation


def _key(p):
    """ Lexicographic sort key of a point.
    """
    return (float(p[0]), float(p[1]))


def orientation(a, b, c):
    """ Orientation test.

    Sign of the signed area determinant of ``(b - a, c - a)``.

    Parameters
    ----------
    a : array_like, shape (2, )
        Start point of the directed line.
    b : array_like, shape (2, )
        End point of the directed line.
    c : array_like, shape (2, )
        Query point.

    Returns
    -------
    Orientation
        :attr:`~Orientation.LEFT` if `c` lies to the left of the directed
        line from `a` to `b` (counter-clockwise turn),
        :attr:`~Orientation.RIGHT` if it lies to its right and
        :attr:`~Orientation.COLLINEAR` otherwise.

    Note
    ----
    The determinant is always evaluated for the lexicographically sorted
    point triple and the sign is corrected by the parity of the sorting
    permutation. Swapping two arguments therefore flips the result
    exactly, even when rounding errors decide the sign.
    """
    a, b, c = _key(a), _key(b), _key(c)
    odd = False

    if b < a:
        a, b, odd = b, a, not odd
    if c < b:
        b, c, odd = c, b, not odd
    if b < a:
        a, b, odd = b, a, not odd

    det = vmath.cross(vmath.sub(b, a), vmath.sub(c, a))

    if odd:
        det = -det

    if det > 0.0:
        return Orientation.LEFT
    elif det < 0.0:
        return Orientation.RIGHT

    return Orientation.COLLINEAR


class Circle:
    """ Circle in the plane.

    Parameters
    ----------
    center : array_like, shape (2, )
        Circle center.
    radius : float
        Circle radius.
    """

    def __init__(self, center, radius):
        self.center = (float(center[0]), float(center[1]))
        self.radius = float(radius)

    def __repr__(self):
        return f'Circle({self.center}, {self.radius})'

    def contains(self, pt):
        """ Closed disk containment.

        Points on the circle count as contained.

        Parameters
        ----------
        pt : array_like, shape (2, )
            Query point.

        Returns
        -------
        bool
            :obj:`True` iff the distance of `pt` from the center does not
            exceed the radius.
        """
        return vmath.dist(self.center, pt) <= self.radius

    def on_boundary(self, pt, rtol=1e-9):
        """ Cocircularity test.

        Parameters
        ----------
        pt : array_like, shape (2, )
            Query point.
        rtol : float, optional
            Relative tolerance with respect to the radius.

        Returns
        -------
        bool
            :obj:`True` if `pt` lies on the circle up to the given
            tolerance.
        """
        return math.isclose(vmath.dist(self.center, pt), self.radius,
                            rel_tol=rtol)


def circumcircle(p0, p1, p2):
    """ Circle through three points.

    The center is the intersection of the perpendicular bisectors of the
    edges ``p0 p1`` and ``p1 p2``.

    Parameters
    ----------
    p0, p1, p2 : array_like, shape (2, )
        Triangle corners, not collinear.

    Raises
    ------
    ZeroDivisionError
        If the points are collinear.

    Returns
    -------
    Circle
        The circumcircle of the triangle.
    """
    center = vmath.intersect(vmath.midpoint(p0, p1), vmath.perp(p0, p1),
                             vmath.midpoint(p1, p2), vmath.perp(p1, p2))

    return Circle(center, vmath.dist(center, p0))


def is_convex_quad(p0, p1, p2, p3):
    """ Strict convexity of a quadrilateral.

    Returns
    -------
    bool
        :obj:`True` iff every triple of consecutive corners (cyclically)
        makes a left turn, i.e., ``p0 p1 p2 p3`` is a simple convex
        polygon in counter-clockwise order.
    """
    quad = (p0, p1, p2, p3)

    return all(orientation(quad[i-1], quad[i], quad[(i+1) % 4])
               is Orientation.LEFT for i in range(4))


def point_in_triangle(p0, p1, p2, pt):
    """ Strict point in triangle test.

    Counts the crossings of the horizontal ray from `pt` towards
    :math:`+\\infty` with the three triangle edges. An odd count means
    the point is inside. Edges are treated as half-open in :math:`y`,
    which takes care of rays through a corner.

    Parameters
    ----------
    p0, p1, p2 : array_like, shape (2, )
        Triangle corners in any order.
    pt : array_like, shape (2, )
        Query point.

    Returns
    -------
    bool
        :obj:`True` iff `pt` lies in the interior of the triangle. Points
        on the boundary are **not** inside.
    """
    count = 0

    for a, b in ((p0, p1), (p1, p2), (p2, p0)):
        side = orientation(a, b, pt)

        # On the supporting line of an edge means on the boundary or
        # outside of the triangle.
        if side is Orientation.COLLINEAR:
            return False

        if (a[1] > pt[1]) != (b[1] > pt[1]):
            # The edge straddles the ray. It lies to the right of pt iff
            # pt is to the left of the upward directed edge.
            upward = b[1] > a[1]

            if (side is Orientation.LEFT) == upward:
                count += 1

    return count % 2 == 1


def point_on_edge(p0, p1, pt):
    """ Point on segment test.

    Parameters
    ----------
    p0 : array_like, shape (2, )
        Segment start point.
    p1 : array_like, shape (2, )
        Segment end point.
    pt : array_like, shape (2, )
        Query point.

    Returns
    -------
    bool
        :obj:`True` iff `pt` is collinear with the segment and lies
        strictly between its endpoints.

    Note
    ----
    Collinearity with the supporting line alone is not sufficient, a
    point beyond either endpoint is not on the edge. Coincidence with an
    endpoint is not reported either.
    """
    if orientation(p0, pt, p1) is not Orientation.COLLINEAR:
        return False

    p0, p1, pt = _key(p0), _key(p1), _key(pt)

    if pt == p0 or pt == p1:
        return False

    return (min(p0[0], p1[0]) <= pt[0] <= max(p0[0], p1[0]) and
            min(p0[1], p1[1]) <= pt[1] <= max(p0[1], p1[1]))


def bounding_triangle(points):
    """ Super triangle.

    Computes three points that form a counter-clockwise triangle whose
    interior contains all given points.

    Parameters
    ----------
    points : array_like, shape (n, 2)
        Input points, at least one.

    Raises
    ------
    ValueError
        If the points have zero extent (all coordinates equal).

    Returns
    -------
    list[tuple(float, float)]
        The triangle corners ``c + (-3m, -3m)``, ``c + (3m, 0)`` and
        ``c + (0, 3m)`` where `c` is the center of the bounding box of the
        points and `m` the larger of its width and height.
    """
    xs = [float(p[0]) for p in points]
    ys = [float(p[1]) for p in points]

    if not xs:
        raise ValueError('cannot bound an empty point set')

    width = max(xs) - min(xs)
    height = max(ys) - min(ys)

    m = max(width, height)

    if m == 0.0:
        raise ValueError('point set has zero extent')

    cx = min(xs) + 0.5*width
    cy = min(ys) + 0.5*height

    return [(cx - 3.0*m, cy - 3.0*m),
            (cx + 3.0*m, cy),
            (cx, cy + 3.0*m)]
