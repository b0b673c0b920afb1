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

""" Basic planar vector math.

Specialized non-vectorized functions for points and vectors in the plane.
Arguments are indexed as ``p[0]`` and ``p[1]``, so tuples, lists and
NumPy rows can be mixed freely. For single points these functions beat
their vectorized NumPy counterparts by a wide margin.
"""

import math


def cross(u, v):
    r""" Planar cross product.

    The :math:`z`-component of the cross product of the vectors `u` and
    `v` embedded in :math:`\mathbb{R}^3`.

    Parameters
    ----------
    u : array_like, shape (2, )
        Vector in :math:`\mathbb{R}^2`.
    v : array_like, shape (2, )
        Vector in :math:`\mathbb{R}^2`.

    Returns
    -------
    float
        Signed area of the parallelogram spanned by `u` and `v`.
    """
    return u[0]*v[1] - u[1]*v[0]


def sub(p, q):
    """ Difference vector ``p - q`` as a tuple.
    """
    return (p[0] - q[0], p[1] - q[1])


def dist(p, q):
    """ Euclidean distance.

    Parameters
    ----------
    p : array_like, shape (2, )
        Point in the plane.
    q : array_like, shape (2, )
        Point in the plane.

    Returns
    -------
    float
        Distance between `p` and `q`.
    """
    return math.hypot(p[0] - q[0], p[1] - q[1])


def midpoint(p, q):
    """ Segment midpoint.
    """
    return (0.5*(p[0] + q[0]), 0.5*(p[1] + q[1]))


def perp(p, q):
    """ Point on the perpendicular bisector.

    The returned point together with ``midpoint(p, q)`` spans the
    perpendicular bisector of the segment from `p` to `q`.

    Parameters
    ----------
    p : array_like, shape (2, )
        Segment start point.
    q : array_like, shape (2, )
        Segment end point.

    Returns
    -------
    tuple(float, float)
        Midpoint shifted by the segment vector rotated by -90 degrees.
    """
    m = midpoint(p, q)
    return (m[0] + (p[1] - q[1]), m[1] - (p[0] - q[0]))


def intersect(p1, p2, q1, q2):
    """ Line intersection.

    Intersection of the line through `p1` and `p2` with the line through
    `q1` and `q2`. Both lines are written in implicit form
    :math:`a x + b y + c = 0` and the resulting 2x2 system is solved by
    Cramer's rule.

    Parameters
    ----------
    p1, p2 : array_like, shape (2, )
        Two distinct points of the first line.
    q1, q2 : array_like, shape (2, )
        Two distinct points of the second line.

    Raises
    ------
    ZeroDivisionError
        If the lines are parallel.

    Returns
    -------
    tuple(float, float)
        Point of intersection.
    """
    a1 = p1[1] - p2[1]
    b1 = p2[0] - p1[0]
    c1 = p1[0]*p2[1] - p1[1]*p2[0]

    a2 = q1[1] - q2[1]
    b2 = q2[0] - q1[0]
    c2 = q1[0]*q2[1] - q1[1]*q2[0]

    det = a1*b2 - a2*b1

    return ((c2*b1 - c1*b2) / det, (a2*c1 - a1*c2) / det)
