import math

import numpy as np
import pytest

import deltri.math as vmath

from deltri.flags import Orientation
from deltri.geometry import Circle
from deltri.geometry import bounding_triangle
from deltri.geometry import circumcircle
from deltri.geometry import is_convex_quad
from deltri.geometry import orientation
from deltri.geometry import point_in_triangle
from deltri.geometry import point_on_edge


def test_vector_math():
    assert vmath.cross((1, 0), (0, 1)) == 1
    assert vmath.dist((0, 0), (3, 4)) == 5
    assert vmath.midpoint((0, 0), (2, 4)) == (1, 2)
    assert vmath.intersect((0, 0), (1, 1), (0, 1), (1, 0)) == (0.5, 0.5)

    with pytest.raises(ZeroDivisionError):
        vmath.intersect((0, 0), (1, 0), (0, 1), (1, 1))


def test_orientation():
    assert orientation((0, 0), (1, 0), (0, 1)) is Orientation.LEFT
    assert orientation((0, 0), (1, 0), (0, -1)) is Orientation.RIGHT
    assert orientation((0, 0), (1, 1), (3, 3)) is Orientation.COLLINEAR
    assert orientation((0, 0), (1, 1), (-2, -2)) is Orientation.COLLINEAR


def test_orientation_antisymmetric():
    rng = np.random.default_rng(7)

    for a, b, c in rng.random((50, 3, 2)):
        # Nearly collinear triple to stress rounding.
        c = a + 0.3*(b - a) + 1e-17

        abc = orientation(a, b, c)
        assert orientation(b, c, a) is abc
        assert orientation(c, a, b) is abc

        if abc is Orientation.LEFT:
            assert orientation(b, a, c) is Orientation.RIGHT
        elif abc is Orientation.RIGHT:
            assert orientation(b, a, c) is Orientation.LEFT
        else:
            assert orientation(b, a, c) is Orientation.COLLINEAR


def test_circumcircle():
    circle = circumcircle((0, 0), (2, 0), (0, 2))

    assert circle.center == pytest.approx((1, 1))
    assert circle.radius == pytest.approx(math.sqrt(2))

    assert circle.contains((1, 1))
    assert circle.contains((2, 2))
    assert not circle.contains((2.5, 2.5))


def test_circle_closed_disk():
    circle = Circle((0, 0), 1)

    assert circle.contains((1, 0))
    assert circle.contains((0, -1))
    assert not circle.contains((1, 1e-3))

    assert circle.on_boundary((1, 0))
    assert circle.on_boundary((0, 1 + 1e-12))
    assert not circle.on_boundary((0, 0.5))


def test_circumcircle_collinear():
    with pytest.raises(ZeroDivisionError):
        circumcircle((0, 0), (1, 1), (2, 2))


def test_convex_quad():
    assert is_convex_quad((0, 0), (1, 0), (1, 1), (0, 1))

    # Clockwise order, reflex corner, flat corner.
    assert not is_convex_quad((0, 0), (0, 1), (1, 1), (1, 0))
    assert not is_convex_quad((0, 0), (2, 0), (0.5, 0.5), (0, 2))
    assert not is_convex_quad((0, 0), (1, 0), (2, 0), (1, 1))


@pytest.mark.parametrize('pt, inside', [
    ((0.25, 0.25), True),
    ((0.1, 0.8), True),
    ((1.0, 1.0), False),
    ((-0.1, 0.5), False),
    ((0.5, 0.0), False),        # on an edge
    ((0.5, 0.5), False),        # on the hypotenuse
    ((0.0, 0.0), False),        # corner
    ((2.0, 0.0), False),        # ray through the right angle corner
    ((-1.0, 0.0), False),       # collinear with the bottom edge
])
def test_point_in_triangle(pt, inside):
    assert point_in_triangle((0, 0), (1, 0), (0, 1), pt) is inside
    assert point_in_triangle((0, 1), (1, 0), (0, 0), pt) is inside


def test_point_in_triangle_ray_through_vertex():
    # The horizontal ray from the query point hits the corner (4, 1).
    assert point_in_triangle((0, 0), (4, 1), (0, 2), (1, 1))
    assert not point_in_triangle((0, 0), (4, 1), (0, 2), (-1, 1))
    assert not point_in_triangle((2, 0), (4, 1), (2, 2), (1, 1))


def test_point_on_edge():
    assert point_on_edge((0, 0), (2, 2), (1, 1))
    assert point_on_edge((0, 0), (2, 0), (0.5, 0))
    assert point_on_edge((1, -1), (1, 3), (1, 0))

    assert not point_on_edge((0, 0), (2, 2), (1, 1.5))
    assert not point_on_edge((0, 0), (2, 2), (0, 0))
    assert not point_on_edge((0, 0), (2, 2), (2, 2))


def test_point_on_edge_collinear_outside():
    # Collinear with the supporting line but beyond either endpoint.
    assert not point_on_edge((0, 0), (2, 2), (3, 3))
    assert not point_on_edge((0, 0), (2, 2), (-1, -1))
    assert not point_on_edge((0, 0), (2, 0), (5, 0))


@pytest.mark.parametrize('points', [
    [(0, 0), (1, 0), (1, 1), (0, 1)],
    [(0, 0), (10, 1), (3, 2)],
    [(-5, 2), (-5, 40), (3, 7)],
    [(0, 0), (1, 0)],
])
def test_bounding_triangle(points):
    p0, p1, p2 = bounding_triangle(points)

    assert orientation(p0, p1, p2) is Orientation.LEFT

    for pt in points:
        assert point_in_triangle(p0, p1, p2, pt)

    # The corners of the bounding box are strictly inside as well.
    xs, ys = zip(*points)

    for pt in ((min(xs), min(ys)), (max(xs), min(ys)),
               (max(xs), max(ys)), (min(xs), max(ys))):
        assert point_in_triangle(p0, p1, p2, pt)


def test_bounding_triangle_formula():
    p0, p1, p2 = bounding_triangle([(0, 0), (2, 0), (2, 1)])

    # m = 2 and center (1, 0.5)
    assert p0 == (-5, -5.5)
    assert p1 == (7, 0.5)
    assert p2 == (1, 6.5)


def test_bounding_triangle_degenerate():
    with pytest.raises(ValueError):
        bounding_triangle([(1, 1), (1, 1)])

    with pytest.raises(ValueError):
        bounding_triangle([])
