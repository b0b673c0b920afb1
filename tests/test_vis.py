import pytest

from deltri.delaunay import triangulate


pytest.importorskip('vtk')

import deltri.vis as vis  # noqa: E402


def test_polydata():
    dt = triangulate([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0),
                      (0.5, 0.5)], seed=0)

    poly = vis.polydata(dt)

    assert poly.GetNumberOfPoints() == 5
    assert poly.GetNumberOfPolys() == 4
    assert poly.GetPoint(0)[2] == 0.0
