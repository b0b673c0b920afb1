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

""" Visualization using VTK.

Wrapper functions for `VTK <https://vtk.org/doc/nightly/html>`_ that turn a
finalized triangulation into a :class:`vtkPolyData` object and display it.
This is not meant as a full featured viewer.
"""

import numpy as np
import vtk

from vtk.util import colors
from vtk.util.numpy_support import numpy_to_vtk


def polydata(mesh):
    """ Convert to VTK.

    Parameters
    ----------
    mesh : Delaunay
        Finalized triangulation.

    Returns
    -------
    vtkPolyData
        Triangles in the :math:`z = 0` plane. Point ids follow the order
        of :attr:`~deltri.delaunay.Delaunay.points`.
    """
    points = mesh.points
    points = np.hstack((points, np.zeros((len(points), 1))))

    point_array = vtk.vtkPoints()
    point_array.SetData(numpy_to_vtk(np.ascontiguousarray(points), deep=True))

    face_array = vtk.vtkCellArray()

    for face in mesh.faces:
        face_array.InsertNextCell(3)

        for v in face:
            face_array.InsertCellPoint(int(v))

    poly = vtk.vtkPolyData()
    poly.SetPoints(point_array)
    poly.SetPolys(face_array)

    return poly


def show(mesh, width=1200, height=600, title=None, edges=True,
         color=colors.snow):
    """ Display a triangulation.

    Opens a render window and blocks until it is closed.

    Parameters
    ----------
    mesh : Delaunay
        Finalized triangulation.
    width : int, optional
        Window width in pixels.
    height : int, optional
        Window height in pixels.
    title : str, optional
        Window title.
    edges : bool, optional
        Render triangle edges.
    color : array_like, shape (3, ), optional
        RGB color triple of the triangles.
    """
    mapper = vtk.vtkPolyDataMapper()
    mapper.SetInputData(polydata(mesh))

    actor = vtk.vtkActor()
    actor.SetMapper(mapper)
    actor.GetProperty().SetColor(color)

    if edges:
        actor.GetProperty().EdgeVisibilityOn()
        actor.GetProperty().SetEdgeColor(colors.ivory_black)

    renderer = vtk.vtkRenderer()
    renderer.AddActor(actor)
    renderer.SetBackground(colors.white)
    renderer.ResetCamera()

    renwin = vtk.vtkRenderWindow()
    renwin.AddRenderer(renderer)
    renwin.SetSize(width, height)

    if title is not None:
        renwin.SetWindowName(str(title))

    iren = vtk.vtkRenderWindowInteractor()
    iren.SetRenderWindow(renwin)
    iren.SetInteractorStyle(vtk.vtkInteractorStyleTrackballCamera())

    renwin.Render()
    iren.Start()
