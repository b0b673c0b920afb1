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

""" Script exporters.

Render a finalized triangulation as a MATLAB script that plots all
triangle outlines, or as an AutoCAD script that places the points and
draws one closed polyline per triangle. Any object with the
:attr:`~deltri.delaunay.Delaunay.vertices` and
:attr:`~deltri.delaunay.Delaunay.triangles` mappings can be exported.
"""

from pathlib import Path


_SUFFIXES = {'.m': 'matlab', '.scr': 'autocad'}


def _outlines(mesh):
    """ Closed corner sequences of all triangles.
    """
    verts = mesh.vertices

    for tri in mesh.triangles.values():
        p0, p1, p2 = (verts[v] for v in tri)
        yield (p0, p1, p2, p0)


def matlab(mesh):
    """ MATLAB plot script.

    Parameters
    ----------
    mesh : Delaunay
        Finalized triangulation.

    Returns
    -------
    str
        Script text: one ``line`` command per triangle followed by the
        vertex coordinate vectors ``x`` and ``y``.
    """
    lines = [f'% Generated {len(mesh.triangles)} triangles']

    for loop in _outlines(mesh):
        xs = ','.join(str(p[0]) for p in loop)
        ys = ','.join(str(p[1]) for p in loop)
        lines.append(f'line([{xs}],[{ys}])')

    lines.append('axis equal')
    lines.append('')

    points = mesh.vertices.values()

    lines.append('x=[' + ','.join(str(p[0]) for p in points) + '];')
    lines.append('y=[' + ','.join(str(p[1]) for p in points) + '];')

    return '\n'.join(lines) + '\n'


def autocad(mesh):
    """ AutoCAD command script.

    Parameters
    ----------
    mesh : Delaunay
        Finalized triangulation.

    Returns
    -------
    str
        A ``point`` command per vertex and a closed ``pline`` command per
        triangle. Empty lines terminate commands.
    """
    lines = []

    for x, y in mesh.vertices.values():
        lines.append('point')
        lines.append(f'{x},{y}')
        lines.append('')

    for loop in _outlines(mesh):
        lines.append('pline')
        lines.extend(f'{x},{y}' for x, y in loop)
        lines.append('')

    return '\n'.join(lines) + '\n'


def write(filename, mesh, format=None):
    """ Write script file.

    Parameters
    ----------
    filename : str
        Name of the output file.
    mesh : Delaunay
        Finalized triangulation.
    format : str, optional
        Either 'matlab' or 'autocad'. Derived from the suffix of
        `filename` ('.m' or '.scr') by default.

    Raises
    ------
    ValueError
        If the format is unknown or cannot be derived.
    """
    if format is None:
        format = _SUFFIXES.get(Path(filename).suffix.lower())

    if format == 'matlab':
        text = matlab(mesh)
    elif format == 'autocad':
        text = autocad(mesh)
    else:
        raise ValueError(f"unknown script format for '{filename}'")

    with open(filename, 'w') as file:
        file.write(text)
