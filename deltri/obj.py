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

""" OBJ file I/O.

Low-level functions to read and write OBJ files. Only vertex ('v') and
face ('f') statements are of interest for planar triangulations. Complete
specifications can be found in the `Advanced Visualizer Manual`.

Point sources that are not OBJ files are read as plain text, one point
per line with whitespace separated coordinates.
"""

from pathlib import Path

import numpy as np


def _array_append(array, item):
    """ Resize and append to array.

    Parameters
    ----------
    array : ~numpy.ndarray or None
        Array object to be augmented. A new array of shape
        ``(1, *item.shape)`` will be created if :obj:`None`.
    item : array_like
        Item to be added as new element of the first axis. The
        shapes ``array.shape[1:]`` and ``item.shape`` have to agree.

    Raises
    ------
    ValueError
        In case of dimension mismatch.

    Returns
    -------
    ~numpy.ndarray
        Reference to the enlarged array. This is a new array if the
        input array argument was :obj:`None`.
    """
    if isinstance(array, np.ndarray):
        if array.shape[1:] != np.shape(item):
            msg = f'cannot add item with shape {np.shape(item)}'
            raise ValueError(msg)

        arr_shape = list(array.shape)
        arr_shape[0] += 1

        array.resize(arr_shape, refcheck=False)
    else:
        array = np.empty((1, *np.shape(item)))

    # Assign to the 'free' space at the end of the extended array.
    array[-1, ...] = item

    return array


def read(filename, *args):
    """ Read from file.

    Assumes an OBJ-like file structure, i.e., a text file where each
    line starts with a tag. Lines whose tag is contained in `args` are
    read. Data blocks are returned in the same order as given in `args`.
    If no corresponding data is found in the file the requested data
    block is represented as :obj:`None`.

    Parameters
    ----------
    filename : str
        Name of an OBJ file.
    *args
        Variable number of arguments of type :class:`str`.

    Raises
    ------
    ValueError
        If any argument is not of type :class:`str`.

    Returns
    -------
    object or tuple(object, ...)
        Data blocks corresponding to line tags given in `args`.


    To read vertices and faces from an OBJ file do

    >>> v, f = read('input-file.obj', 'v', 'f')

    Data blocks are returned as objects of type :class:`~numpy.ndarray`,
    except for the 'f' tag which yields ``list[list[int]]`` with 0-based
    vertex indices.
    """
    if not args:
        return None

    if any((not isinstance(arg, str) for arg in args)):
        raise ValueError("arguments have to be of type 'str'")

    args_arr = {arg: [] if arg == 'f' else None for arg in args}

    # The number of encountered vertex coordinates. Needed to resolve
    # negative (relative) vertex indices.
    vcnt = 0

    with open(filename, 'r') as file:
        for line in file:
            blocks = line.split()

            if not blocks:
                continue

            if blocks[0] == 'v':
                vcnt += 1

            if blocks[0] not in args:
                continue

            if blocks[0] == 'f':
                # Only the vertex part of v/vt/vn definitions matters.
                face = [int(block.split('/')[0]) for block in blocks[1:]]
                face = [vcnt + i if i < 0 else i - 1 for i in face]

                args_arr['f'].append(face)
            else:
                data = [float(block) for block in blocks[1:]]
                arr = args_arr[blocks[0]]
                args_arr[blocks[0]] = _array_append(arr, data)

    if len(args) == 1:
        return args_arr[args[0]]

    return tuple(args_arr.values())


def read_points(filename):
    """ Point source.

    Parameters
    ----------
    filename : str
        An OBJ file (suffix '.obj') whose 'v' statements are used or a
        text file with one point per line. Lines starting with '#' are
        ignored.

    Raises
    ------
    ValueError
        If the file holds no points or fewer than two coordinates per
        point.

    Returns
    -------
    ~numpy.ndarray, shape (n, 2)
        Planar point coordinates. Any further coordinates are dropped.
    """
    if Path(filename).suffix.lower() == '.obj':
        points = read(filename, 'v')
    else:
        points = np.loadtxt(filename, ndmin=2, comments='#')

    if points is None or points.size == 0:
        raise ValueError(f"no points found in '{filename}'")

    if points.shape[1] < 2:
        raise ValueError('points need at least two coordinates')

    return np.array(points[:, :2])


def write(filename, *, f=None, **data):
    """ Write to file.

    Parameters
    ----------
    filename : str
        Name of output file.
    f : list, optional
        Face definitions, 0-based vertex indices.
    **data
        Keyword arguments.


    Data blocks to be stored in the file are passed via keyword arguments:

    >>> write('output-file.obj', v=points, f=faces)

    This assumes that ``points`` can be interpreted as a 2-dimensional
    array. The contents of each row are written to a line that starts
    with the given tag.
    """
    faces = [] if f is None else f

    with open(filename, 'w') as file:
        for key, value in data.items():
            for row in value:
                file.write(key)

                for element in row:
                    file.write(f' {element}')

                file.write('\n')

        for face in faces:
            file.write('f')

            for vertex in face:
                file.write(f' {int(vertex) + 1}')

            file.write('\n')
