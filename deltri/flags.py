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

""" Enumerations.

Orientation of point triples as reported by the geometric predicates and
the states a :class:`~deltri.delaunay.Delaunay` instance moves through.
"""

from enum import Enum
from enum import auto


class Orientation(Enum):
    """ Orientation of a point relative to a directed line.
    """

    LEFT = auto()
    """ Counter-clockwise turn. """

    RIGHT = auto()
    """ Clockwise turn. """

    COLLINEAR = auto()
    """ Degenerate triple, no turn at all. """


class State(Enum):
    """ Triangulation builder states.

    A builder starts out as :attr:`SEEDED`, becomes :attr:`INSERTING`
    after the first point insertion and ends in the terminal state
    :attr:`FINALIZED`.
    """

    SEEDED = auto()
    """ Bounding triangle built. """

    INSERTING = auto()
    """ At least one point inserted. """

    FINALIZED = auto()
    """ Bounding elements excluded, no further mutation. """
