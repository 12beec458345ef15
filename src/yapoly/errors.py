## exception and warning taxonomy for yapoly
## Copyright (c) 2024 yapoly contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Errors raised by the yapoly geometry core.

Every error is a :class:`ValueError` subclass, so callers that only care
about "bad geometry" can catch ``ValueError`` the same way they would for
any other invalid argument.  Cases with a sensible best-effort answer
(a zero-area polygon's centroid) issue :class:`DegeneratePolygonWarning`
instead of raising.
"""

from __future__ import annotations

from typing import Sequence, Tuple


class GeometryError(ValueError):
    """Base class for invalid or degenerate geometry."""


class DimensionMismatchError(GeometryError):
    """Raised when 2D and 3D values are mixed, or a value has the wrong length."""


class DegenerateVectorError(GeometryError):
    """Raised when a near-zero vector has to be normalized."""


class CollinearPointsError(GeometryError):
    """Raised when no plane can be fitted through a point set."""


class DegeneratePolygonError(GeometryError):
    """Raised when a polygon has too few vertices or no area where one is required."""


class DegeneratePolygonWarning(UserWarning):
    """Issued when a zero-area polygon falls back to a best-effort result."""


class TriangulationError(GeometryError):
    """Raised when a face cannot be decomposed into triangles."""


class InvalidPolyhedronError(GeometryError):
    """Raised when a face references a vertex index that does not exist."""


class ZeroVolumeError(GeometryError):
    """Raised when a volume-weighted quantity is requested of a flat solid."""


class NonManifoldError(GeometryError):
    """Raised when an edge is not shared by exactly two faces.

    ``edges`` holds ``((i, j), count)`` pairs for every offending edge.
    """

    def __init__(self, message: str,
                 edges: Sequence[Tuple[Tuple[int, int], int]] = ()) -> None:
        super().__init__(message)
        self.edges = tuple(edges)


class UnknownSolidError(KeyError):
    """Raised when a solid name is not in the catalog."""


__all__ = [
    'GeometryError',
    'DimensionMismatchError',
    'DegenerateVectorError',
    'CollinearPointsError',
    'DegeneratePolygonError',
    'DegeneratePolygonWarning',
    'TriangulationError',
    'InvalidPolyhedronError',
    'ZeroVolumeError',
    'NonManifoldError',
    'UnknownSolidError',
]
