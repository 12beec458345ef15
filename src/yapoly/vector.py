## vector and plane kernel for yapoly
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

"""vector and plane kernel for **yapoly**

====================
OVERVIEW
====================

Points and vectors are immutable named tuples whose *type* carries the
dimension: :class:`Vec2` for ``(x, y)`` and :class:`Vec3` for
``(x, y, z)``.  Equality is exact tuple equality; anything geometric
(closeness, collinearity, zero length) goes through a tolerance.

Mixing a :class:`Vec2` and a :class:`Vec3` in one operation raises
:class:`~yapoly.errors.DimensionMismatchError`.  Use :func:`to_3d` to
lift planar data into the ``z=0`` plane explicitly.

vectors
=======

All of the following make a vector: ::

   a = vec(1, 2)            # Vec2
   b = vec(1.0, 2.0, 3.0)   # Vec3
   c = as_vector([0, 0, 1]) # Vec3 from any sequence

Note that ``a + a`` is tuple concatenation, as for any tuple.  Use
:func:`add`, :func:`sub` and :func:`scale` for arithmetic.

planes
======

A :class:`Plane` is a point plus a unit normal.  Planes are derived
values: fit one with :func:`plane_from_points` (first three
non-collinear points) and use it to project 3D loops into a 2D
coordinate frame with :meth:`Plane.to_local`.

precise sums
============

:func:`fsum` accumulates with :mod:`mpmath` at extended working
precision.  Shoelace, centroid and tetrahedron sums go through it so
that large cancelling terms do not eat the result.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Sequence, Tuple, Union

import mpmath as mpm

from yapoly.errors import (
    CollinearPointsError,
    DegenerateVectorError,
    DimensionMismatchError,
)
from yapoly.tolerance import TolLike, length_eps

## working precision, in bits, used by fsum()
PRECISION_BITS = 113


class Vec2(NamedTuple):
    x: float
    y: float


class Vec3(NamedTuple):
    x: float
    y: float
    z: float


Vector = Union[Vec2, Vec3]

ORIGIN3 = Vec3(0.0, 0.0, 0.0)
Z_AXIS = Vec3(0.0, 0.0, 1.0)


def _isgoodnum(n) -> bool:
    return (not isinstance(n, bool)) and isinstance(n, numbers.Real)


def vec(*coords: float) -> Vector:
    """Make a :class:`Vec2` or :class:`Vec3` from two or three numbers."""
    return as_vector(coords)


def as_vector(v: Sequence[float]) -> Vector:
    """Coerce a 2- or 3-sequence of numbers into a tagged vector."""
    if isinstance(v, (Vec2, Vec3)):
        return v
    try:
        n = len(v)
    except TypeError:
        raise DimensionMismatchError(f'not a vector: {v!r}') from None
    if not all(_isgoodnum(c) for c in v):
        raise DimensionMismatchError(f'vector components must be numbers: {v!r}')
    if n == 2:
        return Vec2(float(v[0]), float(v[1]))
    if n == 3:
        return Vec3(float(v[0]), float(v[1]), float(v[2]))
    raise DimensionMismatchError(f'expected 2 or 3 coordinates, got {n}')


def as_points(points: Iterable[Sequence[float]]) -> Tuple[Vector, ...]:
    """Coerce a point sequence, requiring every point to share one dimension."""
    pts = tuple(as_vector(p) for p in points)
    if pts:
        kind = type(pts[0])
        for p in pts:
            if type(p) is not kind:
                raise DimensionMismatchError('cannot mix 2D and 3D points')
    return pts


def dimension(v: Vector) -> int:
    return len(v)


def _same(a: Vector, b: Vector) -> None:
    if type(a) is not type(b):
        raise DimensionMismatchError(
            f'dimension mismatch: {len(a)}D and {len(b)}D')


def to_3d(v: Vector, z: float = 0.0) -> Vec3:
    """Lift a :class:`Vec2` into the plane ``z``; a :class:`Vec3` is returned as is."""
    if isinstance(v, Vec3):
        return v
    return Vec3(v[0], v[1], float(z))


## arithmetic
## ----------

def add(a: Vector, b: Vector) -> Vector:
    """`a + b`"""
    _same(a, b)
    return type(a)(*(x + y for x, y in zip(a, b)))


def sub(a: Vector, b: Vector) -> Vector:
    """`a - b`"""
    _same(a, b)
    return type(a)(*(x - y for x, y in zip(a, b)))


def scale(a: Vector, c: float) -> Vector:
    """vector ``a`` times scalar ``c``"""
    return type(a)(*(x * c for x in a))


def dot(a: Vector, b: Vector) -> float:
    _same(a, b)
    return sum(x * y for x, y in zip(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Cross product of two 3-vectors."""
    if not (isinstance(a, Vec3) and isinstance(b, Vec3)):
        raise DimensionMismatchError('cross product is only defined for 3D vectors')
    return Vec3(a[1] * b[2] - a[2] * b[1],
                a[2] * b[0] - a[0] * b[2],
                a[0] * b[1] - a[1] * b[0])


def perp_dot(a: Vec2, b: Vec2) -> float:
    """z component of the cross product of two 2-vectors."""
    if not (isinstance(a, Vec2) and isinstance(b, Vec2)):
        raise DimensionMismatchError('perp_dot is only defined for 2D vectors')
    return a[0] * b[1] - a[1] * b[0]


def mag(a: Vector) -> float:
    return math.sqrt(sum(x * x for x in a))


def dist(a: Vector, b: Vector) -> float:
    """Euclidean distance between points ``a`` and ``b``."""
    return mag(sub(a, b))


def vclose(a: Vector, b: Vector, tol: TolLike = None) -> bool:
    """Are two points the same to within the length epsilon?"""
    return dist(a, b) <= length_eps(tol, (a, b))


def normalize(a: Vector, tol: TolLike = None,
              points: Iterable[Sequence[float]] = ()) -> Vector:
    """Return the unit vector along ``a``.

    Raises :class:`DegenerateVectorError` if ``|a|`` is below epsilon.
    A lone vector carries no scale, so epsilon is the absolute floor
    unless ``points`` gives the geometry ``a`` was derived from.
    """
    m = mag(a)
    if m <= length_eps(tol, points):
        raise DegenerateVectorError(f'cannot normalize near-zero vector {tuple(a)}')
    return scale(a, 1.0 / m)


def angle_between(a: Vector, b: Vector, tol: TolLike = None) -> float:
    """Unsigned angle between ``a`` and ``b`` in degrees, in ``[0, 180]``."""
    _same(a, b)
    eps = length_eps(tol)
    if mag(a) <= eps or mag(b) <= eps:
        raise DegenerateVectorError('angle with a near-zero vector is undefined')
    if isinstance(a, Vec3):
        s = mag(cross(a, b))
    else:
        s = abs(perp_dot(a, b))
    return math.degrees(math.atan2(s, dot(a, b)))


def lerp(a: Vector, b: Vector, u: float) -> Vector:
    return add(a, scale(sub(b, a), u))


def midpoint(a: Vector, b: Vector) -> Vector:
    return lerp(a, b, 0.5)


def mean(points: Sequence[Vector]) -> Vector:
    """Simple vertex average."""
    pts = as_points(points)
    if not pts:
        raise ValueError('mean of an empty point list')
    n = len(pts)
    return type(pts[0])(*(fsum(p[i] for p in pts) / n for i in range(len(pts[0]))))


def fsum(terms: Iterable[float]) -> float:
    """Sum ``terms`` at extended precision and round once."""
    with mpm.workprec(PRECISION_BITS):
        return float(mpm.fsum(mpm.mpf(t) for t in terms))


## planes
## ------

@dataclass(frozen=True)
class Plane:
    """A point on the plane and its unit normal (Hessian normal form)."""

    point: Vec3
    normal: Vec3

    def signed_distance(self, p: Vector) -> float:
        """Positive on the side the normal points to."""
        return dot(sub(to_3d(p), self.point), self.normal)

    def contains(self, p: Vector, tol: TolLike = None) -> bool:
        return abs(self.signed_distance(p)) <= length_eps(tol, (self.point, to_3d(p)))

    def project(self, p: Vector) -> Vec3:
        """Orthogonal projection of ``p`` into the plane."""
        p3 = to_3d(p)
        return sub(p3, scale(self.normal, self.signed_distance(p3)))

    def basis(self) -> Tuple[Vec3, Vec3]:
        """Orthonormal in-plane axes ``(u, v)`` with ``u x v == normal``."""
        n = self.normal
        # cross with the axis least aligned with the normal
        ax = [abs(c) for c in n]
        i = ax.index(min(ax))
        axis = Vec3(*(1.0 if k == i else 0.0 for k in range(3)))
        u = normalize(cross(n, axis))
        v = cross(n, u)
        return u, v

    def to_local(self, p: Vector) -> Vec2:
        """2D coordinates of ``p`` (projected) in the plane basis."""
        u, v = self.basis()
        d = sub(to_3d(p), self.point)
        return Vec2(dot(d, u), dot(d, v))

    def to_world(self, q: Vec2) -> Vec3:
        u, v = self.basis()
        return add(self.point, add(scale(u, q[0]), scale(v, q[1])))

    def flipped(self) -> 'Plane':
        return Plane(self.point, scale(self.normal, -1.0))


def plane(point: Sequence[float], normal: Sequence[float], tol: TolLike = None) -> Plane:
    """Make a plane from a point and a (not necessarily unit) normal."""
    return Plane(to_3d(as_vector(point)), normalize(to_3d(as_vector(normal)), tol))


def plane_from_points(points: Sequence[Sequence[float]], tol: TolLike = None) -> Plane:
    """Fit a plane through the first three non-collinear points.

    The search is bounded and linear: the first point anchors the plane,
    the second is the first point farther than epsilon from it, and the
    third is the first later point farther than epsilon from the line
    through the first two.  Raises :class:`CollinearPointsError` if no
    such triple exists.
    """
    pts = [to_3d(p) for p in as_points(points)]
    if len(pts) < 3:
        raise CollinearPointsError(f'need at least 3 points to fit a plane, got {len(pts)}')
    eps = length_eps(tol, pts)
    a = pts[0]
    j = next((k for k in range(1, len(pts)) if dist(pts[k], a) > eps), None)
    if j is None:
        raise CollinearPointsError('all points are coincident')
    ab = sub(pts[j], a)
    lab = mag(ab)
    for k in range(j + 1, len(pts)):
        c = cross(ab, sub(pts[k], a))
        # |ab x ac| / |ab| is the distance of point k from line ab
        if mag(c) / lab > eps:
            return Plane(a, normalize(c))
    raise CollinearPointsError('all points are collinear')


def newell_normal(points: Sequence[Sequence[float]]) -> Vec3:
    """Unnormalized Newell normal of a closed loop.

    Its magnitude is twice the loop's vector area, and its direction
    follows the right-hand rule on the loop order even for non-convex
    loops.
    """
    pts = [to_3d(p) for p in as_points(points)]
    n = len(pts)
    nx = fsum((pts[i].y - pts[(i + 1) % n].y) * (pts[i].z + pts[(i + 1) % n].z)
              for i in range(n))
    ny = fsum((pts[i].z - pts[(i + 1) % n].z) * (pts[i].x + pts[(i + 1) % n].x)
              for i in range(n))
    nz = fsum((pts[i].x - pts[(i + 1) % n].x) * (pts[i].y + pts[(i + 1) % n].y)
              for i in range(n))
    return Vec3(nx, ny, nz)


__all__ = [
    'Vec2',
    'Vec3',
    'Vector',
    'ORIGIN3',
    'Z_AXIS',
    'vec',
    'as_vector',
    'as_points',
    'dimension',
    'to_3d',
    'add',
    'sub',
    'scale',
    'dot',
    'cross',
    'perp_dot',
    'mag',
    'dist',
    'vclose',
    'normalize',
    'angle_between',
    'lerp',
    'midpoint',
    'mean',
    'fsum',
    'Plane',
    'plane',
    'plane_from_points',
    'newell_normal',
]
