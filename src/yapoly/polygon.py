## polygon analysis for yapoly
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

"""
Polygon analysis
================

A polygon is an ordered list of three or more points, all
:class:`~yapoly.vector.Vec2` or all :class:`~yapoly.vector.Vec3`.  Edge
``i`` joins vertex ``i`` to vertex ``(i+1) % n``; a trailing vertex that
repeats the first one (the closed-loop convention) is ignored.  Any
sequence of coordinate sequences is accepted wherever a polygon is
expected: ::

   square = [(0, 0), (1, 0), (1, 1), (0, 1)]
   area(square)      # 1.0
   winding(square)   # Winding.CCW

Polygons with positive area are defined in right-hand
(counterclockwise) order.  A 3D polygon is assumed coplanar; it is
analyzed in the 2D frame of the plane through its first three
non-collinear points (:func:`~yapoly.vector.plane_from_points`), so its
area is unsigned unless a reference normal is supplied.

Point containment has two algorithms, selected with ``method``:

- ``"winding"`` -- Sunday's winding number.  Inside if the number is
  non-zero.
- ``"angle"`` -- the angle-sum test.  Inside if the signed angles
  subtended by the edges add up to +/- 2*pi.

Both agree on simple polygons.  On self-intersecting loops they differ
where the winding number is 2 or more: ``"winding"`` reports inside and
``"angle"`` reports outside.  Points within epsilon of an edge are
:attr:`Containment.BOUNDARY` for both.
"""

from __future__ import annotations

import math
import warnings
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from yapoly.errors import (
    CollinearPointsError,
    DegeneratePolygonError,
    DegeneratePolygonWarning,
    DegenerateVectorError,
    DimensionMismatchError,
)
from yapoly.tolerance import TolLike, area_eps, length_eps
from yapoly.vector import (
    Plane,
    Vec2,
    Vec3,
    Vector,
    Z_AXIS,
    as_points,
    as_vector,
    dist,
    dot,
    fsum,
    mag,
    mean,
    newell_normal,
    normalize,
    perp_dot,
    plane_from_points,
    sub,
    to_3d,
)

PointSeq = Sequence[Sequence[float]]

## tolerance, in degrees, for comparing angles
ANGLE_EPS = 1e-6


class Winding(Enum):
    CW = 'clockwise'
    CCW = 'counter-clockwise'
    DEGENERATE = 'degenerate'


class Containment(Enum):
    INSIDE = 'inside'
    OUTSIDE = 'outside'
    BOUNDARY = 'boundary'


def as_polygon(points: PointSeq) -> Tuple[Vector, ...]:
    """Validate ``points`` as a polygon and return it as a tuple of vectors."""
    pts = as_points(points)
    if len(pts) > 3 and pts[0] == pts[-1]:
        pts = pts[:-1]
    if len(pts) < 3:
        raise DegeneratePolygonError(f'a polygon needs at least 3 vertices, got {len(pts)}')
    return pts


def _frame(pts: Sequence[Vector], tol: TolLike) -> Tuple[Optional[Plane], List[Vec2]]:
    """Return the plane (``None`` for 2D input) and the 2D coordinates of ``pts``."""
    if isinstance(pts[0], Vec2):
        return None, list(pts)
    pl = plane_from_points(pts, tol)
    return pl, [pl.to_local(p) for p in pts]


def _shoelace(pts: Sequence[Vec2]) -> float:
    # relative to the first vertex to keep the products small
    ox, oy = pts[0]
    n = len(pts)
    terms = []
    for i in range(n):
        x0, y0 = pts[i][0] - ox, pts[i][1] - oy
        x1, y1 = pts[(i + 1) % n][0] - ox, pts[(i + 1) % n][1] - oy
        terms.append(x0 * y1 - x1 * y0)
    return fsum(terms) / 2.0


def signed_area(polygon: PointSeq) -> float:
    """Shoelace area of a 2D polygon, positive for counterclockwise order."""
    pts = as_polygon(polygon)
    if not isinstance(pts[0], Vec2):
        raise DimensionMismatchError('signed_area expects a 2D polygon; use area(p, normal=...)')
    return _shoelace(pts)


def area(polygon: PointSeq, normal: Optional[Sequence[float]] = None,
         tol: TolLike = None) -> float:
    """Area of ``polygon``.

    2D polygons return the signed shoelace area.  3D polygons are
    projected onto their fitted plane; the result is unsigned unless a
    reference ``normal`` is given, in which case it is the signed area
    projected along ``normal``: positive when the loop is counterclockwise
    seen from the tip of ``normal`` and zero when the polygon is seen
    edge-on.  A 3D loop whose points are all collinear has zero area.
    """
    pts = as_polygon(polygon)
    if isinstance(pts[0], Vec2):
        return _shoelace(pts)
    try:
        pl, local = _frame(pts, tol)
    except CollinearPointsError:
        return 0.0
    a = _shoelace(local)
    if normal is None:
        return abs(a)
    ref = normalize(to_3d(as_vector(normal)), tol)
    return a * dot(pl.normal, ref)


def perimeter(polygon: PointSeq) -> float:
    """Sum of edge lengths, including the closing edge."""
    pts = as_polygon(polygon)
    n = len(pts)
    return fsum(dist(pts[i], pts[(i + 1) % n]) for i in range(n))


def centroid(polygon: PointSeq, tol: TolLike = None, strict: bool = False) -> Vector:
    """Area-weighted centroid of ``polygon``.

    When the area is below epsilon the vertex average is returned and a
    :class:`DegeneratePolygonWarning` is issued, unless ``strict`` is
    true, in which case :class:`DegeneratePolygonError` is raised.
    """
    pts = as_polygon(polygon)
    try:
        pl, local = _frame(pts, tol)
        a = _shoelace(local)
    except CollinearPointsError:
        pl, local, a = None, None, 0.0
    if abs(a) <= area_eps(tol, pts):
        if strict:
            raise DegeneratePolygonError('polygon has no area; centroid is undefined')
        warnings.warn('zero-area polygon, falling back to the vertex average',
                      DegeneratePolygonWarning, stacklevel=2)
        return mean(pts)

    ox, oy = local[0]
    n = len(local)
    cx_terms = []
    cy_terms = []
    for i in range(n):
        x0, y0 = local[i][0] - ox, local[i][1] - oy
        x1, y1 = local[(i + 1) % n][0] - ox, local[(i + 1) % n][1] - oy
        c = x0 * y1 - x1 * y0
        cx_terms.append((x0 + x1) * c)
        cy_terms.append((y0 + y1) * c)
    c2 = Vec2(fsum(cx_terms) / (6.0 * a) + ox, fsum(cy_terms) / (6.0 * a) + oy)
    if pl is None:
        return c2
    return pl.to_world(c2)


def winding(polygon: PointSeq, normal: Optional[Sequence[float]] = None,
            tol: TolLike = None) -> Winding:
    """Rotational direction of ``polygon``.

    3D polygons are judged as seen from the tip of ``normal``, which
    defaults to +Z.  Loops with no area, or seen edge-on, are
    :attr:`Winding.DEGENERATE`.
    """
    pts = as_polygon(polygon)
    if isinstance(pts[0], Vec2):
        a = _shoelace(pts)
    else:
        a = area(pts, normal=Z_AXIS if normal is None else normal, tol=tol)
    if abs(a) <= area_eps(tol, pts):
        return Winding.DEGENERATE
    return Winding.CCW if a > 0 else Winding.CW


def is_clockwise(polygon: PointSeq, normal: Optional[Sequence[float]] = None,
                 tol: TolLike = None) -> bool:
    return winding(polygon, normal, tol) is Winding.CW


def is_convex(polygon: PointSeq, tol: TolLike = None) -> bool:
    """Does every corner turn the same way?

    Collinear corners are allowed; zero-length edges, fold-backs and
    loops that wind around more than once are not convex.
    """
    pts = as_polygon(polygon)
    eps = length_eps(tol, pts)
    try:
        _, local = _frame(pts, tol)
    except CollinearPointsError:
        return False
    n = len(local)
    edges = [sub(local[(i + 1) % n], local[i]) for i in range(n)]
    if any(mag(e) <= eps for e in edges):
        return False

    sign = 0
    turning = 0.0
    for i in range(n):
        a = edges[i - 1]
        b = edges[i]
        c = perp_dot(a, b)
        d = dot(a, b)
        if abs(c) <= eps * (mag(a) + mag(b)):
            if d < 0:
                return False  # fold-back
            continue
        s = 1 if c > 0 else -1
        if sign == 0:
            sign = s
        elif s != sign:
            return False
        turning += math.atan2(c, d)
    if sign == 0:
        return False
    # a star polygon turns the same way at every corner but winds twice
    return abs(abs(turning) - 2.0 * math.pi) < 1e-6


def _segment_distance(p: Vec2, a: Vec2, b: Vec2) -> float:
    ab = sub(b, a)
    l2 = dot(ab, ab)
    if l2 == 0.0:
        return dist(p, a)
    u = max(0.0, min(1.0, dot(sub(p, a), ab) / l2))
    return dist(p, Vec2(a[0] + u * ab[0], a[1] + u * ab[1]))


def _is_left(a: Vec2, b: Vec2, p: Vec2) -> float:
    return (b[0] - a[0]) * (p[1] - a[1]) - (p[0] - a[0]) * (b[1] - a[1])


def _winding_number(local: Sequence[Vec2], p: Vec2) -> int:
    wn = 0
    n = len(local)
    for i in range(n):
        a = local[i]
        b = local[(i + 1) % n]
        if a[1] <= p[1]:
            if b[1] > p[1] and _is_left(a, b, p) > 0:
                wn += 1
        elif b[1] <= p[1] and _is_left(a, b, p) < 0:
            wn -= 1
    return wn


def _angle_sum(local: Sequence[Vec2], p: Vec2) -> float:
    n = len(local)
    terms = []
    for i in range(n):
        va = sub(local[i], p)
        vb = sub(local[(i + 1) % n], p)
        terms.append(math.atan2(perp_dot(va, vb), dot(va, vb)))
    return fsum(terms)


def _project_query(polygon: PointSeq, point: Sequence[float], tol: TolLike):
    """Shared setup for containment queries.

    Returns ``(local, p2, eps)`` or ``None`` when the point is off the
    plane of a 3D polygon.  For collinear 3D polygons ``local`` is
    ``None`` and only the boundary test is meaningful.
    """
    pts = as_polygon(polygon)
    p = as_vector(point)
    if type(p) is not type(pts[0]):
        raise DimensionMismatchError('point and polygon dimensions differ')
    eps = length_eps(tol, pts + (p,))
    if isinstance(p, Vec2):
        return list(pts), p, eps
    try:
        pl = plane_from_points(pts, tol)
    except CollinearPointsError:
        return None, p, eps
    if abs(pl.signed_distance(p)) > eps:
        return False
    return [pl.to_local(q) for q in pts], pl.to_local(p), eps


def winding_number(polygon: PointSeq, point: Sequence[float], tol: TolLike = None) -> int:
    """Number of times ``polygon`` winds around ``point`` (0 off-plane)."""
    q = _project_query(polygon, point, tol)
    if not q or q[0] is None:
        return 0
    return _winding_number(q[0], q[1])


def point_in_polygon(polygon: PointSeq, point: Sequence[float],
                     method: str = 'winding', tol: TolLike = None) -> Containment:
    """Classify ``point`` as inside, outside, or on the boundary of ``polygon``.

    ``method`` is ``"winding"`` (winding number) or ``"angle"``
    (angle sum).  For 3D polygons a point farther than epsilon from the
    polygon's plane is outside.
    """
    if method not in ('winding', 'angle'):
        raise ValueError(f'unknown point-in-polygon method: {method!r}')
    q = _project_query(polygon, point, tol)
    if q is False:
        return Containment.OUTSIDE
    local, p, eps = q
    if local is None:
        # collinear 3D loop: nothing but its edges
        pts = as_polygon(polygon)
        n = len(pts)
        for i in range(n):
            a, b = pts[i], pts[(i + 1) % n]
            ab = sub(b, a)
            l2 = dot(ab, ab)
            u = 0.0 if l2 == 0.0 else max(0.0, min(1.0, dot(sub(p, a), ab) / l2))
            if dist(p, Vec3(a[0] + u * ab[0], a[1] + u * ab[1], a[2] + u * ab[2])) <= eps:
                return Containment.BOUNDARY
        return Containment.OUTSIDE

    n = len(local)
    for i in range(n):
        if _segment_distance(p, local[i], local[(i + 1) % n]) <= eps:
            return Containment.BOUNDARY

    if method == 'winding':
        inside = _winding_number(local, p) != 0
    else:
        turns = round(_angle_sum(local, p) / (2.0 * math.pi))
        inside = abs(turns) == 1
    return Containment.INSIDE if inside else Containment.OUTSIDE


def normal(polygon: PointSeq, tol: TolLike = None) -> Vec3:
    """Unit normal following the right-hand rule on the vertex order.

    2D polygons are treated as lying in the ``z=0`` plane.  Raises
    :class:`~yapoly.errors.DegenerateVectorError` for zero-area loops.
    """
    pts = as_polygon(polygon)
    n = newell_normal(pts)
    if mag(n) <= 2.0 * area_eps(tol, pts):
        raise DegenerateVectorError('zero-area polygon has no normal')
    return normalize(n)


def interior_angles(polygon: PointSeq, tol: TolLike = None) -> List[float]:
    """Interior angle at each vertex, in degrees.

    The angle between the two edges meeting at a vertex is found with
    the law of cosines; corners that turn against the loop's
    orientation are reflex and reported as ``360 - angle``.
    """
    pts = as_polygon(polygon)
    eps = length_eps(tol, pts)
    try:
        _, local = _frame(pts, tol)
    except CollinearPointsError:
        local = None
    orient = 0.0 if local is None else _shoelace(local)
    n = len(pts)
    angles = []
    for i in range(n):
        prev, cur, nxt = pts[i - 1], pts[i], pts[(i + 1) % n]
        a = dist(cur, prev)
        b = dist(cur, nxt)
        if a <= eps or b <= eps:
            raise DegeneratePolygonError(f'zero-length edge at vertex {i}')
        c = dist(prev, nxt)
        cosang = max(-1.0, min(1.0, (a * a + b * b - c * c) / (2.0 * a * b)))
        ang = math.degrees(math.acos(cosang))
        if local is not None:
            turn = perp_dot(sub(local[i], local[i - 1]), sub(local[(i + 1) % n], local[i]))
            if turn * orient < 0 and abs(turn) > eps * (a + b):
                ang = 360.0 - ang
        angles.append(ang)
    return angles


def is_regular(polygon: PointSeq, tol: TolLike = None) -> bool:
    """Are all edges the same length and all interior angles equal?"""
    pts = as_polygon(polygon)
    eps = length_eps(tol, pts)
    n = len(pts)
    lengths = [dist(pts[i], pts[(i + 1) % n]) for i in range(n)]
    if max(lengths) - min(lengths) > eps:
        return False
    if not is_convex(pts, tol):
        return False
    angles = interior_angles(pts, tol)
    return max(angles) - min(angles) <= ANGLE_EPS


__all__ = [
    'ANGLE_EPS',
    'Winding',
    'Containment',
    'as_polygon',
    'signed_area',
    'area',
    'perimeter',
    'centroid',
    'winding',
    'is_clockwise',
    'is_convex',
    'point_in_polygon',
    'winding_number',
    'normal',
    'interior_angles',
    'is_regular',
]
