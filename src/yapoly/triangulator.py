"""Triangulation helpers for yapoly polygons and faces.

Three methods are available:

``"fan"``
    Fan from the first vertex.  Correct for convex loops only.
``"ear"``
    Ear clipping.  Each candidate ear must be a convex corner whose
    triangle contains no other remaining vertex, tested with the
    polygon analyzer's containment primitive.
``"earcut"``
    Delegates to ``mapbox-earcut`` (the fast ear clipping implementation
    used by Mapbox GL).

``"auto"`` picks fan for convex loops and ear clipping otherwise.
Triangles are index triples into the polygon's vertex list and keep
the polygon's winding.

Ear clipping keeps an ear flag per vertex and only re-tests the two
neighbours of each clipped ear, so a loop of ``n`` vertices costs
O(n^2) containment tests.  When a pass finds no ear (only possible for
self-intersecting or degenerate loops) the flattest corner is clipped
instead, so every pass removes exactly one vertex and the loop always
terminates.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

try:
    import mapbox_earcut as _earcut
except ImportError as exc:  # pragma: no cover - import guard
    raise ImportError(
        "mapbox-earcut must be installed to triangulate polygons"
    ) from exc

from yapoly.errors import CollinearPointsError, TriangulationError
from yapoly.polygon import (
    Containment,
    as_polygon,
    is_convex,
    point_in_polygon,
    signed_area,
)
from yapoly.tolerance import TolLike, area_eps, length_eps
from yapoly.vector import Vec2, dist, perp_dot, plane_from_points, sub

Tri = Tuple[int, int, int]

METHODS = ('auto', 'fan', 'ear', 'earcut')


def fan(n: int) -> List[Tri]:
    """Fan triangulation of an ``n``-vertex loop from vertex 0."""
    if n < 3:
        raise TriangulationError(f'cannot triangulate a loop of {n} vertices')
    return [(0, i, i + 1) for i in range(1, n - 1)]


def ear_clip(points: Sequence[Sequence[float]], tol: TolLike = None) -> List[Tri]:
    """Ear-clip the 2D loop ``points``; see the module notes for the bound."""
    pts = [Vec2(float(p[0]), float(p[1])) for p in points]
    n = len(pts)
    if n < 3:
        raise TriangulationError(f'cannot triangulate a loop of {n} vertices')
    a2 = signed_area(pts)
    if abs(a2) <= area_eps(tol, pts):
        return fan(n)
    eps = length_eps(tol, pts)
    orient = 1.0 if a2 > 0 else -1.0
    prev = [(i - 1) % n for i in range(n)]
    nxt = [(i + 1) % n for i in range(n)]

    def turn(i: int) -> float:
        a, b, c = pts[prev[i]], pts[i], pts[nxt[i]]
        return orient * perp_dot(sub(b, a), sub(c, b))

    def is_ear(i: int) -> bool:
        a, b, c = pts[prev[i]], pts[i], pts[nxt[i]]
        if turn(i) <= eps * (dist(a, b) + dist(b, c)):
            return False
        tri = (a, b, c)
        j = nxt[nxt[i]]
        while j != prev[i]:
            q = pts[j]
            if q not in tri and point_in_polygon(tri, q, tol=tol) is not Containment.OUTSIDE:
                return False
            j = nxt[j]
        return True

    ear = [is_ear(i) for i in range(n)]
    tris: List[Tri] = []
    remaining = n
    i = 0
    while remaining > 3:
        found = False
        for _ in range(remaining):
            if ear[i]:
                found = True
                break
            i = nxt[i]
        if not found:
            best = j = i
            for _ in range(remaining):
                if abs(turn(j)) < abs(turn(best)):
                    best = j
                j = nxt[j]
            i = best
        p, q = prev[i], nxt[i]
        tris.append((p, i, q))
        nxt[p] = q
        prev[q] = p
        remaining -= 1
        ear[p] = is_ear(p)
        ear[q] = is_ear(q)
        i = q
    tris.append((prev[i], i, nxt[i]))
    return tris


def earcut(points: Sequence[Sequence[float]]) -> List[Tri]:
    """Triangulate the 2D loop ``points`` with ``mapbox-earcut``.

    Earcut does not promise an output winding, so each triangle is
    flipped where needed to match the loop.
    """
    loop = [(float(p[0]), float(p[1])) for p in points]
    if len(loop) < 3:
        raise TriangulationError(f'cannot triangulate a loop of {len(loop)} vertices')
    vertices = np.asarray(loop, dtype=np.float64).reshape(-1, 2)
    ring_array = np.asarray([len(loop)], dtype=np.uint32)
    indices = _earcut.triangulate_float64(vertices, ring_array)
    orient = 1.0 if signed_area(loop) >= 0 else -1.0
    tris: List[Tri] = []
    for k in range(0, len(indices), 3):
        a, b, c = int(indices[k]), int(indices[k + 1]), int(indices[k + 2])
        if orient * signed_area([loop[a], loop[b], loop[c]]) < 0:
            b, c = c, b
        tris.append((a, b, c))
    return tris


def triangulate_polygon(polygon: Sequence[Sequence[float]], method: str = 'auto',
                        tol: TolLike = None) -> List[Tri]:
    """Triangulate a 2D or 3D polygon.

    Returns index triples into ``as_polygon(polygon)`` (a closing vertex
    that repeats the first one is not counted).  3D polygons are
    projected onto their fitted plane first; a collinear loop has no
    plane and is fanned into zero-area triangles.
    """
    if method not in METHODS:
        raise ValueError(f'unknown triangulation method: {method!r}')
    pts = as_polygon(polygon)
    n = len(pts)
    if n == 3:
        return [(0, 1, 2)]
    if isinstance(pts[0], Vec2):
        local = list(pts)
    else:
        try:
            pl = plane_from_points(pts, tol)
        except CollinearPointsError:
            return fan(n)
        local = [pl.to_local(p) for p in pts]

    if method == 'auto':
        method = 'fan' if is_convex(local, tol) else 'ear'
    if method == 'fan':
        return fan(n)
    if method == 'ear':
        return ear_clip(local, tol)
    return earcut(local)


__all__ = [
    'METHODS',
    'fan',
    'ear_clip',
    'earcut',
    'triangulate_polygon',
]
