"""Convex faceting of point sets.

Given the vertices of a convex polyhedron, recover its faces: every
plane through three of the points that has all other points on one
side is a face plane, and the points lying on it, ordered by angle
around the face center, are the face loop.  Faces come out wound
counterclockwise seen from outside, so the resulting polyhedron has a
positive volume.

Coplanar points are merged into one face, which is what turns the
square faces of a cube into quads instead of pairs of triangles.

The search is vectorized with numpy over the third point of each
candidate triple, which keeps solids with a hundred or so vertices
quick enough to build catalog entries on demand.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from yapoly.errors import CollinearPointsError
from yapoly.polygon import normal as polygon_normal
from yapoly.polyhedron import Polyhedron
from yapoly.tolerance import TolLike, length_eps
from yapoly.vector import Vec3


def _order_loop(pts: np.ndarray, on: Sequence[int], normal: np.ndarray) -> Tuple[int, ...]:
    sub = pts[list(on)]
    c = sub.mean(axis=0)
    u = sub[0] - c
    u = u / np.linalg.norm(u)
    v = np.cross(normal, u)
    rel = sub - c
    ang = np.arctan2(rel @ v, rel @ u)
    loop = [on[k] for k in np.argsort(ang, kind='stable')]
    start = loop.index(min(loop))
    return tuple(int(i) for i in loop[start:] + loop[:start])


def convex_faces(points: Sequence[Sequence[float]], tol: TolLike = None) -> List[Tuple[int, ...]]:
    """Outward-wound faces of the convex hull of ``points``.

    Every point is expected to be a hull vertex; points strictly inside
    the hull are simply not referenced by any face.  Raises
    :class:`~yapoly.errors.CollinearPointsError` if the points are
    coplanar.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    n = len(pts)
    if n < 4:
        raise CollinearPointsError('a solid needs at least 4 points')
    eps = length_eps(tol, [tuple(p) for p in pts])

    faces: List[Tuple[int, ...]] = []
    seen = set()
    for i in range(n - 2):
        for j in range(i + 1, n - 1):
            ij = pts[j] - pts[i]
            lij = np.linalg.norm(ij)
            if lij <= eps:
                continue
            ks = np.arange(j + 1, n)
            normals = np.cross(ij, pts[ks] - pts[i])
            lens = np.linalg.norm(normals, axis=1)
            ok = lens / lij > eps
            if not ok.any():
                continue
            normals = normals[ok] / lens[ok, None]
            dists = normals @ pts.T - (normals @ pts[i])[:, None]
            above = (dists > eps).any(axis=1)
            below = (dists < -eps).any(axis=1)
            for r in np.nonzero(~(above & below))[0]:
                if not above[r] and not below[r]:
                    continue
                d, nrm = dists[r], normals[r]
                if above[r]:
                    d, nrm = -d, -nrm
                on = tuple(int(k) for k in np.nonzero(np.abs(d) <= eps)[0])
                if on in seen:
                    continue
                seen.add(on)
                faces.append(_order_loop(pts, on, nrm))
    if not faces:
        raise CollinearPointsError('points are coplanar; no hull faces')
    return faces


def hull(points: Sequence[Sequence[float]], name: str = '', tol: TolLike = None) -> Polyhedron:
    """Build a :class:`~yapoly.polyhedron.Polyhedron` from convex hull vertices."""
    verts = tuple(Vec3(float(p[0]), float(p[1]), float(p[2])) for p in points)
    return Polyhedron(verts, tuple(convex_faces(verts, tol)), name)


def reciprocate(poly: Polyhedron, name: str = '', tol: TolLike = None) -> Polyhedron:
    """Polar dual of a convex polyhedron centered on the origin.

    Each face plane ``n . x = d`` becomes the dual vertex ``n / d``.
    """
    pts = np.asarray(poly.vertices, dtype=np.float64)
    duals = []
    for fi, face in enumerate(poly.faces):
        c = pts[list(face)].mean(axis=0)
        nrm = np.asarray(polygon_normal(poly.face_points(fi), tol))
        d = float(nrm @ c)
        if d <= 0:
            raise ValueError('polar dual needs the origin strictly inside the solid')
        duals.append(nrm / d)
    return hull(duals, name, tol)


__all__ = [
    'convex_faces',
    'hull',
    'reciprocate',
]
