## polyhedron decomposition and measurement for yapoly
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
==================================================
polyhedron -- vertex/face polyhedra for yapoly
==================================================

A polyhedron is a vertex list plus a face list, where each face is an
ordered list of at least three vertex indices describing one planar
(or nearly planar) loop: ::

   cube = Polyhedron(
       vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0),
                 (0, 0, 1), (1, 0, 1), (0, 1, 1), (1, 1, 1)],
       faces=[(0, 2, 3, 1), (4, 5, 7, 6), (0, 1, 5, 4),
              (2, 6, 7, 3), (0, 4, 6, 2), (1, 3, 7, 5)])

   volume(cube)        # 1.0
   surface_area(cube)  # 6.0
   centroid(cube)      # Vec3(0.5, 0.5, 0.5)

Faces are expected to be wound counterclockwise seen from outside the
solid.  Volume and centroid come from a signed tetrahedron sum over the
triangulated faces, using vertex 0 as the apex of every tetrahedron.
Inconsistent winding is not detected: it produces a finite but wrong
volume.  Use :func:`edges` in strict mode to confirm the surface is a
closed manifold before trusting volume-based results.

Edges are unordered index pairs ``(i, j)`` with ``i < j``.  The order of
edges is the order in which they are first met walking the faces in
index order, and every per-edge result (:func:`edge_lengths`,
:func:`edge_angles`, :func:`edge_normals`) is aligned with it.

Nothing is cached between calls.  :class:`PolyhedronAnalysis` holds the
edge map, face normals and triangulation for one analysis pass when a
caller wants to run several measurements over the same solid.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Dict, List, Optional, Sequence, Set, Tuple

from yapoly.errors import (
    DimensionMismatchError,
    InvalidPolyhedronError,
    NonManifoldError,
    ZeroVolumeError,
)
from yapoly.polygon import (
    area as polygon_area,
    centroid as polygon_centroid,
    interior_angles,
    is_regular,
    normal as polygon_normal,
)
from yapoly.tolerance import TolLike, volume_eps
from yapoly.triangulator import triangulate_polygon
from yapoly.vector import (
    Vec3,
    add,
    angle_between,
    as_vector,
    cross,
    dist,
    dot,
    fsum,
    mean,
    normalize,
    scale,
    sub,
)

Face = Tuple[int, ...]
Edge = Tuple[int, int]
Tri = Tuple[int, int, int]

EDGE_MODES = ('strict', 'boundary', 'any')


@dataclass(frozen=True)
class Polyhedron:
    """Immutable vertex/face polyhedron.

    Construction coerces vertices to :class:`~yapoly.vector.Vec3` and
    faces to tuples of ints, and raises
    :class:`~yapoly.errors.InvalidPolyhedronError` for short faces or
    out-of-range indices.
    """

    vertices: Tuple[Vec3, ...]
    faces: Tuple[Face, ...]
    name: str = ''

    def __post_init__(self) -> None:
        verts = tuple(as_vector(v) for v in self.vertices)
        for v in verts:
            if not isinstance(v, Vec3):
                raise DimensionMismatchError('polyhedron vertices must be 3D')
        nv = len(verts)
        faces = []
        for k, face in enumerate(self.faces):
            if len(face) < 3:
                raise InvalidPolyhedronError(f'face {k} has fewer than 3 vertices')
            idx = []
            for i in face:
                if isinstance(i, bool) or int(i) != i:
                    raise InvalidPolyhedronError(f'face {k} has a non-integer index {i!r}')
                i = int(i)
                if not 0 <= i < nv:
                    raise InvalidPolyhedronError(
                        f'face {k} index {i} out of range for {nv} vertices')
                idx.append(i)
            faces.append(tuple(idx))
        if not faces:
            raise InvalidPolyhedronError('a polyhedron needs at least one face')
        object.__setattr__(self, 'vertices', verts)
        object.__setattr__(self, 'faces', tuple(faces))

    def face_points(self, index: int) -> Tuple[Vec3, ...]:
        return tuple(self.vertices[i] for i in self.faces[index])

    def __repr__(self) -> str:
        label = f'{self.name!r}, ' if self.name else ''
        return f'Polyhedron({label}{len(self.vertices)} vertices, {len(self.faces)} faces)'


def polyhedron(vertices: Sequence[Sequence[float]], faces: Sequence[Sequence[int]],
               name: str = '') -> Polyhedron:
    """Convenience constructor accepting any sequences."""
    return Polyhedron(tuple(vertices), tuple(tuple(f) for f in faces), name)


## edges and adjacency
## -------------------

def edge_key(a: int, b: int) -> Edge:
    return (a, b) if a < b else (b, a)


class EdgeMap(Dict[Edge, Tuple[int, ...]]):
    """Mapping of each undirected edge to its adjacent face indices."""

    def boundary(self) -> List[Edge]:
        """Edges with exactly one adjacent face."""
        return [e for e, f in self.items() if len(f) == 1]

    def manifold(self) -> List[Edge]:
        return [e for e, f in self.items() if len(f) == 2]

    def non_manifold(self) -> List[Edge]:
        """Edges shared by more than two faces."""
        return [e for e, f in self.items() if len(f) > 2]


def edges(poly: Polyhedron, mode: str = 'strict') -> EdgeMap:
    """Derive the undirected edges of ``poly`` and their adjacent faces.

    ``mode`` controls what counts as an error:

    - ``"strict"``: every edge must have exactly two faces.
    - ``"boundary"``: one-face (boundary) edges are accepted; edges with
      more than two faces still raise.
    - ``"any"``: never raise.

    Violations raise :class:`~yapoly.errors.NonManifoldError`.
    """
    if mode not in EDGE_MODES:
        raise ValueError(f'unknown edge mode: {mode!r}')
    found: Dict[Edge, List[int]] = {}
    for fi, face in enumerate(poly.faces):
        n = len(face)
        for k in range(n):
            a, b = face[k], face[(k + 1) % n]
            if a == b:
                continue
            found.setdefault(edge_key(a, b), []).append(fi)
    emap = EdgeMap((e, tuple(f)) for e, f in found.items())

    if mode == 'strict':
        bad = [(e, len(f)) for e, f in emap.items() if len(f) != 2]
    elif mode == 'boundary':
        bad = [(e, len(f)) for e, f in emap.items() if len(f) > 2]
    else:
        bad = []
    if bad:
        raise NonManifoldError(
            f'{len(bad)} edge(s) not shared by exactly two faces: {bad[:5]}', bad)
    return emap


def is_closed(poly: Polyhedron) -> bool:
    """Is every edge shared by exactly two faces?"""
    return all(len(f) == 2 for f in edges(poly, 'any').values())


def vertex_adjacent_faces(poly: Polyhedron) -> Dict[int, Set[int]]:
    adj: Dict[int, Set[int]] = {i: set() for i in range(len(poly.vertices))}
    for fi, face in enumerate(poly.faces):
        for i in face:
            adj[i].add(fi)
    return adj


def vertex_adjacent_vertices(poly: Polyhedron) -> Dict[int, Set[int]]:
    adj: Dict[int, Set[int]] = {i: set() for i in range(len(poly.vertices))}
    for a, b in edges(poly, 'any'):
        adj[a].add(b)
        adj[b].add(a)
    return adj


def face_adjacent_faces(poly: Polyhedron) -> Dict[int, Set[int]]:
    """Faces sharing at least one edge with each face."""
    adj: Dict[int, Set[int]] = {i: set() for i in range(len(poly.faces))}
    for faces in edges(poly, 'any').values():
        for f in faces:
            adj[f].update(g for g in faces if g != f)
    return adj


def face_vertex_counts(poly: Polyhedron) -> List[int]:
    return [len(f) for f in poly.faces]


def euler_characteristic(poly: Polyhedron) -> int:
    """``V - E + F`` counting only vertices that some face uses."""
    used = {i for face in poly.faces for i in face}
    return len(used) - len(edges(poly, 'any')) + len(poly.faces)


## triangulation
## -------------

def triangulate_face(poly: Polyhedron, index: int, method: str = 'auto',
                     tol: TolLike = None) -> List[Tri]:
    """Triangulate face ``index``, returning polyhedron vertex indices."""
    face = poly.faces[index]
    local = triangulate_polygon(poly.face_points(index), method=method, tol=tol)
    return [(face[a], face[b], face[c]) for a, b, c in local]


def triangulate(poly: Polyhedron, method: str = 'auto', tol: TolLike = None) -> List[Tri]:
    """Triangulated mesh covering every face of ``poly``, winding preserved."""
    tris: List[Tri] = []
    for fi in range(len(poly.faces)):
        tris.extend(triangulate_face(poly, fi, method, tol))
    return tris


## measurement
## -----------

def bounding_box(poly: Polyhedron) -> Tuple[Vec3, Vec3]:
    """``(min corner, max corner)`` over all vertices."""
    vs = poly.vertices
    return (Vec3(min(v.x for v in vs), min(v.y for v in vs), min(v.z for v in vs)),
            Vec3(max(v.x for v in vs), max(v.y for v in vs), max(v.z for v in vs)))


def surface_area(poly: Polyhedron, tol: TolLike = None) -> float:
    """Sum of face areas, each face measured on its own fitted plane."""
    return fsum(polygon_area(poly.face_points(fi), tol=tol) for fi in range(len(poly.faces)))


def _tetrahedra(poly: Polyhedron, tris: Sequence[Tri]):
    """Yield ``(6 * signed volume, a, b, c)`` relative to vertex 0."""
    ref = poly.vertices[0]
    for i, j, k in tris:
        a = sub(poly.vertices[i], ref)
        b = sub(poly.vertices[j], ref)
        c = sub(poly.vertices[k], ref)
        yield dot(a, cross(b, c)), a, b, c


def _volume(poly: Polyhedron, tris: Sequence[Tri]) -> float:
    return fsum(v6 for v6, _, _, _ in _tetrahedra(poly, tris)) / 6.0


def _centroid(poly: Polyhedron, tris: Sequence[Tri], tol: TolLike) -> Vec3:
    terms = list(_tetrahedra(poly, tris))
    v6 = fsum(t[0] for t in terms)
    if abs(v6 / 6.0) <= volume_eps(tol, poly.vertices):
        raise ZeroVolumeError('polyhedron has no volume; centroid is undefined')
    moment = [fsum(w * (a[i] + b[i] + c[i]) for w, a, b, c in terms) for i in range(3)]
    # each tetrahedron's centroid is (ref + a + b + c) / 4 relative to ref
    return add(poly.vertices[0], Vec3(*(m / (4.0 * v6) for m in moment)))


def volume(poly: Polyhedron, method: str = 'auto', tol: TolLike = None) -> float:
    """Signed volume; positive when faces are wound outward."""
    return _volume(poly, triangulate(poly, method, tol))


def centroid(poly: Polyhedron, method: str = 'auto', tol: TolLike = None) -> Vec3:
    """Volume-weighted centroid.

    Raises :class:`~yapoly.errors.ZeroVolumeError` for flat solids.
    """
    return _centroid(poly, triangulate(poly, method, tol), tol)


## per-element queries
## -------------------

def face_normals(poly: Polyhedron, tol: TolLike = None) -> List[Vec3]:
    """Unit outward normal of each face (right-hand rule on its winding)."""
    return [polygon_normal(poly.face_points(fi), tol) for fi in range(len(poly.faces))]


def face_centroids(poly: Polyhedron, tol: TolLike = None) -> List[Vec3]:
    return [polygon_centroid(poly.face_points(fi), tol) for fi in range(len(poly.faces))]


def face_angles(poly: Polyhedron, tol: TolLike = None) -> List[List[float]]:
    """Interior angles, in degrees, of each face, in face-vertex order."""
    return [interior_angles(poly.face_points(fi), tol) for fi in range(len(poly.faces))]


def faces_are_regular(poly: Polyhedron, tol: TolLike = None) -> bool:
    """Is every face a regular polygon?"""
    return all(is_regular(poly.face_points(fi), tol) for fi in range(len(poly.faces)))


def edge_lengths(poly: Polyhedron) -> List[float]:
    """Length of each edge, aligned with the order of :func:`edges`."""
    return [dist(poly.vertices[a], poly.vertices[b]) for a, b in edges(poly, 'any')]


def _dihedral(poly: Polyhedron, e: Edge, f1: int, f2: int,
              normals: Sequence[Vec3], tol: TolLike) -> float:
    n1, n2 = normals[f1], normals[f2]
    bend = angle_between(n1, n2, tol)
    # which side of face f1 does face f2 fall on?
    c2 = mean(poly.face_points(f2))
    if dot(n1, sub(c2, poly.vertices[e[0]])) > 0:
        return 180.0 + bend
    return 180.0 - bend


def _edge_angles(poly: Polyhedron, emap: EdgeMap, normals: Sequence[Vec3],
                 tol: TolLike) -> List[Optional[float]]:
    out: List[Optional[float]] = []
    for e, faces in emap.items():
        if len(faces) != 2:
            out.append(None)
            continue
        out.append(_dihedral(poly, e, faces[0], faces[1], normals, tol))
    return out


def edge_angles(poly: Polyhedron, mode: str = 'boundary',
                tol: TolLike = None) -> List[Optional[float]]:
    """Interior dihedral angle, in degrees, at each edge.

    Aligned with the order of :func:`edges`.  Angles below 180 are
    convex edges and above 180 reflex ones.  Edges without exactly two
    faces (only possible in ``"boundary"`` or ``"any"`` mode) are
    ``None``.
    """
    return _edge_angles(poly, edges(poly, mode), face_normals(poly, tol), tol)


def vertex_normals(poly: Polyhedron, tol: TolLike = None) -> List[Optional[Vec3]]:
    """Normalized mean of the adjacent face normals; ``None`` for unused vertices."""
    normals = face_normals(poly, tol)
    out: List[Optional[Vec3]] = []
    for vi, faces in sorted(vertex_adjacent_faces(poly).items()):
        if not faces:
            out.append(None)
            continue
        out.append(normalize(mean([normals[f] for f in sorted(faces)]), tol))
    return out


def edge_normals(poly: Polyhedron, mode: str = 'boundary',
                 tol: TolLike = None) -> List[Vec3]:
    """Normalized mean of the adjacent face normals of each edge."""
    normals = face_normals(poly, tol)
    return [normalize(mean([normals[f] for f in faces]), tol)
            for faces in edges(poly, mode).values()]


## construction helpers
## --------------------

## outward-wound faces of a box whose vertex i sits at corner
## (i & 1, i >> 1 & 1, i >> 2 & 1)
BOX_FACES = ((0, 2, 3, 1), (4, 5, 7, 6), (0, 1, 5, 4),
             (2, 6, 7, 3), (0, 4, 6, 2), (1, 3, 7, 5))


def bounding_box_polyhedron(poly: Polyhedron) -> Polyhedron:
    """The bounding box of ``poly`` as a six-faced polyhedron."""
    lo, hi = bounding_box(poly)
    verts = []
    for i in range(8):
        verts.append(Vec3(hi.x if i & 1 else lo.x,
                          hi.y if i >> 1 & 1 else lo.y,
                          hi.z if i >> 2 & 1 else lo.z))
    return Polyhedron(tuple(verts), BOX_FACES, f'{poly.name} bbox' if poly.name else 'bbox')


def translated(poly: Polyhedron, delta: Sequence[float]) -> Polyhedron:
    d = as_vector(delta)
    return Polyhedron(tuple(add(v, d) for v in poly.vertices), poly.faces, poly.name)


def scaled(poly: Polyhedron, factor: float) -> Polyhedron:
    """Uniformly scale about the origin; a negative factor also flips the winding."""
    faces = poly.faces
    if factor < 0:
        faces = tuple(tuple(reversed(f)) for f in faces)
    return Polyhedron(tuple(scale(v, factor) for v in poly.vertices), faces, poly.name)


def reversed_faces(poly: Polyhedron) -> Polyhedron:
    """Same solid with every face wound the other way."""
    return Polyhedron(poly.vertices, tuple(tuple(reversed(f)) for f in poly.faces), poly.name)


## analysis pass
## -------------

class PolyhedronAnalysis:
    """Per-pass cache over one polyhedron.

    Each derived quantity is computed on first use and reused by the
    other measurements of the same object.  Build a new instance for a
    new solid or tolerance; nothing is shared between instances.
    """

    def __init__(self, poly: Polyhedron, tol: TolLike = None,
                 mode: str = 'strict', method: str = 'auto') -> None:
        self.poly = poly
        self.tol = tol
        self.mode = mode
        self.method = method

    @cached_property
    def edges(self) -> EdgeMap:
        return edges(self.poly, self.mode)

    @cached_property
    def triangles(self) -> List[Tri]:
        return triangulate(self.poly, self.method, self.tol)

    @cached_property
    def face_normals(self) -> List[Vec3]:
        return face_normals(self.poly, self.tol)

    @cached_property
    def volume(self) -> float:
        return _volume(self.poly, self.triangles)

    @cached_property
    def centroid(self) -> Vec3:
        return _centroid(self.poly, self.triangles, self.tol)

    @cached_property
    def surface_area(self) -> float:
        return surface_area(self.poly, self.tol)

    @cached_property
    def bounding_box(self) -> Tuple[Vec3, Vec3]:
        return bounding_box(self.poly)

    @cached_property
    def edge_lengths(self) -> List[float]:
        return [dist(self.poly.vertices[a], self.poly.vertices[b]) for a, b in self.edges]

    @cached_property
    def edge_angles(self) -> List[Optional[float]]:
        return _edge_angles(self.poly, self.edges, self.face_normals, self.tol)

    def summary(self) -> dict:
        """Plain-data digest of the solid, suitable for ``json.dumps``."""
        lo, hi = self.bounding_box
        try:
            cen = list(self.centroid)
        except ZeroVolumeError:
            cen = None
        return {
            'name': self.poly.name,
            'vertices': len(self.poly.vertices),
            'edges': len(self.edges),
            'faces': len(self.poly.faces),
            'face_vertex_counts': face_vertex_counts(self.poly),
            'surface_area': self.surface_area,
            'volume': self.volume,
            'centroid': cen,
            'bounding_box': [list(lo), list(hi)],
        }


__all__ = [
    'EDGE_MODES',
    'BOX_FACES',
    'Polyhedron',
    'polyhedron',
    'EdgeMap',
    'edge_key',
    'edges',
    'is_closed',
    'vertex_adjacent_faces',
    'vertex_adjacent_vertices',
    'face_adjacent_faces',
    'face_vertex_counts',
    'euler_characteristic',
    'triangulate_face',
    'triangulate',
    'bounding_box',
    'surface_area',
    'volume',
    'centroid',
    'face_normals',
    'face_centroids',
    'face_angles',
    'faces_are_regular',
    'edge_lengths',
    'edge_angles',
    'vertex_normals',
    'edge_normals',
    'bounding_box_polyhedron',
    'translated',
    'scaled',
    'reversed_faces',
    'PolyhedronAnalysis',
]
