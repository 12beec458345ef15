## canonical polyhedra for yapoly
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
=========================================
database -- canonical polyhedra catalog
=========================================

A static catalog of named solids, grouped in families: ::

   from yapoly import database

   database.families()            # ('platonic', 'archimedean', ...)
   database.names('platonic')     # ['tetrahedron', 'cube', ...]
   cube = database.get('cube')    # Polyhedron

Every entry is a :class:`~yapoly.polyhedron.Polyhedron` centered on the
origin with outward-wound faces.  Vertex coordinates come from the usual
closed forms (cyclic and signed permutations of a few seed points);
faces are recovered by convex faceting (:mod:`yapoly.hull`).  Uniform
solids (Platonic, Archimedean, prisms, antiprisms) and the Johnson
solids are scaled to unit edge length.  Archimedean duals and
trapezohedra are polar reciprocals of their uniform counterparts and
keep the reciprocal's scale.

The n-gonal families are parametric -- :func:`prism`,
:func:`antiprism`, :func:`pyramid`, :func:`dipyramid`, :func:`cupola`
and :func:`trapezohedron` accept any valid ``n`` -- and the catalog
lists them by ``<family>_<n>`` for n = 3..10 (cupolas 3..5).

Entries are built on first access and kept for the life of the process.
"""

from __future__ import annotations

import itertools
import logging
import math
from functools import lru_cache
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from yapoly.errors import UnknownSolidError
from yapoly.hull import hull, reciprocate
from yapoly.polyhedron import Polyhedron, edge_lengths, scaled

logger = logging.getLogger(__name__)

PHI = (1.0 + math.sqrt(5.0)) / 2.0

## tribonacci constant, used by the snub cube
TRIBONACCI = (1.0 + (19.0 + 3.0 * math.sqrt(33.0)) ** (1.0 / 3.0)
              + (19.0 - 3.0 * math.sqrt(33.0)) ** (1.0 / 3.0)) / 3.0

FAMILIES = (
    'platonic',
    'archimedean',
    'archimedean_dual',
    'johnson',
    'prism',
    'antiprism',
    'pyramid',
    'dipyramid',
    'cupola',
    'trapezohedron',
)

Point = Tuple[float, float, float]


## coordinate generators
## ---------------------

def _signs(p: Sequence[float]) -> List[Point]:
    """Every sign combination of the non-zero coordinates of ``p``."""
    choices = [(c, -c) if c != 0 else (0.0,) for c in p]
    return [tuple(float(c) for c in q) for q in itertools.product(*choices)]


def _cyclic(p: Sequence[float]) -> List[Point]:
    return [(p[0], p[1], p[2]), (p[1], p[2], p[0]), (p[2], p[0], p[1])]


def _even_perms(p: Sequence[float]) -> List[Point]:
    return _cyclic(p)


def _odd_perms(p: Sequence[float]) -> List[Point]:
    return _cyclic((p[1], p[0], p[2]))


def _all_perms(p: Sequence[float]) -> List[Point]:
    return list(itertools.permutations(p))


def _unique(points: Iterable[Sequence[float]]) -> List[Point]:
    out: List[Point] = []
    keys = set()
    for p in points:
        key = tuple(round(c, 9) + 0.0 for c in p)
        if key in keys:
            continue
        keys.add(key)
        out.append(tuple(float(c) for c in p))
    return out


def _signed_cyclic(*seeds: Sequence[float]) -> List[Point]:
    return _unique(q for s in seeds for p in _cyclic(s) for q in _signs(p))


def _signed_all(*seeds: Sequence[float]) -> List[Point]:
    return _unique(q for s in seeds for p in _all_perms(s) for q in _signs(p))


def _unit_edge(poly: Polyhedron) -> Polyhedron:
    return scaled(poly, 1.0 / min(edge_lengths(poly)))


def _uniform(points: Sequence[Point], name: str) -> Polyhedron:
    return _unit_edge(hull(points, name))


def _ring(n: int, radius: float, z: float, phase: float = 0.0) -> List[Point]:
    return [(radius * math.cos(phase + 2.0 * math.pi * k / n),
             radius * math.sin(phase + 2.0 * math.pi * k / n),
             z) for k in range(n)]


def _circumradius(n: int) -> float:
    """Circumradius of a unit-edge regular n-gon."""
    return 1.0 / (2.0 * math.sin(math.pi / n))


def _check_n(n: int, low: int = 3, high: Optional[int] = None) -> None:
    if isinstance(n, bool) or not isinstance(n, int) or n < low or (high is not None and n > high):
        bound = f'{low}..{high}' if high is not None else f'>= {low}'
        raise ValueError(f'n must be an integer {bound}, got {n!r}')


def _centered(points: Sequence[Point]) -> List[Point]:
    k = len(points)
    c = [sum(p[i] for p in points) / k for i in range(3)]
    return [(p[0] - c[0], p[1] - c[1], p[2] - c[2]) for p in points]


## parametric families
## -------------------

def prism(n: int) -> Polyhedron:
    """Uniform n-gonal prism with unit edges."""
    _check_n(n)
    r = _circumradius(n)
    return hull(_ring(n, r, -0.5) + _ring(n, r, 0.5), f'prism_{n}')


def _antiprism_points(n: int) -> List[Point]:
    r = _circumradius(n)
    # lateral edges are unit length: horizontal chord between the rings
    # is 2 r sin(pi / 2n)
    h = math.sqrt(1.0 - (2.0 * r * math.sin(math.pi / (2 * n))) ** 2)
    return _ring(n, r, -h / 2.0) + _ring(n, r, h / 2.0, math.pi / n)


def antiprism(n: int) -> Polyhedron:
    """Uniform n-gonal antiprism with unit edges."""
    _check_n(n)
    return hull(_antiprism_points(n), f'antiprism_{n}')


def _apex_height(n: int) -> float:
    # equilateral lateral faces exist only for n < 6
    if n < 6:
        r = _circumradius(n)
        return math.sqrt(1.0 - r * r)
    return 1.0


def pyramid(n: int) -> Polyhedron:
    """Right n-gonal pyramid with a unit-edge base.

    Lateral faces are equilateral for n < 6; otherwise the apex sits at
    height 1.
    """
    _check_n(n)
    h = _apex_height(n)
    return hull(_centered(_ring(n, _circumradius(n), 0.0) + [(0.0, 0.0, h)]), f'pyramid_{n}')


def dipyramid(n: int) -> Polyhedron:
    """Right n-gonal dipyramid (bipyramid) around a unit-edge n-gon."""
    _check_n(n)
    h = _apex_height(n)
    pts = _ring(n, _circumradius(n), 0.0) + [(0.0, 0.0, h), (0.0, 0.0, -h)]
    return hull(pts, f'dipyramid_{n}')


def cupola(n: int) -> Polyhedron:
    """n-gonal cupola with unit edges (n = 3, 4, 5 are Johnson solids J3-J5)."""
    _check_n(n, 3, 5)
    rt = _circumradius(n)
    rb = _circumradius(2 * n)
    # square faces join a top edge to the parallel bottom edge
    gap = rb * math.cos(math.pi / (2 * n)) - rt * math.cos(math.pi / n)
    h = math.sqrt(1.0 - gap * gap)
    # top edges sit over alternate bottom edges
    pts = _ring(n, rt, h) + _ring(2 * n, rb, 0.0, math.pi / (2 * n))
    return hull(_centered(pts), f'cupola_{n}')


def trapezohedron(n: int) -> Polyhedron:
    """n-gonal trapezohedron, the polar dual of the n-gonal antiprism."""
    _check_n(n)
    return reciprocate(hull(_antiprism_points(n)), f'trapezohedron_{n}')


## fixed families
## --------------

def _platonic() -> Dict[str, Callable[[], Polyhedron]]:
    return {
        'tetrahedron': lambda: _uniform(
            [(1, 1, 1), (1, -1, -1), (-1, 1, -1), (-1, -1, 1)], 'tetrahedron'),
        'cube': lambda: _uniform(_signs((1, 1, 1)), 'cube'),
        'octahedron': lambda: _uniform(_signed_all((1, 0, 0)), 'octahedron'),
        'dodecahedron': lambda: _uniform(
            _signed_cyclic((1, 1, 1), (0, 1 / PHI, PHI)), 'dodecahedron'),
        'icosahedron': lambda: _uniform(_signed_cyclic((0, 1, PHI)), 'icosahedron'),
    }


def _truncated_tetrahedron_points() -> List[Point]:
    # permutations of (3, 1, 1) with an even number of minus signs
    pts = _signed_all((3, 1, 1))
    return [p for p in pts if sum(1 for c in p if c < 0) % 2 == 0]


def _snub_cube_points() -> List[Point]:
    t = TRIBONACCI
    seed = (1.0, 1.0 / t, t)
    pts = []
    for p in _even_perms(seed):
        pts += [q for q in _signs(p) if sum(1 for c in q if c > 0) % 2 == 0]
    for p in _odd_perms(seed):
        pts += [q for q in _signs(p) if sum(1 for c in q if c > 0) % 2 == 1]
    return _unique(pts)


_ARCHIMEDEAN_POINTS: Dict[str, Callable[[], List[Point]]] = {
    'truncated_tetrahedron': _truncated_tetrahedron_points,
    'cuboctahedron': lambda: _signed_all((1, 1, 0)),
    'truncated_cube': lambda: _signed_all((math.sqrt(2.0) - 1.0, 1, 1)),
    'truncated_octahedron': lambda: _signed_all((0, 1, 2)),
    'rhombicuboctahedron': lambda: _signed_all((1, 1, 1.0 + math.sqrt(2.0))),
    'truncated_cuboctahedron': lambda: _signed_all(
        (1, 1.0 + math.sqrt(2.0), 1.0 + 2.0 * math.sqrt(2.0))),
    'snub_cube': _snub_cube_points,
    'icosidodecahedron': lambda: _signed_cyclic(
        (0, 0, PHI), (0.5, PHI / 2.0, PHI * PHI / 2.0)),
    'truncated_dodecahedron': lambda: _signed_cyclic(
        (0, 1 / PHI, 2.0 + PHI), (1 / PHI, PHI, 2.0 * PHI), (PHI, 2.0, PHI + 1.0)),
    'truncated_icosahedron': lambda: _signed_cyclic(
        (0, 1, 3.0 * PHI), (1, 2.0 + PHI, 2.0 * PHI), (PHI, 2, PHI ** 3)),
    'rhombicosidodecahedron': lambda: _signed_cyclic(
        (1, 1, PHI ** 3), (PHI * PHI, PHI, 2.0 * PHI), (2.0 + PHI, 0, PHI * PHI)),
    'truncated_icosidodecahedron': lambda: _signed_cyclic(
        (1 / PHI, 1 / PHI, 3.0 + PHI), (2.0 / PHI, PHI, 1.0 + 2.0 * PHI),
        (1 / PHI, PHI * PHI, 3.0 * PHI - 1.0), (2.0 * PHI - 1.0, 2, 2.0 + PHI),
        (PHI, 3, 2.0 * PHI)),
}

## dual name -> archimedean solid it reciprocates
_DUALS = {
    'triakis_tetrahedron': 'truncated_tetrahedron',
    'rhombic_dodecahedron': 'cuboctahedron',
    'triakis_octahedron': 'truncated_cube',
    'tetrakis_hexahedron': 'truncated_octahedron',
    'deltoidal_icositetrahedron': 'rhombicuboctahedron',
    'disdyakis_dodecahedron': 'truncated_cuboctahedron',
    'pentagonal_icositetrahedron': 'snub_cube',
    'rhombic_triacontahedron': 'icosidodecahedron',
    'triakis_icosahedron': 'truncated_dodecahedron',
    'pentakis_dodecahedron': 'truncated_icosahedron',
    'deltoidal_hexecontahedron': 'rhombicosidodecahedron',
    'disdyakis_triacontahedron': 'truncated_icosidodecahedron',
}


def _archimedean() -> Dict[str, Callable[[], Polyhedron]]:
    return {name: (lambda name=name, pts=pts: _uniform(pts(), name))
            for name, pts in _ARCHIMEDEAN_POINTS.items()}


def _archimedean_dual() -> Dict[str, Callable[[], Polyhedron]]:
    return {name: (lambda name=name, src=src: reciprocate(get(src), name))
            for name, src in _DUALS.items()}


def _elongated_square_pyramid(both: bool) -> List[Point]:
    r = _circumradius(4)
    h = _apex_height(4)
    pts = _ring(4, r, -0.5) + _ring(4, r, 0.5) + [(0.0, 0.0, 0.5 + h)]
    if both:
        pts.append((0.0, 0.0, -0.5 - h))
    return _centered(pts)


def _gyroelongated_square_pyramid() -> List[Point]:
    pts = _antiprism_points(4)
    top = max(p[2] for p in pts)
    return _centered(pts + [(0.0, 0.0, top + _apex_height(4))])


def _johnson() -> Dict[str, Callable[[], Polyhedron]]:
    def renamed(build: Callable[[int], Polyhedron], n: int, name: str) -> Callable[[], Polyhedron]:
        def make() -> Polyhedron:
            poly = build(n)
            return Polyhedron(poly.vertices, poly.faces, name)
        return make

    return {
        'square_pyramid': renamed(pyramid, 4, 'square_pyramid'),
        'pentagonal_pyramid': renamed(pyramid, 5, 'pentagonal_pyramid'),
        'triangular_cupola': renamed(cupola, 3, 'triangular_cupola'),
        'square_cupola': renamed(cupola, 4, 'square_cupola'),
        'pentagonal_cupola': renamed(cupola, 5, 'pentagonal_cupola'),
        'elongated_square_pyramid': lambda: hull(
            _elongated_square_pyramid(False), 'elongated_square_pyramid'),
        'gyroelongated_square_pyramid': lambda: hull(
            _gyroelongated_square_pyramid(), 'gyroelongated_square_pyramid'),
        'triangular_dipyramid': renamed(dipyramid, 3, 'triangular_dipyramid'),
        'pentagonal_dipyramid': renamed(dipyramid, 5, 'pentagonal_dipyramid'),
        'elongated_square_dipyramid': lambda: hull(
            _elongated_square_pyramid(True), 'elongated_square_dipyramid'),
    }


def _ngonal(build: Callable[[int], Polyhedron], family: str,
            ns: Iterable[int]) -> Dict[str, Callable[[], Polyhedron]]:
    return {f'{family}_{n}': (lambda n=n: build(n)) for n in ns}


@lru_cache(maxsize=None)
def _catalog() -> Dict[str, Tuple[str, Callable[[], Polyhedron]]]:
    tables = {
        'platonic': _platonic(),
        'archimedean': _archimedean(),
        'archimedean_dual': _archimedean_dual(),
        'johnson': _johnson(),
        'prism': _ngonal(prism, 'prism', range(3, 11)),
        'antiprism': _ngonal(antiprism, 'antiprism', range(3, 11)),
        'pyramid': _ngonal(pyramid, 'pyramid', range(3, 11)),
        'dipyramid': _ngonal(dipyramid, 'dipyramid', range(3, 11)),
        'cupola': _ngonal(cupola, 'cupola', range(3, 6)),
        'trapezohedron': _ngonal(trapezohedron, 'trapezohedron', range(3, 11)),
    }
    catalog: Dict[str, Tuple[str, Callable[[], Polyhedron]]] = {}
    for family in FAMILIES:
        for name, build in tables[family].items():
            catalog[name] = (family, build)
    logger.debug('solid catalog lists %d entries in %d families',
                 len(catalog), len(FAMILIES))
    return catalog


## public interface
## ----------------

def families() -> Tuple[str, ...]:
    return FAMILIES


def names(family: Optional[str] = None) -> List[str]:
    """Names of every catalog entry, or of one family, in catalog order."""
    if family is not None and family not in FAMILIES:
        raise ValueError(f'unknown family {family!r}; expected one of {FAMILIES}')
    return [name for name, (fam, _) in _catalog().items()
            if family is None or fam == family]


def family_of(name: str) -> str:
    try:
        return _catalog()[name][0]
    except KeyError:
        raise UnknownSolidError(name) from None


@lru_cache(maxsize=None)
def get(name: str) -> Polyhedron:
    """Look up a solid by name.

    Raises :class:`~yapoly.errors.UnknownSolidError` (a ``KeyError``)
    for names not in the catalog.
    """
    try:
        family, build = _catalog()[name]
    except KeyError:
        raise UnknownSolidError(name) from None
    poly = build()
    logger.debug('built %s solid %s: %d vertices, %d faces',
                 family, name, len(poly.vertices), len(poly.faces))
    return poly


def table(family: str) -> Dict[str, Polyhedron]:
    """Every solid of ``family`` by name."""
    return {name: get(name) for name in names(family)}


__all__ = [
    'PHI',
    'FAMILIES',
    'families',
    'names',
    'family_of',
    'get',
    'table',
    'prism',
    'antiprism',
    'pyramid',
    'dipyramid',
    'cupola',
    'trapezohedron',
]
