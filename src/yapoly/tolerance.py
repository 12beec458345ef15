"""Numeric tolerance configuration for yapoly.

There is no process-wide epsilon to redefine.  Every predicate that
compares against zero takes an optional ``tol`` argument, which may be

* ``None`` -- use :data:`DEFAULT_TOLERANCE`, scaled to the input,
* a :class:`Tolerance` -- scaled to the input the same way,
* a plain ``float`` -- used verbatim as an absolute length epsilon.

Scaling keeps the tolerance meaningful across model sizes: the effective
length epsilon is ``max(absolute, relative * d)`` where ``d`` is the
diagonal of the bounding box of the points being analyzed.  Area and
volume thresholds are derived from the length epsilon by multiplying by
``d`` and ``d**2`` respectively.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Union

ABSOLUTE_EPSILON = 1e-9
RELATIVE_EPSILON = 1e-9


@dataclass(frozen=True)
class Tolerance:
    """Absolute floor plus a relative factor applied to the input scale."""

    absolute: float = ABSOLUTE_EPSILON
    relative: float = RELATIVE_EPSILON

    def __post_init__(self) -> None:
        if self.absolute < 0 or self.relative < 0:
            raise ValueError('tolerance components must be non-negative')

    def length(self, points: Iterable[Sequence[float]] = ()) -> float:
        """Return the length epsilon for ``points``."""
        return max(self.absolute, self.relative * diagonal(points))

    def area(self, points: Iterable[Sequence[float]] = ()) -> float:
        pts = list(points)
        eps = self.length(pts)
        return eps * max(diagonal(pts), eps)

    def volume(self, points: Iterable[Sequence[float]] = ()) -> float:
        pts = list(points)
        eps = self.length(pts)
        d = max(diagonal(pts), eps)
        return eps * d * d


DEFAULT_TOLERANCE = Tolerance()

TolLike = Union[None, float, Tolerance]


def diagonal(points: Iterable[Sequence[float]]) -> float:
    """Length of the bounding box diagonal of ``points`` (0 when empty)."""
    lo = hi = None
    for p in points:
        if lo is None:
            lo = list(p)
            hi = list(p)
            continue
        for i, c in enumerate(p):
            if c < lo[i]:
                lo[i] = c
            elif c > hi[i]:
                hi[i] = c
    if lo is None:
        return 0.0
    return math.sqrt(sum((b - a) ** 2 for a, b in zip(lo, hi)))


def as_tolerance(tol: TolLike) -> Tolerance:
    """Normalize any accepted ``tol`` value to a :class:`Tolerance`."""
    if tol is None:
        return DEFAULT_TOLERANCE
    if isinstance(tol, Tolerance):
        return tol
    if isinstance(tol, bool) or not isinstance(tol, (int, float)):
        raise TypeError(f'bad tolerance value: {tol!r}')
    # a bare number is an unscaled absolute epsilon
    return Tolerance(absolute=float(tol), relative=0.0)


def length_eps(tol: TolLike, points: Iterable[Sequence[float]] = ()) -> float:
    return as_tolerance(tol).length(points)


def area_eps(tol: TolLike, points: Iterable[Sequence[float]] = ()) -> float:
    return as_tolerance(tol).area(points)


def volume_eps(tol: TolLike, points: Iterable[Sequence[float]] = ()) -> float:
    return as_tolerance(tol).volume(points)


__all__ = [
    'ABSOLUTE_EPSILON',
    'RELATIVE_EPSILON',
    'DEFAULT_TOLERANCE',
    'Tolerance',
    'TolLike',
    'as_tolerance',
    'diagonal',
    'length_eps',
    'area_eps',
    'volume_eps',
]
