import math
import random

import pytest

from yapoly.errors import (
    CollinearPointsError,
    DegeneratePolygonError,
    DegeneratePolygonWarning,
    DegenerateVectorError,
    DimensionMismatchError,
)
from yapoly.polygon import (
    Containment,
    Winding,
    area,
    as_polygon,
    centroid,
    interior_angles,
    is_clockwise,
    is_convex,
    is_regular,
    normal,
    perimeter,
    point_in_polygon,
    signed_area,
    winding,
    winding_number,
)
from yapoly.vector import Vec2, Vec3, plane_from_points, vclose

L_SHAPE = [(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]


def _regular(n, r=1.0, phase=0.0):
    return [(r * math.cos(phase + 2 * math.pi * k / n),
             r * math.sin(phase + 2 * math.pi * k / n)) for k in range(n)]


def _pentagram():
    pts = _regular(5, phase=math.pi / 2)
    return [pts[i] for i in (0, 2, 4, 1, 3)]


def test_as_polygon_drops_closing_vertex():
    assert len(as_polygon([(0, 0), (1, 0), (1, 1), (0, 0)])) == 3
    with pytest.raises(DegeneratePolygonError):
        as_polygon([(0, 0), (1, 0)])
    with pytest.raises(DimensionMismatchError):
        as_polygon([(0, 0), (1, 0), (1, 1, 0)])


@pytest.mark.parametrize('s', [1.0, 2.5, 1e-3, 1e4])
def test_square_area_and_reversal(s):
    square = [(0, 0), (s, 0), (s, s), (0, s)]
    assert math.isclose(area(square), s * s)
    assert math.isclose(area(list(reversed(square))), -s * s)
    assert math.isclose(signed_area(square), s * s)


def test_signed_area_rejects_3d():
    with pytest.raises(DimensionMismatchError):
        signed_area([(0, 0, 0), (1, 0, 0), (0, 1, 0)])


def test_area_of_3d_polygon():
    square = [(0, 0, 5), (1, 0, 5), (1, 1, 5), (0, 1, 5)]
    assert math.isclose(area(square), 1.0)
    assert math.isclose(area(list(reversed(square))), 1.0)
    assert math.isclose(area(square, normal=(0, 0, 1)), 1.0)
    assert math.isclose(area(square, normal=(0, 0, -1)), -1.0)
    tilted = [(0, 0, 0), (1, 0, 1), (1, 1, 1), (0, 1, 0)]
    assert math.isclose(area(tilted), math.sqrt(2))


def test_collinear_polygons():
    flat3 = [(0, 0, 0), (1, 1, 1), (2, 2, 2)]
    with pytest.raises(CollinearPointsError):
        plane_from_points(flat3)
    assert area(flat3) == 0.0
    assert math.isclose(area([(0, 0), (1, 1), (2, 2)]), 0.0, abs_tol=1e-12)
    assert winding([(0, 0), (1, 1), (2, 2)]) is Winding.DEGENERATE


def test_degenerate_centroid_warns():
    with pytest.warns(DegeneratePolygonWarning):
        c = centroid([(0, 0), (1, 1), (2, 2)])
    assert c == Vec2(1.0, 1.0)
    with pytest.warns(DegeneratePolygonWarning):
        c = centroid([(0, 0, 0), (1, 1, 1), (2, 2, 2)])
    assert c == Vec3(1.0, 1.0, 1.0)
    with pytest.raises(DegeneratePolygonError):
        centroid([(0, 0), (1, 1), (2, 2)], strict=True)


def test_centroid():
    assert vclose(centroid([(0, 0), (2, 0), (2, 2), (0, 2)]), Vec2(1.0, 1.0))
    # L shape: a 2x1 bar plus a 1x1 block on its left end
    assert vclose(centroid(L_SHAPE), Vec2(5.0 / 6.0, 5.0 / 6.0))
    tri = [(0, 0, 1), (3, 0, 1), (0, 3, 1)]
    assert vclose(centroid(tri), Vec3(1.0, 1.0, 1.0))


def test_winding():
    tri = [(0, 0), (1, 0), (0, 1)]
    assert winding(tri) is Winding.CCW
    assert winding(list(reversed(tri))) is Winding.CW
    assert is_clockwise(list(reversed(tri)))
    tri3 = [(0, 0, 2), (1, 0, 2), (0, 1, 2)]
    assert winding(tri3) is Winding.CCW
    assert winding(tri3, normal=(0, 0, -1)) is Winding.CW


def test_perimeter_invariant_under_rotation_and_reversal():
    rng = random.Random(7)
    pts = [(rng.uniform(-5, 5), rng.uniform(-5, 5)) for _ in range(9)]
    p = perimeter(pts)
    for k in range(len(pts)):
        rotated = pts[k:] + pts[:k]
        assert math.isclose(perimeter(rotated), p)
    assert math.isclose(perimeter(list(reversed(pts))), p)
    assert math.isclose(perimeter([(0, 0), (3, 0), (3, 4)]), 12.0)


def test_is_convex():
    assert is_convex([(0, 0), (1, 0), (1, 1), (0, 1)])
    assert is_convex(list(reversed(_regular(7))))
    assert is_convex([(0, 0), (1, 0), (2, 0), (2, 2), (0, 2)])
    assert not is_convex(L_SHAPE)
    assert not is_convex(_pentagram())
    assert not is_convex([(0, 0), (1, 0), (1, 0), (0, 1)])
    assert not is_convex([(0, 0, 0), (1, 1, 1), (2, 2, 2)])


def test_point_in_square():
    square = [(0, 0), (1, 0), (1, 1), (0, 1)]
    for method in ('winding', 'angle'):
        assert point_in_polygon(square, (0.5, 0.5), method) is Containment.INSIDE
        assert point_in_polygon(square, (2.0, 0.5), method) is Containment.OUTSIDE
        assert point_in_polygon(square, (0.5, 0.0), method) is Containment.BOUNDARY
        assert point_in_polygon(square, (1.0, 1.0), method) is Containment.BOUNDARY
    with pytest.raises(ValueError):
        point_in_polygon(square, (0.5, 0.5), 'ray')
    with pytest.raises(DimensionMismatchError):
        point_in_polygon(square, (0.5, 0.5, 0.0))


def test_point_in_nonconvex():
    for method in ('winding', 'angle'):
        assert point_in_polygon(L_SHAPE, (0.5, 1.5), method) is Containment.INSIDE
        assert point_in_polygon(L_SHAPE, (1.5, 1.5), method) is Containment.OUTSIDE
        assert point_in_polygon(L_SHAPE, (1.5, 1.0), method) is Containment.BOUNDARY


def _random_convex(seed, n):
    """Points at sorted random angles on a random ellipse."""
    rng = random.Random(seed)
    a, b = rng.uniform(0.5, 3.0), rng.uniform(0.5, 3.0)
    cx, cy = rng.uniform(-5, 5), rng.uniform(-5, 5)
    angles = sorted(rng.uniform(0, 2 * math.pi) for _ in range(n))
    return [(cx + a * math.cos(t), cy + b * math.sin(t)) for t in angles]


def _tilt(p, t=0.7):
    return (p[0], p[1] * math.cos(t), p[1] * math.sin(t) + 2.0)


@pytest.mark.parametrize('seed,n', [(1, 3), (2, 5), (3, 8), (4, 13), (5, 21)])
@pytest.mark.parametrize('reverse', [False, True])
@pytest.mark.parametrize('embed', [False, True])
def test_containment_methods_agree_on_convex_polygons(seed, n, reverse, embed):
    poly = _random_convex(seed, n)
    if reverse:
        poly.reverse()
    assert is_convex(poly)
    lo_x = min(p[0] for p in poly) - 1.0
    hi_x = max(p[0] for p in poly) + 1.0
    lo_y = min(p[1] for p in poly) - 1.0
    hi_y = max(p[1] for p in poly) + 1.0
    rng = random.Random(seed * 100 + n)
    queries = [(rng.uniform(lo_x, hi_x), rng.uniform(lo_y, hi_y)) for _ in range(100)]
    queries.append(tuple(sum(p[i] for p in poly) / n for i in range(2)))
    if embed:
        poly = [_tilt(p) for p in poly]
        queries = [_tilt(q) for q in queries]
    inside = 0
    for q in queries:
        result = point_in_polygon(poly, q, 'winding')
        assert result is point_in_polygon(poly, q, 'angle')
        inside += result is Containment.INSIDE
    assert inside > 0


def test_edge_on_polygon_has_no_orientation():
    square = [(0, 0, 0), (1, 0, 0), (1, 0, 1), (0, 0, 1)]
    backwards = list(reversed(square))
    assert winding(square) is Winding.DEGENERATE
    assert winding(backwards) is Winding.DEGENERATE
    assert not is_clockwise(square)
    assert math.isclose(area(square, normal=(0, 0, 1)), 0.0, abs_tol=1e-12)
    assert math.isclose(area(square), 1.0)
    # seen from -y the square runs counterclockwise
    assert winding(square, normal=(0, -1, 0)) is Winding.CCW
    assert winding(backwards, normal=(0, -1, 0)) is Winding.CW
    assert math.isclose(area(square, normal=(0, -1, 0)), 1.0)


def test_area_along_oblique_normal_is_projected():
    square = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]
    assert math.isclose(area(square, normal=(0, 1, 1)), math.sqrt(0.5))
    assert math.isclose(area(list(reversed(square)), normal=(0, 1, 1)), -math.sqrt(0.5))


def test_containment_methods_differ_on_double_winding():
    star = _pentagram()
    assert winding_number(star, (0.0, 0.0)) in (2, -2)
    assert point_in_polygon(star, (0.0, 0.0), 'winding') is Containment.INSIDE
    assert point_in_polygon(star, (0.0, 0.0), 'angle') is Containment.OUTSIDE


def test_point_in_3d_polygon():
    square = [(0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1)]
    assert point_in_polygon(square, (0.5, 0.5, 1.0)) is Containment.INSIDE
    assert point_in_polygon(square, (0.5, 0.5, 1.5)) is Containment.OUTSIDE
    assert point_in_polygon(square, (1.0, 0.5, 1.0), 'angle') is Containment.BOUNDARY
    assert winding_number(square, (0.5, 0.5, 2.0)) == 0
    line = [(0, 0, 0), (1, 1, 1), (2, 2, 2)]
    assert point_in_polygon(line, (0.5, 0.5, 0.5)) is Containment.BOUNDARY
    assert point_in_polygon(line, (0.5, 0.0, 0.5)) is Containment.OUTSIDE


def test_normal():
    assert normal([(0, 0), (1, 0), (1, 1), (0, 1)]) == Vec3(0.0, 0.0, 1.0)
    tri = [(0, 0, 0), (0, 0, 1), (0, 1, 0)]
    assert vclose(normal(tri), Vec3(-1.0, 0.0, 0.0))
    with pytest.raises(DegenerateVectorError):
        normal([(0, 0), (1, 1), (2, 2)])


def test_interior_angles():
    assert interior_angles([(0, 0), (1, 0), (1, 1), (0, 1)]) == pytest.approx([90.0] * 4)
    angles = interior_angles(L_SHAPE)
    assert angles == pytest.approx([90.0, 90.0, 90.0, 270.0, 90.0, 90.0])
    assert math.isclose(sum(angles), 720.0)
    assert sum(interior_angles(list(reversed(L_SHAPE)))) == pytest.approx(720.0)
    assert interior_angles(_regular(6)) == pytest.approx([120.0] * 6)
    with pytest.raises(DegeneratePolygonError):
        interior_angles([(0, 0), (1, 0), (1, 0), (0, 1)])


def test_is_regular():
    assert is_regular(_regular(5))
    assert is_regular([(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)])
    assert not is_regular([(0, 0), (2, 0), (2, 1), (0, 1)])
    # a rhombus has equal edges but unequal angles
    assert not is_regular([(0, 0), (1, 0), (1.5, math.sqrt(3) / 2), (0.5, math.sqrt(3) / 2)])
