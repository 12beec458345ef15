import math

import pytest

from yapoly import database
from yapoly.errors import UnknownSolidError
from yapoly.polyhedron import (
    PolyhedronAnalysis,
    edge_lengths,
    edges,
    euler_characteristic,
    face_vertex_counts,
    faces_are_regular,
    is_closed,
)
from yapoly.vector import mag

ALL_NAMES = database.names()

# (vertices, edges, faces)
COUNTS = {
    'tetrahedron': (4, 6, 4),
    'cube': (8, 12, 6),
    'octahedron': (6, 12, 8),
    'dodecahedron': (20, 30, 12),
    'icosahedron': (12, 30, 20),
    'truncated_tetrahedron': (12, 18, 8),
    'cuboctahedron': (12, 24, 14),
    'truncated_cube': (24, 36, 14),
    'truncated_octahedron': (24, 36, 14),
    'rhombicuboctahedron': (24, 48, 26),
    'truncated_cuboctahedron': (48, 72, 26),
    'snub_cube': (24, 60, 38),
    'icosidodecahedron': (30, 60, 32),
    'truncated_dodecahedron': (60, 90, 32),
    'truncated_icosahedron': (60, 90, 32),
    'rhombicosidodecahedron': (60, 120, 62),
    'truncated_icosidodecahedron': (120, 180, 62),
    'rhombic_dodecahedron': (14, 24, 12),
    'rhombic_triacontahedron': (32, 60, 30),
    'disdyakis_triacontahedron': (62, 180, 120),
    'square_pyramid': (5, 8, 5),
    'pentagonal_pyramid': (6, 10, 6),
    'triangular_cupola': (9, 15, 8),
    'square_cupola': (12, 20, 10),
    'pentagonal_cupola': (15, 25, 12),
    'elongated_square_pyramid': (9, 16, 9),
    'gyroelongated_square_pyramid': (9, 20, 13),
    'triangular_dipyramid': (5, 9, 6),
    'pentagonal_dipyramid': (7, 15, 10),
    'elongated_square_dipyramid': (10, 20, 12),
    'prism_6': (12, 18, 8),
    'antiprism_5': (10, 20, 12),
    'pyramid_7': (8, 14, 8),
    'dipyramid_8': (10, 24, 16),
    'trapezohedron_5': (12, 20, 10),
}

UNIT_EDGE_FAMILIES = ('platonic', 'archimedean', 'johnson', 'prism', 'antiprism')


def test_families_and_names():
    assert database.families() == database.FAMILIES
    assert len(database.families()) == 10
    assert database.names('platonic') == [
        'tetrahedron', 'cube', 'octahedron', 'dodecahedron', 'icosahedron']
    assert len(database.names('archimedean')) == 12
    assert len(database.names('archimedean_dual')) == 12
    assert database.names('prism') == [f'prism_{n}' for n in range(3, 11)]
    assert database.names('cupola') == ['cupola_3', 'cupola_4', 'cupola_5']
    assert len(ALL_NAMES) == len(set(ALL_NAMES))
    assert database.family_of('snub_cube') == 'archimedean'
    assert database.family_of('trapezohedron_4') == 'trapezohedron'


def test_unknown_names():
    with pytest.raises(UnknownSolidError):
        database.get('great_dodecahedron')
    with pytest.raises(KeyError):
        database.family_of('nope')
    with pytest.raises(ValueError):
        database.names('kepler_poinsot')


def test_get_is_memoized():
    assert database.get('cube') is database.get('cube')
    assert database.get('cube').name == 'cube'


@pytest.mark.parametrize('name', ALL_NAMES)
def test_every_solid_is_a_closed_convex_solid(name):
    poly = database.get(name)
    assert poly.name == name
    assert is_closed(poly)
    assert euler_characteristic(poly) == 2
    analysis = PolyhedronAnalysis(poly)
    assert analysis.volume > 0
    assert analysis.surface_area > 0
    assert mag(analysis.centroid) < 1.0
    assert all(a < 180.0 for a in analysis.edge_angles)


@pytest.mark.parametrize('name', sorted(COUNTS))
def test_element_counts(name):
    poly = database.get(name)
    assert (len(poly.vertices), len(edges(poly)), len(poly.faces)) == COUNTS[name]


@pytest.mark.parametrize('family', UNIT_EDGE_FAMILIES)
def test_unit_edges(family):
    for name, poly in database.table(family).items():
        assert edge_lengths(poly) == pytest.approx([1.0] * len(edges(poly)), rel=1e-9), name


@pytest.mark.parametrize('family', ['platonic', 'archimedean'])
def test_regular_faces(family):
    for name, poly in database.table(family).items():
        assert faces_are_regular(poly), name


def test_platonic_centroids_at_origin():
    for poly in database.table('platonic').values():
        assert mag(PolyhedronAnalysis(poly).centroid) < 1e-9


def test_duals_swap_vertices_and_faces():
    for name in database.names('archimedean_dual'):
        dual = database.get(name)
        src = database.get(database._DUALS[name])
        assert len(dual.vertices) == len(src.faces)
        assert len(dual.faces) == len(src.vertices)


def test_snub_cube_faces():
    counts = face_vertex_counts(database.get('snub_cube'))
    assert counts.count(3) == 32
    assert counts.count(4) == 6


def test_parametric_constructors():
    assert len(database.prism(12).faces) == 14
    assert len(database.antiprism(3).vertices) == 6
    assert face_vertex_counts(database.trapezohedron(3)) == [4] * 6
    assert database.pyramid(4).name == 'pyramid_4'
    for bad in (2, 0, 3.5, True):
        with pytest.raises(ValueError):
            database.prism(bad)
    with pytest.raises(ValueError):
        database.cupola(6)


def test_pyramid_apex_height():
    tall = database.pyramid(8)
    lo, hi = PolyhedronAnalysis(tall).bounding_box
    assert math.isclose(hi.z - lo.z, 1.0)
