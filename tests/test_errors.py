import pytest

from yapoly import errors


def test_geometry_errors_are_value_errors():
    for name in ('DimensionMismatchError', 'DegenerateVectorError',
                 'CollinearPointsError', 'DegeneratePolygonError',
                 'TriangulationError', 'InvalidPolyhedronError',
                 'ZeroVolumeError', 'NonManifoldError'):
        cls = getattr(errors, name)
        assert issubclass(cls, errors.GeometryError)
        assert issubclass(cls, ValueError)


def test_non_manifold_error_keeps_edges():
    exc = errors.NonManifoldError('bad', [((0, 1), 1), ((1, 2), 3)])
    assert exc.edges == (((0, 1), 1), ((1, 2), 3))
    with pytest.raises(ValueError):
        raise exc


def test_unknown_solid_is_key_error():
    assert issubclass(errors.UnknownSolidError, KeyError)
    assert issubclass(errors.DegeneratePolygonWarning, UserWarning)
