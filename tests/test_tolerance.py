import math

import pytest

from yapoly.tolerance import (
    DEFAULT_TOLERANCE,
    Tolerance,
    area_eps,
    as_tolerance,
    diagonal,
    length_eps,
    volume_eps,
)


def test_diagonal_of_box():
    assert math.isclose(diagonal([(0, 0), (3, 4)]), 5.0)
    assert math.isclose(diagonal([(0, 0, 0), (1, 1, 1), (0.5, 0.2, 0.1)]), math.sqrt(3))
    assert diagonal([]) == 0.0


def test_default_tolerance_scales_with_input():
    small = length_eps(None, [(0, 0), (1, 0)])
    large = length_eps(None, [(0, 0), (1e6, 0)])
    assert small == DEFAULT_TOLERANCE.absolute
    assert math.isclose(large, 1e6 * DEFAULT_TOLERANCE.relative)


def test_bare_float_is_absolute():
    tol = as_tolerance(1e-3)
    assert tol == Tolerance(absolute=1e-3, relative=0.0)
    assert length_eps(1e-3, [(0, 0), (1e6, 0)]) == 1e-3


def test_area_and_volume_thresholds():
    tol = Tolerance(absolute=1e-6, relative=0.0)
    pts = [(0, 0, 0), (2, 0, 0)]
    assert math.isclose(area_eps(tol, pts), 2e-6)
    assert math.isclose(volume_eps(tol, pts), 4e-6)


def test_bad_tolerances():
    with pytest.raises(ValueError):
        Tolerance(absolute=-1.0)
    with pytest.raises(TypeError):
        as_tolerance('tight')
    with pytest.raises(TypeError):
        as_tolerance(True)
