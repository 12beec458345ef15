import json

import pytest

from yapoly.cli import main


def test_list_family(capsys):
    assert main(['list', '--family', 'platonic']) == 0
    out = capsys.readouterr().out.split()
    assert out == ['tetrahedron', 'cube', 'octahedron', 'dodecahedron', 'icosahedron']


def test_list_all(capsys):
    assert main(['list']) == 0
    lines = capsys.readouterr().out.splitlines()
    assert any(line.split() == ['archimedean', 'snub_cube'] for line in lines)


def test_info_json(capsys):
    assert main(['info', 'cube', '--json']) == 0
    info = json.loads(capsys.readouterr().out)
    assert info['name'] == 'cube'
    assert info['family'] == 'platonic'
    assert (info['vertices'], info['edges'], info['faces']) == (8, 12, 6)
    assert info['volume'] == pytest.approx(1.0)
    assert info['surface_area'] == pytest.approx(6.0)


def test_info_text(capsys):
    assert main(['info', 'prism_5']) == 0
    out = capsys.readouterr().out
    assert 'faces:         7' in out
    assert '2x5-gon' in out
    assert '5x4-gon' in out


def test_unknown_solid(capsys):
    assert main(['info', 'hypercube']) == 1
    assert 'hypercube' in capsys.readouterr().err


def test_bad_family_exits():
    with pytest.raises(SystemExit):
        main(['list', '--family', 'kepler_poinsot'])
