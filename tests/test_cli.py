import pytest

from swatch_studio.__main__ import main, parse_anchor
from swatch_studio.colorspace import ColorRGBA


def test_default_ramp(capsys):
    assert main([]) == 0
    lines = capsys.readouterr().out.split()
    assert len(lines) == 8
    assert lines[0] == "#f0e6dc"
    assert lines[-1] == "#141428"


def test_anchor_arguments(capsys):
    assert main(["-n", "3", "0:#ffffff", "1:black"]) == 0
    assert capsys.readouterr().out.split() == ["#ffffff", "#808080", "#000000"]


def test_hue_shift_keeps_length(capsys):
    assert main(["-n", "5", "--space", "oklch", "--hue-shift", "0.5"]) == 0
    assert len(capsys.readouterr().out.split()) == 5


def test_bad_anchor_exits_nonzero(capsys):
    assert main(["0.5-red"]) == 2
    assert main(["x:#ff0000"]) == 2
    assert capsys.readouterr().out == ""


def test_parse_anchor():
    assert parse_anchor("0.25:#102030") == (0.25, ColorRGBA(16, 32, 48))
    with pytest.raises(ValueError):
        parse_anchor("0.25:notacolor")


def test_infinite_param_is_clamped(capsys):
    assert main(["--param", "inf", "-n", "3", "0.5:gray"]) == 0
    assert capsys.readouterr().out.split() == ["#ffffff", "#808080", "#000000"]
    assert main(["--curve", "ease-in", "--param", "-1", "-n", "4"]) == 0
    assert len(capsys.readouterr().out.split()) == 4
