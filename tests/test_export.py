"""CAD export of the disc outline."""

import pytest

pytest.importorskip("dearpygui.dearpygui")

from cyclo_app.export_manager import (  # noqa: E402
    export_points,
    filter_duplicate_points,
)
from cycloid_equations import profile_polygon  # noqa: E402

SQUARE = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0)]


def test_filter_removes_consecutive_duplicates():
    pts = [(0.0, 0.0), (0.0, 0.0), (1.0, 0.0), (1.0, 1e-12), (2.0, 0.0)]
    filtered, removed = filter_duplicate_points(pts)
    assert filtered == [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)]
    assert removed == 2


def test_filter_empty_input():
    assert filter_duplicate_points([]) == ([], 0)


def test_sldcrv_drops_closing_point(tmp_path):
    path = tmp_path / "square.sldcrv"
    ok, count, removed = export_points(str(path), SQUARE, closed=True)
    assert ok
    assert count == 4
    assert removed == 1
    lines = path.read_text().splitlines()
    assert lines[0] == "0.0,0.0,0"
    assert lines[-1] == "0.0,1.0,0"


def test_open_export_keeps_every_point(tmp_path):
    path = tmp_path / "square.sldcrv"
    ok, count, removed = export_points(str(path), SQUARE, closed=False)
    assert ok and count == 5 and removed == 0


def test_dxf_polyline_structure(tmp_path):
    path = tmp_path / "square.dxf"
    ok, count, _ = export_points(str(path), SQUARE, closed=True)
    assert ok
    text = path.read_text()
    assert "AC1009" in text
    assert text.count("VERTEX") == count
    assert "70\n1\n" in text
    assert text.rstrip().endswith("EOF")


def test_profile_export_is_duplicate_free(tmp_path):
    outline = profile_polygon(80.0, 12, 5.0, 4.0, 720)
    path = tmp_path / "disc.sldcrv"
    ok, count, removed = export_points(str(path), outline.tolist(), closed=True)
    assert ok
    assert count == 720
    assert removed == 1
    assert len(path.read_text().splitlines()) == 720


def test_unsupported_extension_fails(tmp_path):
    path = tmp_path / "disc.stl"
    ok, _, _ = export_points(str(path), SQUARE)
    assert not ok
    assert not path.exists()
