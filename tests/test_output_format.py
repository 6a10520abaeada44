"""Text formatting of the output panel values."""

import pytest

pytest.importorskip("dearpygui.dearpygui")

from cyclo_app.widgets.output_panel import format_output  # noqa: E402


def test_float_with_unit():
    text = format_output("r_max", 75.12345)
    assert "75.123" in text
    assert text.endswith("mm")


def test_tiny_float_keeps_precision():
    assert "0.000050" in format_output("k1", 0.00005)


def test_bool_and_text():
    assert format_output("unknown_flag", True) == "unknown_flag: yes"
    assert format_output("ratio", "1 : 11").endswith("1 : 11")


def test_tuple_is_joined():
    assert "(4.000, 0.000)" in format_output("disc_center", (4.0, 0.0))
