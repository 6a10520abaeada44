"""Simulation tab: state changes are applied on the next frame."""

import pytest

pytest.importorskip("dearpygui.dearpygui")

from cyclo_app.app_state import AppState  # noqa: E402
from cyclo_app.tabs import tab_simulation  # noqa: E402
from cyclo_app.themes import create_themes  # noqa: E402
from cycloid_equations import KinematicMode  # noqa: E402


@pytest.fixture
def sim_plot(dpg_context, monkeypatch):
    monkeypatch.setattr(tab_simulation, "_rebuild_pending", False)
    monkeypatch.setattr(tab_simulation, "_derived_pending", False)
    monkeypatch.setattr(tab_simulation, "_pin_series_count", 0)
    monkeypatch.setattr(tab_simulation, "_first_update", False)

    create_themes()
    with dpg_context.window():
        tab_simulation._create_plot()
    tab_simulation._rebuild_plot()
    AppState.add_change_callback(tab_simulation._on_state_change)
    return dpg_context


def test_pin_count_change_rebuilds_on_tick_only(sim_plot):
    dpg = sim_plot
    assert dpg.does_item_exist("series_sim_pin_11")

    AppState.set_param("Zp", 6)
    # callback thread only flags the rebuild; series stay until the next frame
    assert dpg.does_item_exist("series_sim_pin_11")
    assert tab_simulation._rebuild_pending

    tab_simulation.tick()
    assert not tab_simulation._rebuild_pending
    assert not dpg.does_item_exist("series_sim_pin_11")
    assert dpg.does_item_exist("series_sim_pin_5")
    assert dpg.does_item_exist("series_sim_disc")


def test_mode_change_is_deferred(sim_plot):
    AppState.set_mode(KinematicMode.FIXED_CYCLOID)
    assert tab_simulation._derived_pending
    assert not tab_simulation._rebuild_pending

    tab_simulation.tick()
    assert not tab_simulation._derived_pending


def test_update_button_requests_rebuild(sim_plot):
    tab_simulation.request_rebuild()
    assert tab_simulation._rebuild_pending
    tab_simulation.tick()
    assert not tab_simulation._rebuild_pending


def test_tick_advances_clock_and_moves_disc(sim_plot):
    dpg = sim_plot
    before = dpg.get_value("series_sim_disc")[0][0]
    tab_simulation.tick()
    assert AppState.get_clock().input_angle > 0.0
    assert dpg.get_value("series_sim_disc")[0][0] != before
