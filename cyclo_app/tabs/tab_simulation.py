"""
Simulation tab - animated cycloidal drive

Draws the pin ring, housing, disc, eccentric bearing and input shaft under
the placement of the current frame.  tick() is called once per rendered
frame by the main loop.
"""

import dearpygui.dearpygui as dpg
import math

from cycloid_equations import build_scene, derived_quantities, PROFILE_SAMPLES

from cyclo_app.app_state import AppState, scaled
from cyclo_app.themes import get_color
from cyclo_app.widgets.parameter_panel import (
    create_parameter_panel, create_mode_selector, create_animation_controls, create_button_row
)
from cyclo_app.widgets.output_panel import (
    create_output_panel, update_output_values, set_undercut_warning,
    create_info_text, update_info_text, create_legend
)

TAG = "tab_sim"
Y_AXIS = "tab_sim_y"

# Fixed series that exist regardless of pin count
_STATIC_SERIES = [
    ("series_sim_housing", "Housing", "theme_line_housing"),
    ("series_sim_disc", "Cycloid disc", "theme_line_disc"),
    ("series_sim_bearing", "Eccentric bearing", "theme_line_bearing"),
    ("series_sim_marker", "Disc reference", "theme_line_marker"),
    ("series_sim_eccentric", "Input shaft", "theme_line_eccentric"),
]

# Module-level state
_pin_series_count = 0
_first_update = True

# Set from the callback thread, consumed by tick() on the render thread
_rebuild_pending = False
_derived_pending = False


def create_tab_simulation():
    """Create the Simulation tab content."""
    with dpg.group(horizontal=True):
        # Left panel - Parameters
        with dpg.child_window(width=scaled(340), border=True):
            create_parameter_panel(
                tag_prefix=TAG,
                on_change=_on_param_change,
                on_error=_on_param_error
            )

            create_mode_selector(TAG, on_change=_on_mode_change)
            create_animation_controls(TAG)

            create_button_row(
                tag_prefix="sim",
                on_update=request_rebuild,
                on_reset=_reset_and_update
            )

            create_output_panel(
                tag_prefix=TAG,
                tab_type="simulation"
            )

            create_legend(TAG, [
                ("Cycloid disc", get_color("disc")),
                ("Ring pins", get_color("pin")),
                ("Housing", get_color("housing")),
                ("Input shaft / bearing", get_color("eccentric")),
            ])

            create_info_text(TAG, "Running.")

        # Right panel - Plot
        with dpg.child_window(width=-1, border=True):
            _create_plot()

    AppState.add_change_callback(_on_state_change)
    _rebuild_plot()


def _create_plot():
    """Create the visualization plot (pan/zoom handled by the plot)."""
    with dpg.plot(
        label="Cycloidal Drive",
        tag="tab_sim_plot",
        width=-1,
        height=-1,
        equal_aspects=True,
        anti_aliased=True
    ):
        dpg.add_plot_axis(dpg.mvXAxis, label="X (mm)", tag="tab_sim_x")
        dpg.add_plot_axis(dpg.mvYAxis, label="Y (mm)", tag=Y_AXIS)


def _clear_plot_series():
    """Delete every series owned by this tab."""
    global _pin_series_count
    for tag, _, _ in _STATIC_SERIES:
        if dpg.does_item_exist(tag):
            dpg.delete_item(tag)
    for i in range(_pin_series_count):
        tag = f"series_sim_pin_{i}"
        if dpg.does_item_exist(tag):
            dpg.delete_item(tag)
    _pin_series_count = 0


def _rebuild_plot():
    """Recreate all series (pin count may have changed), then draw."""
    global _pin_series_count, _first_update

    _clear_plot_series()

    params = AppState.get_params()
    for i in range(params.Zp):
        tag = f"series_sim_pin_{i}"
        dpg.add_line_series([], [], tag=tag, parent=Y_AXIS)
        dpg.bind_item_theme(tag, "theme_line_pin")
    _pin_series_count = params.Zp

    for tag, label, theme in _STATIC_SERIES:
        dpg.add_line_series([], [], label=label, tag=tag, parent=Y_AXIS)
        dpg.bind_item_theme(tag, theme)

    _draw_frame()
    _update_derived_outputs()

    if _first_update:
        dpg.fit_axis_data("tab_sim_x")
        dpg.fit_axis_data(Y_AXIS)
        _first_update = False


def _set_series(tag: str, pts):
    if dpg.does_item_exist(tag):
        dpg.set_value(tag, [pts[:, 0].tolist(), pts[:, 1].tolist()])


def _draw_frame():
    """Recompute the scene at the clock's current angle and push it to the plot."""
    clock = AppState.get_clock()
    params = AppState.get_params()
    mode = AppState.get_mode()

    scene = build_scene(clock.input_angle, params, mode, samples=PROFILE_SAMPLES)

    _set_series("series_sim_housing", scene["housing_xy"])
    _set_series("series_sim_disc", scene["disc_xy"])
    _set_series("series_sim_bearing", scene["bearing_xy"])
    _set_series("series_sim_marker", scene["disc_marker_xy"])
    _set_series("series_sim_eccentric", scene["eccentric_xy"])
    for i, pin_xy in enumerate(scene["pins_xy"][:_pin_series_count]):
        _set_series(f"series_sim_pin_{i}", pin_xy)

    place = scene["placement"]
    update_output_values(TAG, {
        "input_angle": math.degrees(clock.input_angle) % 360.0,
        "pin_group_angle": math.degrees(place.pin_group_angle) % 360.0,
        "disc_rotation": math.degrees(place.disc_rotation) % 360.0,
        "disc_center": place.disc_center,
    })

    angle_tag = f"{TAG}_angle_text"
    if dpg.does_item_exist(angle_tag):
        dpg.set_value(angle_tag, f"Input angle: {math.degrees(clock.input_angle):.1f}°")


def _update_derived_outputs():
    """Refresh ratio, direction, K1 and the undercut warning."""
    params = AppState.get_params()
    derived = derived_quantities(params.R, params.Zp, params.rp, params.e, AppState.get_mode())

    update_output_values(TAG, {
        "ratio": derived.ratio_text,
        "direction": derived.rotation_direction.label,
        "k1": derived.eccentricity_factor,
        "Zc": params.Zc,
        "pin_pitch": params.R / params.Zp,
    })
    set_undercut_warning(TAG, derived.undercut_warning)

    from cyclo_app.main import update_mode
    update_mode(AppState.get_mode().label)


def request_rebuild():
    """Ask the next tick() to recreate the series."""
    global _rebuild_pending
    _rebuild_pending = True


def tick():
    """Apply pending changes, advance the clock one frame and redraw.

    Series are only deleted and recreated here, so widget callbacks never
    race the per-frame set_value calls.
    """
    global _rebuild_pending, _derived_pending

    if _rebuild_pending:
        _rebuild_pending = False
        _derived_pending = False
        _rebuild_plot()
    elif _derived_pending:
        _derived_pending = False
        _update_derived_outputs()

    if not dpg.does_item_exist("series_sim_disc"):
        return
    AppState.get_clock().advance()
    _draw_frame()


def _on_state_change(key, value):
    """Parameters or mode changed anywhere in the app."""
    global _derived_pending
    if key == "mode":
        _derived_pending = True
    else:
        request_rebuild()


def _on_param_change():
    update_info_text(TAG, "Running.", color=(100, 255, 100))


def _on_param_error(message: str):
    update_info_text(TAG, f"Invalid configuration: {message}", color=(255, 100, 100))


def _on_mode_change():
    update_info_text(TAG, f"Mode: {AppState.get_mode().label}", color=(100, 255, 100))


def _reset_and_update():
    """Reset and update."""
    AppState.reset_to_defaults()
    update_info_text(TAG, "Parameters reset.", color=(100, 255, 100))
