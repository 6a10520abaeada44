"""
Disc Profile tab - static cycloid disc outline

Shows the disc outline in its own frame next to the unoffset epitrochoid it
is derived from, and exports the outline to CAD formats.
"""

import dearpygui.dearpygui as dpg
import numpy as np

from cycloid_equations import (
    profile_polygon, base_curve_polygon, circle_points, derived_quantities, PROFILE_SAMPLES
)

from cyclo_app.app_state import AppState, scaled
from cyclo_app.themes import get_color
from cyclo_app.widgets.parameter_panel import create_parameter_panel, create_button_row
from cyclo_app.widgets.output_panel import (
    create_output_panel, update_output_values, set_undercut_warning,
    create_info_text, update_info_text, create_legend
)
from cyclo_app.export_manager import show_export_dialog, EXPORT_FORMATS

TAG = "tab_prof"
Y_AXIS = "tab_prof_y"

# Module-level state
_last_outline = None
_show_base = True
_first_update = True


def create_tab_profile():
    """Create the Disc Profile tab content."""
    with dpg.group(horizontal=True):
        with dpg.child_window(width=scaled(340), border=True):
            # Committed edits reach _update_plot through the AppState callback
            create_parameter_panel(
                tag_prefix=TAG,
                on_error=_on_param_error
            )

            dpg.add_spacer(height=5)
            dpg.add_input_int(
                label="Samples",
                tag=f"{TAG}_samples",
                default_value=PROFILE_SAMPLES,
                min_value=36,
                max_value=36000,
                min_clamped=True,
                max_clamped=True,
                width=scaled(120),
                callback=lambda: _update_plot()
            )

            create_button_row(
                tag_prefix="prof",
                on_update=_update_plot,
                on_reset=_reset_and_update,
                include_export=True,
                on_export=export_profile
            )

            dpg.add_spacer(height=10)
            dpg.add_button(
                label="Hide Base Curve",
                tag="btn_base_prof",
                callback=_toggle_base,
                width=scaled(150)
            )

            create_output_panel(
                tag_prefix=TAG,
                tab_type="profile"
            )

            create_legend(TAG, [
                ("Disc outline", get_color("disc")),
                ("Base epitrochoid", get_color("base_curve")),
                ("Pin circle R", get_color("housing")),
            ])

            create_info_text(TAG, "Disc outline not computed yet.")

        with dpg.child_window(width=-1, border=True):
            _create_plot()

    AppState.add_change_callback(lambda key, value: _update_plot() if key != "mode" else None)
    _update_plot()


def _create_plot():
    with dpg.plot(
        label="Cycloid Disc",
        tag="tab_prof_plot",
        width=-1,
        height=-1,
        equal_aspects=True,
        anti_aliased=True
    ):
        dpg.add_plot_legend(location=dpg.mvPlot_Location_NorthEast)
        dpg.add_plot_axis(dpg.mvXAxis, label="X (mm)", tag="tab_prof_x")
        dpg.add_plot_axis(dpg.mvYAxis, label="Y (mm)", tag=Y_AXIS)


def _clear_plot_series():
    for tag in ["series_prof_disc", "series_prof_base", "series_prof_pitch"]:
        if dpg.does_item_exist(tag):
            dpg.delete_item(tag)


def _add_series(pts: np.ndarray, label: str, tag: str, theme: str):
    dpg.add_line_series(pts[:, 0].tolist(), pts[:, 1].tolist(), label=label, tag=tag, parent=Y_AXIS)
    dpg.bind_item_theme(tag, theme)


def _update_plot():
    """Recompute the outline with current parameters."""
    global _last_outline, _first_update

    params = AppState.get_params()
    n = dpg.get_value(f"{TAG}_samples") if dpg.does_item_exist(f"{TAG}_samples") else PROFILE_SAMPLES

    outline = profile_polygon(params.R, params.Zp, params.rp, params.e, n)
    _last_outline = outline

    _clear_plot_series()
    _add_series(circle_points((0.0, 0.0), params.R), "Pin circle", "series_prof_pitch", "theme_line_housing")
    if _show_base:
        base = base_curve_polygon(params.R, params.Zp, params.e, n)
        _add_series(base, "Base epitrochoid", "series_prof_base", "theme_line_base")
    _add_series(outline, "Disc outline", "series_prof_disc", "theme_line_disc")

    if _first_update:
        dpg.fit_axis_data("tab_prof_x")
        dpg.fit_axis_data(Y_AXIS)
        _first_update = False

    radii = np.hypot(outline[:, 0], outline[:, 1])
    derived = derived_quantities(params.R, params.Zp, params.rp, params.e, AppState.get_mode())
    update_output_values(TAG, {
        "Zc": params.Zc,
        "pin_pitch": params.R / params.Zp,
        "k1": derived.eccentricity_factor,
        "r_min": float(radii.min()),
        "r_max": float(radii.max()),
        "samples": int(n),
    })
    set_undercut_warning(TAG, derived.undercut_warning)

    update_info_text(TAG, f"Disc outline computed: {len(outline)} points", color=(100, 255, 100))

    from cyclo_app.main import update_point_count
    update_point_count(len(outline))


def _toggle_base():
    global _show_base
    _show_base = not _show_base
    dpg.configure_item("btn_base_prof", label="Hide Base Curve" if _show_base else "Show Base Curve")
    _update_plot()


def export_profile():
    """Export the disc outline in the disc's own frame."""
    if _last_outline is None:
        update_info_text(TAG, "No data to export. Click Update first.", color=(255, 200, 100))
        return

    params = AppState.get_params()
    name = f"cycloid_R{params.R:g}_Zp{params.Zp}_rp{params.rp:g}_e{params.e:g}"
    show_export_dialog(name, _last_outline.tolist(), EXPORT_FORMATS, closed=True)


def _on_param_error(message: str):
    update_info_text(TAG, f"Invalid configuration: {message}", color=(255, 100, 100))


def _reset_and_update():
    AppState.reset_to_defaults()
