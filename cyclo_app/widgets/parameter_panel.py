"""
Reusable parameter input panel widget.

Provides collapsible parameter groups with validation and tooltips, the
kinematic mode selector and the animation controls.
"""

import dearpygui.dearpygui as dpg
from typing import Callable, Optional

from cyclo_app.app_state import (
    AppState, PARAM_GROUPS, get_param_label, get_param_tooltip, scaled
)
from cycloid_equations import InvalidConfigurationError, KinematicMode, MODE_LABELS


def create_parameter_panel(
    tag_prefix: str,
    on_change: Optional[Callable] = None,
    on_error: Optional[Callable] = None
):
    """
    Create a parameter input panel with collapsible groups.

    Args:
        tag_prefix: Prefix for widget tags (e.g., "tab_sim")
        on_change: Callback when a parameter is committed
        on_error: Callback(message) when an edit is rejected
    """
    dpg.add_text("Parameters", color=(180, 180, 255))
    dpg.add_separator()
    dpg.add_spacer(height=5)

    for group_name, param_keys in PARAM_GROUPS.items():
        with dpg.collapsing_header(label=group_name, default_open=True):
            for key in param_keys:
                _create_param_input(
                    key=key,
                    tag_prefix=tag_prefix,
                    on_change=on_change,
                    on_error=on_error
                )
            dpg.add_spacer(height=3)


def _create_param_input(
    key: str,
    tag_prefix: str,
    on_change: Optional[Callable] = None,
    on_error: Optional[Callable] = None
):
    """Create a single parameter input with label and tooltip."""
    label = get_param_label(key)
    tooltip = get_param_tooltip(key)
    value = AppState.get_param(key)
    input_tag = f"{tag_prefix}_param_{key}"

    with dpg.table(header_row=False, borders_innerH=False, borders_innerV=False,
                   borders_outerH=False, borders_outerV=False, policy=dpg.mvTable_SizingStretchProp):
        dpg.add_table_column(width_stretch=True, init_width_or_weight=1.0)
        dpg.add_table_column(width_fixed=True, init_width_or_weight=scaled(130))

        with dpg.table_row():
            dpg.add_text(label, indent=10)

            if key == "Zp":
                # No min clamp: Zp < 2 must be rejected, not silently fixed
                dpg.add_input_int(
                    tag=input_tag,
                    default_value=int(value),
                    width=scaled(120)
                )
            else:
                dpg.add_input_float(
                    tag=input_tag,
                    default_value=float(value),
                    width=scaled(120),
                    step=0.5,
                    format="%.3f"
                )

    # Commit on deactivation (click away or Enter)
    handler_tag = f"{input_tag}_handler"
    if dpg.does_item_exist(handler_tag):
        dpg.delete_item(handler_tag)
    with dpg.item_handler_registry(tag=handler_tag):
        dpg.add_item_deactivated_after_edit_handler(
            callback=_make_param_callback(key, on_change, on_error, input_tag)
        )
    dpg.bind_item_handler_registry(input_tag, handler_tag)

    if tooltip:
        with dpg.tooltip(parent=input_tag):
            dpg.add_text(tooltip, wrap=250)


def _make_param_callback(key: str, on_change: Optional[Callable],
                         on_error: Optional[Callable], widget_tag: str):
    """Create a callback that validates and commits a parameter edit."""
    def callback(sender, app_data, user_data=None):
        value = dpg.get_value(widget_tag)

        if value is None:
            return

        try:
            AppState.set_param(key, value, record_undo=True)
        except InvalidConfigurationError as e:
            dpg.bind_item_theme(widget_tag, "theme_input_error")
            if on_error:
                on_error(str(e))
            return

        dpg.bind_item_theme(widget_tag, "theme_input_valid")
        if on_change:
            on_change()

    return callback


def create_mode_selector(tag_prefix: str, on_change: Optional[Callable] = None):
    """Radio buttons choosing which body is held fixed."""
    dpg.add_spacer(height=5)
    dpg.add_text("Kinematics", color=(180, 180, 255))
    dpg.add_separator()

    labels = [MODE_LABELS[m] for m in KinematicMode]

    def callback(sender, app_data, user_data=None):
        mode = next(m for m in KinematicMode if MODE_LABELS[m] == app_data)
        AppState.set_mode(mode)
        if on_change:
            on_change()

    dpg.add_radio_button(
        items=labels,
        tag=f"{tag_prefix}_mode",
        default_value=AppState.get_mode().label,
        horizontal=True,
        callback=callback
    )
    dpg.add_text(AppState.get_mode().description, tag=f"{tag_prefix}_mode_desc",
                 color=(150, 150, 150))


def create_animation_controls(tag_prefix: str):
    """Speed slider plus pause and reset buttons for the simulation clock."""
    clock = AppState.get_clock()

    dpg.add_spacer(height=10)
    dpg.add_text("Animation", color=(180, 180, 255))
    dpg.add_separator()

    dpg.add_slider_float(
        label="Speed",
        tag=f"{tag_prefix}_speed",
        default_value=clock.speed,
        min_value=0.0,
        max_value=5.0,
        width=scaled(200),
        callback=lambda s, a: setattr(clock, "speed", float(a))
    )

    def toggle_pause():
        running = clock.toggle()
        dpg.configure_item(f"btn_pause_{tag_prefix}", label="Pause" if running else "Resume")

    def reset_angle():
        # Redrawn by the next tick(), paused or not
        clock.reset()

    with dpg.group(horizontal=True):
        pause_btn = dpg.add_button(
            label="Pause",
            tag=f"btn_pause_{tag_prefix}",
            callback=toggle_pause,
            width=scaled(95)
        )
        dpg.bind_item_theme(pause_btn, "theme_button_pause")

        reset_btn = dpg.add_button(
            label="Zero Angle",
            callback=reset_angle,
            width=scaled(95)
        )
        dpg.bind_item_theme(reset_btn, "theme_button_reset")

    dpg.add_text("Input angle: 0.0°", tag=f"{tag_prefix}_angle_text", color=(150, 150, 150))


def create_button_row(
    tag_prefix: str,
    on_update: Callable,
    on_reset: Optional[Callable] = None,
    include_export: bool = False,
    on_export: Optional[Callable] = None
):
    """
    Create a row of action buttons.

    Args:
        tag_prefix: Prefix for widget tags
        on_update: Callback for Update button
        on_reset: Callback for Reset button (defaults to AppState.reset_to_defaults)
        include_export: Whether to include Export button
        on_export: Callback for Export button
    """
    dpg.add_spacer(height=10)

    with dpg.group(horizontal=True):
        update_btn = dpg.add_button(
            label="Update",
            tag=f"btn_update_{tag_prefix}",
            callback=on_update,
            width=scaled(95)
        )
        dpg.bind_item_theme(update_btn, "theme_button_update")

        reset_callback = on_reset if on_reset else lambda: AppState.reset_to_defaults()
        reset_btn = dpg.add_button(
            label="Reset",
            callback=reset_callback,
            width=scaled(95)
        )
        dpg.bind_item_theme(reset_btn, "theme_button_reset")

        if include_export and on_export:
            export_btn = dpg.add_button(
                label="Export",
                callback=on_export,
                width=scaled(95)
            )
            dpg.bind_item_theme(export_btn, "theme_button_export")
