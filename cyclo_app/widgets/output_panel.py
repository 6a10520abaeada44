"""
Reusable output display panel widget.

Provides category dropdown, formatted output values, the undercut warning
line, status text and a colour legend.
"""

import dearpygui.dearpygui as dpg
from typing import Dict, List, Any

from cyclo_app.app_state import scaled
from cyclo_app.themes import get_color


# Output categories for each tab type
OUTPUT_CATEGORIES = {
    "simulation": {
        "Transmission": ["ratio", "direction", "k1"],
        "Placement": ["input_angle", "pin_group_angle", "disc_rotation", "disc_center"],
        "Geometry": ["Zc", "pin_pitch"],
    },
    "profile": {
        "Geometry": ["Zc", "pin_pitch", "k1"],
        "Outline": ["r_min", "r_max", "samples"],
    },
}

# Display labels for output values
OUTPUT_LABELS = {
    "ratio": "Reduction ratio",
    "direction": "Output direction",
    "k1": "Eccentricity K₁",
    "input_angle": "Input angle",
    "pin_group_angle": "Pin ring angle",
    "disc_rotation": "Disc rotation",
    "disc_center": "Disc centre",
    "Zc": "Disc lobes Zc",
    "pin_pitch": "Pin pitch R/Zₚ",
    "r_min": "Outline min radius",
    "r_max": "Outline max radius",
    "samples": "Outline samples",
}

# Units for output values
OUTPUT_UNITS = {
    "input_angle": "°",
    "pin_group_angle": "°",
    "disc_rotation": "°",
    "disc_center": "mm",
    "pin_pitch": "mm",
    "r_min": "mm",
    "r_max": "mm",
}

UNDERCUT_MESSAGE = "Warning: undercut / self-intersecting profile likely"


def create_output_panel(
    tag_prefix: str,
    tab_type: str
):
    """
    Create an output display panel with category dropdown.

    Args:
        tag_prefix: Prefix for widget tags
        tab_type: Type of tab (key in OUTPUT_CATEGORIES)
    """
    categories = OUTPUT_CATEGORIES.get(tab_type, {})
    category_names = list(categories.keys())

    if not category_names:
        dpg.add_text("No output categories defined", color=(150, 150, 150))
        return

    dpg.add_spacer(height=10)
    dpg.add_separator()
    dpg.add_spacer(height=5)

    dpg.add_text("Output", color=(180, 180, 255))
    dpg.add_spacer(height=5)

    dpg.add_combo(
        items=category_names,
        tag=f"{tag_prefix}_output_category",
        default_value=category_names[0],
        width=-1,
        callback=lambda s, a: _show_category_outputs(tag_prefix, tab_type, a)
    )

    dpg.add_spacer(height=5)

    with dpg.child_window(
        tag=f"{tag_prefix}_output_display",
        height=scaled(100),
        border=False
    ):
        # One text widget per output key; a key may appear in several categories
        created = set()
        for keys in categories.values():
            for key in keys:
                if key in created:
                    continue
                created.add(key)
                dpg.add_text(
                    "",
                    tag=f"{tag_prefix}_out_{key}",
                    show=False,
                    color=(200, 200, 200)
                )

    dpg.add_text(
        UNDERCUT_MESSAGE,
        tag=f"{tag_prefix}_warn_undercut",
        color=get_color("error"),
        wrap=scaled(310),
        show=False
    )

    _show_category_outputs(tag_prefix, tab_type, category_names[0])


def _show_category_outputs(tag_prefix: str, tab_type: str, category: str):
    """Show outputs for the selected category, hide others."""
    categories = OUTPUT_CATEGORIES.get(tab_type, {})

    for cat_keys in categories.values():
        for key in cat_keys:
            widget_tag = f"{tag_prefix}_out_{key}"
            if dpg.does_item_exist(widget_tag):
                dpg.configure_item(widget_tag, show=False)

    for key in categories.get(category, []):
        widget_tag = f"{tag_prefix}_out_{key}"
        if dpg.does_item_exist(widget_tag):
            dpg.configure_item(widget_tag, show=True)


def format_output(key: str, value: Any) -> str:
    """Format one output value with its label and unit."""
    label = OUTPUT_LABELS.get(key, key)
    unit = OUTPUT_UNITS.get(key, "")

    if isinstance(value, bool):
        text = f"{label}: {'yes' if value else 'no'}"
    elif isinstance(value, float):
        if abs(value) < 0.0001 and value != 0:
            text = f"{label}: {value:.6f} {unit}"
        else:
            text = f"{label}: {value:.3f} {unit}"
    elif isinstance(value, tuple):
        inner = ", ".join(f"{v:.3f}" for v in value)
        text = f"{label}: ({inner}) {unit}"
    else:
        text = f"{label}: {value}"
    return text.rstrip()


def update_output_values(tag_prefix: str, values: Dict[str, Any]):
    """
    Update output display with new values.

    Args:
        tag_prefix: Widget tag prefix
        values: Dictionary of key -> value pairs
    """
    for key, value in values.items():
        widget_tag = f"{tag_prefix}_out_{key}"
        if dpg.does_item_exist(widget_tag):
            dpg.set_value(widget_tag, format_output(key, value))


def set_undercut_warning(tag_prefix: str, show: bool):
    widget_tag = f"{tag_prefix}_warn_undercut"
    if dpg.does_item_exist(widget_tag):
        dpg.configure_item(widget_tag, show=show)


def create_info_text(tag_prefix: str, initial_text: str = "Ready."):
    """Create a simple info text display."""
    dpg.add_spacer(height=10)
    dpg.add_separator()
    dpg.add_spacer(height=5)

    dpg.add_text("Status", color=(180, 180, 255))
    dpg.add_text(
        initial_text,
        tag=f"{tag_prefix}_info",
        wrap=scaled(310),
        color=(150, 150, 150)
    )


def update_info_text(tag_prefix: str, text: str, color: tuple = None):
    """Update the info text display."""
    widget_tag = f"{tag_prefix}_info"
    if dpg.does_item_exist(widget_tag):
        dpg.set_value(widget_tag, text)
        if color:
            dpg.configure_item(widget_tag, color=color)


def create_legend(tag_prefix: str, items: List[tuple]):
    """
    Create a color legend.

    Args:
        tag_prefix: Widget tag prefix
        items: List of (label, color_tuple) pairs
    """
    dpg.add_spacer(height=10)
    dpg.add_separator()
    dpg.add_spacer(height=5)

    dpg.add_text("Legend", color=(180, 180, 255))
    dpg.add_spacer(height=3)

    for label, color in items:
        with dpg.group(horizontal=True):
            with dpg.drawlist(width=16, height=16):
                dpg.draw_rectangle(
                    (0, 0), (16, 16),
                    fill=color,
                    color=color
                )
            dpg.add_spacer(width=5)
            dpg.add_text(label, color=(180, 180, 180))
