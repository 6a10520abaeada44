"""
Configuration save/load manager.

Stores named gear configurations (parameters, kinematic mode, animation
speed) as JSON files and provides the save/load dialogs.
"""

import dearpygui.dearpygui as dpg
import json
import os
from typing import List, Optional, Tuple

from cyclo_app.app_state import AppState
from cycloid_equations import (
    GearParameters, KinematicMode, InvalidConfigurationError, validate_params,
)

# Configuration directory (next to the package)
CONFIG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "configs")


def ensure_config_dir(config_dir: str = CONFIG_DIR):
    """Ensure the config directory exists."""
    os.makedirs(config_dir, exist_ok=True)


def sanitize_name(name: str) -> str:
    """Strip a config name down to a safe file stem."""
    return "".join(c for c in name if c.isalnum() or c in " _-").strip()


def list_configs(config_dir: str = CONFIG_DIR) -> List[str]:
    """List all available configuration files."""
    ensure_config_dir(config_dir)
    try:
        files = [f[:-5] for f in os.listdir(config_dir) if f.endswith(".json")]
        return sorted(files)
    except OSError:
        return []


def save_config(name: str, params: GearParameters, mode: KinematicMode,
                speed: float = 1.0, config_dir: str = CONFIG_DIR) -> bool:
    """
    Save a parameter set to a named JSON config file.

    Returns True on success, False on failure.
    """
    ensure_config_dir(config_dir)

    safe_name = sanitize_name(name)
    if not safe_name:
        return False

    config_data = {
        "name": name,
        "params": params.as_dict(),
        "mode": mode.value,
        "speed": speed,
    }

    filepath = os.path.join(config_dir, f"{safe_name}.json")
    try:
        with open(filepath, "w") as f:
            json.dump(config_data, f, indent=2)
        return True
    except OSError as e:
        print(f"Error saving config: {e}")
        return False


def load_config(name: str, config_dir: str = CONFIG_DIR) -> Optional[Tuple[GearParameters, KinematicMode, float]]:
    """
    Load a saved JSON config file.

    The stored parameters are revalidated; a file describing an invalid
    drive is rejected rather than clamped.

    Returns (params, mode, speed), or None on failure.
    """
    filepath = os.path.join(config_dir, f"{name}.json")
    try:
        with open(filepath, "r") as f:
            config_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error loading config: {e}")
        return None

    if not isinstance(config_data, dict):
        print(f"Error loading config '{name}': expected a JSON object")
        return None

    try:
        params = validate_params(config_data.get("params", {}))
        mode = KinematicMode(config_data.get("mode", KinematicMode.FIXED_PINS.value))
        speed = float(config_data.get("speed", 1.0))
    except (InvalidConfigurationError, ValueError, TypeError) as e:
        print(f"Error loading config '{name}': {e}")
        return None

    return params, mode, speed


def delete_config(name: str, config_dir: str = CONFIG_DIR) -> bool:
    """
    Delete a configuration file.

    Returns True on success, False on failure.
    """
    filepath = os.path.join(config_dir, f"{name}.json")
    try:
        os.remove(filepath)
        return True
    except OSError as e:
        print(f"Error deleting config: {e}")
        return False


def apply_config(name: str, config_dir: str = CONFIG_DIR) -> bool:
    """Load a config and push it into the application state."""
    loaded = load_config(name, config_dir)
    if loaded is None:
        return False

    params, mode, speed = loaded
    AppState.update_params(params.as_dict())
    AppState.set_mode(mode)
    AppState.get_clock().speed = speed
    if dpg.does_item_exist("tab_sim_speed"):
        dpg.set_value("tab_sim_speed", speed)
    return True


def _refresh_config_list(listbox_tag: str):
    """Refresh the config listbox with current files."""
    dpg.configure_item(listbox_tag, items=list_configs())


def show_save_dialog():
    """Show the save configuration dialog."""
    if dpg.does_item_exist("save_dialog"):
        dpg.delete_item("save_dialog")

    configs = list_configs()

    def on_save():
        name = dpg.get_value("save_name_input")
        if not name or not name.strip():
            dpg.configure_item("save_status", default_value="Please enter a name", color=(255, 100, 100))
            return

        safe_name = sanitize_name(name)
        if safe_name in list_configs():
            dpg.configure_item("save_status", default_value=f"Overwriting '{safe_name}'...", color=(255, 200, 100))

        ok = save_config(name, AppState.get_params(), AppState.get_mode(), AppState.get_clock().speed)
        if ok:
            dpg.configure_item("save_status", default_value=f"Saved '{safe_name}'", color=(100, 255, 100))
            _refresh_config_list("save_config_list")
            dpg.split_frame()
            dpg.delete_item("save_dialog")
        else:
            dpg.configure_item("save_status", default_value="Save failed!", color=(255, 100, 100))

    def on_delete():
        selected = dpg.get_value("save_config_list")
        if not selected:
            dpg.configure_item("save_status", default_value="Select a config to delete", color=(255, 200, 100))
            return

        if delete_config(selected):
            dpg.configure_item("save_status", default_value=f"Deleted '{selected}'", color=(100, 255, 100))
            _refresh_config_list("save_config_list")
            dpg.set_value("save_name_input", "")
        else:
            dpg.configure_item("save_status", default_value="Delete failed!", color=(255, 100, 100))

    def on_select():
        selected = dpg.get_value("save_config_list")
        if selected:
            dpg.set_value("save_name_input", selected)

    with dpg.window(
        label="Save Configuration",
        tag="save_dialog",
        modal=True,
        width=450,
        height=500,
        pos=(dpg.get_viewport_width() // 2 - 225, dpg.get_viewport_height() // 2 - 250),
        no_collapse=True,
    ):
        dpg.add_text("Existing Configurations:", color=(180, 180, 255))
        dpg.add_spacer(height=5)

        dpg.add_listbox(
            items=configs,
            tag="save_config_list",
            width=-1,
            num_items=12,
            callback=lambda: on_select()
        )

        dpg.add_spacer(height=10)
        dpg.add_text("File name:")
        dpg.add_input_text(
            tag="save_name_input",
            width=-1,
            hint="Enter configuration name...",
            on_enter=True,
            callback=lambda: on_save()
        )

        dpg.add_spacer(height=10)
        with dpg.group(horizontal=True):
            dpg.add_button(label="Save", callback=on_save, width=100)
            dpg.add_button(label="Delete", callback=on_delete, width=100)
            dpg.add_button(label="Cancel", callback=lambda: dpg.delete_item("save_dialog"), width=100)

        dpg.add_spacer(height=5)
        dpg.add_text("", tag="save_status", color=(150, 150, 150))


def show_load_dialog():
    """Show the load configuration dialog."""
    if dpg.does_item_exist("load_dialog"):
        dpg.delete_item("load_dialog")

    configs = list_configs()

    if not configs:
        with dpg.window(
            label="Load Configuration",
            tag="load_dialog",
            modal=True,
            width=300,
            height=120,
            pos=(dpg.get_viewport_width() // 2 - 150, dpg.get_viewport_height() // 2 - 60),
            no_resize=True,
            no_collapse=True,
        ):
            dpg.add_text("No saved configurations found.")
            dpg.add_spacer(height=20)
            dpg.add_button(label="OK", callback=lambda: dpg.delete_item("load_dialog"), width=-1)
        return

    def on_load():
        selected = dpg.get_value("load_config_list")
        if not selected:
            dpg.configure_item("load_status", default_value="Select a configuration", color=(255, 200, 100))
            return

        if apply_config(selected):
            dpg.configure_item("load_status", default_value=f"Loaded '{selected}'", color=(100, 255, 100))
            dpg.split_frame()
            dpg.delete_item("load_dialog")
        else:
            dpg.configure_item("load_status", default_value="Load failed (invalid or unreadable)", color=(255, 100, 100))

    def on_delete():
        selected = dpg.get_value("load_config_list")
        if not selected:
            dpg.configure_item("load_status", default_value="Select a config to delete", color=(255, 200, 100))
            return

        if delete_config(selected):
            dpg.configure_item("load_status", default_value=f"Deleted '{selected}'", color=(100, 255, 100))
            _refresh_config_list("load_config_list")
        else:
            dpg.configure_item("load_status", default_value="Delete failed!", color=(255, 100, 100))

    with dpg.window(
        label="Load Configuration",
        tag="load_dialog",
        modal=True,
        width=450,
        height=450,
        pos=(dpg.get_viewport_width() // 2 - 225, dpg.get_viewport_height() // 2 - 225),
        no_collapse=True,
    ):
        dpg.add_text("Select a Configuration:", color=(180, 180, 255))
        dpg.add_spacer(height=5)

        dpg.add_listbox(
            items=configs,
            tag="load_config_list",
            width=-1,
            num_items=14,
        )

        dpg.add_spacer(height=10)
        with dpg.group(horizontal=True):
            dpg.add_button(label="Load", callback=on_load, width=100)
            dpg.add_button(label="Delete", callback=on_delete, width=100)
            dpg.add_button(label="Cancel", callback=lambda: dpg.delete_item("load_dialog"), width=100)

        dpg.add_spacer(height=5)
        dpg.add_text("", tag="load_status", color=(150, 150, 150))
