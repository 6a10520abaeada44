"""
DearPyGui Application - Cycloidal Drive Simulator

Entry point.  Runs a manual render loop so the simulation clock advances
exactly once per displayed frame.
"""

import dearpygui.dearpygui as dpg
import sys
import os
import ctypes


def set_windows_dark_titlebar():
    """Enable dark mode for the window title bar on Windows 10/11."""
    if sys.platform != "win32":
        return
    try:
        hwnd = ctypes.windll.user32.GetActiveWindow()
        DWMWA_USE_IMMERSIVE_DARK_MODE = 20
        value = ctypes.c_int(1)
        ctypes.windll.dwmapi.DwmSetWindowAttribute(
            hwnd, DWMWA_USE_IMMERSIVE_DARK_MODE,
            ctypes.byref(value), ctypes.sizeof(value)
        )
    except Exception:
        pass


# Get DPI scale factor and enable DPI awareness on Windows
_dpi_scale = 1.0
if sys.platform == "win32":
    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(2)  # Per-monitor DPI aware
        user32 = ctypes.windll.user32
        user32.SetProcessDPIAware()
        dc = user32.GetDC(0)
        dpi = ctypes.windll.gdi32.GetDeviceCaps(dc, 88)  # LOGPIXELSX
        user32.ReleaseDC(0, dc)
        _dpi_scale = dpi / 96.0
    except Exception:
        try:
            ctypes.windll.user32.SetProcessDPIAware()
        except Exception:
            pass

# Add parent directory to path so the script also runs from a source checkout
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cyclo_app.themes import create_themes, setup_fonts
from cyclo_app.app_state import AppState, set_dpi_scale
from cyclo_app.config_manager import show_save_dialog, show_load_dialog
from cyclo_app.tabs.tab_simulation import create_tab_simulation, tick
from cyclo_app.tabs.tab_profile import create_tab_profile, export_profile


def create_menu_bar():
    """Create the application menu bar."""
    with dpg.menu_bar():
        with dpg.menu(label="File"):
            dpg.add_menu_item(label="Save Config...", callback=lambda: show_save_dialog())
            dpg.add_menu_item(label="Load Config...", callback=lambda: show_load_dialog())
            dpg.add_menu_item(label="Export Disc Profile...", callback=lambda: export_profile())
            dpg.add_separator()
            dpg.add_menu_item(label="Exit", callback=lambda: dpg.stop_dearpygui())

        with dpg.menu(label="Edit"):
            dpg.add_menu_item(label="Undo", callback=lambda: AppState.undo())
            dpg.add_menu_item(label="Redo", callback=lambda: AppState.redo())

        with dpg.menu(label="View"):
            dpg.add_menu_item(label="Fit All Axes", callback=fit_current_plot, shortcut="Home")
            dpg.add_menu_item(label="Pause / Resume", callback=toggle_pause, shortcut="Space")
            dpg.add_menu_item(label="Reset Parameters", callback=lambda: AppState.reset_to_defaults())


def create_status_bar():
    """Create the bottom status bar."""
    with dpg.group(horizontal=True, tag="status_bar"):
        dpg.add_text("Ready", tag="status_text")
        dpg.add_spacer(width=30)
        dpg.add_text("Points: 0", tag="point_count")
        dpg.add_spacer(width=30)
        dpg.add_text("Mode: --", tag="mode_text")


def _current_tab() -> str:
    """Alias of the selected tab (the tab bar value may be a numeric id)."""
    value = dpg.get_value("main_tabs")
    if isinstance(value, int):
        return dpg.get_item_alias(value)
    return value


def fit_current_plot():
    """Fit the current tab's plot to its data."""
    current_tab = _current_tab()
    tab_axes = {
        "tab_simulation": ("tab_sim_x", "tab_sim_y"),
        "tab_profile": ("tab_prof_x", "tab_prof_y"),
    }
    if current_tab in tab_axes:
        for axis in tab_axes[current_tab]:
            if dpg.does_item_exist(axis):
                dpg.fit_axis_data(axis)


def toggle_pause():
    """Pause or resume the simulation clock."""
    running = AppState.get_clock().toggle()
    if dpg.does_item_exist("btn_pause_tab_sim"):
        dpg.configure_item("btn_pause_tab_sim", label="Pause" if running else "Resume")
    update_status("Running" if running else "Paused")


def setup_keyboard_shortcuts():
    """Register global keyboard shortcuts."""
    with dpg.handler_registry(tag="global_handlers"):
        dpg.add_key_press_handler(dpg.mvKey_F5, callback=update_current_tab)
        dpg.add_key_press_handler(dpg.mvKey_Home, callback=lambda: fit_current_plot())
        dpg.add_key_press_handler(dpg.mvKey_Spacebar, callback=lambda: toggle_pause())


def update_current_tab():
    """Trigger update on the currently active tab."""
    current_tab = _current_tab()
    callback_map = {
        "tab_simulation": "btn_update_sim",
        "tab_profile": "btn_update_prof",
    }
    if current_tab in callback_map:
        btn_tag = callback_map[current_tab]
        if dpg.does_item_exist(btn_tag):
            callback = dpg.get_item_callback(btn_tag)
            if callback:
                callback()


def update_status(text: str):
    if dpg.does_item_exist("status_text"):
        dpg.set_value("status_text", text)


def update_point_count(count: int):
    if dpg.does_item_exist("point_count"):
        dpg.set_value("point_count", f"Points: {count:,}")


def update_mode(mode: str):
    if dpg.does_item_exist("mode_text"):
        dpg.set_value("mode_text", f"Mode: {mode}")


def create_main_window():
    """Create the main application window with all tabs."""
    with dpg.window(tag="primary_window"):
        create_menu_bar()

        with dpg.tab_bar(tag="main_tabs"):
            with dpg.tab(label="Simulation", tag="tab_simulation"):
                create_tab_simulation()

            with dpg.tab(label="Disc Profile", tag="tab_profile"):
                create_tab_profile()

        dpg.add_separator()
        create_status_bar()


def main():
    """Main entry point for the application."""
    dpg.create_context()

    set_dpi_scale(_dpi_scale)
    setup_fonts(_dpi_scale)
    create_themes()

    AppState.initialize()

    dpg.create_viewport(
        title="Cycloidal Drive Simulator",
        width=int(1400 * _dpi_scale),
        height=int(900 * _dpi_scale),
        min_width=int(1000 * _dpi_scale),
        min_height=int(700 * _dpi_scale)
    )

    create_main_window()
    dpg.bind_theme("theme_main")
    dpg.set_primary_window("primary_window", True)
    setup_keyboard_shortcuts()

    dpg.setup_dearpygui()
    dpg.show_viewport()

    set_windows_dark_titlebar()
    update_status("Running")
    update_mode(AppState.get_mode().label)

    # One kinematics pass per displayed frame
    while dpg.is_dearpygui_running():
        tick()
        dpg.render_dearpygui_frame()

    dpg.destroy_context()


if __name__ == "__main__":
    main()
