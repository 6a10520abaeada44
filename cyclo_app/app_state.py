"""
Centralized application state management.

Holds the gear parameters, kinematic mode and simulation clock shared by all
tabs, and keeps the DearPyGui parameter widgets of every tab in sync.
"""

import dearpygui.dearpygui as dpg
from typing import Dict, Any, Optional, Callable, List
import copy

# Global DPI scale factor (set by main.py on startup)
_dpi_scale = 1.0


def set_dpi_scale(scale: float):
    """Set the global DPI scale factor."""
    global _dpi_scale
    _dpi_scale = scale


def scaled(value: int) -> int:
    """Scale a pixel value by the DPI scale factor."""
    return int(value * _dpi_scale)


from cycloid_equations import (
    DEFAULTS, PARAM_ORDER, PARAM_LABELS, ANGLE_STEP,
    GearParameters, KinematicMode, validate_params,
)


# Parameter tooltips for user guidance
PARAM_TOOLTIPS = {
    "R": "Pitch-circle radius of the pin ring (mm)",
    "Zp": "Number of ring pins; the disc has Zp - 1 lobes (>= 2)",
    "rp": "Pin radius (mm); keep below R/Zp to avoid undercut",
    "e": "Eccentricity of the input shaft (mm)",
}

# Parameter groupings for collapsible UI sections
PARAM_GROUPS = {
    "Pin Ring": ["R", "Zp", "rp"],
    "Input Shaft": ["e"],
}


class UndoManager:
    """Manages undo/redo history for parameter states."""

    def __init__(self, max_history: int = 50):
        self._history: List[Dict[str, float]] = []
        self._position: int = -1
        self._max_history = max_history

    def push(self, state: Dict[str, float]):
        """Push a new state onto the history stack."""
        # Truncate forward history if we're not at the end
        self._history = self._history[:self._position + 1]
        self._history.append(copy.deepcopy(state))

        if len(self._history) > self._max_history:
            self._history.pop(0)
        else:
            self._position += 1

    def undo(self) -> Optional[Dict[str, float]]:
        """Return the previous state, or None if at beginning."""
        if self._position > 0:
            self._position -= 1
            return copy.deepcopy(self._history[self._position])
        return None

    def redo(self) -> Optional[Dict[str, float]]:
        """Return the next state, or None if at end."""
        if self._position < len(self._history) - 1:
            self._position += 1
            return copy.deepcopy(self._history[self._position])
        return None

    def can_undo(self) -> bool:
        return self._position > 0

    def can_redo(self) -> bool:
        return self._position < len(self._history) - 1

    def clear(self):
        self._history.clear()
        self._position = -1


class SimulationClock:
    """Owns the input-shaft angle and advances it once per frame.

    The step only sets animation speed; the kinematics read the angle and
    never write it back.
    """

    def __init__(self, step: float = ANGLE_STEP):
        self.input_angle = 0.0
        self.base_step = step
        self.speed = 1.0
        self.running = True

    def advance(self) -> float:
        """Advance one frame (no-op while paused) and return the angle."""
        if self.running:
            self.input_angle += self.base_step * self.speed
        return self.input_angle

    def toggle(self) -> bool:
        self.running = not self.running
        return self.running

    def reset(self):
        self.input_angle = 0.0


class AppState:
    """
    Centralized application state manager.

    Parameters are stored as validated GearParameters; every write goes
    through validate_params so an invalid configuration never reaches the
    kinematics.
    """

    # Class-level state (singleton pattern)
    _params: GearParameters = GearParameters(**DEFAULTS)
    _mode: KinematicMode = KinematicMode.FIXED_PINS
    _clock: SimulationClock = SimulationClock()
    _undo_manager: UndoManager = UndoManager()
    _change_callbacks: List[Callable] = []
    _initialized: bool = False

    # Tab prefixes for widget synchronization
    _TAB_PREFIXES = ["tab_sim", "tab_prof"]

    @classmethod
    def initialize(cls):
        """Initialize state with default values."""
        if cls._initialized:
            return

        cls._params = validate_params(DEFAULTS)
        cls._mode = KinematicMode.FIXED_PINS
        cls._clock = SimulationClock()
        cls._undo_manager = UndoManager()
        cls._change_callbacks = []

        cls._undo_manager.push(cls._params.as_dict())
        cls._initialized = True

    @classmethod
    def get_params(cls) -> GearParameters:
        return cls._params

    @classmethod
    def get_param(cls, key: str) -> float:
        return cls._params.as_dict().get(key, 0.0)

    @classmethod
    def set_param(cls, key: str, value: float, record_undo: bool = True):
        """Set a single parameter value.

        Raises InvalidConfigurationError if the resulting parameter set is
        invalid; the stored state is left untouched in that case.
        """
        if key not in PARAM_ORDER:
            return
        candidate = cls._params.as_dict()
        candidate[key] = value
        cls.update_params(candidate, record_undo=record_undo)

    @classmethod
    def update_params(cls, params: Dict[str, float], record_undo: bool = True):
        """Replace the parameter set after validating it."""
        merged = cls._params.as_dict()
        merged.update({k: v for k, v in params.items() if k in PARAM_ORDER})
        new_params = validate_params(merged)
        if new_params == cls._params:
            return

        cls._params = new_params
        cls._sync_widgets()

        if record_undo:
            cls._undo_manager.push(new_params.as_dict())
        cls._notify_change("*", None)

    @classmethod
    def reset_to_defaults(cls):
        """Reset parameters and the clock to their defaults."""
        cls._clock.reset()
        defaults = validate_params(DEFAULTS)
        if defaults == cls._params:
            return

        cls._params = defaults
        cls._sync_widgets()
        cls._undo_manager.push(cls._params.as_dict())
        cls._notify_change("*", None)

    @classmethod
    def get_mode(cls) -> KinematicMode:
        return cls._mode

    @classmethod
    def set_mode(cls, mode: KinematicMode):
        """Switch convention; takes effect on the next frame."""
        if mode == cls._mode:
            return
        cls._mode = mode
        for prefix in cls._TAB_PREFIXES:
            widget_tag = f"{prefix}_mode"
            if dpg.does_item_exist(widget_tag):
                dpg.set_value(widget_tag, mode.label)
            desc_tag = f"{prefix}_mode_desc"
            if dpg.does_item_exist(desc_tag):
                dpg.set_value(desc_tag, mode.description)
        cls._notify_change("mode", mode)

    @classmethod
    def get_clock(cls) -> SimulationClock:
        return cls._clock

    @classmethod
    def undo(cls):
        """Undo the last parameter change."""
        state = cls._undo_manager.undo()
        if state:
            cls.update_params(state, record_undo=False)

    @classmethod
    def redo(cls):
        """Redo the last undone change."""
        state = cls._undo_manager.redo()
        if state:
            cls.update_params(state, record_undo=False)

    @classmethod
    def add_change_callback(cls, callback: Callable):
        """Register a callback for parameter changes."""
        cls._change_callbacks.append(callback)

    @classmethod
    def _notify_change(cls, key: str, value: Any):
        """Notify all registered callbacks of a change."""
        for callback in cls._change_callbacks:
            try:
                callback(key, value)
            except Exception as e:
                print(f"Error in change callback: {e}")

    @classmethod
    def _sync_widgets(cls):
        """Push current parameter values into every tab's inputs."""
        for key, value in cls._params.as_dict().items():
            for prefix in cls._TAB_PREFIXES:
                widget_tag = f"{prefix}_param_{key}"
                if dpg.does_item_exist(widget_tag):
                    dpg.set_value(widget_tag, int(value) if key == "Zp" else float(value))


def get_param_label(key: str) -> str:
    """Get the display label for a parameter."""
    return PARAM_LABELS.get(key, key)


def get_param_tooltip(key: str) -> str:
    """Get the tooltip text for a parameter."""
    return PARAM_TOOLTIPS.get(key, "")


def get_param_groups() -> Dict[str, List[str]]:
    """Get parameter groupings for UI organization."""
    return PARAM_GROUPS.copy()
