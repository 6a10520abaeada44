"""
Kinematics and profile geometry of a cycloidal (epicycloidal pin-gear) reducer.

The disc outline is the equidistant offset of the epitrochoid

    x0 = R·cos θ − e·cos(Zp·θ)
    y0 = R·sin θ − e·sin(Zp·θ)

pushed inward by the pin radius rp.  The motion model maps one input-shaft
angle φ to the placement of the disc and the pin ring under two fixed-frame
conventions:

    FIXED_PINS     – housing stationary, output taken off the orbiting disc
    FIXED_CYCLOID  – disc phase held, output taken off the rotating housing

Everything here is pure: no timers, no drawing, no widget state.
"""
import math
import numbers
from dataclasses import dataclass
from enum import Enum

import numpy as np
from scipy.interpolate import splprep, splev


# ── Default parameter values ───────────────────────────────────────
DEFAULTS = {
    "R":  80.0,     # pin-circle radius (mm)
    "Zp": 12,       # number of ring pins
    "rp": 5.0,      # pin radius (mm)
    "e":  4.0,      # eccentricity of the input shaft (mm)
}

# Display labels for GUI
PARAM_LABELS = {
    "R":  "Pin circle R",
    "Zp": "Pin count Zₚ",
    "rp": "Pin radius rₚ",
    "e":  "Eccentricity e",
}

# Ordered list of parameter keys for consistent UI ordering
PARAM_ORDER = ["R", "Zp", "rp", "e"]

# Tangent length below which the offset normal is undefined (cusp)
TANGENT_EPS = 1e-6

# Samples per disc outline; plenty for mm-scale display
PROFILE_SAMPLES = 3600

# Input-shaft advance per animation frame (rad)
ANGLE_STEP = 0.02

# Undercut limits: pin radius vs. pin pitch, and K1 approaching a loop
UNDERCUT_PIN_FACTOR = 1.1
UNDERCUT_K1_LIMIT = 0.98

# Visual clearances for housing ring and eccentric bearing bore (mm)
HOUSING_CLEARANCE = 5.0
BEARING_CLEARANCE = 2.0


class InvalidConfigurationError(ValueError):
    """Gear parameters that cannot describe a cycloidal drive."""


# ══════════════════════════════════════════════════════════════════
# Parameters and modes
# ══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class GearParameters:
    """Validated gear parameters.

    Attributes:
        R:  pitch-circle radius of the pin ring (mm, > 0)
        Zp: number of ring pins (integer, >= 2)
        rp: pin radius (mm, >= 0)
        e:  eccentricity of the input shaft (mm, >= 0)
    """

    R: float
    Zp: int
    rp: float
    e: float

    def __post_init__(self):
        for key in ("R", "rp", "e"):
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidConfigurationError(f"{key} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidConfigurationError(f"{key} must be finite, got {value}")
        if isinstance(self.Zp, bool) or not isinstance(self.Zp, int):
            raise InvalidConfigurationError(f"Zp must be an integer, got {self.Zp!r}")
        if self.Zp < 2:
            raise InvalidConfigurationError(f"Zp must be >= 2 (disc needs Zp-1 >= 1 lobes), got {self.Zp}")
        if self.R <= 0:
            raise InvalidConfigurationError(f"R must be positive, got {self.R}")
        if self.rp < 0:
            raise InvalidConfigurationError(f"rp must be non-negative, got {self.rp}")
        if self.e < 0:
            raise InvalidConfigurationError(f"e must be non-negative, got {self.e}")

    @property
    def Zc(self) -> int:
        """Lobe count of the cycloidal disc."""
        return self.Zp - 1

    def as_dict(self) -> dict:
        return {"R": self.R, "Zp": self.Zp, "rp": self.rp, "e": self.e}


def validate_params(params: dict) -> GearParameters:
    """Check a raw parameter dict and return a GearParameters.

    Accepts Zp as an int or an integral float (the GUI stores every value
    as float).  Missing keys, non-integral Zp and out-of-range values raise
    InvalidConfigurationError; nothing is clamped.
    """
    missing = [key for key in PARAM_ORDER if key not in params]
    if missing:
        raise InvalidConfigurationError(f"Missing parameters: {', '.join(missing)}")

    zp = params["Zp"]
    if isinstance(zp, numbers.Integral) and not isinstance(zp, bool):
        zp = int(zp)
    elif isinstance(zp, float):
        if not zp.is_integer():
            raise InvalidConfigurationError(f"Zp must be an integer, got {zp}")
        zp = int(zp)

    return GearParameters(
        R=params["R"],
        Zp=zp,
        rp=params["rp"],
        e=params["e"],
    )


class KinematicMode(Enum):
    """Which body is held as the fixed frame."""

    FIXED_PINS = "STD"
    FIXED_CYCLOID = "RV"

    @property
    def label(self) -> str:
        return MODE_LABELS[self]

    @property
    def description(self) -> str:
        return MODE_DESCRIPTIONS[self]


class RotationDirection(Enum):
    """Sense of the output relative to the input shaft."""

    OPPOSITE = "opposite"
    SAME = "same"

    @property
    def label(self) -> str:
        return "Opposite" if self is RotationDirection.OPPOSITE else "Same"


MODE_LABELS = {
    KinematicMode.FIXED_PINS: "Fixed Pins",
    KinematicMode.FIXED_CYCLOID: "Fixed Cycloid",
}

MODE_DESCRIPTIONS = {
    KinematicMode.FIXED_PINS: "Housing fixed (Fixed Pins)\nOutput: cycloid disc (wobble)",
    KinematicMode.FIXED_CYCLOID: "Disc phase fixed (Wobble)\nOutput: pin housing",
}


# ══════════════════════════════════════════════════════════════════
# Profile generator — equidistant epitrochoid
# ══════════════════════════════════════════════════════════════════

def base_point(theta: float, R: float, Zp: float, e: float) -> tuple[float, float]:
    """Point on the unoffset epitrochoid.

    x0 = R·cos θ − e·cos(Zp·θ)
    y0 = R·sin θ − e·sin(Zp·θ)
    """
    x0 = R * math.cos(theta) - e * math.cos(Zp * theta)
    y0 = R * math.sin(theta) - e * math.sin(Zp * theta)
    return x0, y0


def profile_point(theta: float, R: float, Zp: float, rp: float, e: float) -> tuple[float, float]:
    """Point on the disc outline (epitrochoid offset inward by rp).

    dx/dθ = −R·sin θ + e·Zp·sin(Zp·θ)
    dy/dθ =  R·cos θ − e·Zp·cos(Zp·θ)

    The curve winds counter-clockwise, so rotating the unit tangent by +90°
    gives the inward normal (−dy, dx)/L.  At a cusp (L < TANGENT_EPS) the
    normal is undefined and the base point is returned unchanged.
    """
    x0, y0 = base_point(theta, R, Zp, e)

    dxdt = -R * math.sin(theta) + e * Zp * math.sin(Zp * theta)
    dydt = R * math.cos(theta) - e * Zp * math.cos(Zp * theta)

    length = math.hypot(dxdt, dydt)
    if length < TANGENT_EPS:
        return x0, y0

    nx = -dydt / length
    ny = dxdt / length
    return x0 + rp * nx, y0 + rp * ny


def _theta_samples(n: int) -> np.ndarray:
    # Closed polygon: last sample repeats θ = 2π
    return np.linspace(0.0, 2.0 * np.pi, int(n) + 1)


def base_curve_polygon(R: float, Zp: float, e: float,
                       n: int = PROFILE_SAMPLES) -> np.ndarray:
    """Sample the unoffset epitrochoid over [0, 2π] as an (n+1, 2) array."""
    theta = _theta_samples(n)
    x0 = R * np.cos(theta) - e * np.cos(Zp * theta)
    y0 = R * np.sin(theta) - e * np.sin(Zp * theta)
    return np.column_stack((x0, y0))


def profile_polygon(R: float, Zp: float, rp: float, e: float,
                    n: int = PROFILE_SAMPLES) -> np.ndarray:
    """Sample the disc outline over [0, 2π] as an (n+1, 2) array.

    Vectorised form of profile_point(); samples where the tangent vanishes
    fall back to the base point, one sample at a time.
    """
    theta = _theta_samples(n)
    x0 = R * np.cos(theta) - e * np.cos(Zp * theta)
    y0 = R * np.sin(theta) - e * np.sin(Zp * theta)

    dxdt = -R * np.sin(theta) + e * Zp * np.sin(Zp * theta)
    dydt = R * np.cos(theta) - e * Zp * np.cos(Zp * theta)

    length = np.hypot(dxdt, dydt)
    cusp = length < TANGENT_EPS
    safe_length = np.where(cusp, 1.0, length)
    offset = np.where(cusp, 0.0, rp)

    x = x0 + offset * (-dydt / safe_length)
    y = y0 + offset * (dxdt / safe_length)
    return np.column_stack((x, y))


# ══════════════════════════════════════════════════════════════════
# Kinematics solver
# ══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Placement:
    """Rigid placement of both bodies for one tick.

    pin_group_angle – rotation of the pin ring about the world origin
    disc_center     – disc axis offset from the world origin
    disc_rotation   – disc spin about its own axis
    """

    pin_group_angle: float
    disc_center: tuple[float, float]
    disc_rotation: float


def _disc_center(input_angle: float, e: float) -> tuple[float, float]:
    # Eccentric bearing carries the disc axis around the origin at radius e
    return e * math.cos(input_angle), e * math.sin(input_angle)


def _placement_fixed_pins(input_angle: float, Zp: int, e: float) -> Placement:
    """Housing still; disc counter-rotates once per Zc input turns."""
    zc = Zp - 1
    return Placement(
        pin_group_angle=0.0,
        disc_center=_disc_center(input_angle, e),
        disc_rotation=-input_angle / zc,
    )


def _placement_fixed_cycloid(input_angle: float, Zp: int, e: float) -> Placement:
    """Disc phase held; housing turns with the input at 1/Zp speed."""
    return Placement(
        pin_group_angle=input_angle / Zp,
        disc_center=_disc_center(input_angle, e),
        disc_rotation=0.0,
    )


_PLACEMENT_RULES = {
    KinematicMode.FIXED_PINS: _placement_fixed_pins,
    KinematicMode.FIXED_CYCLOID: _placement_fixed_cycloid,
}


def placement(input_angle: float, R: float, Zp: int, e: float,
              mode: KinematicMode) -> Placement:
    """Place the disc and pin ring for a given input-shaft angle.

    R does not enter the closed-form rules but is part of the contract so
    callers can pass a full parameter set.  Zp >= 2 is the caller's
    responsibility (see validate_params).
    """
    return _PLACEMENT_RULES[mode](input_angle, Zp, e)


@dataclass(frozen=True)
class DerivedQuantities:
    reduction_ratio: int
    rotation_direction: RotationDirection
    eccentricity_factor: float
    undercut_warning: bool

    @property
    def ratio_text(self) -> str:
        return f"1 : {self.reduction_ratio}"


_RATIO_RULES = {
    KinematicMode.FIXED_PINS: (lambda Zp: Zp - 1, RotationDirection.OPPOSITE),
    KinematicMode.FIXED_CYCLOID: (lambda Zp: Zp, RotationDirection.SAME),
}


def eccentricity_factor(R: float, Zp: float, e: float) -> float:
    """Shortening coefficient K1 = e·Zp / R."""
    return e * Zp / R


def derived_quantities(R: float, Zp: int, rp: float, e: float,
                       mode: KinematicMode) -> DerivedQuantities:
    """Ratio, direction and undercut warning for a parameter set.

    The warning fires when the pin is too large for the pin pitch
    (rp > 1.1·R/Zp) or the epitrochoid is about to form a loop (K1 > 0.98).
    """
    ratio_rule, direction = _RATIO_RULES[mode]
    k1 = eccentricity_factor(R, Zp, e)
    warning = rp > UNDERCUT_PIN_FACTOR * (R / Zp) or k1 > UNDERCUT_K1_LIMIT
    return DerivedQuantities(
        reduction_ratio=int(ratio_rule(Zp)),
        rotation_direction=direction,
        eccentricity_factor=k1,
        undercut_warning=bool(warning),
    )


# ══════════════════════════════════════════════════════════════════
# Scene assembly (world-space polylines for one tick)
# ══════════════════════════════════════════════════════════════════

def rigid_transform(points: np.ndarray, rotation: float,
                    offset: tuple[float, float] = (0.0, 0.0)) -> np.ndarray:
    """Rotate (N, 2) points about the local origin, then translate."""
    pts = np.asarray(points, dtype=np.float64)
    c, s = math.cos(rotation), math.sin(rotation)
    rot = np.array([[c, -s], [s, c]])
    return pts @ rot.T + np.asarray(offset, dtype=np.float64)


def circle_points(center: tuple[float, float], radius: float, n: int = 180) -> np.ndarray:
    """Closed circle polyline as an (n+1, 2) array."""
    a = np.linspace(0.0, 2.0 * np.pi, n + 1)
    return np.column_stack((center[0] + radius * np.cos(a),
                            center[1] + radius * np.sin(a)))


def pin_centers(R: float, Zp: int, pin_group_angle: float = 0.0) -> np.ndarray:
    """Pin i sits at angle 2π·i/Zp + pin_group_angle on radius R."""
    a = 2.0 * np.pi * np.arange(Zp) / Zp + pin_group_angle
    return np.column_stack((R * np.cos(a), R * np.sin(a)))


def build_scene(input_angle: float, params: GearParameters, mode: KinematicMode,
                samples: int = PROFILE_SAMPLES, pin_segments: int = 48) -> dict:
    """Everything a renderer needs to draw one frame, in world coordinates.

    Returns dict with:
        disc_xy        – disc outline under the current placement
        pins_xy        – list of pin circles (one per pin)
        pin_centers_xy – pin centres
        housing_xy     – housing circle, radius R + rp + 5
        bearing_xy     – eccentric bearing bore on the disc axis, radius e + 2
        disc_marker_xy – reference line from the disc axis, spins with the disc
        eccentric_xy   – input shaft indicator from the origin
        placement, derived
    """
    R, Zp, rp, e = params.R, params.Zp, params.rp, params.e
    place = placement(input_angle, R, Zp, e, mode)
    derived = derived_quantities(R, Zp, rp, e, mode)

    disc_local = profile_polygon(R, Zp, rp, e, samples)
    disc_xy = rigid_transform(disc_local, place.disc_rotation, place.disc_center)

    centers = pin_centers(R, Zp, place.pin_group_angle)
    pins_xy = [circle_points((cx, cy), rp, pin_segments) for cx, cy in centers]

    marker_local = np.array([[0.0, 0.0], [R / 2.0, 0.0]])
    disc_marker_xy = rigid_transform(marker_local, place.disc_rotation, place.disc_center)

    eccentric_xy = rigid_transform(np.array([[0.0, 0.0], [e, 0.0]]), input_angle)

    return {
        "disc_xy": disc_xy,
        "pins_xy": pins_xy,
        "pin_centers_xy": centers,
        "housing_xy": circle_points((0.0, 0.0), R + rp + HOUSING_CLEARANCE),
        "bearing_xy": circle_points(place.disc_center, e + BEARING_CLEARANCE, 90),
        "disc_marker_xy": disc_marker_xy,
        "eccentric_xy": eccentric_xy,
        "placement": place,
        "derived": derived,
    }


# ══════════════════════════════════════════════════════════════════
# Spline resampling for export
# ══════════════════════════════════════════════════════════════════

def resample_closed_profile(points, num_out: int = 720,
                            s: float = 0.0) -> list[tuple[float, float]]:
    """Fit a periodic parametric spline to a closed outline and resample it.

    Parameters:
        points  – (x, y) sequence, closed or open
        num_out – number of output points (open list, not re-closed)
        s       – smoothing factor (0 = interpolate)

    Returns the original points if there are too few to fit or the fit fails.
    """
    pts = [tuple(p) for p in np.asarray(points, dtype=np.float64).tolist()]
    if len(pts) < 4:
        return pts
    # splprep(per=1) ignores the last sample, so it must repeat the first
    if math.dist(pts[0], pts[-1]) > 1e-12:
        pts = pts + [pts[0]]

    x = np.array([p[0] for p in pts])
    y = np.array([p[1] for p in pts])
    try:
        tck, _ = splprep([x, y], s=s, k=3, per=1)
        u_new = np.linspace(0.0, 1.0, num_out, endpoint=False)
        xs, ys = splev(u_new, tck)
        return list(zip(xs.tolist(), ys.tolist()))
    except Exception:
        return pts
