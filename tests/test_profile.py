"""Disc outline: equidistant epitrochoid and its offset normal."""

import math

import numpy as np
import pytest

from cycloid_equations import (
    TANGENT_EPS,
    base_curve_polygon,
    base_point,
    profile_point,
    profile_polygon,
)

REFERENCE = dict(R=80.0, Zp=12, rp=5.0, e=4.0)


def _shoelace(pts: np.ndarray) -> float:
    x, y = pts[:, 0], pts[:, 1]
    return 0.5 * float(np.sum(x[:-1] * y[1:] - x[1:] * y[:-1]))


@pytest.mark.parametrize("theta", [0.0, 0.3, 1.7, math.pi, 5.9, -2.4])
def test_profile_is_two_pi_periodic(theta):
    p0 = profile_point(theta, **REFERENCE)
    p1 = profile_point(theta + 2.0 * math.pi, **REFERENCE)
    assert p0 == pytest.approx(p1, abs=1e-9)


@pytest.mark.parametrize("Zp", [2, 5, 12, 31])
def test_zero_eccentricity_gives_circle_of_radius_R_minus_rp(Zp):
    """Regression check for the inward normal sign."""
    R, rp = 80.0, 5.0
    for theta in np.linspace(0.0, 2.0 * np.pi, 37):
        x, y = profile_point(theta, R, Zp, rp, 0.0)
        assert math.hypot(x, y) == pytest.approx(R - rp, abs=1e-9)


def test_offset_points_toward_interior_at_lobe_tip():
    # θ = 0: base point (R - e, 0), tangent straight up, normal along -x
    x, y = profile_point(0.0, **REFERENCE)
    assert x == pytest.approx(80.0 - 4.0 - 5.0)
    assert y == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("e", [1.0, 4.0, 6.0])
def test_offset_shrinks_enclosed_area_for_nonzero_eccentricity(e):
    R, Zp, rp = 80.0, 12, 5.0
    base = base_curve_polygon(R, Zp, e, 3600)
    outline = profile_polygon(R, Zp, rp, e, 3600)
    assert _shoelace(base) > 0.0  # counter-clockwise winding
    assert _shoelace(outline) < _shoelace(base)


def test_offset_distance_equals_pin_radius():
    R, Zp, rp, e = REFERENCE.values()
    for theta in np.linspace(0.05, 6.2, 25):
        bx, by = base_point(theta, R, Zp, e)
        px, py = profile_point(theta, R, Zp, rp, e)
        assert math.hypot(px - bx, py - by) == pytest.approx(rp, rel=1e-9)


def test_degenerate_tangent_falls_back_to_base_point():
    # R = e·Zp makes the tangent vanish at θ = 0
    R, Zp, rp, e = 80.0, 10, 5.0, 8.0
    dx = -R * math.sin(0.0) + e * Zp * math.sin(0.0)
    dy = R * math.cos(0.0) - e * Zp * math.cos(0.0)
    assert math.hypot(dx, dy) < TANGENT_EPS

    x, y = profile_point(0.0, R, Zp, rp, e)
    assert math.isfinite(x) and math.isfinite(y)
    assert (x, y) == base_point(0.0, R, Zp, e)
    assert (x, y) == (72.0, 0.0)


def test_degenerate_polygon_stays_finite():
    outline = profile_polygon(80.0, 10, 5.0, 8.0, 720)
    assert np.all(np.isfinite(outline))
    assert outline[0] == pytest.approx([72.0, 0.0])


def test_polygon_matches_pointwise_evaluation():
    n = 360
    outline = profile_polygon(n=n, **REFERENCE)
    assert outline.shape == (n + 1, 2)
    for i in range(0, n + 1, 17):
        theta = 2.0 * math.pi * i / n
        assert outline[i] == pytest.approx(profile_point(theta, **REFERENCE), abs=1e-9)


def test_polygon_is_closed():
    outline = profile_polygon(n=3600, **REFERENCE)
    assert outline[0] == pytest.approx(outline[-1], abs=1e-9)


def test_base_curve_polygon_matches_base_point():
    base = base_curve_polygon(80.0, 12, 4.0, 90)
    theta = 2.0 * math.pi * 7 / 90
    assert base[7] == pytest.approx(base_point(theta, 80.0, 12, 4.0))
