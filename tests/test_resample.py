"""Periodic spline resampling of closed outlines before export."""

import math

import numpy as np
import pytest

from cycloid_equations import circle_points, profile_polygon, resample_closed_profile


def test_circle_stays_on_radius():
    pts = circle_points((0.0, 0.0), 50.0, 200)
    out = resample_closed_profile(pts, num_out=333)
    assert len(out) == 333
    radii = [math.hypot(x, y) for x, y in out]
    assert min(radii) == pytest.approx(50.0, abs=1e-3)
    assert max(radii) == pytest.approx(50.0, abs=1e-3)


def test_open_input_is_closed_before_fitting():
    pts = circle_points((0.0, 0.0), 10.0, 120)[:-1]
    out = resample_closed_profile(pts, num_out=64)
    assert len(out) == 64
    assert out[0] == pytest.approx((10.0, 0.0), abs=1e-6)


def test_output_is_not_reclosed():
    outline = profile_polygon(80.0, 12, 5.0, 4.0, 1440)
    out = resample_closed_profile(outline, num_out=500)
    assert len(out) == 500
    assert math.dist(out[0], out[-1]) > 1e-6


def test_too_few_points_are_returned_unchanged():
    pts = [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)]
    assert resample_closed_profile(pts) == pts


def test_accepts_numpy_input():
    pts = np.asarray(circle_points((1.0, 1.0), 3.0, 16))
    out = resample_closed_profile(pts, num_out=40)
    assert len(out) == 40
    assert all(isinstance(p, tuple) for p in out)
