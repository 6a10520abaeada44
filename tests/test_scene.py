"""World-space scene assembly and transform helpers."""

import math

import numpy as np
import pytest

from cycloid_equations import (
    BEARING_CLEARANCE,
    HOUSING_CLEARANCE,
    KinematicMode,
    build_scene,
    circle_points,
    pin_centers,
    profile_polygon,
    rigid_transform,
    validate_params,
    DEFAULTS,
)

PARAMS = validate_params(DEFAULTS)


def test_rigid_transform_rotates_then_translates():
    pts = np.array([[1.0, 0.0], [0.0, 2.0]])
    out = rigid_transform(pts, math.pi / 2, (10.0, -1.0))
    assert out[0] == pytest.approx([10.0, 0.0])
    assert out[1] == pytest.approx([8.0, -1.0])


def test_rigid_transform_identity():
    pts = np.array([[3.0, 4.0], [-1.0, 0.5]])
    assert np.allclose(rigid_transform(pts, 0.0), pts)


def test_circle_points_closed_and_on_radius():
    pts = circle_points((2.0, 3.0), 5.0, 60)
    assert pts.shape == (61, 2)
    assert np.allclose(np.hypot(pts[:, 0] - 2.0, pts[:, 1] - 3.0), 5.0)
    assert np.allclose(pts[0], pts[-1])


def test_pin_centers_start_on_x_axis():
    centers = pin_centers(80.0, 12)
    assert centers.shape == (12, 2)
    assert centers[0] == pytest.approx([80.0, 0.0])
    assert np.allclose(np.hypot(centers[:, 0], centers[:, 1]), 80.0)


def test_pin_centers_follow_group_angle():
    centers = pin_centers(80.0, 12, 0.25)
    assert centers[0] == pytest.approx([80.0 * math.cos(0.25), 80.0 * math.sin(0.25)])


def test_scene_contents():
    scene = build_scene(0.9, PARAMS, KinematicMode.FIXED_PINS, samples=720, pin_segments=24)
    assert set(scene) == {
        "disc_xy", "pins_xy", "pin_centers_xy", "housing_xy", "bearing_xy",
        "disc_marker_xy", "eccentric_xy", "placement", "derived",
    }
    assert scene["disc_xy"].shape == (721, 2)
    assert len(scene["pins_xy"]) == PARAMS.Zp
    assert all(pin.shape == (25, 2) for pin in scene["pins_xy"])
    assert scene["derived"].reduction_ratio == 11


def test_scene_disc_is_placed_profile():
    phi = 2.3
    scene = build_scene(phi, PARAMS, KinematicMode.FIXED_PINS, samples=360)
    place = scene["placement"]
    local = profile_polygon(PARAMS.R, PARAMS.Zp, PARAMS.rp, PARAMS.e, 360)
    expected = rigid_transform(local, place.disc_rotation, place.disc_center)
    assert np.allclose(scene["disc_xy"], expected)


def test_scene_housing_and_bearing_radii():
    scene = build_scene(1.0, PARAMS, KinematicMode.FIXED_CYCLOID, samples=90)
    housing = scene["housing_xy"]
    assert np.allclose(np.hypot(housing[:, 0], housing[:, 1]),
                       PARAMS.R + PARAMS.rp + HOUSING_CLEARANCE)

    cx, cy = scene["placement"].disc_center
    bearing = scene["bearing_xy"]
    assert np.allclose(np.hypot(bearing[:, 0] - cx, bearing[:, 1] - cy),
                       PARAMS.e + BEARING_CLEARANCE)


def test_scene_indicator_lines():
    phi = 0.6
    scene = build_scene(phi, PARAMS, KinematicMode.FIXED_PINS, samples=90)
    place = scene["placement"]

    ecc = scene["eccentric_xy"]
    assert ecc[0] == pytest.approx([0.0, 0.0])
    assert ecc[1] == pytest.approx([PARAMS.e * math.cos(phi), PARAMS.e * math.sin(phi)])

    marker = scene["disc_marker_xy"]
    assert marker[0] == pytest.approx(list(place.disc_center))
    dx, dy = marker[1] - marker[0]
    assert math.hypot(dx, dy) == pytest.approx(PARAMS.R / 2)
    assert math.atan2(dy, dx) == pytest.approx(place.disc_rotation)


def test_fixed_cycloid_scene_rotates_pins():
    phi = 1.8
    scene = build_scene(phi, PARAMS, KinematicMode.FIXED_CYCLOID, samples=90)
    first = scene["pin_centers_xy"][0]
    assert math.atan2(first[1], first[0]) == pytest.approx(phi / PARAMS.Zp)
