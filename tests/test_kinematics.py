"""Placement of disc and pin ring for both fixed-frame conventions."""

import math

import pytest

from cycloid_equations import KinematicMode, Placement, placement

R, ZP, E = 80.0, 12, 4.0


@pytest.mark.parametrize("mode", list(KinematicMode))
@pytest.mark.parametrize("phi", [0.0, 0.7, 2.0, math.pi, 11.3, -4.2])
def test_disc_center_orbits_at_eccentricity(mode, phi):
    cx, cy = placement(phi, R, ZP, E, mode).disc_center
    assert math.hypot(cx, cy) == pytest.approx(E)
    assert math.atan2(cy, cx) == pytest.approx(math.atan2(math.sin(phi), math.cos(phi)))


@pytest.mark.parametrize("phi", [0.0, 1.3, 7.9])
def test_disc_center_does_not_depend_on_mode(phi):
    a = placement(phi, R, ZP, E, KinematicMode.FIXED_PINS)
    b = placement(phi, R, ZP, E, KinematicMode.FIXED_CYCLOID)
    assert a.disc_center == b.disc_center


def test_fixed_pins_counter_rotates_disc():
    place = placement(1.1, R, ZP, E, KinematicMode.FIXED_PINS)
    assert place.pin_group_angle == 0.0
    assert place.disc_rotation == pytest.approx(-1.1 / 11)


def test_fixed_cycloid_turns_pin_ring_forward():
    place = placement(1.2, R, ZP, E, KinematicMode.FIXED_CYCLOID)
    assert place.disc_rotation == 0.0
    assert place.pin_group_angle == pytest.approx(1.2 / 12)


def test_one_output_turn_per_reduction_ratio_of_input_turns():
    turns = 2.0 * math.pi
    fixed_pins = placement(11 * turns, R, ZP, E, KinematicMode.FIXED_PINS)
    fixed_disc = placement(12 * turns, R, ZP, E, KinematicMode.FIXED_CYCLOID)
    assert fixed_pins.disc_rotation == pytest.approx(-turns)
    assert fixed_disc.pin_group_angle == pytest.approx(turns)


def test_zero_input_angle_is_home_position():
    for mode in KinematicMode:
        place = placement(0.0, R, ZP, E, mode)
        assert place.disc_center == pytest.approx((E, 0.0))
        assert place.pin_group_angle == 0.0
        assert place.disc_rotation == 0.0


def test_placement_is_stateless():
    first = placement(3.3, R, ZP, E, KinematicMode.FIXED_PINS)
    placement(9.9, R, ZP, E, KinematicMode.FIXED_PINS)
    again = placement(3.3, R, ZP, E, KinematicMode.FIXED_PINS)
    assert first == again
    assert isinstance(first, Placement)


def test_minimum_pin_count():
    # Zp = 2 leaves a single lobe; rotation is the full negated input
    place = placement(0.5, R, 2, E, KinematicMode.FIXED_PINS)
    assert place.disc_rotation == pytest.approx(-0.5)


def test_mode_wire_values():
    assert KinematicMode("STD") is KinematicMode.FIXED_PINS
    assert KinematicMode("RV") is KinematicMode.FIXED_CYCLOID
    assert KinematicMode.FIXED_PINS.label == "Fixed Pins"
    assert "housing" in KinematicMode.FIXED_CYCLOID.description.lower()
