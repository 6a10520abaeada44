"""Parameter validation at the configuration boundary."""

import math

import pytest

from cycloid_equations import (
    DEFAULTS,
    GearParameters,
    InvalidConfigurationError,
    validate_params,
)


def _with(**overrides):
    params = dict(DEFAULTS)
    params.update(overrides)
    return params


def test_defaults_are_valid():
    params = validate_params(DEFAULTS)
    assert params == GearParameters(80.0, 12, 5.0, 4.0)
    assert params.Zc == 11
    assert params.as_dict() == DEFAULTS


def test_integral_float_pin_count_is_accepted():
    params = validate_params(_with(Zp=12.0))
    assert params.Zp == 12
    assert isinstance(params.Zp, int)


def test_zero_eccentricity_and_pin_radius_are_allowed():
    params = validate_params(_with(rp=0.0, e=0.0))
    assert params.rp == 0.0 and params.e == 0.0


@pytest.mark.parametrize("overrides", [
    {"Zp": 1},
    {"Zp": 0},
    {"Zp": -3},
    {"Zp": 12.5},
    {"Zp": True},
    {"Zp": "12"},
    {"R": 0.0},
    {"R": -10.0},
    {"rp": -0.1},
    {"e": -1.0},
    {"R": math.nan},
    {"e": math.inf},
    {"rp": None},
])
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(InvalidConfigurationError):
        validate_params(_with(**overrides))


def test_missing_keys_are_named():
    params = dict(DEFAULTS)
    del params["e"]
    with pytest.raises(InvalidConfigurationError, match="e"):
        validate_params(params)


def test_error_is_a_value_error():
    with pytest.raises(ValueError):
        GearParameters(R=80.0, Zp=1, rp=5.0, e=4.0)


def test_parameters_are_immutable():
    params = validate_params(DEFAULTS)
    with pytest.raises(AttributeError):
        params.R = 10.0
