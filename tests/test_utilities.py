"""
Tests for the raw count to temperature conversion.
"""
import math

import numpy as np
import pytest

from flir_thermal_reader.errors import MissingCalibrationError
from flir_thermal_reader.utilities import (
    UnitConversion,
    planck_coefficients,
    raw_to_celsius,
    raw_to_kelvin,
)

from builders import PLANCK


def _planck_celsius(raw, r1, r2, b, f, o):
    return b / math.log(r1 / ((raw + o) * r2) + f) - 273.15


def test_planck_equation():
    """Typical coefficients give the Planck temperature."""
    expected = _planck_celsius(17000, **{k.split("_")[1]: v for k, v in PLANCK.items()})
    assert float(raw_to_celsius(17000, PLANCK)) == pytest.approx(expected, abs=1e-3)
    assert 15.0 < expected < 20.0


def test_single_precision_output():
    """Results are float32 with the input shape."""
    raw = np.full((3, 4), 17000, dtype=np.uint16)
    temp = raw_to_celsius(raw, PLANCK)
    assert temp.dtype == np.float32
    assert temp.shape == (3, 4)


def test_non_positive_term_is_zero_celsius():
    """term <= 0 gives exactly 0.0 °C."""
    coeffs = {"planck_r1": -1000.0, "planck_r2": 1.0, "planck_b": 1500.0, "planck_f": 0.0, "planck_o": 0.0}
    assert float(raw_to_celsius(100, coeffs)) == 0.0
    assert float(raw_to_kelvin(100, coeffs)) == pytest.approx(273.15)


def test_out_of_range_kelvin_uses_linear_fallback():
    """A Kelvin result outside [200, 400) becomes raw * 0.01 °C."""
    coeffs = {"planck_r1": 1.0, "planck_r2": 1.0, "planck_b": 1.0, "planck_f": 1.0, "planck_o": 0.0}
    raw = np.array([1000, 2500], dtype=np.uint16)
    np.testing.assert_allclose(raw_to_celsius(raw, coeffs), raw * 0.01, atol=1e-3)


def test_non_finite_kelvin_uses_linear_fallback():
    """Division by zero falls back to the linear approximation."""
    coeffs = dict(PLANCK, planck_o=-17000.0)
    assert float(raw_to_celsius(17000, coeffs)) == pytest.approx(170.0, abs=1e-3)


def test_grid_is_converted_per_sample():
    """Each sample is converted independently of its neighbours."""
    raw = np.array([[16000, 17000], [18000, 0]], dtype=np.uint16)
    grid = raw_to_celsius(raw, PLANCK)
    for (y, x), value in np.ndenumerate(raw):
        np.testing.assert_allclose(grid[y, x], raw_to_celsius(int(value), PLANCK), rtol=1e-6)


def test_missing_calibration():
    """Missing Planck coefficients raise MissingCalibrationError."""
    coeffs = dict(PLANCK)
    del coeffs["planck_o"]
    with pytest.raises(MissingCalibrationError, match="planck_o") as exc:
        raw_to_celsius(17000, coeffs)
    assert exc.value.missing == ("planck_o",)


def test_planck_coefficients_order():
    """Coefficients are returned as (R1, R2, B, F, O)."""
    assert planck_coefficients(PLANCK) == (21106.77, 0.012545258, 1501.0, 1.0, -7340.0)


def test_unit_conversion():
    assert UnitConversion.k2c(273.15) == pytest.approx(0.0)
    assert UnitConversion.c2k(0.0) == pytest.approx(273.15)
    assert UnitConversion.c2f(100.0) == pytest.approx(212.0)
    assert UnitConversion.f2c(32.0) == pytest.approx(0.0)
    assert UnitConversion.c2f(10.0, diff=True) == pytest.approx(18.0)
