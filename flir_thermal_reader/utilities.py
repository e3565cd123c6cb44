"""Raw count to temperature conversion (FLIR Planck equation) and unit conversions."""

from typing import Dict, Mapping, Tuple, Union

import numpy as np

from .errors import MissingCalibrationError

PLANCK_KEYS = ("planck_r1", "planck_r2", "planck_b", "planck_f", "planck_o")

# Plausible object temperatures [K]; outside this the linear fallback is used
KELVIN_MIN = 200.0
KELVIN_MAX = 400.0
LINEAR_FALLBACK_SLOPE = 0.01

_ZERO_C = np.float32(273.15)


def planck_coefficients(camera_info: Mapping[str, float]) -> Tuple[float, float, float, float, float]:
    """Return (R1, R2, B, F, O) from camera_info or raise MissingCalibrationError."""
    missing = [k for k in PLANCK_KEYS if k not in camera_info]
    if missing:
        raise MissingCalibrationError(missing)
    return tuple(float(camera_info[k]) for k in PLANCK_KEYS)


def raw_to_kelvin(raw: Union[int, np.ndarray], camera_info: Mapping[str, float]) -> np.ndarray:
    """Apply the FLIR Planck equation per sample, in single precision.

    term = R1 / ((raw + O) * R2) + F; a non-positive term maps to 273.15 K and a
    result that is not finite or outside [KELVIN_MIN, KELVIN_MAX) falls back to
    273.15 + raw * 0.01.
    """
    r1, r2, b, f, o = (np.float32(c) for c in planck_coefficients(camera_info))
    raw_obj = np.asarray(raw, dtype=np.float32)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        x = (raw_obj + o) * r2
        planck_term = r1 / x + f
        kelvin = b / np.log(planck_term)

        fallback = _ZERO_C + raw_obj * np.float32(LINEAR_FALLBACK_SLOPE)
        out_of_range = ~np.isfinite(kelvin) | (kelvin < KELVIN_MIN) | (kelvin >= KELVIN_MAX)
        kelvin = np.where(out_of_range, fallback, kelvin)
        kelvin = np.where(planck_term <= 0, _ZERO_C, kelvin)
    return kelvin.astype(np.float32)


def raw_to_celsius(raw: Union[int, np.ndarray], camera_info: Mapping[str, float]) -> np.ndarray:
    """Same as raw_to_kelvin, in °C."""
    return (raw_to_kelvin(raw, camera_info) - _ZERO_C).astype(np.float32)


def describe_calibration(camera_info: Dict[str, float]) -> str:
    """One-line summary of the Planck coefficients, for reporting."""
    return ", ".join(f"{k}={camera_info[k]:g}" for k in PLANCK_KEYS if k in camera_info)


class UnitConversion:
    """Temperature conversions (K↔°C, °C↔°F)."""

    @staticmethod
    def k2c(k):
        return k - 273.15

    @staticmethod
    def c2k(c):
        return c + 273.15

    @staticmethod
    def c2f(c, diff=False):
        """Celsius to Fahrenheit; diff=True for delta conversion."""
        return c * (9.0 / 5.0) + (0 if diff else 32)

    @staticmethod
    def f2c(f, diff=False):
        """Fahrenheit to Celsius; diff=True for delta conversion."""
        return (f - (0 if diff else 32)) * (5.0 / 9.0)

    @staticmethod
    def unitlabel(unit):
        if unit == 'C':
            return '°C'
        if unit == 'K':
            return 'K'
        if unit == 'F':
            return '°F'
        return None
