"""
Data models for FLIR thermal files.
"""

from dataclasses import dataclass, field, replace
from enum import IntEnum
from functools import cached_property
from types import MappingProxyType
from typing import Mapping, Tuple, Optional
import numpy as np

from .utilities import raw_to_celsius, PLANCK_KEYS


class Tool(IntEnum):
    """Measurement tool kinds stored in the measurement record."""

    NONE = 0
    SPOT = 1
    AREA = 2
    ELLIPSE = 3
    LINE = 4
    ENDPOINT = 5
    ALARM = 6
    UNUSED = 7
    DIFFERENCE = 8


@dataclass(frozen=True)
class Measurement:
    """A measurement annotation: tool kind, tool parameters and label.

    Parameter meaning depends on the tool: (x, y) for a spot, (x, y, w, h) for
    an area, (x, y, rx, ry) for an ellipse, (x1, y1, x2, y2) for a line.
    """

    tool: Tool
    params: Tuple[int, ...] = ()
    label: str = ""


@dataclass(frozen=True, eq=False)
class Thermogram:
    """A decoded FLIR thermogram.

    raw_data holds the sensor counts with shape (height, width); celsius is
    derived from raw_data and camera_info the first time it is read.
    camera_info and measurements are copied into read-only containers.
    """

    path: str
    width: int
    height: int
    raw_data: np.ndarray
    camera_info: Mapping[str, float] = field(default_factory=dict)
    measurements: Tuple[Measurement, ...] = ()

    def __post_init__(self):
        if self.raw_data.shape != (self.height, self.width):
            raise ValueError(
                f"raw_data shape {self.raw_data.shape} does not match {self.height}x{self.width}"
            )
        self.raw_data.flags.writeable = False
        object.__setattr__(self, "camera_info", MappingProxyType(dict(self.camera_info)))
        object.__setattr__(self, "measurements", tuple(self.measurements))

    @cached_property
    def celsius(self) -> np.ndarray:
        """Temperature grid in °C; raises MissingCalibrationError without Planck coefficients."""
        temp = raw_to_celsius(self.raw_data, self.camera_info)
        temp.flags.writeable = False
        return temp

    @property
    def has_calibration(self) -> bool:
        return all(k in self.camera_info for k in PLANCK_KEYS)

    def with_camera_info(self, camera_info: Mapping[str, float]) -> "Thermogram":
        """Return a copy using camera_info; its temperatures are recomputed."""
        return replace(self, camera_info=camera_info)

    def get_image_shape(self) -> tuple:
        """Return the image dimensions."""
        return (self.height, self.width)

    def get_temperature_range(self) -> tuple:
        """Return the temperature range (min, max)."""
        return float(np.min(self.celsius)), float(np.max(self.celsius))

    def get_average_temperature(self) -> float:
        """Return the average temperature."""
        return float(np.mean(self.celsius))

    def get_temperature_at_pixel(self, x: int, y: int) -> float:
        """Return the temperature at the given pixel."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return float(self.celsius[y, x])
        raise IndexError(f"Pixel coordinates ({x}, {y}) out of image bounds")

    def find_measurement(self, label: str) -> Optional[Measurement]:
        """Return the first measurement with the given label, or None."""
        for m in self.measurements:
            if m.label == label:
                return m
        return None
