"""Exceptions raised while decoding FLIR radiometric JPEG files."""

from typing import Iterable

GITHUB_MESSAGE = (
    " This FLIR sub-format is not supported yet. Please open an issue or submit a pull request "
    "on the project GitHub repository with your file details or a sample so support can be added."
)


class FlirError(Exception):
    """Base class for all decoding errors."""


class FormatError(FlirError, ValueError):
    """Raised when the binary layout is invalid or inconsistent."""


class UnsupportedFormatError(FlirError, ValueError):
    """Raised when a recognised sub-format cannot be decoded."""

    def __init__(self, message: str):
        super().__init__(message + GITHUB_MESSAGE)


class MissingCalibrationError(FlirError, ValueError):
    """Raised when temperatures are requested without Planck coefficients."""

    def __init__(self, missing: Iterable[str]):
        self.missing = tuple(missing)
        super().__init__(
            "Camera info with Planck coefficients is required for temperature conversion. "
            f"Missing: {', '.join(self.missing)}"
        )
