"""
Tests for camera parameter sources.
"""
import struct

import pytest

from flir_thermal_reader.camera_info import FixedCameraParameters, LayoutCameraParameterSource
from flir_thermal_reader.errors import UnsupportedFormatError
from flir_thermal_reader.records import RecordMetadata

from builders import PLANCK


def test_fixed_parameters_returns_copy():
    """FixedCameraParameters returns its values, converted to float."""
    source = FixedCameraParameters(dict(PLANCK, emissivity=1))
    params = source.read(b"", None)
    assert params["emissivity"] == 1.0 and isinstance(params["emissivity"], float)
    params["planck_b"] = 0.0
    assert source.read(b"", None)["planck_b"] == 1501.0


def test_layout_source_reads_floats():
    """Values are read at the configured byte ranges of the record."""
    record = struct.pack("<8f", 0.95, 1.5, 20.0, 21.0, 21106.77, 1501.0, 1.0, 0.0125)
    blob = b"\x00" * 5 + record
    source = LayoutCameraParameterSource({"emissivity": (0, 4), "planck_b": (20, 24), "planck_r2": (28, 32)})
    params = source.read(blob, RecordMetadata(0, 32, 5, len(record)))
    assert params["emissivity"] == pytest.approx(0.95)
    assert params["planck_b"] == pytest.approx(1501.0)
    assert params["planck_r2"] == pytest.approx(0.0125)


def test_layout_source_big_endian():
    record = struct.pack(">f", 0.9)
    source = LayoutCameraParameterSource({"emissivity": (0, 4)}, byte_order=">")
    assert source.read(record, RecordMetadata(0, 32, 0, 4))["emissivity"] == pytest.approx(0.9)


def test_layout_source_without_layout():
    """No layout means the record cannot be interpreted."""
    with pytest.raises(UnsupportedFormatError, match="No camera info layout"):
        LayoutCameraParameterSource(None).read(b"\x00" * 64, RecordMetadata(0, 32, 0, 64))


def test_layout_source_record_too_short():
    source = LayoutCameraParameterSource({"planck_b": (60, 64)})
    with pytest.raises(UnsupportedFormatError, match="layout needs 64"):
        source.read(b"\x00" * 40, RecordMetadata(0, 32, 0, 40))


def test_layout_source_without_record():
    source = LayoutCameraParameterSource({"planck_b": (0, 4)})
    with pytest.raises(UnsupportedFormatError, match="no CAMERA_INFO"):
        source.read(b"", None)


def test_layout_source_bad_byte_order():
    with pytest.raises(ValueError):
        LayoutCameraParameterSource({}, byte_order="=")
