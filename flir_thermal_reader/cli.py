"""
Command-line interface for FlirReader.
"""

import argparse
import logging
import sys

from .camera_info import FixedCameraParameters, OBJECT_PARAMETER_KEYS
from .errors import MissingCalibrationError
from .reader import read_flir
from .utilities import PLANCK_KEYS, UnitConversion, describe_calibration


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="FLIR radiometric JPEG reader"
    )

    parser.add_argument(
        "file_path",
        help="Path to the FLIR .jpg file to read"
    )

    parser.add_argument(
        "--info",
        action="store_true",
        help="Show thermogram information"
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show temperature statistics (requires --planck)"
    )

    parser.add_argument(
        "--measurements",
        action="store_true",
        help="Show measurement annotations"
    )

    parser.add_argument(
        "--export-csv",
        type=str,
        help="Export raw counts (and temperatures, if calibrated) to CSV file"
    )

    parser.add_argument(
        "--planck",
        type=float,
        nargs=5,
        metavar=("R1", "R2", "B", "F", "O"),
        help="Planck coefficients used for temperature conversion"
    )

    parser.add_argument(
        "--unit",
        choices=["C", "F", "K"],
        default="C",
        help="Temperature unit for --stats (default: C)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    camera_parameters = None
    if args.planck:
        camera_parameters = FixedCameraParameters(dict(zip(PLANCK_KEYS, args.planck)))

    try:
        thermogram = read_flir(args.file_path, camera_parameters=camera_parameters)

        if args.info:
            print_info(thermogram)

        if args.stats:
            print_stats(thermogram, args.unit)

        if args.measurements:
            print_measurements(thermogram)

        if args.export_csv:
            export_to_csv(thermogram, args.export_csv)
            print(f"Data exported to: {args.export_csv}")

        if not any([args.info, args.stats, args.measurements, args.export_csv]):
            print(f"File loaded successfully: {args.file_path}")
            print(f"Thermal data dimensions: {thermogram.height} x {thermogram.width}")
            print(f"Measurements found: {len(thermogram.measurements)}")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def print_info(thermogram):
    """Print thermogram information."""
    print("\n=== THERMOGRAM INFORMATION ===")
    print(f"File: {thermogram.path}")
    print(f"Image size: {thermogram.get_image_shape()}")
    print(f"Measurements: {len(thermogram.measurements)}")
    if thermogram.has_calibration:
        print(f"Calibration: {describe_calibration(thermogram.camera_info)}")
    else:
        print("Calibration: not available")
    for key in OBJECT_PARAMETER_KEYS:
        if key in thermogram.camera_info:
            print(f"{key.replace('_', ' ').capitalize()}: {thermogram.camera_info[key]:g}")


def _convert(value, unit):
    if unit == "F":
        return UnitConversion.c2f(value)
    if unit == "K":
        return UnitConversion.c2k(value)
    return value


def print_stats(thermogram, unit="C"):
    """Print temperature statistics."""
    if thermogram.raw_data.size == 0:
        print("\nTemperature statistics: NOT AVAILABLE")
        print("Reason: file has no thermal data")
        return

    try:
        temp_min, temp_max = thermogram.get_temperature_range()
        temp_avg = thermogram.get_average_temperature()
    except MissingCalibrationError as e:
        print("\nTemperature conversion: NOT AVAILABLE")
        print(f"Reason: {e}")
        return

    label = UnitConversion.unitlabel(unit)
    print("\n=== TEMPERATURE STATISTICS ===")
    print(f"Minimum temperature: {_convert(temp_min, unit):.2f}{label}")
    print(f"Maximum temperature: {_convert(temp_max, unit):.2f}{label}")
    print(f"Average temperature: {_convert(temp_avg, unit):.2f}{label}")
    print(f"Temperature range: {(_convert(temp_max, unit) - _convert(temp_min, unit)):.2f}{label}")


def print_measurements(thermogram):
    """Print measurement annotations."""
    if not thermogram.measurements:
        print("\nNo measurement annotations found")
        return

    print("\n=== MEASUREMENTS ===")
    for i, measurement in enumerate(thermogram.measurements):
        print(f"[{i}] {measurement.tool.name}: {measurement.label}")
        if measurement.params:
            print(f"    Parameters: [{', '.join(str(p) for p in measurement.params)}]")


def export_to_csv(thermogram, output_path):
    """Export raw counts and temperatures to CSV format."""
    import csv

    raw = thermogram.raw_data
    temp = thermogram.celsius if thermogram.has_calibration else None

    with open(output_path, 'w', newline='') as csvfile:
        writer = csv.writer(csvfile)

        # Header
        header = ['X', 'Y', 'Raw']
        if temp is not None:
            header.append('Temperature_C')
        writer.writerow(header)

        # Data
        for y in range(raw.shape[0]):
            for x in range(raw.shape[1]):
                row = [x, y, int(raw[y, x])]
                if temp is not None:
                    row.append(float(temp[y, x]))
                writer.writerow(row)


if __name__ == "__main__":
    main()
