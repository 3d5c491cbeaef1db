"""Summarize a recorded flight and optionally export it to CSV.

Usage:
    flightloop-telemetry flightloop_telemetry_YYYYMMDD_HHMMSS.db
    flightloop-telemetry flight.db --csv flight.csv --columns frame_count altitude_m
"""

import argparse
import sys
from pathlib import Path

from flightloop.telemetry.telemetry_logger import TelemetryAnalyzer


def format_summary(summary: dict) -> list[str]:
    """Human-readable lines for a flight summary."""
    if not summary["frame_count"]:
        return ["No telemetry recorded"]
    return [
        f"Frames:        {summary['frame_count']}",
        f"Duration:      {summary['duration_seconds']:.1f} s",
        f"Max airspeed:  {summary['max_airspeed_mps']:.1f} m/s",
        f"Altitude:      {summary['min_altitude_m']:.1f} .. {summary['max_altitude_m']:.1f} m",
        f"Max throttle:  {summary['max_throttle']:.1f}",
    ]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a FlightLoop telemetry database")
    parser.add_argument("db_path", type=Path, help="Telemetry SQLite database")
    parser.add_argument("--csv", type=Path, help="Export the recording to this CSV file")
    parser.add_argument("--columns", nargs="+", help="Columns to export (default: all)")
    args = parser.parse_args(argv)

    if not args.db_path.exists():
        print(f"Error: Database not found: {args.db_path}")
        return 1

    print(f"Analyzing telemetry from: {args.db_path}")
    print("=" * 60)

    analyzer = TelemetryAnalyzer(args.db_path)
    try:
        for line in format_summary(analyzer.get_summary()):
            print(line)

        metadata = analyzer.get_metadata()
        if metadata:
            print("-" * 60)
            for key, value in sorted(metadata.items()):
                print(f"{key:<24} {value}")

        if args.csv:
            try:
                rows = analyzer.export_to_csv(args.csv, args.columns)
            except ValueError as e:
                print(f"Error: {e}")
                return 1
            print(f"\nExported {rows} rows to {args.csv}")
    finally:
        analyzer.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
