"""Tests for the telemetry analysis command."""

from pathlib import Path

import pytest

from flightloop.simulation.publisher import StateSnapshot
from flightloop.telemetry.analyze import format_summary, main
from flightloop.telemetry.telemetry_logger import TelemetryLogger


@pytest.fixture
def recording(tmp_path: Path) -> Path:
    """Short recorded flight."""
    db_path = tmp_path / "flight.db"
    recorder = TelemetryLogger(db_path)
    recorder.set_metadata("mass", 1000.0)
    for frame in range(1, 11):
        recorder.log(
            StateSnapshot(
                throttle=80.0,
                pitch_deg=0.0,
                roll_deg=0.0,
                yaw_deg=0.0,
                airspeed=frame * 2.0,
                altitude=100.0 - frame,
                frame=frame,
                elapsed=frame * 0.5,
                dt=0.5,
            )
        )
    recorder.close()
    return db_path


class TestAnalyzeCommand:
    """Test the flightloop-telemetry entry point."""

    def test_prints_summary(self, recording: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the summary and metadata are printed."""
        assert main([str(recording)]) == 0

        out = capsys.readouterr().out
        assert "Frames:        10" in out
        assert "Duration:      4.5 s" in out
        assert "Max airspeed:  20.0 m/s" in out
        assert "mass" in out

    def test_exports_csv(self, recording: Path, tmp_path: Path) -> None:
        """Test --csv writes the selected columns."""
        csv_path = tmp_path / "out.csv"

        code = main([str(recording), "--csv", str(csv_path), "--columns", "frame_count", "throttle"])

        assert code == 0
        lines = csv_path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "frame_count,throttle"
        assert len(lines) == 11

    def test_unknown_column(self, recording: Path, tmp_path: Path) -> None:
        """Test an unknown export column fails with exit code 1."""
        code = main([str(recording), "--csv", str(tmp_path / "x.csv"), "--columns", "rpm"])
        assert code == 1

    def test_missing_database(self, tmp_path: Path) -> None:
        """Test a missing database fails with exit code 1."""
        assert main([str(tmp_path / "none.db")]) == 1

    def test_empty_summary(self) -> None:
        """Test an empty recording is reported as such."""
        assert format_summary({"frame_count": 0}) == ["No telemetry recorded"]
