"""SQLite flight recorder for snapshot logging and analysis.

The recorder is a snapshot sink: every published snapshot becomes one row
in the ``telemetry`` table. Rows are buffered and written in batches. The
data can be used for:
- Flight analysis and debugging
- Physics model validation
- Export to CSV for plotting
"""

import csv
import sqlite3
import time
from datetime import datetime
from pathlib import Path
from typing import Any

from flightloop.core.logging_system import get_logger
from flightloop.simulation.publisher import ISnapshotSink, StateSnapshot

logger = get_logger(__name__)

TELEMETRY_COLUMNS = (
    "timestamp_ms",
    "timestamp_real",
    "frame_count",
    "dt",
    "position_x",
    "position_y",
    "position_z",
    "velocity_x",
    "velocity_y",
    "velocity_z",
    "acceleration_x",
    "acceleration_y",
    "acceleration_z",
    "airspeed_mps",
    "altitude_m",
    "pitch_deg",
    "roll_deg",
    "yaw_deg",
    "throttle",
)


class TelemetryLogger(ISnapshotSink):
    """Records published snapshots to a SQLite database.

    Timestamps use simulated time so that replays of the same inputs give
    the same database; wall time is stored alongside for reference.
    """

    def __init__(self, db_path: str | Path | None = None, buffer_size: int = 100) -> None:
        """Initialize telemetry logger.

        Args:
            db_path: Path to SQLite database file. If None, a timestamped
                file is created in the working directory.
            buffer_size: Number of records to buffer before writing to disk.
        """
        if db_path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            db_path = f"flightloop_telemetry_{timestamp}.db"

        self.db_path = str(db_path)
        self.buffer_size = max(1, buffer_size)
        self.buffer: list[dict[str, Any]] = []
        self.frame_count = 0

        self._init_database()

        logger.info(f"TelemetryLogger initialized: {self.db_path}")

    def _init_database(self) -> None:
        """Create database schema for telemetry data."""
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS telemetry (
                id INTEGER PRIMARY KEY AUTOINCREMENT,

                -- Timing
                timestamp_ms INTEGER NOT NULL,  -- Simulated milliseconds since start
                timestamp_real REAL NOT NULL,   -- Unix timestamp
                frame_count INTEGER NOT NULL,
                dt REAL,

                -- Position and velocity
                position_x REAL,
                position_y REAL,
                position_z REAL,
                velocity_x REAL,
                velocity_y REAL,
                velocity_z REAL,
                acceleration_x REAL,
                acceleration_y REAL,
                acceleration_z REAL,
                airspeed_mps REAL,
                altitude_m REAL,

                -- Attitude and controls
                pitch_deg REAL,
                roll_deg REAL,
                yaw_deg REAL,
                throttle REAL
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_timestamp
            ON telemetry(timestamp_ms)
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS metadata (
                key TEXT PRIMARY KEY,
                value TEXT
            )
        """)

        cursor.execute(
            "INSERT OR REPLACE INTO metadata (key, value) VALUES ('session_start', ?)",
            (datetime.now().isoformat(),),
        )

        conn.commit()
        conn.close()

    def present(self, snapshot: StateSnapshot) -> None:
        self.log(snapshot)

    def log(self, snapshot: StateSnapshot) -> None:
        """Buffer one snapshot, flushing when the buffer is full.

        Args:
            snapshot: Snapshot to record.
        """
        self.frame_count += 1
        px, py, pz = snapshot.position
        vx, vy, vz = snapshot.velocity
        ax, ay, az = snapshot.acceleration

        self.buffer.append(
            {
                "timestamp_ms": int(round(snapshot.elapsed * 1000)),
                "timestamp_real": time.time(),
                "frame_count": snapshot.frame,
                "dt": snapshot.dt,
                "position_x": px,
                "position_y": py,
                "position_z": pz,
                "velocity_x": vx,
                "velocity_y": vy,
                "velocity_z": vz,
                "acceleration_x": ax,
                "acceleration_y": ay,
                "acceleration_z": az,
                "airspeed_mps": snapshot.airspeed,
                "altitude_m": snapshot.altitude,
                "pitch_deg": snapshot.pitch_deg,
                "roll_deg": snapshot.roll_deg,
                "yaw_deg": snapshot.yaw_deg,
                "throttle": snapshot.throttle,
            }
        )

        if len(self.buffer) >= self.buffer_size:
            self.flush()

    def set_metadata(self, key: str, value: Any) -> None:
        """Store a session metadata entry (e.g. aircraft constants)."""
        conn = sqlite3.connect(self.db_path)
        conn.execute(
            "INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)", (key, str(value))
        )
        conn.commit()
        conn.close()

    def flush(self) -> None:
        """Write buffered data to database."""
        if not self.buffer:
            return

        placeholders = ",".join("?" for _ in TELEMETRY_COLUMNS)
        columns_str = ",".join(TELEMETRY_COLUMNS)

        conn = sqlite3.connect(self.db_path)
        conn.executemany(
            f"INSERT INTO telemetry ({columns_str}) VALUES ({placeholders})",
            [[record[col] for col in TELEMETRY_COLUMNS] for record in self.buffer],
        )
        conn.commit()
        conn.close()

        logger.debug(f"Flushed {len(self.buffer)} telemetry records to database")
        self.buffer.clear()

    def close(self) -> None:
        """Flush remaining data and close logger."""
        self.flush()
        logger.info(f"TelemetryLogger closed: {self.frame_count} frames logged to {self.db_path}")

    def query(self, sql: str, params: tuple = ()) -> list[tuple]:
        """Execute a SQL query and return results.

        Args:
            sql: SQL query string.
            params: Query parameters.

        Returns:
            List of result tuples.
        """
        conn = sqlite3.connect(self.db_path)
        try:
            return conn.execute(sql, params).fetchall()
        finally:
            conn.close()


class TelemetryAnalyzer:
    """Reads a recorded flight back for analysis."""

    def __init__(self, db_path: str | Path) -> None:
        """Initialize analyzer with database path.

        Args:
            db_path: Path to telemetry SQLite database.
        """
        self.db_path = str(db_path)
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row

    def get_summary(self) -> dict[str, Any]:
        """Get summary statistics for the flight.

        Returns:
            Frame count, time span, and airspeed/altitude extremes.
        """
        cursor = self.conn.execute("""
            SELECT
                COUNT(*) as frame_count,
                MIN(timestamp_ms) as start_ms,
                MAX(timestamp_ms) as end_ms,
                MAX(airspeed_mps) as max_airspeed_mps,
                MAX(altitude_m) as max_altitude_m,
                MIN(altitude_m) as min_altitude_m,
                MAX(throttle) as max_throttle
            FROM telemetry
        """)
        summary = dict(cursor.fetchone())

        if summary["frame_count"]:
            summary["duration_seconds"] = (summary["end_ms"] - summary["start_ms"]) / 1000.0
        else:
            summary["duration_seconds"] = 0.0
        return summary

    def get_metadata(self) -> dict[str, str]:
        """All session metadata entries."""
        rows = self.conn.execute("SELECT key, value FROM metadata").fetchall()
        return {row["key"]: row["value"] for row in rows}

    def export_to_csv(self, csv_path: str | Path, columns: list[str] | None = None) -> int:
        """Export telemetry data to CSV file.

        Args:
            csv_path: Output CSV file path.
            columns: Columns to export (None = all recorded columns).

        Returns:
            Number of rows written.

        Raises:
            ValueError: If a requested column does not exist.
        """
        selected = list(columns) if columns else list(TELEMETRY_COLUMNS)
        unknown = [c for c in selected if c not in TELEMETRY_COLUMNS]
        if unknown:
            raise ValueError(f"Unknown telemetry columns: {', '.join(unknown)}")

        rows = self.conn.execute(
            f"SELECT {','.join(selected)} FROM telemetry ORDER BY frame_count"
        ).fetchall()

        if not rows:
            logger.warning("No data to export")
            return 0

        with open(csv_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(selected)
            writer.writerows(tuple(row) for row in rows)

        logger.info(f"Exported {len(rows)} rows to {csv_path}")
        return len(rows)

    def close(self) -> None:
        """Close database connection."""
        self.conn.close()
