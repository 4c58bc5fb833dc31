"""Storage for telemetry readings."""

import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

import appdirs

from .models import Reading
from .utils import ensure_utc, format_local_time, timestamp_in_range

SOLARWATCH_DATA_DIR = appdirs.user_data_dir("solarwatch", "solarwatch")
SOLARWATCH_DB_PATH = Path(SOLARWATCH_DATA_DIR, "solarwatch.db")


class ReadingStore(ABC):
    """Append-only log of telemetry readings.

    Readings are stored exactly as given: there is no de-duplication and no
    check of physical plausibility. Queries return readings in the order
    they were stored, which is not necessarily timestamp order.
    """

    def __init__(self, debug=False):
        self.debug_enabled = debug

    def debug(self, msg):
        """Log debug message if debug mode is enabled."""
        if self.debug_enabled:
            print(msg)

    @abstractmethod
    def store(self, reading):
        """Append a reading to the log.

        Args:
            reading: Reading to store
        """
        pass

    @abstractmethod
    def query(self, start, end):
        """Get all readings with start <= timestamp <= end.

        Args:
            start: Start of the time range (inclusive)
            end: End of the time range (inclusive)

        Returns:
            list: Matching readings in insertion order
        """
        pass


class MemoryReadingStore(ReadingStore):
    """Non-durable store keeping readings in a list."""

    def __init__(self, debug=False):
        super().__init__(debug)
        self.readings = []

    def __len__(self):
        return len(self.readings)

    def store(self, reading):
        self.readings.append(reading)
        self.debug(f"Stored reading at {format_local_time(reading.timestamp)}")

    def query(self, start, end):
        start, end = ensure_utc(start), ensure_utc(end)
        return [
            reading for reading in self.readings
            if timestamp_in_range(reading.timestamp, start, end)
        ]


class SqliteReadingStore(ReadingStore):
    """File-backed store keeping readings in an SQLite database.

    Timestamps are stored as UTC ISO-8601 strings with a fixed precision so
    that range queries can compare them as text.
    """

    def __init__(self, database="", debug=False):
        """Initialize the store.

        Args:
            database: Optional path to SQLite database file
            debug: Enable debug logging
        """
        super().__init__(debug)
        self.database = SOLARWATCH_DB_PATH if not database else Path(database)
        self.sqlcon = None

    def __len__(self):
        cur = self.connection().cursor()
        for row in cur.execute("SELECT count(*) AS total FROM readings"):
            return row["total"]
        return 0

    def init_database(self):
        """Open the database and create the readings table if needed."""
        self.database.parent.mkdir(parents=True, exist_ok=True)
        self.sqlcon = sqlite3.connect(self.database)
        self.sqlcon.row_factory = sqlite3.Row

        self.debug(f"init_database: database={self.database.resolve()}")
        with self.sqlcon:
            self.sqlcon.execute("""
                CREATE TABLE IF NOT EXISTS readings (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp text,
                    power_produced real,
                    power_consumed real,
                    battery_soc real,
                    irradiance real,
                    temperature real,
                    panel_voltage real,
                    panel_current real
                )
            """)

    def connection(self):
        """Get the database connection, opening the database on first use."""
        if self.sqlcon is None:
            self.init_database()
        return self.sqlcon

    @staticmethod
    def _timestamp_text(timestamp):
        return ensure_utc(timestamp).isoformat(timespec="microseconds")

    def store(self, reading):
        sqlcon = self.connection()
        with sqlcon:
            sqlcon.execute(
                """INSERT INTO readings (timestamp, power_produced, power_consumed, battery_soc,
                       irradiance, temperature, panel_voltage, panel_current)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    self._timestamp_text(reading.timestamp),
                    reading.power_produced,
                    reading.power_consumed,
                    reading.battery_soc,
                    reading.irradiance,
                    reading.temperature,
                    reading.panel_voltage,
                    reading.panel_current,
                )
            )
        self.debug(f"Stored reading at {format_local_time(reading.timestamp)}")

    def query(self, start, end):
        cur = self.connection().cursor()
        readings = []
        for row in cur.execute(
            "SELECT * FROM readings WHERE timestamp >= ? AND timestamp <= ? ORDER BY id ASC",
            (self._timestamp_text(start), self._timestamp_text(end))
        ):
            readings.append(Reading(
                power_produced=row["power_produced"],
                power_consumed=row["power_consumed"],
                battery_soc=row["battery_soc"],
                irradiance=row["irradiance"],
                temperature=row["temperature"],
                panel_voltage=row["panel_voltage"],
                panel_current=row["panel_current"],
                timestamp=datetime.fromisoformat(row["timestamp"]),
            ))
        return readings

    def close(self):
        """Close database connection."""
        if self.sqlcon is not None:
            self.sqlcon.close()
