"""Main entry point and command-line interface for solar maintenance monitoring."""

import argparse
import json
import sys
from pathlib import Path

from .efficiency import RATED_PANEL_WATTAGE
from .processor import HOURS_PER_READING, SolarDataProcessor
from .reporter import HTML_OUTPUT_PATH, Reporter
from .sources import csv_readings, prompt_count, prompt_readings
from .store import MemoryReadingStore, SqliteReadingStore, SOLARWATCH_DB_PATH

CONFIG_PATH = Path("solarwatch.json")

DEFAULT_CONFIG = {
    "rated_panel_wattage": RATED_PANEL_WATTAGE,
    "hours_per_reading": HOURS_PER_READING,
    "html_output": HTML_OUTPUT_PATH,
    "database": None,
}


class SolarWatch:
    """Main class for running a monitoring session.

    This class wires a reading source, a reading store, the
    SolarDataProcessor and the Reporter together.
    """

    def __init__(self, debug=False, config_path=None) -> None:
        """Initialize SolarWatch.

        Args:
            debug: Enable debug logging
            config_path: Optional path to a JSON config file. If not given,
                solarwatch.json in the working directory is used when present.
        """
        self.debug_enabled = debug
        self.config_path = Path(config_path) if config_path else None
        self.config = dict(DEFAULT_CONFIG)
        self.store = None
        self.processor = None
        self.reporter = Reporter(debug=debug)

    def debug(self, msg):
        """Log debug message if debug mode is enabled."""
        if self.debug_enabled:
            print(msg)

    def load_config(self):
        """Load configuration from the JSON config file, if there is one."""
        path = self.config_path
        if path is None:
            if not CONFIG_PATH.exists():
                self.debug("load_config: no solarwatch.json, using defaults")
                return
            path = CONFIG_PATH
        with open(path) as fd:
            self.config.update(json.load(fd))
        self.debug(f"load_config: {path}: {self.config}")

    def open_store(self, use_sqlite=False):
        """Create the reading store selected by the configuration."""
        rated_panel_wattage = float(self.config["rated_panel_wattage"])
        if rated_panel_wattage <= 0:
            raise ValueError(f"rated_panel_wattage must be positive, got {rated_panel_wattage:g}")
        if self.config["database"] or use_sqlite:
            self.store = SqliteReadingStore(self.config["database"] or SOLARWATCH_DB_PATH, self.debug_enabled)
            self.store.init_database()
        else:
            self.store = MemoryReadingStore(self.debug_enabled)
        self.processor = SolarDataProcessor(
            self.store,
            rated_panel_wattage=rated_panel_wattage,
            hours_per_reading=float(self.config["hours_per_reading"]),
            debug=self.debug_enabled,
        )

    def run(self, readings):
        """Process readings then print the alert and impact reports.

        Args:
            readings: Iterable of Reading

        Returns:
            int: Number of readings processed
        """
        count = self.processor.process_readings(readings)
        self.debug(f"run: processed {count} readings")
        self.reporter.print_maintenance_alerts(self.processor.active_alerts)
        self.reporter.generate_environmental_report(self.processor.impact, self.config["html_output"])
        return count

    def close(self):
        if isinstance(self.store, SqliteReadingStore):
            self.store.close()


def main(argv=None):
    """Main entry point."""
    # Make stdout line-buffered (i.e. each line will be automatically flushed):
    sys.stdout.reconfigure(line_buffering=True)

    parser = argparse.ArgumentParser(description='Solar array maintenance monitor')
    parser.add_argument('--count', type=int,
                        help='Number of readings to enter interactively. Asked for if not given')
    parser.add_argument('--input', help='Read readings from a CSV file instead of prompting')
    parser.add_argument('--database', help='Path to sqlite3 database for storing readings')
    parser.add_argument('--sqlite', action='store_true',
                        help='Store readings in the default sqlite3 database instead of memory')
    parser.add_argument('--html-output', help=f'Path of the visualization file (default {HTML_OUTPUT_PATH})')
    parser.add_argument('--config', help='Path to JSON config file (default solarwatch.json if present)')
    parser.add_argument('--debug', action='store_true',
                        help='Print debug messages')

    args = parser.parse_args(argv)
    if args.count is not None and args.count < 0:
        parser.error("--count must not be negative")

    solar_watch = SolarWatch(debug=args.debug, config_path=args.config)
    try:
        solar_watch.load_config()
        if args.database:
            solar_watch.config["database"] = args.database
        if args.html_output:
            solar_watch.config["html_output"] = args.html_output
        solar_watch.open_store(use_sqlite=args.sqlite)

        if args.input:
            readings = csv_readings(args.input)
        else:
            count = args.count if args.count is not None else prompt_count()
            readings = prompt_readings(count)
        solar_watch.run(readings)

    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1
    finally:
        solar_watch.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
