"""Process incoming telemetry readings."""

from .alerts import AlertEngine
from .efficiency import RATED_PANEL_WATTAGE, EfficiencyTracker
from .impact import ImpactAccumulator
from .store import MemoryReadingStore

HOURS_PER_READING = 1.0


class SolarDataProcessor:
    """Processes telemetry readings one at a time.

    This class handles:
    - Storing each reading in the reading store
    - Accumulating produced energy for the environmental impact report
    - Running the maintenance alert rules
    """

    def __init__(self, store=None, rated_panel_wattage=RATED_PANEL_WATTAGE,
                 hours_per_reading=HOURS_PER_READING, debug=False):
        """Initialize data processor.

        Args:
            store: ReadingStore to append readings to, defaults to an in-memory store
            rated_panel_wattage: Panel output in watts at 1000 W/m^2
            hours_per_reading: Duration each reading's power is counted for
            debug: Enable debug logging
        """
        self.debug_enabled = debug
        self.store = store if store is not None else MemoryReadingStore(debug)
        self.hours_per_reading = hours_per_reading
        self.tracker = EfficiencyTracker(rated_panel_wattage, debug)
        self.alert_engine = AlertEngine(self.tracker, debug)
        self.impact = ImpactAccumulator()
        self.readings_processed = 0

    def debug(self, msg):
        """Log debug message if debug mode is enabled."""
        if self.debug_enabled:
            print(msg)

    def process_reading(self, reading, now=None):
        """Store a reading, add its energy and evaluate maintenance rules.

        Args:
            reading: Reading to process
            now: Current time for alert expiry, defaults to the wall clock

        Returns:
            list: Alerts raised for this reading
        """
        self.store.store(reading)
        self.impact.add_energy(reading.power_produced, self.hours_per_reading)
        alerts = self.alert_engine.evaluate(reading, now)
        self.readings_processed += 1
        self.debug(
            f"process_reading: {reading.timestamp.isoformat()}, {reading.power_produced:.2f}W, "
            f"{reading.irradiance:.2f}W/m^2, {reading.temperature:.1f}C, {len(alerts)} alerts"
        )
        return alerts

    def process_readings(self, readings, now=None):
        """Process every reading from a source.

        Args:
            readings: Iterable of Reading
            now: Current time for alert expiry, defaults to the wall clock

        Returns:
            int: Number of readings processed
        """
        count = 0
        for reading in readings:
            self.process_reading(reading, now)
            count += 1
        return count

    @property
    def active_alerts(self):
        return self.alert_engine.active_alerts
