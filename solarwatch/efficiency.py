"""Panel efficiency calculation and history."""

from datetime import timedelta

RATED_PANEL_WATTAGE = 300.0
STANDARD_IRRADIANCE = 1000.0  # W/m^2 at which the panel delivers its rated output
MIN_HISTORY_SAMPLES = 30
ROLLING_WINDOW = timedelta(days=30)


class EfficiencyTracker:
    """Tracks panel efficiency over time.

    Efficiency is the ratio of produced power to the power a panel of the
    rated wattage is expected to deliver at the measured irradiance. The
    history is keyed by timestamp; recording the same timestamp twice keeps
    the latest value. The history is never pruned.
    """

    def __init__(self, rated_panel_wattage=RATED_PANEL_WATTAGE, debug=False):
        """Initialize the tracker.

        Args:
            rated_panel_wattage: Panel output in watts at 1000 W/m^2
            debug: Enable debug logging
        """
        self.rated_panel_wattage = rated_panel_wattage
        self.debug_enabled = debug
        self.history = {}

    def debug(self, msg):
        """Log debug message if debug mode is enabled."""
        if self.debug_enabled:
            print(msg)

    def __len__(self):
        return len(self.history)

    def expected_power(self, irradiance):
        """Power in watts the panel should produce at the given irradiance."""
        return irradiance / STANDARD_IRRADIANCE * self.rated_panel_wattage

    def efficiency(self, irradiance, produced_power):
        """Calculate panel efficiency.

        No sunlight means no meaningful efficiency, so this is 0.0 whenever
        irradiance is zero or negative.

        Args:
            irradiance: Incident irradiance in W/m^2
            produced_power: Measured output in watts

        Returns:
            float: produced / expected power
        """
        if irradiance <= 0:
            return 0.0
        return produced_power / self.expected_power(irradiance)

    def record(self, timestamp, efficiency):
        self.history[timestamp] = efficiency

    def rolling_average(self, reference_timestamp, window=ROLLING_WINDOW):
        """Average efficiency over the window ending at reference_timestamp.

        Args:
            reference_timestamp: End of the window (inclusive)
            window: Length of the window as a timedelta

        Returns:
            float: Mean efficiency, or None if fewer than MIN_HISTORY_SAMPLES
            samples have been recorded or none fall inside the window
        """
        if len(self.history) < MIN_HISTORY_SAMPLES:
            self.debug(f"rolling_average: {len(self.history)} samples, need {MIN_HISTORY_SAMPLES}")
            return None

        window_start = reference_timestamp - window
        values = [
            efficiency for timestamp, efficiency in self.history.items()
            if window_start <= timestamp <= reference_timestamp
        ]
        if not values:
            self.debug(f"rolling_average: no samples from {window_start} to {reference_timestamp}")
            return None

        return sum(values) / len(values)
