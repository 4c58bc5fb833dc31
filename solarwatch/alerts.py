"""Rule-based maintenance alerts."""

import math
from datetime import timedelta

from .efficiency import EfficiencyTracker
from .models import AlertType, MaintenanceAlert
from .utils import ensure_utc, utc_now

PANEL_DEGRADATION_THRESHOLD = 0.05  # 5% performance drop
TEMPERATURE_ALERT_THRESHOLD = 70.0  # °C
TEMPERATURE_SEVERITY_RANGE = 10.0  # °C above threshold for full severity
ALERT_RETENTION = timedelta(days=7)


class AlertEngine:
    """Evaluates maintenance rules against incoming readings.

    The engine owns the list of active alerts. Each evaluation pass first
    drops alerts older than ALERT_RETENTION, then runs every rule against
    the reading. A rule that fires appends a new alert even if an identical
    one is already active.
    """

    def __init__(self, tracker=None, debug=False):
        """Initialize the engine.

        Args:
            tracker: EfficiencyTracker holding the efficiency history
            debug: Enable debug logging
        """
        self.tracker = tracker if tracker is not None else EfficiencyTracker(debug=debug)
        self.debug_enabled = debug
        self.alerts = []
        self.rules = [
            self.check_panel_degradation,
            self.check_temperature_issues,
            self.check_low_efficiency,
            self.check_inverter_issues,
            self.check_battery_degradation,
        ]

    def debug(self, msg):
        """Log debug message if debug mode is enabled."""
        if self.debug_enabled:
            print(msg)

    @property
    def active_alerts(self):
        return list(self.alerts)

    def prune(self, now=None):
        """Remove alerts raised before now - ALERT_RETENTION.

        Args:
            now: Current time, defaults to the wall clock

        Returns:
            int: Number of alerts removed
        """
        now = utc_now() if now is None else ensure_utc(now)
        cutoff = now - ALERT_RETENTION
        kept = [alert for alert in self.alerts if not alert.timestamp < cutoff]
        removed = len(self.alerts) - len(kept)
        self.alerts = kept
        if removed:
            self.debug(f"prune: removed {removed} alerts older than {cutoff.isoformat()}")
        return removed

    def evaluate(self, reading, now=None):
        """Run one evaluation pass for a reading.

        Args:
            reading: Reading to evaluate
            now: Current time, defaults to the wall clock

        Returns:
            list: Alerts raised by this pass
        """
        now = utc_now() if now is None else ensure_utc(now)
        self.prune(now)

        raised = []
        for rule in self.rules:
            alert = rule(reading, now)
            if alert is not None:
                self.debug(f"evaluate: {alert.type.value} severity={alert.severity:.2f}")
                raised.append(alert)
        self.alerts.extend(raised)
        return raised

    def check_panel_degradation(self, reading, now):
        current_efficiency = self.tracker.efficiency(reading.irradiance, reading.power_produced)
        self.tracker.record(reading.timestamp, current_efficiency)

        avg_efficiency = self.tracker.rolling_average(reading.timestamp)
        if avg_efficiency is None or avg_efficiency == 0:
            return None

        degradation = 1.0 - (current_efficiency / avg_efficiency)
        if not degradation > PANEL_DEGRADATION_THRESHOLD:
            return None

        return MaintenanceAlert(
            type=AlertType.PANEL_DEGRADATION,
            message=f"Panel degradation detected: {math.floor(degradation * 100)}% performance loss",
            timestamp=now,
            severity=degradation / PANEL_DEGRADATION_THRESHOLD,
        )

    def check_temperature_issues(self, reading, now):
        if not reading.temperature > TEMPERATURE_ALERT_THRESHOLD:
            return None

        severity = (reading.temperature - TEMPERATURE_ALERT_THRESHOLD) / TEMPERATURE_SEVERITY_RANGE
        return MaintenanceAlert(
            type=AlertType.HIGH_TEMPERATURE,
            message=f"High panel temperature: {int(reading.temperature)}°C",
            timestamp=now,
            severity=min(severity, 1.0),
        )

    # No thresholds are defined for these alert types yet, so they never fire.

    def check_low_efficiency(self, reading, now):
        return None

    def check_inverter_issues(self, reading, now):
        return None

    def check_battery_degradation(self, reading, now):
        return None
