"""Data models for solar telemetry and maintenance alerts."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .utils import ensure_utc, utc_now


@dataclass(frozen=True)
class Reading:
    """A single telemetry sample from the PV array.

    The timestamp is captured when the reading is created unless one is given.
    It is always stored as a timezone-aware UTC datetime; naive timestamps
    are taken as UTC.
    """
    power_produced: float
    power_consumed: float
    battery_soc: float
    irradiance: float
    temperature: float
    panel_voltage: float
    panel_current: float
    timestamp: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        object.__setattr__(self, "timestamp", ensure_utc(self.timestamp))


class AlertType(Enum):
    PANEL_DEGRADATION = "panel_degradation"
    HIGH_TEMPERATURE = "high_temperature"
    LOW_EFFICIENCY = "low_efficiency"
    INVERTER_ISSUE = "inverter_issue"
    BATTERY_DEGRADATION = "battery_degradation"


@dataclass
class MaintenanceAlert:
    """Maintenance alert raised by a rule in the alert engine.

    Severity is nominally 0-1, but panel degradation alerts are not capped.
    """
    type: AlertType
    message: str
    timestamp: datetime
    severity: float
