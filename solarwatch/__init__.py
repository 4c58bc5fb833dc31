"""Solar array maintenance monitoring package.

This package stores solar telemetry readings, raises maintenance alerts from
efficiency and temperature rules, and reports the environmental impact of
the energy produced.
"""

from .models import Reading, AlertType, MaintenanceAlert
from .store import ReadingStore, MemoryReadingStore, SqliteReadingStore
from .efficiency import EfficiencyTracker
from .alerts import AlertEngine
from .impact import ImpactAccumulator
from .reporter import Reporter
from .processor import SolarDataProcessor
from .sources import ReadingValidationError, csv_readings, prompt_readings

__all__ = [
    'Reading',
    'AlertType',
    'MaintenanceAlert',
    'ReadingStore',
    'MemoryReadingStore',
    'SqliteReadingStore',
    'EfficiencyTracker',
    'AlertEngine',
    'ImpactAccumulator',
    'Reporter',
    'SolarDataProcessor',
    'ReadingValidationError',
    'csv_readings',
    'prompt_readings'
]
