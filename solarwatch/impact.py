"""Cumulative environmental impact of solar production."""

from .utils import utc_now

CO2_SAVINGS_PER_KWH = 0.4  # kg CO2 per kWh
TREES_EQUIVALENT_PER_KWH = 0.01
GRID_DISPLACEMENT_FACTOR = 0.9  # share of solar energy that displaces grid energy


class ImpactAccumulator:
    """Running total of energy produced, with derived CO2 and tree figures."""

    def __init__(self, start_date=None):
        self.total_energy_kwh = 0.0
        self.start_date = start_date if start_date is not None else utc_now()

    def add_energy(self, power_watts, duration_hours):
        """Add energy produced at a constant power for a duration.

        Args:
            power_watts: Average power in watts
            duration_hours: Duration in hours
        """
        self.total_energy_kwh += power_watts * duration_hours / 1000.0

    def co2_avoided(self):
        """CO2 emissions avoided in kg."""
        return self.total_energy_kwh * CO2_SAVINGS_PER_KWH

    def tree_equivalents(self):
        return self.total_energy_kwh * TREES_EQUIVALENT_PER_KWH

    def grid_energy_displaced(self):
        """Grid energy in kWh replaced by solar production."""
        return self.total_energy_kwh * GRID_DISPLACEMENT_FACTOR
