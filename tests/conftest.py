from datetime import datetime, timedelta, timezone

import pytest

from solarwatch.models import Reading

T0 = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_reading(timestamp=T0, power_produced=210.0, irradiance=1000.0, temperature=25.0, **kwargs):
    values = {
        "power_consumed": 150.0,
        "battery_soc": 80.0,
        "panel_voltage": 36.0,
        "panel_current": 5.8,
    }
    values.update(kwargs)
    return Reading(
        power_produced=power_produced,
        irradiance=irradiance,
        temperature=temperature,
        timestamp=timestamp,
        **values
    )


@pytest.fixture
def hourly_readings():
    """Factory for readings one hour apart starting at T0."""
    def factory(count, **kwargs):
        return [make_reading(T0 + timedelta(hours=i), **kwargs) for i in range(count)]
    return factory
