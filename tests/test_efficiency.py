from datetime import timedelta

import pytest

from solarwatch.efficiency import EfficiencyTracker

from conftest import T0


def test_expected_power_uses_rated_wattage():
    assert EfficiencyTracker().expected_power(1000.0) == pytest.approx(300.0)
    assert EfficiencyTracker(rated_panel_wattage=400.0).expected_power(500.0) == pytest.approx(200.0)


@pytest.mark.parametrize("irradiance", [0.0, -1.0, -800.0])
def test_efficiency_is_zero_without_irradiance(irradiance):
    assert EfficiencyTracker().efficiency(irradiance, 250.0) == 0.0


def test_efficiency_ratio():
    tracker = EfficiencyTracker()
    assert tracker.efficiency(1000.0, 210.0) == pytest.approx(0.7)
    assert tracker.efficiency(500.0, 150.0) == pytest.approx(1.0)


def test_record_overwrites_same_timestamp():
    tracker = EfficiencyTracker()
    tracker.record(T0, 0.5)
    tracker.record(T0, 0.8)
    assert len(tracker) == 1
    assert tracker.history[T0] == 0.8


def test_rolling_average_needs_thirty_samples():
    tracker = EfficiencyTracker()
    for i in range(29):
        tracker.record(T0 + timedelta(hours=i), 0.7)
    assert tracker.rolling_average(T0 + timedelta(hours=28)) is None

    tracker.record(T0 + timedelta(hours=29), 0.4)
    assert tracker.rolling_average(T0 + timedelta(hours=29)) == pytest.approx((29 * 0.7 + 0.4) / 30)


def test_rolling_average_only_uses_window():
    tracker = EfficiencyTracker()
    for i in range(30):
        tracker.record(T0 + timedelta(days=i), 0.2)
    reference = T0 + timedelta(days=100)
    tracker.record(reference, 0.9)

    assert tracker.rolling_average(reference) == pytest.approx(0.9)
    assert tracker.rolling_average(T0 + timedelta(days=29), window=timedelta(days=1)) == pytest.approx(0.2)


def test_rolling_average_empty_window():
    tracker = EfficiencyTracker()
    for i in range(30):
        tracker.record(T0 + timedelta(hours=i), 0.7)
    assert tracker.rolling_average(T0 - timedelta(days=1)) is None
