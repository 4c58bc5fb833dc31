from datetime import datetime, timedelta, timezone

import pytest

from solarwatch.alerts import AlertEngine
from solarwatch.models import AlertType, MaintenanceAlert

from conftest import T0, make_reading


def feed(engine, readings, now=T0):
    for reading in readings:
        engine.evaluate(reading, now)


def test_degradation_scenario(hourly_readings):
    engine = AlertEngine()
    feed(engine, hourly_readings(29, power_produced=210.0))
    assert engine.active_alerts == []

    raised = engine.evaluate(make_reading(T0 + timedelta(hours=29), power_produced=150.0), T0)

    average = (29 * 0.7 + 0.5) / 30
    degradation = 1 - 0.5 / average
    assert len(raised) == 1
    alert = raised[0]
    assert alert.type is AlertType.PANEL_DEGRADATION
    assert alert.severity == pytest.approx(degradation / 0.05)
    assert alert.severity > 5.5
    assert alert.message == "Panel degradation detected: 27% performance loss"
    assert alert.timestamp == T0


def test_no_degradation_alert_before_thirty_samples(hourly_readings):
    engine = AlertEngine()
    feed(engine, hourly_readings(28, power_produced=210.0))
    raised = engine.evaluate(make_reading(T0 + timedelta(hours=28), power_produced=30.0), T0)
    assert raised == []


def test_degradation_threshold_is_strict(hourly_readings):
    engine = AlertEngine()
    feed(engine, hourly_readings(30, power_produced=210.0))
    assert engine.active_alerts == []

    # 4% below the average of previous readings does not fire
    raised = engine.evaluate(make_reading(T0 + timedelta(hours=30), power_produced=201.6), T0)
    assert raised == []


def test_degradation_severity_is_not_capped(hourly_readings):
    engine = AlertEngine()
    feed(engine, hourly_readings(39, power_produced=300.0))
    raised = engine.evaluate(make_reading(T0 + timedelta(hours=39), power_produced=0.0), T0)
    assert len(raised) == 1
    # current efficiency is zero, so degradation is 100%
    assert raised[0].severity == pytest.approx(20.0)
    assert raised[0].severity > 1.0


def test_zero_average_efficiency_does_not_raise(hourly_readings):
    engine = AlertEngine()
    feed(engine, hourly_readings(31, irradiance=0.0))
    assert engine.active_alerts == []


def test_night_reading_after_daylight_history_fires(hourly_readings):
    engine = AlertEngine()
    feed(engine, hourly_readings(30, power_produced=210.0))
    raised = engine.evaluate(make_reading(T0 + timedelta(hours=30), irradiance=0.0), T0)
    assert [a.type for a in raised] == [AlertType.PANEL_DEGRADATION]


@pytest.mark.parametrize("temperature, severity", [
    (75.0, 0.5),
    (80.0, 1.0),
    (90.0, 1.0),
    (70.5, 0.05),
])
def test_high_temperature_severity(temperature, severity):
    engine = AlertEngine()
    raised = engine.evaluate(make_reading(temperature=temperature), T0)
    assert len(raised) == 1
    assert raised[0].type is AlertType.HIGH_TEMPERATURE
    assert raised[0].severity == pytest.approx(severity)
    assert raised[0].message == f"High panel temperature: {int(temperature)}°C"


def test_no_temperature_alert_at_threshold():
    engine = AlertEngine()
    assert engine.evaluate(make_reading(temperature=70.0), T0) == []


def test_repeated_firings_accumulate():
    engine = AlertEngine()
    for i in range(3):
        engine.evaluate(make_reading(T0 + timedelta(hours=i), temperature=85.0), T0)
    assert len(engine.active_alerts) == 3


def test_unimplemented_rules_never_fire():
    engine = AlertEngine()
    reading = make_reading(power_produced=1.0, battery_soc=1.0, panel_voltage=0.0, panel_current=0.0)
    assert engine.check_low_efficiency(reading, T0) is None
    assert engine.check_inverter_issues(reading, T0) is None
    assert engine.check_battery_degradation(reading, T0) is None


def test_prune_removes_alerts_older_than_seven_days():
    engine = AlertEngine()
    engine.evaluate(make_reading(temperature=75.0), T0)

    engine.prune(T0 + timedelta(days=6, hours=23))
    assert len(engine.active_alerts) == 1

    engine.prune(T0 + timedelta(days=7))
    assert len(engine.active_alerts) == 1

    removed = engine.prune(T0 + timedelta(days=7, seconds=1))
    assert removed == 1
    assert engine.active_alerts == []


def test_evaluate_prunes_before_running_rules():
    engine = AlertEngine()
    engine.evaluate(make_reading(temperature=75.0), T0)
    later = T0 + timedelta(days=8)

    raised = engine.evaluate(make_reading(later, temperature=76.0), later)

    assert engine.active_alerts == raised
    assert raised[0].timestamp == later


def test_active_alerts_is_a_copy():
    engine = AlertEngine()
    engine.evaluate(make_reading(temperature=75.0), T0)
    engine.active_alerts.append(
        MaintenanceAlert(AlertType.INVERTER_ISSUE, "injected", T0, 0.1)
    )
    assert len(engine.active_alerts) == 1


def test_naive_now_is_taken_as_utc():
    engine = AlertEngine()
    engine.evaluate(make_reading(temperature=75.0))

    raised = engine.evaluate(make_reading(temperature=76.0), datetime.now(timezone.utc).replace(tzinfo=None))

    assert len(raised) == 1
    assert raised[0].timestamp.tzinfo is not None
    assert len(engine.active_alerts) == 2
