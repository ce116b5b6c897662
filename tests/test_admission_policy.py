import pytest

from app.core.exceptions import GeofenceError, TimeWindowError, ValidationError
from app.models import Employee
from app.services.admission_policy import (
    AdmissionPolicy,
    TimeWindow,
    STRICT,
    LENIENT,
    TIME_IN,
    TIME_OUT,
    ALERT_LOCATION,
    ALERT_NO_GPS,
    ALERT_NO_BASE_LOCATION,
    REJECT_TIME_WINDOW,
    REJECT_GEOFENCE,
    REJECT_MISSING_GPS,
    REJECT_MISSING_BASE,
)
from tests.conftest import manila_time


def build_policy(config, bypass=False):
    return AdmissionPolicy(
        config,
        time_in_window=TimeWindow.from_clock_times("06:00", "08:30"),
        time_out_window=TimeWindow.from_clock_times("20:30", "21:00"),
        time_window_bypass=bypass,
        default_radius_m=200,
    )


def employee(lat=14.60, lon=120.98, radius=200):
    return Employee(
        em_id=1,
        em_employee_id="EMP-001",
        em_full_name="Juan Dela Cruz",
        em_role="Cashier",
        em_latitude=lat,
        em_longitude=lon,
        em_radius_meters=radius,
    )


@pytest.mark.parametrize("hour,minute", [(6, 0), (7, 15), (8, 30)])
def test_time_in_accepted_inside_inclusive_window(hour, minute):
    decision = build_policy(STRICT).evaluate(employee(), TIME_IN, manila_time(hour, minute), 14.60, 120.98)
    assert decision.accepted
    assert decision.distance == 0
    assert decision.alert_type is None


@pytest.mark.parametrize("hour,minute", [(5, 59), (8, 31), (10, 0), (20, 45)])
def test_time_in_rejected_outside_window(hour, minute):
    decision = build_policy(STRICT).evaluate(employee(), TIME_IN, manila_time(hour, minute), 14.60, 120.98)
    assert not decision.accepted
    assert decision.rejection == REJECT_TIME_WINDOW
    assert decision.reason == "Time In is only allowed between 6:00 AM and 8:30 AM"


@pytest.mark.parametrize("hour,minute,accepted", [(20, 29, False), (20, 30, True), (21, 0, True), (21, 1, False)])
def test_time_out_window_edges(hour, minute, accepted):
    decision = build_policy(STRICT).evaluate(employee(), TIME_OUT, manila_time(hour, minute), 14.60, 120.98)
    assert decision.accepted is accepted


def test_bypass_disables_time_window():
    decision = build_policy(STRICT, bypass=True).evaluate(employee(), TIME_IN, manila_time(13, 0), 14.60, 120.98)
    assert decision.accepted


def test_time_window_checked_before_location():
    decision = build_policy(STRICT).evaluate(employee(), TIME_IN, manila_time(10, 0), None, None)
    assert decision.rejection == REJECT_TIME_WINDOW
    with pytest.raises(TimeWindowError):
        decision.raise_for_rejection()


def test_strict_rejects_outside_radius_with_distance():
    decision = build_policy(STRICT).evaluate(employee(), TIME_IN, manila_time(7, 0), 14.70, 120.98)
    assert decision.rejection == REJECT_GEOFENCE
    assert decision.distance == 11119
    assert decision.allowed_radius == 200

    with pytest.raises(GeofenceError) as exc_info:
        decision.raise_for_rejection()
    assert exc_info.value.status_code == 403
    assert exc_info.value.details == {"distance": 11119, "allowedRadius": 200}


def test_strict_accepts_at_exact_radius_boundary():
    # 1112m away, radius widened to match
    decision = build_policy(STRICT).evaluate(
        employee(lat=14.5995, lon=120.9842, radius=1112), TIME_IN, manila_time(7, 0), 14.6095, 120.9842
    )
    assert decision.accepted
    assert decision.distance == 1112


def test_employee_without_radius_uses_default():
    policy = build_policy(STRICT)
    assert policy.allowed_radius(employee(radius=None)) == 200


def test_strict_requires_gps():
    decision = build_policy(STRICT).evaluate(employee(), TIME_IN, manila_time(7, 0), None, None)
    assert decision.rejection == REJECT_MISSING_GPS
    with pytest.raises(ValidationError):
        decision.raise_for_rejection()


def test_strict_requires_base_location():
    decision = build_policy(STRICT).evaluate(employee(lat=None, lon=None), TIME_IN, manila_time(7, 0), 14.60, 120.98)
    assert decision.rejection == REJECT_MISSING_BASE
    assert "contact admin" in decision.reason


def test_lenient_ignores_time_window():
    decision = build_policy(LENIENT).evaluate(employee(), "Active", manila_time(23, 30), 14.60, 120.98)
    assert decision.accepted
    assert decision.alert_type is None


def test_lenient_flags_location_alert():
    decision = build_policy(LENIENT).evaluate(employee(), "Active", manila_time(12, 0), 14.70, 120.98)
    assert decision.accepted
    assert decision.alert_type == ALERT_LOCATION
    assert decision.distance == 11119


def test_lenient_falls_back_to_base_location_without_gps():
    decision = build_policy(LENIENT).evaluate(employee(), "Active", manila_time(12, 0), None, None)
    assert decision.accepted
    assert decision.alert_type == ALERT_NO_GPS
    assert decision.distance == 0
    assert (decision.latitude, decision.longitude) == (14.60, 120.98)


def test_lenient_without_base_location():
    decision = build_policy(LENIENT).evaluate(employee(lat=None, lon=None), "Active", manila_time(12, 0), 14.65, 120.99)
    assert decision.accepted
    assert decision.alert_type == ALERT_NO_BASE_LOCATION
    assert decision.distance == 0
    assert (decision.latitude, decision.longitude) == (14.65, 120.99)


def test_accepted_decision_raises_nothing():
    decision = build_policy(LENIENT).evaluate(employee(), "Active", manila_time(12, 0), 14.60, 120.98)
    decision.raise_for_rejection()
