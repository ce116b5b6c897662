"""
Admission Policy - Decides whether a scan may be recorded

One implementation, two configurations:
- STRICT  (public clock-in): time window, GPS and base coordinates required,
  geofence breaches are rejected.
- LENIENT (supervisor monitoring): no time window, location problems become
  alerts on the recorded event.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.core.clock import minutes_since_midnight, parse_clock_time
from app.core.config import settings
from app.core.exceptions import ValidationError, TimeWindowError, GeofenceError
from app.core.geo import calculate_distance, has_coordinates
from app.models.employee import Employee

TIME_IN = "Time In"
TIME_OUT = "Time Out"

ALERT_LOCATION = "Location Alert"
ALERT_NO_GPS = "No GPS"
ALERT_NO_BASE_LOCATION = "No Base Location"

# Rejection kinds
REJECT_TIME_WINDOW = "time_window"
REJECT_GEOFENCE = "geofence"
REJECT_MISSING_GPS = "missing_gps"
REJECT_MISSING_BASE = "missing_base_location"


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive [start, end] range in minutes since local midnight"""
    start: int
    end: int

    @classmethod
    def from_clock_times(cls, start: str, end: str) -> "TimeWindow":
        return cls(parse_clock_time(start), parse_clock_time(end))

    def contains(self, minutes: int) -> bool:
        return self.start <= minutes <= self.end

    def describe(self) -> str:
        return f"{_format_minutes(self.start)} and {_format_minutes(self.end)}"


@dataclass(frozen=True)
class PolicyConfig:
    enforce_time_window: bool
    require_gps: bool
    require_base_location: bool
    reject_outside_radius: bool


STRICT = PolicyConfig(
    enforce_time_window=True,
    require_gps=True,
    require_base_location=True,
    reject_outside_radius=True,
)

LENIENT = PolicyConfig(
    enforce_time_window=False,
    require_gps=False,
    require_base_location=False,
    reject_outside_radius=False,
)


@dataclass
class AdmissionDecision:
    accepted: bool
    distance: Optional[int] = None
    alert_type: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    reason: Optional[str] = None
    rejection: Optional[str] = None
    allowed_radius: Optional[int] = None

    @classmethod
    def accept(cls, distance, alert_type, latitude, longitude, allowed_radius) -> "AdmissionDecision":
        return cls(
            accepted=True,
            distance=distance,
            alert_type=alert_type,
            latitude=latitude,
            longitude=longitude,
            allowed_radius=allowed_radius,
        )

    @classmethod
    def reject(cls, rejection: str, reason: str, distance=None, allowed_radius=None) -> "AdmissionDecision":
        return cls(
            accepted=False,
            rejection=rejection,
            reason=reason,
            distance=distance,
            allowed_radius=allowed_radius,
        )

    def raise_for_rejection(self) -> None:
        """Raise the taxonomy error matching this rejection (no-op when accepted)"""
        if self.accepted:
            return
        if self.rejection == REJECT_TIME_WINDOW:
            raise TimeWindowError(self.reason)
        if self.rejection == REJECT_GEOFENCE:
            raise GeofenceError(self.reason, self.distance, self.allowed_radius)
        raise ValidationError(self.reason)


class AdmissionPolicy:
    def __init__(
        self,
        config: PolicyConfig,
        time_in_window: Optional[TimeWindow] = None,
        time_out_window: Optional[TimeWindow] = None,
        time_window_bypass: Optional[bool] = None,
        default_radius_m: Optional[int] = None
    ) -> None:
        self.config = config
        self.time_in_window = time_in_window or TimeWindow.from_clock_times(
            settings.TIME_IN_START, settings.TIME_IN_END
        )
        self.time_out_window = time_out_window or TimeWindow.from_clock_times(
            settings.TIME_OUT_START, settings.TIME_OUT_END
        )
        self.time_window_bypass = (
            settings.TIME_WINDOW_BYPASS if time_window_bypass is None else time_window_bypass
        )
        self.default_radius_m = default_radius_m or settings.DEFAULT_GEOFENCE_RADIUS_M

    def allowed_radius(self, employee: Employee) -> int:
        return employee.em_radius_meters or self.default_radius_m

    def check_time_window(self, action: str, now: datetime) -> Optional[AdmissionDecision]:
        """
        Validate the requested action against its clock window

        Returns:
            AdmissionDecision: rejection, or None when the action is admitted
        """
        if not self.config.enforce_time_window or self.time_window_bypass:
            return None

        if action == TIME_IN:
            window = self.time_in_window
        elif action == TIME_OUT:
            window = self.time_out_window
        else:
            return None

        if not window.contains(minutes_since_midnight(now)):
            return AdmissionDecision.reject(
                REJECT_TIME_WINDOW,
                f"{action} is only allowed between {window.describe()}"
            )
        return None

    def check_location(
        self,
        employee: Employee,
        latitude: Optional[float],
        longitude: Optional[float]
    ) -> AdmissionDecision:
        """Validate scan coordinates against the employee geofence"""
        radius = self.allowed_radius(employee)
        scan_located = has_coordinates(latitude, longitude)
        base_located = has_coordinates(employee.em_latitude, employee.em_longitude)

        if scan_located and base_located:
            distance = calculate_distance(
                latitude, longitude,
                employee.em_latitude, employee.em_longitude
            )
            if distance > radius:
                if self.config.reject_outside_radius:
                    return AdmissionDecision.reject(
                        REJECT_GEOFENCE,
                        f"You are out of range of your registered coordinates "
                        f"({distance}m away, {radius}m allowed)",
                        distance=distance,
                        allowed_radius=radius
                    )
                return AdmissionDecision.accept(distance, ALERT_LOCATION, latitude, longitude, radius)
            return AdmissionDecision.accept(distance, None, latitude, longitude, radius)

        if not scan_located:
            if self.config.require_gps:
                return AdmissionDecision.reject(
                    REJECT_MISSING_GPS,
                    "GPS coordinates are required for attendance"
                )
            # Kiosks and simulators without a fix stand in for the base location
            if base_located:
                return AdmissionDecision.accept(
                    0, ALERT_NO_GPS, employee.em_latitude, employee.em_longitude, radius
                )
            return AdmissionDecision.accept(0, ALERT_NO_BASE_LOCATION, None, None, radius)

        if self.config.require_base_location:
            return AdmissionDecision.reject(
                REJECT_MISSING_BASE,
                "No registered coordinates found for this employee. Please contact admin."
            )
        return AdmissionDecision.accept(0, ALERT_NO_BASE_LOCATION, latitude, longitude, radius)

    def evaluate(
        self,
        employee: Employee,
        action: Optional[str],
        now: datetime,
        latitude: Optional[float],
        longitude: Optional[float]
    ) -> AdmissionDecision:
        """
        Evaluate a scan: time window first, then geofence

        Args:
            employee: Resolved employee
            action: 'Time In' / 'Time Out' (strict) or a free-form status (lenient)
            now: Current local time from the injected clock
            latitude: Reported scan latitude
            longitude: Reported scan longitude

        Returns:
            AdmissionDecision: acceptance with distance/alert, or rejection
        """
        rejected = self.check_time_window(action, now)
        if rejected:
            return rejected
        return self.check_location(employee, latitude, longitude)


def _format_minutes(minutes: int) -> str:
    hour, minute = divmod(minutes, 60)
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"
