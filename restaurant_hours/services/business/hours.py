"""
Operating hours service.
Weekly schedule model for restaurant locations plus the validation and
time queries behind the admin console's hours widgets (open now, next
opening/closing, day progress). Windows whose close time is earlier than
the open time run past midnight into the next calendar day.

All functions are pure: they never mutate the schedules they receive and
take an optional reference datetime, defaulting to the local wall clock.
"""
import logging
import math
import re
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from restaurant_hours.core.config import settings

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
PLACEHOLDER_TIME = "00:00"
FALLBACK_OPEN_TIME = "09:00"
FALLBACK_CLOSE_TIME = "18:00"
TIME_PATTERN = re.compile(r"([01]?[0-9]|2[0-3]):[0-5][0-9]")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class DayOfWeek(str, Enum):
    """day keys used by stored schedules, in Monday-first order."""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def weekday(self) -> int:
        """index as returned by datetime.weekday() (0=Monday, 6=Sunday)."""
        return WEEKDAY_INDEX[self]

    @classmethod
    def from_weekday(cls, weekday: int) -> "DayOfWeek":
        return _DAY_BY_WEEKDAY[weekday]

    @classmethod
    def of(cls, value: datetime) -> "DayOfWeek":
        """day key for the calendar day a datetime falls on."""
        return cls.from_weekday(value.weekday())


WEEKDAY_INDEX: Dict[DayOfWeek, int] = {
    DayOfWeek.MONDAY: 0,
    DayOfWeek.TUESDAY: 1,
    DayOfWeek.WEDNESDAY: 2,
    DayOfWeek.THURSDAY: 3,
    DayOfWeek.FRIDAY: 4,
    DayOfWeek.SATURDAY: 5,
    DayOfWeek.SUNDAY: 6,
}
_DAY_BY_WEEKDAY: Dict[int, DayOfWeek] = {index: day for day, index in WEEKDAY_INDEX.items()}


@dataclass(frozen=True)
class DaySchedule:
    """operating window for one day of the week."""
    open: str
    close: str
    closed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"open": self.open, "close": self.close, "closed": self.closed}


# weekly schedule, one entry per DayOfWeek
OperatingHours = Dict[DayOfWeek, DaySchedule]


@dataclass
class OperatingHoursValidationResult:
    """result of weekly schedule validation."""
    is_valid: bool
    errors: List[str]


@dataclass(frozen=True)
class HourBar:
    """position of a day's window on a 24h timeline, in percent."""
    start_percent: float
    duration_percent: float


@dataclass
class LocationStatus:
    is_open: bool
    status_text: str
    next_change_text: str
    today_key: DayOfWeek


@dataclass
class LocationSummary:
    open_count: int
    closed_count: int
    total_count: int
    open_percentage: int


class InvalidOperatingHoursError(ValueError):
    """raised when a schedule that failed validation is about to be persisted."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(f"Horarios inválidos: {', '.join(self.errors)}")


# ---------------------------------------------------------------------------
# time parsing & formatting
# ---------------------------------------------------------------------------

def _leading_int(segment: Optional[str]) -> int:
    match = _LEADING_INT.match(segment or "")
    return int(match.group(1)) if match else 0


def time_to_minutes(value: str) -> int:
    """minutes since midnight for an HH:MM string; unreadable parts count as 0."""
    parts = value.split(":") if isinstance(value, str) else []
    hours = _leading_int(parts[0] if parts else None)
    minutes = _leading_int(parts[1] if len(parts) > 1 else None)
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def is_valid_time_format(value: Any) -> bool:
    return isinstance(value, str) and TIME_PATTERN.fullmatch(value) is not None


def format_time(value: str) -> str:
    """zero-pad the hour of a valid time ("9:05" -> "09:05"); anything else is returned as is."""
    if not value or not is_valid_time_format(value):
        return value
    hours, minutes = value.split(":")
    return f"{int(hours):02d}:{minutes}"


def format_day_schedule(schedule: DaySchedule) -> str:
    if schedule.closed:
        return "Cerrado"
    return f"{schedule.open} - {schedule.close}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _minute_of_day(value: datetime) -> int:
    return value.hour * 60 + value.minute


def _wall_clock(reference: datetime, days: int, minutes: int) -> datetime:
    """reference's calendar date shifted by `days`, at `minutes` past midnight."""
    midnight = reference.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(days=days, minutes=minutes)


def _raw_schedule_for(hours: Mapping[Any, Any], day: DayOfWeek) -> Any:
    schedule = hours.get(day)
    if schedule is None:
        schedule = hours.get(day.value)
    return schedule


def _as_schedule(value: Any) -> Any:
    """JSON-shaped day entries are read field by field into a DaySchedule."""
    if isinstance(value, Mapping):
        return DaySchedule(
            open=value.get("open", ""),
            close=value.get("close", ""),
            closed=bool(value.get("closed", False)),
        )
    return value


def _schedule_for(hours: Mapping[Any, Any], day: DayOfWeek) -> Optional[DaySchedule]:
    return _as_schedule(_raw_schedule_for(hours, day))


def _crosses_midnight(open_minutes: int, close_minutes: int) -> bool:
    return open_minutes >= close_minutes


# ---------------------------------------------------------------------------
# validation
# ---------------------------------------------------------------------------

def validate_day_schedule(schedule: DaySchedule, day_label: str) -> List[str]:
    """errors for one day; closed days are not checked, crossing midnight is allowed."""
    errors: List[str] = []

    schedule = _as_schedule(schedule)
    if schedule.closed:
        return errors

    open_ok = is_valid_time_format(schedule.open)
    close_ok = is_valid_time_format(schedule.close)

    if not open_ok:
        errors.append(f"{day_label}: Formato de hora de apertura inválido. Use HH:MM (formato 24h)")

    if not close_ok:
        errors.append(f"{day_label}: Formato de hora de cierre inválido. Use HH:MM (formato 24h)")

    if open_ok and close_ok and time_to_minutes(schedule.open) == time_to_minutes(schedule.close):
        errors.append(f"{day_label}: Las horas de apertura y cierre no pueden ser iguales")

    return errors


def validate_operating_hours(hours: Mapping[Any, DaySchedule]) -> OperatingHoursValidationResult:
    """validate all seven days; a missing day is reported once and skipped."""
    errors: List[str] = []

    for day in DayOfWeek:
        schedule = _schedule_for(hours, day)
        if schedule is None:
            errors.append(f"Falta horario para {day.value}")
            continue
        errors.extend(validate_day_schedule(schedule, day.value))

    return OperatingHoursValidationResult(is_valid=not errors, errors=errors)


# ---------------------------------------------------------------------------
# open/closed determination
# ---------------------------------------------------------------------------

def is_open_at(hours: Mapping[Any, DaySchedule], at: datetime) -> bool:
    """check if the location is open at a specific moment.

    Only the schedule of the calendar day `at` falls on is consulted. The tail
    of the previous day's midnight-crossing window is not carried over, so a
    closed Monday reports closed at 01:00 even if Sunday closes at 02:00.
    """
    schedule = _schedule_for(hours, DayOfWeek.of(at))
    if schedule is None or schedule.closed:
        return False

    current = _minute_of_day(at)
    open_minutes = time_to_minutes(schedule.open)
    close_minutes = time_to_minutes(schedule.close)

    # regular window, e.g. 09:00 - 22:00
    if open_minutes < close_minutes:
        return open_minutes <= current <= close_minutes

    # window past midnight, e.g. 22:00 - 02:00
    return current >= open_minutes or current <= close_minutes


def is_currently_open(hours: Mapping[Any, DaySchedule], now: Optional[datetime] = None) -> bool:
    return is_open_at(hours, now or datetime.now())


# ---------------------------------------------------------------------------
# forward search
# ---------------------------------------------------------------------------

def get_next_opening_time(hours: Mapping[Any, DaySchedule], from_time: Optional[datetime] = None) -> Optional[datetime]:
    """next opening within a week of `from_time`; today's opening counts only if still ahead."""
    start = from_time or datetime.now()

    for offset in range(7):
        schedule = _schedule_for(hours, DayOfWeek.of(start + timedelta(days=offset)))
        if schedule is None or schedule.closed:
            continue

        opening = _wall_clock(start, offset, time_to_minutes(schedule.open))
        if offset == 0 and opening <= start:
            continue

        return opening

    # closed for the next 7 days
    return None


def get_next_closing_time(hours: Mapping[Any, DaySchedule], from_time: Optional[datetime] = None) -> Optional[datetime]:
    """close of the window `from_time` is in, or else of the next open day."""
    start = from_time or datetime.now()
    today = _schedule_for(hours, DayOfWeek.of(start))

    if today is not None and not today.closed:
        current = _minute_of_day(start)
        open_minutes = time_to_minutes(today.open)
        close_minutes = time_to_minutes(today.close)

        if not _crosses_midnight(open_minutes, close_minutes):
            if open_minutes <= current < close_minutes:
                return _wall_clock(start, 0, close_minutes)
        elif current >= open_minutes or current < close_minutes:
            # after opening the close falls on tomorrow's date
            days = 1 if current >= open_minutes else 0
            return _wall_clock(start, days, close_minutes)

    for offset in range(1, 8):
        schedule = _schedule_for(hours, DayOfWeek.of(start + timedelta(days=offset)))
        if schedule is None or schedule.closed:
            continue

        open_minutes = time_to_minutes(schedule.open)
        close_minutes = time_to_minutes(schedule.close)
        days = offset + 1 if _crosses_midnight(open_minutes, close_minutes) else offset
        return _wall_clock(start, days, close_minutes)

    return None


def get_next_status_change_text(hours: Mapping[Any, DaySchedule], now: Optional[datetime] = None) -> str:
    """short countdown to the next closing (when open) or opening (when closed)."""
    now = now or datetime.now()

    if is_open_at(hours, now):
        next_close = get_next_closing_time(hours, now)
        if next_close is None:
            return ""
        diff_minutes = _round_half_up((next_close - now).total_seconds() / 60)
        if diff_minutes < 60:
            return f"Cierra en {diff_minutes} min"
        return f"Cierra en {_round_half_up(diff_minutes / 60)}h"

    next_open = get_next_opening_time(hours, now)
    if next_open is None:
        return "Cerrado indefinidamente"

    diff_minutes = _round_half_up((next_open - now).total_seconds() / 60)
    if diff_minutes < 60:
        return f"Abre en {diff_minutes} min"
    if diff_minutes < MINUTES_PER_DAY:
        return f"Abre en {_round_half_up(diff_minutes / 60)}h"
    return f"Abre en {_round_half_up(diff_minutes / MINUTES_PER_DAY)}d"


# ---------------------------------------------------------------------------
# display helpers
# ---------------------------------------------------------------------------

def get_current_status_text(hours: Mapping[Any, DaySchedule], now: Optional[datetime] = None) -> str:
    now = now or datetime.now()

    if is_open_at(hours, now):
        return "Abierto ahora"

    next_open = get_next_opening_time(hours, now)
    if next_open is None:
        return "Cerrado permanentemente"

    diff_hours = math.ceil((next_open - now).total_seconds() / 3600)
    if diff_hours < 24:
        return f"Abre en {diff_hours} horas"
    return f"Abre el {next_open.day}/{next_open.month}/{next_open.year}"


def get_current_day_key(now: Optional[datetime] = None) -> DayOfWeek:
    return DayOfWeek.of(now or datetime.now())


def get_day_progress_percentage(schedule: DaySchedule, at: datetime) -> float:
    """share of the day's window already elapsed at `at`, 0-100; 0 outside the window."""
    if schedule.closed:
        return 0

    current = _minute_of_day(at)
    open_minutes = time_to_minutes(schedule.open)
    close_minutes = time_to_minutes(schedule.close)

    if open_minutes < close_minutes:
        if current < open_minutes or current > close_minutes:
            return 0
        total = close_minutes - open_minutes
        elapsed = current - open_minutes
        return max(0, min(100, elapsed / total * 100))

    total = (MINUTES_PER_DAY - open_minutes) + close_minutes
    if current >= open_minutes:
        elapsed = current - open_minutes
    elif current <= close_minutes:
        elapsed = (MINUTES_PER_DAY - open_minutes) + current
    else:
        return 0
    return min(100, elapsed / total * 100)


def _window_minutes(open_time: str, close_time: str) -> int:
    open_minutes = time_to_minutes(open_time)
    close_minutes = time_to_minutes(close_time)
    if open_minutes < close_minutes:
        return close_minutes - open_minutes
    return (MINUTES_PER_DAY - open_minutes) + close_minutes


def calculate_duration_text(open_time: str, close_time: str) -> str:
    """length of a window as "8h", "45 min" or "8h 30min"."""
    hours, minutes = divmod(_window_minutes(open_time, close_time), 60)

    if hours == 0:
        return f"{minutes} min"
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}min"


def get_hour_bar(schedule: DaySchedule) -> Optional[HourBar]:
    """timeline bar for a day; crossing windows extend beyond the 24h mark."""
    if schedule.closed:
        return None

    open_minutes = time_to_minutes(schedule.open)
    close_minutes = time_to_minutes(schedule.close)
    if close_minutes < open_minutes:
        close_minutes += MINUTES_PER_DAY

    return HourBar(
        start_percent=open_minutes / MINUTES_PER_DAY * 100,
        duration_percent=(close_minutes - open_minutes) / MINUTES_PER_DAY * 100,
    )


# ---------------------------------------------------------------------------
# editing helpers
# ---------------------------------------------------------------------------

def _copy_hours(hours: Mapping[Any, DaySchedule]) -> OperatingHours:
    result: OperatingHours = {}
    for day in DayOfWeek:
        schedule = _schedule_for(hours, day)
        if schedule is not None:
            result[day] = schedule
    return result


def update_day_schedule(hours: Mapping[Any, DaySchedule], day: DayOfWeek, **changes: Any) -> OperatingHours:
    """new schedule with the given fields of one day replaced."""
    day = DayOfWeek(day)
    result = _copy_hours(hours)
    current = result.get(day) or get_default_operating_hours()[day]
    result[day] = replace(current, **changes)
    return result


def set_day_closed(hours: Mapping[Any, DaySchedule], day: DayOfWeek, closed: bool) -> OperatingHours:
    """toggle a day; closing resets its times to the 00:00 placeholder."""
    if closed:
        return update_day_schedule(hours, day, closed=True, open=PLACEHOLDER_TIME, close=PLACEHOLDER_TIME)
    return update_day_schedule(hours, day, closed=False)


def apply_schedule_to_all(hours: Mapping[Any, DaySchedule], day: DayOfWeek) -> OperatingHours:
    """copy one day's schedule onto every day of the week."""
    day = DayOfWeek(day)
    template = _schedule_for(hours, day)
    if template is None:
        raise KeyError(day.value)
    return {each: template for each in DayOfWeek}


# ---------------------------------------------------------------------------
# normalization
# ---------------------------------------------------------------------------

def _default_times() -> Tuple[str, str]:
    open_time = settings.DEFAULT_OPEN_TIME
    close_time = settings.DEFAULT_CLOSE_TIME
    if (
        is_valid_time_format(open_time)
        and is_valid_time_format(close_time)
        and time_to_minutes(open_time) != time_to_minutes(close_time)
    ):
        return open_time, close_time

    logger.warning(
        f"Invalid default hours {open_time!r}-{close_time!r}, "
        f"using {FALLBACK_OPEN_TIME}-{FALLBACK_CLOSE_TIME}"
    )
    return FALLBACK_OPEN_TIME, FALLBACK_CLOSE_TIME


def get_default_operating_hours() -> OperatingHours:
    """fresh default template: every day open from the configured default times."""
    open_time, close_time = _default_times()
    return {day: DaySchedule(open=open_time, close=close_time, closed=False) for day in DayOfWeek}


def _text_or(value: Any, fallback: str) -> str:
    return value if isinstance(value, str) and value else fallback


def sanitize_operating_hours(partial: Optional[Mapping[Any, Any]]) -> OperatingHours:
    """fill a partial schedule from the defaults. Does not validate the result."""
    result = get_default_operating_hours()
    partial = partial or {}

    for day in DayOfWeek:
        day_input = _raw_schedule_for(partial, day)
        if not day_input:
            continue

        if isinstance(day_input, DaySchedule):
            fields = day_input.to_dict()
        elif isinstance(day_input, Mapping):
            fields = day_input
        else:
            fields = {}

        default = result[day]
        result[day] = DaySchedule(
            open=_text_or(fields.get("open"), default.open),
            close=_text_or(fields.get("close"), default.close),
            closed=bool(fields.get("closed")),
        )

    return result


def from_backend_format(raw: Any) -> OperatingHours:
    """schedule from a stored JSON value; anything that isn't an object yields the defaults."""
    if not raw or not isinstance(raw, Mapping):
        return get_default_operating_hours()
    return sanitize_operating_hours(raw)


def to_backend_format(hours: Mapping[Any, DaySchedule]) -> Dict[str, Dict[str, Any]]:
    """JSON shape for storage. Raises InvalidOperatingHoursError if validation fails."""
    result = validate_operating_hours(hours)
    if not result.is_valid:
        logger.warning(f"Rejected operating hours with {len(result.errors)} error(s): {result.errors}")
        raise InvalidOperatingHoursError(result.errors)

    return {day.value: _schedule_for(hours, day).to_dict() for day in DayOfWeek}


# ---------------------------------------------------------------------------
# location status
# ---------------------------------------------------------------------------

def get_operational_status(hours: Optional[Mapping[Any, DaySchedule]], now: Optional[datetime] = None) -> LocationStatus:
    now = now or datetime.now()
    today_key = DayOfWeek.of(now)

    if hours is None:
        return LocationStatus(
            is_open=False,
            status_text="Horarios no disponibles",
            next_change_text="",
            today_key=today_key,
        )

    return LocationStatus(
        is_open=is_open_at(hours, now),
        status_text=get_current_status_text(hours, now),
        next_change_text=get_next_status_change_text(hours, now),
        today_key=today_key,
    )


def summarize_locations(all_hours: Iterable[Optional[Mapping[Any, DaySchedule]]], now: Optional[datetime] = None) -> LocationSummary:
    """open/closed counts over many locations; locations without hours use the defaults."""
    now = now or datetime.now()
    total_count = 0
    open_count = 0

    for hours in all_hours:
        total_count += 1
        if is_open_at(hours if hours is not None else get_default_operating_hours(), now):
            open_count += 1

    open_percentage = _round_half_up(open_count / total_count * 100) if total_count else 0
    logger.debug(f"Location summary: {open_count}/{total_count} open")

    return LocationSummary(
        open_count=open_count,
        closed_count=total_count - open_count,
        total_count=total_count,
        open_percentage=open_percentage,
    )
