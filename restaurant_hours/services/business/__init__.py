"""
Business logic services package.

This package contains services for handling business logic including:
- Weekly operating hours model and validation
- Open/closed status and next opening/closing lookups
- Status summaries across restaurant locations
"""

from .hours import (
    DayOfWeek,
    DaySchedule,
    OperatingHours,
    OperatingHoursValidationResult,
    InvalidOperatingHoursError,
    HourBar,
    LocationStatus,
    LocationSummary,
    time_to_minutes,
    minutes_to_time,
    is_valid_time_format,
    format_time,
    format_day_schedule,
    validate_day_schedule,
    validate_operating_hours,
    is_open_at,
    is_currently_open,
    get_next_opening_time,
    get_next_closing_time,
    get_next_status_change_text,
    get_current_status_text,
    get_current_day_key,
    get_day_progress_percentage,
    calculate_duration_text,
    get_hour_bar,
    update_day_schedule,
    set_day_closed,
    apply_schedule_to_all,
    get_default_operating_hours,
    sanitize_operating_hours,
    from_backend_format,
    to_backend_format,
    get_operational_status,
    summarize_locations,
)

__all__ = [
    'DayOfWeek',
    'DaySchedule',
    'OperatingHours',
    'OperatingHoursValidationResult',
    'InvalidOperatingHoursError',
    'HourBar',
    'LocationStatus',
    'LocationSummary',
    'time_to_minutes',
    'minutes_to_time',
    'is_valid_time_format',
    'format_time',
    'format_day_schedule',
    'validate_day_schedule',
    'validate_operating_hours',
    'is_open_at',
    'is_currently_open',
    'get_next_opening_time',
    'get_next_closing_time',
    'get_next_status_change_text',
    'get_current_status_text',
    'get_current_day_key',
    'get_day_progress_percentage',
    'calculate_duration_text',
    'get_hour_bar',
    'update_day_schedule',
    'set_day_closed',
    'apply_schedule_to_all',
    'get_default_operating_hours',
    'sanitize_operating_hours',
    'from_backend_format',
    'to_backend_format',
    'get_operational_status',
    'summarize_locations',
]
