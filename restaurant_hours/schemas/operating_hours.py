from typing import Optional, List, Dict
from pydantic import BaseModel, Field

from restaurant_hours.services.business.hours import DayOfWeek, DaySchedule, OperatingHours


class DayScheduleSchema(BaseModel):
    # times aren't pattern-checked here so that the engine can report every bad day at once
    open: str = Field("00:00", description="Opening time in HH:MM format")
    close: str = Field("00:00", description="Closing time in HH:MM format")
    closed: bool = Field(False, description="Whether the location is closed on this day")

    def to_schedule(self) -> DaySchedule:
        return DaySchedule(open=self.open, close=self.close, closed=self.closed)


class OperatingHoursSchema(BaseModel):
    """full weekly schedule as stored and returned by the API."""
    monday: DayScheduleSchema
    tuesday: DayScheduleSchema
    wednesday: DayScheduleSchema
    thursday: DayScheduleSchema
    friday: DayScheduleSchema
    saturday: DayScheduleSchema
    sunday: DayScheduleSchema

    @classmethod
    def from_hours(cls, hours: OperatingHours) -> "OperatingHoursSchema":
        return cls.model_validate({day.value: hours[day].to_dict() for day in DayOfWeek})


class WeeklyHoursIn(BaseModel):
    """weekly schedule sent by the editor; missing days are reported by validation."""
    monday: Optional[DayScheduleSchema] = None
    tuesday: Optional[DayScheduleSchema] = None
    wednesday: Optional[DayScheduleSchema] = None
    thursday: Optional[DayScheduleSchema] = None
    friday: Optional[DayScheduleSchema] = None
    saturday: Optional[DayScheduleSchema] = None
    sunday: Optional[DayScheduleSchema] = None

    def to_hours(self) -> Dict[DayOfWeek, DaySchedule]:
        hours = {}
        for day in DayOfWeek:
            day_input = getattr(self, day.value)
            if day_input is not None:
                hours[day] = day_input.to_schedule()
        return hours


class OperatingHoursUpdate(BaseModel):
    operating_hours: WeeklyHoursIn


class ValidationReport(BaseModel):
    is_valid: bool
    errors: List[str] = []


class OperatingStatusOut(BaseModel):
    location_id: int
    is_open: bool = Field(..., description="Whether the location is open right now")
    status_text: str
    next_change_text: str
    today_key: str
    current_time: str = Field(..., description="Local wall-clock time used for the check")


class LocationStatusItem(BaseModel):
    location_id: int
    name: str
    is_open: bool
    status_text: str
    next_change_text: str


class LocationsSummaryOut(BaseModel):
    open_count: int
    closed_count: int
    total_count: int
    open_percentage: int
    locations: List[LocationStatusItem] = []
    current_time: str
