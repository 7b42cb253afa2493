import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from restaurant_hours import models
from restaurant_hours.db.session import get_db
from restaurant_hours.schemas.operating_hours import (
    OperatingHoursSchema,
    OperatingHoursUpdate,
    ValidationReport,
    OperatingStatusOut,
    LocationStatusItem,
    LocationsSummaryOut,
)
from restaurant_hours.services.business.hours import (
    InvalidOperatingHoursError,
    from_backend_format,
    get_default_operating_hours,
    get_operational_status,
    summarize_locations,
    to_backend_format,
    validate_operating_hours,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/restaurants/locations", tags=["operating-hours"])


def get_current_time() -> datetime:
    """local wall-clock time used for status checks."""
    return datetime.now()


def _get_location(db: Session, location_id: int) -> models.RestaurantLocation:
    location = db.get(models.RestaurantLocation, location_id)
    if not location:
        raise HTTPException(status_code=404, detail="Location not found")
    return location


@router.get("/operating-hours/summary", response_model=LocationsSummaryOut)
def get_operating_hours_summary(
    db: Session = Depends(get_db),
    now: datetime = Depends(get_current_time),
):
    """open/closed overview across all locations."""
    locations = db.query(models.RestaurantLocation).order_by(models.RestaurantLocation.id.asc()).all()
    all_hours = [from_backend_format(location.operating_hours) for location in locations]

    items = []
    for location, hours in zip(locations, all_hours):
        status = get_operational_status(hours, now)
        items.append(LocationStatusItem(
            location_id=location.id,
            name=location.name,
            is_open=status.is_open,
            status_text=status.status_text,
            next_change_text=status.next_change_text,
        ))

    summary = summarize_locations(all_hours, now)
    return LocationsSummaryOut(
        open_count=summary.open_count,
        closed_count=summary.closed_count,
        total_count=summary.total_count,
        open_percentage=summary.open_percentage,
        locations=items,
        current_time=now.strftime('%Y-%m-%d %H:%M:%S'),
    )


@router.post("/operating-hours/validate", response_model=ValidationReport)
def validate_hours(payload: OperatingHoursUpdate):
    """check a weekly schedule without saving it."""
    result = validate_operating_hours(payload.operating_hours.to_hours())
    return ValidationReport(is_valid=result.is_valid, errors=result.errors)


@router.get("/{location_id}/operating-hours", response_model=OperatingHoursSchema)
def get_location_hours(
    location_id: int,
    db: Session = Depends(get_db),
):
    """get weekly hours for a location (defaults if none saved yet)."""
    location = _get_location(db, location_id)
    return OperatingHoursSchema.from_hours(from_backend_format(location.operating_hours))


@router.patch("/{location_id}/operating-hours", response_model=OperatingHoursSchema)
def update_location_hours(
    location_id: int,
    payload: OperatingHoursUpdate,
    db: Session = Depends(get_db),
):
    """replace the weekly hours of a location."""
    location = _get_location(db, location_id)

    hours = payload.operating_hours.to_hours()
    try:
        stored = to_backend_format(hours)
    except InvalidOperatingHoursError as e:
        raise HTTPException(status_code=400, detail={"message": str(e), "errors": e.errors})

    location.operating_hours = stored
    db.add(location)
    db.commit()
    logger.info(f"Operating hours updated for location {location_id}")

    return OperatingHoursSchema.from_hours(hours)


@router.post("/{location_id}/operating-hours/reset", response_model=OperatingHoursSchema)
def reset_location_hours(
    location_id: int,
    db: Session = Depends(get_db),
):
    """reset a location to the default weekly template."""
    location = _get_location(db, location_id)
    defaults = get_default_operating_hours()

    try:
        location.operating_hours = to_backend_format(defaults)
    except InvalidOperatingHoursError as e:
        raise HTTPException(status_code=400, detail={"message": str(e), "errors": e.errors})

    db.add(location)
    db.commit()
    logger.info(f"Operating hours reset to defaults for location {location_id}")

    return OperatingHoursSchema.from_hours(defaults)


@router.get("/{location_id}/operating-hours/status", response_model=OperatingStatusOut)
def get_location_status(
    location_id: int,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_current_time),
):
    """current open/closed status of a location."""
    location = _get_location(db, location_id)
    status = get_operational_status(from_backend_format(location.operating_hours), now)

    return OperatingStatusOut(
        location_id=location.id,
        is_open=status.is_open,
        status_text=status.status_text,
        next_change_text=status.next_change_text,
        today_key=status.today_key.value,
        current_time=now.strftime('%Y-%m-%d %H:%M:%S'),
    )
