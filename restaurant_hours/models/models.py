from datetime import datetime
from sqlalchemy import Integer, String, DateTime, Float, JSON
from sqlalchemy.orm import Mapped, mapped_column

from restaurant_hours.db.base import Base

# helpers
now = datetime.utcnow


class RestaurantLocation(Base):
    __tablename__ = "restaurant_locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    address: Mapped[str] = mapped_column(String(1024))
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    # {"monday": {"open": "09:00", "close": "18:00", "closed": false}, ...}
    operating_hours: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now, onupdate=now)
