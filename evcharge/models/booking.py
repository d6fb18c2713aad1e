from sqlalchemy import Column, ForeignKey, Index, Integer, String, TIMESTAMP, func

from evcharge.models.base import Base

BOOKING_PENDING = "Pending"
BOOKING_CONFIRMED = "Confirmed"
BOOKING_CANCELLED = "Cancelled"
BOOKING_COMPLETED = "Completed"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True)
    station_id = Column(Integer, ForeignKey("stations.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    status = Column(String(20), nullable=False, default=BOOKING_PENDING)
    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("ix_bookings_station_id", "station_id"),)
