from sqlalchemy import (
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    TIMESTAMP,
    func,
)

from evcharge.models.base import Base

APPROVAL_PENDING = "Pending"
APPROVAL_APPROVED = "Approved"
APPROVAL_REJECTED = "Rejected"

DEFAULT_OPERATIONAL_STATUS = "Active"


class Station(Base):
    __tablename__ = "stations"

    id = Column(Integer, primary_key=True)
    name = Column(String(120), nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    address = Column(String(255), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    price_per_kwh = Column(Float, nullable=True)
    # free-form, set by the owner ("Active", "Maintenance", ...)
    operational_status = Column(
        String(50), nullable=False, default=DEFAULT_OPERATIONAL_STATUS
    )
    approval_status = Column(String(20), nullable=False, default=APPROVAL_PENDING)
    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("ix_stations_owner_id", "owner_id"),
        Index("ix_stations_approval_status", "approval_status"),
    )
