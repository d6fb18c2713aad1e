from sqlalchemy import (
    CheckConstraint,
    Column,
    Index,
    Integer,
    Text,
    TIMESTAMP,
    func,
)
from sqlalchemy.orm import relationship

from evcharge.models.base import Base
from evcharge.models.station import Station
from evcharge.models.user import User


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True)
    # No foreign keys: a review outlives the user or station it points at.
    user_id = Column(Integer, nullable=False)
    station_id = Column(Integer, nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False, default="")
    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

    user = relationship(
        User,
        primaryjoin="foreign(Review.user_id) == User.id",
        viewonly=True,
    )
    station = relationship(
        Station,
        primaryjoin="foreign(Review.station_id) == Station.id",
        viewonly=True,
    )

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
        Index("ix_reviews_station_id", "station_id"),
        Index("ix_reviews_user_id", "user_id"),
    )
