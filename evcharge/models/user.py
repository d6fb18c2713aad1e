from sqlalchemy import Column, Integer, String, TIMESTAMP, func

from evcharge.models.base import Base

ROLE_ADMIN = "Admin"
ROLE_STATION_MASTER = "StationMaster"
ROLE_USER = "User"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(120), nullable=False)
    email = Column(String(200), unique=True, index=True, nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_USER)
    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )
