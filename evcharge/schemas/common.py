from pydantic import BaseModel

from evcharge.schemas.base import CamelModel


class MessageResponse(BaseModel):
    message: str


class DashboardStats(CamelModel):
    total_users: int
    total_stations: int
    total_bookings: int
    active_bookings: int
    pending_stations: int


class DashboardStatsResponse(CamelModel):
    stats: DashboardStats
