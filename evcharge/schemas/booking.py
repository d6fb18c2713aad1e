from datetime import datetime

from evcharge.schemas.base import CamelModel


class BookingOut(CamelModel):
    id: int
    station_id: int
    user_id: int | None = None
    status: str
    created_at: datetime | None = None


class BookingListResponse(CamelModel):
    bookings: list[BookingOut]
