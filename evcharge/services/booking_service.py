from evcharge.models.booking import (
    BOOKING_CANCELLED,
    BOOKING_COMPLETED,
    BOOKING_CONFIRMED,
)
from evcharge.schemas.booking import BookingOut
from evcharge.services.errors import BookingNotFoundError, NotOwnedError
from evcharge.store.base import AbstractBookingStore, AbstractStationStore


class BookingService:
    """Station-master side of bookings.

    Status changes overwrite whatever status the booking currently has; only
    ownership of the booking's station is checked.
    """

    def __init__(
        self, bookings: AbstractBookingStore, stations: AbstractStationStore
    ) -> None:
        self.bookings = bookings
        self.stations = stations

    async def list_bookings(self) -> list[BookingOut]:
        return await self.bookings.list_bookings()

    async def _check_owner(self, station_id: int, master_id: int) -> None:
        station = await self.stations.get_station(station_id)
        if station is None or station.owner_id != master_id:
            raise NotOwnedError(
                f"Station {station_id} not found or not owned by user {master_id}"
            )

    async def list_station_bookings(
        self, station_id: int, master_id: int
    ) -> list[BookingOut]:
        await self._check_owner(station_id, master_id)
        return await self.bookings.list_by_station(station_id)

    async def confirm(self, booking_id: int, master_id: int) -> BookingOut:
        return await self._set_status(booking_id, master_id, BOOKING_CONFIRMED)

    async def cancel(self, booking_id: int, master_id: int) -> BookingOut:
        return await self._set_status(booking_id, master_id, BOOKING_CANCELLED)

    async def complete(self, booking_id: int, master_id: int) -> BookingOut:
        return await self._set_status(booking_id, master_id, BOOKING_COMPLETED)

    async def _set_status(
        self, booking_id: int, master_id: int, status: str
    ) -> BookingOut:
        booking = await self.bookings.get_booking(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        await self._check_owner(booking.station_id, master_id)
        updated = await self.bookings.set_status(booking_id, status)
        if updated is None:
            raise BookingNotFoundError(booking_id)
        return updated
