from evcharge.models.booking import BOOKING_CONFIRMED
from evcharge.models.station import APPROVAL_PENDING
from evcharge.schemas.common import DashboardStats
from evcharge.schemas.user import UserOut
from evcharge.store.base import (
    AbstractBookingStore,
    AbstractStationStore,
    AbstractUserStore,
)


class DashboardService:
    def __init__(
        self,
        users: AbstractUserStore,
        stations: AbstractStationStore,
        bookings: AbstractBookingStore,
    ) -> None:
        self.users = users
        self.stations = stations
        self.bookings = bookings

    async def list_users(self) -> list[UserOut]:
        return await self.users.list_users()

    async def get_stats(self) -> DashboardStats:
        users = await self.users.list_users()
        stations = await self.stations.list_stations()
        bookings = await self.bookings.list_bookings()
        return DashboardStats(
            total_users=len(users),
            total_stations=len(stations),
            total_bookings=len(bookings),
            active_bookings=sum(1 for b in bookings if b.status == BOOKING_CONFIRMED),
            pending_stations=sum(
                1 for s in stations if s.approval_status == APPROVAL_PENDING
            ),
        )
