from abc import ABC, abstractmethod

from evcharge.schemas.booking import BookingOut
from evcharge.schemas.review import ReviewCreate, ReviewRecord
from evcharge.schemas.station import StationIn, StationOut, StationUpdate
from evcharge.schemas.user import UserOut


class AbstractUserStore(ABC):
    @abstractmethod
    async def get_user(self, user_id: int) -> UserOut | None: ...

    @abstractmethod
    async def list_users(self) -> list[UserOut]: ...


class AbstractStationStore(ABC):
    @abstractmethod
    async def list_stations(self) -> list[StationOut]: ...

    @abstractmethod
    async def list_by_owner(self, owner_id: int) -> list[StationOut]: ...

    @abstractmethod
    async def list_by_approval_status(self, status: str) -> list[StationOut]: ...

    @abstractmethod
    async def get_station(self, station_id: int) -> StationOut | None: ...

    @abstractmethod
    async def create_station(
        self, owner_id: int, station: StationIn
    ) -> StationOut: ...

    @abstractmethod
    async def update_station(
        self, station_id: int, changes: StationUpdate
    ) -> StationOut | None: ...

    @abstractmethod
    async def set_approval_status(
        self, station_id: int, status: str
    ) -> StationOut | None: ...

    @abstractmethod
    async def set_operational_status(
        self, station_id: int, status: str
    ) -> StationOut | None: ...


class AbstractBookingStore(ABC):
    @abstractmethod
    async def list_bookings(self) -> list[BookingOut]: ...

    @abstractmethod
    async def list_by_station(self, station_id: int) -> list[BookingOut]: ...

    @abstractmethod
    async def get_booking(self, booking_id: int) -> BookingOut | None: ...

    @abstractmethod
    async def set_status(
        self, booking_id: int, status: str
    ) -> BookingOut | None: ...


class AbstractReviewStore(ABC):
    @abstractmethod
    async def list_with_user_and_station(self) -> list[ReviewRecord]: ...

    @abstractmethod
    async def list_by_station(self, station_id: int) -> list[ReviewRecord]: ...

    @abstractmethod
    async def create_review(
        self, user_id: int, review: ReviewCreate
    ) -> ReviewRecord: ...
