from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from evcharge.models.booking import Booking
from evcharge.models.review import Review
from evcharge.models.station import APPROVAL_PENDING, Station
from evcharge.models.user import User
from evcharge.schemas.booking import BookingOut
from evcharge.schemas.review import ReviewCreate, ReviewRecord
from evcharge.schemas.station import StationIn, StationOut, StationUpdate
from evcharge.schemas.user import UserOut
from evcharge.store.base import (
    AbstractBookingStore,
    AbstractReviewStore,
    AbstractStationStore,
    AbstractUserStore,
)


class SqlUserStore(AbstractUserStore):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_user(self, user_id: int) -> UserOut | None:
        user = await self.session.get(User, user_id)
        if user is None:
            return None
        return UserOut.model_validate(user)

    async def list_users(self) -> list[UserOut]:
        result = await self.session.execute(select(User).order_by(User.id))
        return [UserOut.model_validate(u) for u in result.scalars().all()]


class SqlStationStore(AbstractStationStore):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _list(self, *criteria) -> list[StationOut]:
        stmt = select(Station).order_by(Station.id)
        if criteria:
            stmt = stmt.where(*criteria)
        result = await self.session.execute(stmt)
        return [StationOut.model_validate(s) for s in result.scalars().all()]

    async def list_stations(self) -> list[StationOut]:
        return await self._list()

    async def list_by_owner(self, owner_id: int) -> list[StationOut]:
        return await self._list(Station.owner_id == owner_id)

    async def list_by_approval_status(self, status: str) -> list[StationOut]:
        return await self._list(Station.approval_status == status)

    async def get_station(self, station_id: int) -> StationOut | None:
        station = await self.session.get(Station, station_id)
        if station is None:
            return None
        return StationOut.model_validate(station)

    async def create_station(
        self, owner_id: int, station: StationIn
    ) -> StationOut:
        row = Station(
            **station.model_dump(),
            owner_id=owner_id,
            approval_status=APPROVAL_PENDING,
        )
        self.session.add(row)
        await self.session.commit()
        await self.session.refresh(row)
        return StationOut.model_validate(row)

    async def _update(self, station_id: int, values: dict) -> StationOut | None:
        row = await self.session.get(Station, station_id)
        if row is None:
            return None
        for key, value in values.items():
            setattr(row, key, value)
        await self.session.commit()
        await self.session.refresh(row)
        return StationOut.model_validate(row)

    async def update_station(
        self, station_id: int, changes: StationUpdate
    ) -> StationOut | None:
        return await self._update(station_id, changes.model_dump(exclude_unset=True))

    async def set_approval_status(
        self, station_id: int, status: str
    ) -> StationOut | None:
        return await self._update(station_id, {"approval_status": status})

    async def set_operational_status(
        self, station_id: int, status: str
    ) -> StationOut | None:
        return await self._update(station_id, {"operational_status": status})


class SqlBookingStore(AbstractBookingStore):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_bookings(self) -> list[BookingOut]:
        result = await self.session.execute(select(Booking).order_by(Booking.id))
        return [BookingOut.model_validate(b) for b in result.scalars().all()]

    async def list_by_station(self, station_id: int) -> list[BookingOut]:
        result = await self.session.execute(
            select(Booking)
            .where(Booking.station_id == station_id)
            .order_by(Booking.id)
        )
        return [BookingOut.model_validate(b) for b in result.scalars().all()]

    async def get_booking(self, booking_id: int) -> BookingOut | None:
        booking = await self.session.get(Booking, booking_id)
        if booking is None:
            return None
        return BookingOut.model_validate(booking)

    async def set_status(
        self, booking_id: int, status: str
    ) -> BookingOut | None:
        booking = await self.session.get(Booking, booking_id)
        if booking is None:
            return None
        booking.status = status
        await self.session.commit()
        await self.session.refresh(booking)
        return BookingOut.model_validate(booking)


class SqlReviewStore(AbstractReviewStore):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _joined(self):
        return select(Review).options(
            selectinload(Review.user), selectinload(Review.station)
        )

    async def list_with_user_and_station(self) -> list[ReviewRecord]:
        result = await self.session.execute(
            self._joined().order_by(Review.rating.asc(), Review.id.asc())
        )
        return [ReviewRecord.model_validate(r) for r in result.scalars().all()]

    async def list_by_station(self, station_id: int) -> list[ReviewRecord]:
        result = await self.session.execute(
            self._joined()
            .where(Review.station_id == station_id)
            .order_by(Review.id.asc())
        )
        return [ReviewRecord.model_validate(r) for r in result.scalars().all()]

    async def create_review(
        self, user_id: int, review: ReviewCreate
    ) -> ReviewRecord:
        row = Review(
            user_id=user_id,
            station_id=review.station_id,
            rating=review.rating,
            comment=review.comment or "",
        )
        self.session.add(row)
        await self.session.commit()

        result = await self.session.execute(
            self._joined()
            .where(Review.id == row.id)
            .execution_options(populate_existing=True)
        )
        return ReviewRecord.model_validate(result.scalar_one())
