from evcharge.models.station import (
    APPROVAL_APPROVED,
    APPROVAL_PENDING,
    APPROVAL_REJECTED,
)
from evcharge.schemas.station import StationIn, StationOut, StationUpdate
from evcharge.services.errors import (
    InvalidTransitionError,
    NotOwnedError,
    StationNotFoundError,
)
from evcharge.store.base import AbstractStationStore

# Re-applying the current decision is allowed; a decision is never reversed.
APPROVAL_TRANSITIONS = {
    APPROVAL_PENDING: {APPROVAL_APPROVED, APPROVAL_REJECTED},
    APPROVAL_APPROVED: {APPROVAL_APPROVED},
    APPROVAL_REJECTED: {APPROVAL_REJECTED},
}


class StationService:
    def __init__(self, store: AbstractStationStore) -> None:
        self.store = store

    async def list_stations(self) -> list[StationOut]:
        return await self.store.list_stations()

    async def list_by_approval_status(self, status: str) -> list[StationOut]:
        return await self.store.list_by_approval_status(status)

    async def list_pending(self) -> list[StationOut]:
        return await self.store.list_by_approval_status(APPROVAL_PENDING)

    async def approve(self, station_id: int) -> StationOut:
        return await self._decide(station_id, APPROVAL_APPROVED)

    async def reject(self, station_id: int) -> StationOut:
        return await self._decide(station_id, APPROVAL_REJECTED)

    async def _decide(self, station_id: int, target: str) -> StationOut:
        station = await self.store.get_station(station_id)
        if station is None:
            raise StationNotFoundError(station_id)
        if target not in APPROVAL_TRANSITIONS.get(station.approval_status, set()):
            raise InvalidTransitionError(station.approval_status, target)
        updated = await self.store.set_approval_status(station_id, target)
        if updated is None:
            raise StationNotFoundError(station_id)
        return updated

    async def list_for_master(self, master_id: int) -> list[StationOut]:
        return await self.store.list_by_owner(master_id)

    async def create_for_master(
        self, station: StationIn, master_id: int
    ) -> StationOut:
        return await self.store.create_station(master_id, station)

    async def get_owned(self, station_id: int, master_id: int) -> StationOut:
        station = await self.store.get_station(station_id)
        if station is None or station.owner_id != master_id:
            raise NotOwnedError(
                f"Station {station_id} not found or not owned by user {master_id}"
            )
        return station

    async def update_for_master(
        self, station_id: int, changes: StationUpdate, master_id: int
    ) -> StationOut:
        await self.get_owned(station_id, master_id)
        updated = await self.store.update_station(station_id, changes)
        if updated is None:
            raise StationNotFoundError(station_id)
        return updated

    async def update_status(
        self, station_id: int, status: str, master_id: int
    ) -> StationOut:
        await self.get_owned(station_id, master_id)
        updated = await self.store.set_operational_status(station_id, status)
        if updated is None:
            raise StationNotFoundError(station_id)
        return updated
