import logging

from evcharge.schemas.review import ReviewCreate, ReviewRecord, ReviewView
from evcharge.services.errors import NotOwnedError
from evcharge.services.review_views import (
    build_review_view,
    build_review_views,
    sort_by_rating,
)
from evcharge.store.base import AbstractReviewStore, AbstractStationStore

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(
        self, reviews: AbstractReviewStore, stations: AbstractStationStore
    ) -> None:
        self.reviews = reviews
        self.stations = stations

    async def list_reviews(self) -> list[ReviewView]:
        records = await self.reviews.list_with_user_and_station()
        return build_review_views(records)

    async def list_station_reviews(self, station_id: int) -> list[ReviewView]:
        # An unknown station simply has no reviews.
        records = await self.reviews.list_by_station(station_id)
        return build_review_views(records)

    async def list_owned_station_reviews(
        self, station_id: int, master_id: int
    ) -> list[ReviewView]:
        station = await self.stations.get_station(station_id)
        if station is None or station.owner_id != master_id:
            raise NotOwnedError(
                f"Station {station_id} not found or not owned by user {master_id}"
            )
        records = await self.reviews.list_by_station(station_id)
        return build_review_views(records, station)

    async def list_master_reviews(self, master_id: int) -> list[ReviewView]:
        views: list[ReviewView] = []
        stations = await self.stations.list_by_owner(master_id)
        for station in stations:
            records = await self.reviews.list_by_station(station.id)
            views.extend(build_review_view(r, station) for r in records)
        logger.debug(
            "Collected %d reviews across %d stations for master %d",
            len(views),
            len(stations),
            master_id,
        )
        return sort_by_rating(views)

    async def create_review(
        self, user_id: int, review: ReviewCreate
    ) -> ReviewRecord:
        return await self.reviews.create_review(user_id, review)
