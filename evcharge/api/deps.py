from typing import Annotated

from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from evcharge.db import get_session
from evcharge.schemas.base import MAX_ID
from evcharge.services.booking_service import BookingService
from evcharge.services.dashboard_service import DashboardService
from evcharge.services.review_service import ReviewService
from evcharge.services.station_service import StationService
from evcharge.store.sql import (
    SqlBookingStore,
    SqlReviewStore,
    SqlStationStore,
    SqlUserStore,
)

PathId = Annotated[int, Path(ge=1, le=MAX_ID)]


def get_review_service(session: AsyncSession = Depends(get_session)) -> ReviewService:
    return ReviewService(SqlReviewStore(session), SqlStationStore(session))


def get_station_service(session: AsyncSession = Depends(get_session)) -> StationService:
    return StationService(SqlStationStore(session))


def get_booking_service(session: AsyncSession = Depends(get_session)) -> BookingService:
    return BookingService(SqlBookingStore(session), SqlStationStore(session))


def get_dashboard_service(
    session: AsyncSession = Depends(get_session),
) -> DashboardService:
    return DashboardService(
        SqlUserStore(session), SqlStationStore(session), SqlBookingStore(session)
    )
