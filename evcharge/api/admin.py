import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from evcharge.api.deps import (
    PathId,
    get_booking_service,
    get_dashboard_service,
    get_review_service,
    get_station_service,
)
from evcharge.auth import require_admin
from evcharge.schemas.booking import BookingListResponse
from evcharge.schemas.common import DashboardStatsResponse, MessageResponse
from evcharge.schemas.review import ReviewView
from evcharge.schemas.station import StationListResponse
from evcharge.schemas.user import UserListResponse
from evcharge.services.booking_service import BookingService
from evcharge.services.dashboard_service import DashboardService
from evcharge.services.errors import MarketplaceError
from evcharge.services.review_service import ReviewService
from evcharge.services.station_service import StationService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/dashboard-stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardStatsResponse:
    return DashboardStatsResponse(stats=await service.get_stats())


@router.get("/users", response_model=UserListResponse)
async def get_all_users(
    service: DashboardService = Depends(get_dashboard_service),
) -> UserListResponse:
    return UserListResponse(users=await service.list_users())


@router.get("/bookings", response_model=BookingListResponse)
async def get_all_bookings(
    service: BookingService = Depends(get_booking_service),
) -> BookingListResponse:
    return BookingListResponse(bookings=await service.list_bookings())


@router.get("/reviews", response_model=list[ReviewView])
async def get_all_reviews(
    service: ReviewService = Depends(get_review_service),
) -> list[ReviewView]:
    try:
        return await service.list_reviews()
    except Exception:
        logger.exception("Error getting reviews for admin")
        return []


@router.get("/stations", response_model=StationListResponse)
async def get_all_stations(
    service: StationService = Depends(get_station_service),
) -> StationListResponse:
    return StationListResponse(stations=await service.list_stations())


@router.get("/stations/pending", response_model=StationListResponse)
async def get_pending_stations(
    service: StationService = Depends(get_station_service),
) -> StationListResponse:
    return StationListResponse(stations=await service.list_pending())


@router.put("/stations/{station_id}/approve", response_model=MessageResponse)
async def approve_station(
    station_id: PathId,
    service: StationService = Depends(get_station_service),
):
    try:
        await service.approve(station_id)
    except (SQLAlchemyError, MarketplaceError) as e:
        logger.warning("Approving station %d failed: %s", station_id, e)
        return JSONResponse(
            status_code=400,
            content={"error": f"Failed to approve station: {e}"},
        )
    logger.info("Station %d approved", station_id)
    return MessageResponse(message="Station approved successfully")


@router.put("/stations/{station_id}/reject", response_model=MessageResponse)
async def reject_station(
    station_id: PathId,
    service: StationService = Depends(get_station_service),
):
    try:
        await service.reject(station_id)
    except (SQLAlchemyError, MarketplaceError) as e:
        logger.warning("Rejecting station %d failed: %s", station_id, e)
        return JSONResponse(
            status_code=400,
            content={"error": f"Failed to reject station: {e}"},
        )
    logger.info("Station %d rejected", station_id)
    return MessageResponse(message="Station rejected successfully")
