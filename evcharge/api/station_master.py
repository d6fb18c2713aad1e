import logging
from typing import Awaitable, Callable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from evcharge.api.deps import (
    PathId,
    get_booking_service,
    get_review_service,
    get_station_service,
)
from evcharge.auth import require_station_master
from evcharge.schemas.booking import BookingOut
from evcharge.schemas.common import MessageResponse
from evcharge.schemas.review import ReviewView
from evcharge.schemas.station import (
    StationIn,
    StationOut,
    StationStatusUpdate,
    StationUpdate,
)
from evcharge.schemas.user import UserOut
from evcharge.services.booking_service import BookingService
from evcharge.services.errors import MarketplaceError, NotOwnedError
from evcharge.services.review_service import ReviewService
from evcharge.services.station_service import StationService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/station-master",
    tags=["Station Master"],
    dependencies=[Depends(require_station_master)],
)

NOT_OWNED_MESSAGE = "Station not found or not owned by you"


def _failure(message: str, exc: Exception) -> JSONResponse:
    if isinstance(exc, NotOwnedError):
        return JSONResponse(status_code=404, content={"message": NOT_OWNED_MESSAGE})
    return JSONResponse(status_code=500, content={"message": message, "error": str(exc)})


# ── Stations ──────────────────────────────────────────────────────────────────

@router.get("/stations", response_model=list[StationOut])
async def get_my_stations(
    master: UserOut = Depends(require_station_master),
    service: StationService = Depends(get_station_service),
):
    try:
        return await service.list_for_master(master.id)
    except SQLAlchemyError as e:
        logger.error("Error retrieving stations for master %d: %s", master.id, e)
        return _failure("Error retrieving stations", e)


@router.post("/stations", response_model=StationOut)
async def create_station(
    body: StationIn,
    master: UserOut = Depends(require_station_master),
    service: StationService = Depends(get_station_service),
):
    try:
        station = await service.create_for_master(body, master.id)
    except (SQLAlchemyError, MarketplaceError) as e:
        logger.error("Error creating station for master %d: %s", master.id, e)
        return _failure("Error creating station", e)
    logger.info("Station %d submitted for approval by master %d", station.id, master.id)
    return station


@router.put("/stations/{station_id}", response_model=StationOut)
async def update_station(
    station_id: PathId,
    body: StationUpdate,
    master: UserOut = Depends(require_station_master),
    service: StationService = Depends(get_station_service),
):
    try:
        return await service.update_for_master(station_id, body, master.id)
    except (SQLAlchemyError, MarketplaceError) as e:
        logger.warning("Updating station %d failed: %s", station_id, e)
        return _failure("Error updating station", e)


@router.put("/stations/{station_id}/status", response_model=MessageResponse)
async def update_station_status(
    station_id: PathId,
    body: StationStatusUpdate,
    master: UserOut = Depends(require_station_master),
    service: StationService = Depends(get_station_service),
):
    try:
        await service.update_status(station_id, body.status, master.id)
    except (SQLAlchemyError, MarketplaceError) as e:
        logger.warning("Updating status of station %d failed: %s", station_id, e)
        return _failure("Error updating station status", e)
    return MessageResponse(message="Station status updated successfully")


@router.get("/stations/{station_id}/bookings", response_model=list[BookingOut])
async def get_station_bookings(
    station_id: PathId,
    master: UserOut = Depends(require_station_master),
    service: BookingService = Depends(get_booking_service),
):
    try:
        return await service.list_station_bookings(station_id, master.id)
    except (SQLAlchemyError, MarketplaceError) as e:
        logger.warning("Listing bookings of station %d failed: %s", station_id, e)
        return _failure("Error retrieving bookings", e)


# ── Reviews ───────────────────────────────────────────────────────────────────

@router.get("/stations/{station_id}/reviews", response_model=list[ReviewView])
async def get_station_reviews(
    station_id: PathId,
    master: UserOut = Depends(require_station_master),
    service: ReviewService = Depends(get_review_service),
):
    try:
        return await service.list_owned_station_reviews(station_id, master.id)
    except Exception:
        logger.exception(
            "Reviews of station %d unavailable to master %d", station_id, master.id
        )
        return JSONResponse(status_code=404, content={"message": NOT_OWNED_MESSAGE})


@router.get("/reviews", response_model=list[ReviewView])
async def get_my_station_reviews(
    master: UserOut = Depends(require_station_master),
    service: ReviewService = Depends(get_review_service),
) -> list[ReviewView]:
    try:
        return await service.list_master_reviews(master.id)
    except Exception:
        logger.exception("Error getting reviews for master %d", master.id)
        return []


# ── Bookings ──────────────────────────────────────────────────────────────────

async def _change_booking(
    action: Callable[[int, int], Awaitable[BookingOut]],
    booking_id: PathId,
    master_id: int,
    failure_message: str,
) -> BookingOut | JSONResponse:
    try:
        booking = await action(booking_id, master_id)
    except (SQLAlchemyError, MarketplaceError) as e:
        logger.error("%s %d: %s", failure_message, booking_id, e)
        return JSONResponse(
            status_code=500,
            content={"message": failure_message, "error": str(e)},
        )
    logger.info("Booking %d is now %s", booking.id, booking.status)
    return booking


@router.put("/bookings/{booking_id}/confirm")
async def confirm_booking(
    booking_id: PathId,
    master: UserOut = Depends(require_station_master),
    service: BookingService = Depends(get_booking_service),
):
    result = await _change_booking(
        service.confirm, booking_id, master.id, "Error confirming booking"
    )
    if isinstance(result, JSONResponse):
        return result
    return {"message": "Booking confirmed successfully"}


@router.put("/bookings/{booking_id}/cancel")
async def cancel_booking(
    booking_id: PathId,
    master: UserOut = Depends(require_station_master),
    service: BookingService = Depends(get_booking_service),
):
    result = await _change_booking(
        service.cancel, booking_id, master.id, "Error cancelling booking"
    )
    if isinstance(result, JSONResponse):
        return result
    return {"message": "Booking cancelled successfully"}


@router.put("/bookings/{booking_id}/complete")
async def complete_booking(
    booking_id: PathId,
    master: UserOut = Depends(require_station_master),
    service: BookingService = Depends(get_booking_service),
):
    result = await _change_booking(
        service.complete, booking_id, master.id, "Error completing booking"
    )
    if isinstance(result, JSONResponse):
        return result
    return {"message": "Booking completed successfully", "bookingId": booking_id}
