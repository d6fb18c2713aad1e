import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from evcharge.api.deps import PathId, get_review_service
from evcharge.auth import get_current_user, require_admin
from evcharge.schemas.common import MessageResponse
from evcharge.schemas.review import ReviewCreate, ReviewView
from evcharge.schemas.user import UserOut
from evcharge.services.errors import MarketplaceError
from evcharge.services.review_service import ReviewService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


@router.get("", response_model=list[ReviewView])
async def get_all_reviews(
    service: ReviewService = Depends(get_review_service),
) -> list[ReviewView]:
    try:
        return await service.list_reviews()
    except Exception:
        logger.exception("Error getting all reviews")
        return []


@router.get("/station/{station_id}", response_model=list[ReviewView])
async def get_station_reviews(
    station_id: PathId,
    service: ReviewService = Depends(get_review_service),
) -> list[ReviewView]:
    try:
        return await service.list_station_reviews(station_id)
    except Exception:
        logger.exception("Error getting reviews for station %d", station_id)
        return []


@router.get(
    "/admin",
    response_model=list[ReviewView],
    dependencies=[Depends(require_admin)],
)
async def get_admin_reviews() -> list[ReviewView]:
    # Admins read the full list from /api/admin/reviews.
    return []


@router.post("", response_model=MessageResponse)
async def create_review(
    body: ReviewCreate,
    user: UserOut = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    try:
        review = await service.create_review(user.id, body)
    except (SQLAlchemyError, MarketplaceError) as e:
        logger.error("Error creating review: %s", e)
        return JSONResponse(
            status_code=500,
            content={"message": "Error creating review", "error": str(e)},
        )
    logger.info(
        "User %d rated station %d with %d", user.id, review.station_id, review.rating
    )
    return MessageResponse(message="Review created successfully")
