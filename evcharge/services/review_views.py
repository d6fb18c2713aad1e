"""
Shaping of stored reviews into the flat records the review endpoints return.

Every endpoint that lists reviews orders them by rating, lowest first. The
sort is stable, so reviews with equal ratings keep the order they were
fetched in.
"""

from typing import Iterable

from evcharge.schemas.review import (
    ReviewRecord,
    ReviewStationInfo,
    ReviewUserInfo,
    ReviewView,
)
from evcharge.schemas.station import StationOut

UNKNOWN = "Unknown"


def build_review_view(
    review: ReviewRecord, station: StationOut | None = None
) -> ReviewView:
    """Flatten one review.

    ``station`` overrides the review's own station association when given.
    A user or station that no longer resolves is rendered as ``"Unknown"``.
    """
    if review.user is not None:
        user_info = ReviewUserInfo(name=review.user.name, email=review.user.email)
    else:
        user_info = ReviewUserInfo(name=UNKNOWN, email=UNKNOWN)

    station = station if station is not None else review.station
    if station is not None:
        station_info = ReviewStationInfo(name=station.name)
    else:
        station_info = ReviewStationInfo(name=UNKNOWN)

    return ReviewView(
        id=review.id,
        user_id=review.user_id,
        station_id=review.station_id,
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
        user=user_info,
        station=station_info,
    )


def sort_by_rating(views: Iterable[ReviewView]) -> list[ReviewView]:
    return sorted(views, key=lambda v: v.rating)


def build_review_views(
    reviews: Iterable[ReviewRecord], station: StationOut | None = None
) -> list[ReviewView]:
    return sort_by_rating(build_review_view(r, station) for r in reviews)
