from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from evcharge.schemas.base import MAX_ID, CamelModel
from evcharge.schemas.station import StationOut
from evcharge.schemas.user import UserOut


class ReviewCreate(CamelModel):
    station_id: int = Field(ge=1, le=MAX_ID)
    rating: int = Field(ge=1, le=5)
    comment: str | None = ""

    @field_validator("comment")
    @classmethod
    def default_empty(cls, v: str | None) -> str:
        return v or ""


class ReviewRecord(CamelModel):
    """A stored review plus whatever user/station rows it still resolves to."""

    id: int
    user_id: int
    station_id: int
    rating: int
    comment: str = ""
    created_at: datetime | None = None
    user: UserOut | None = None
    station: StationOut | None = None


class ReviewUserInfo(BaseModel):
    name: str
    email: str


class ReviewStationInfo(BaseModel):
    name: str


class ReviewView(CamelModel):
    id: int
    user_id: int
    station_id: int
    rating: int
    comment: str
    created_at: datetime | None = None
    user: ReviewUserInfo
    station: ReviewStationInfo
