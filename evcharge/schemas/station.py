from datetime import datetime
from pydantic import Field, field_validator

from evcharge.schemas.base import CamelModel


class StationIn(CamelModel):
    name: str = Field(min_length=3, max_length=120)
    address: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    price_per_kwh: float | None = Field(default=None, ge=0)
    operational_status: str = Field(default="Active", alias="status", max_length=50)

    @field_validator("name", "operational_status")
    @classmethod
    def non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class StationUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=3, max_length=120)
    address: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    price_per_kwh: float | None = Field(default=None, ge=0)
    operational_status: str | None = Field(default=None, alias="status", max_length=50)

    # Omitted fields are left alone; an explicit null would blank a required column.
    @field_validator("name", "operational_status")
    @classmethod
    def not_null_or_empty(cls, v: str | None) -> str:
        if v is None or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class StationStatusUpdate(CamelModel):
    status: str = Field(min_length=1, max_length=50)

    @field_validator("status")
    @classmethod
    def non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class StationOut(CamelModel):
    id: int
    name: str
    owner_id: int
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    price_per_kwh: float | None = None
    operational_status: str = Field(alias="status")
    approval_status: str
    created_at: datetime | None = None


class StationListResponse(CamelModel):
    stations: list[StationOut]
