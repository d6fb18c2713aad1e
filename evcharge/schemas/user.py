from datetime import datetime

from evcharge.schemas.base import CamelModel


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    role: str
    created_at: datetime | None = None


class UserListResponse(CamelModel):
    users: list[UserOut]
