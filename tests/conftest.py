import os

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from evcharge.api.deps import get_review_service
from evcharge.auth import create_access_token
from evcharge.db import get_session
from evcharge.main import app
from evcharge.models.base import Base
from evcharge.models.booking import Booking
from evcharge.models.review import Review
from evcharge.models.station import Station
from evcharge.models.user import ROLE_ADMIN, ROLE_STATION_MASTER, ROLE_USER, User
from evcharge.services.review_service import ReviewService
from evcharge.store.base import AbstractReviewStore, AbstractStationStore

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")


@pytest_asyncio.fixture
async def test_engine():
    if TEST_DATABASE_URL.startswith("sqlite"):
        # one shared in-memory database for every session in the test
        eng = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        eng = create_async_engine(TEST_DATABASE_URL)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_session() -> AsyncSession:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c
    app.dependency_overrides.clear()


# ── Seeding helpers ───────────────────────────────────────────────────────────

@pytest.fixture
def add(session):
    async def _add(row):
        session.add(row)
        await session.commit()
        await session.refresh(row)
        # release the connection; later reads must not see a stale identity map
        await session.close()
        return row

    return _add


@pytest_asyncio.fixture
async def admin_user(add) -> User:
    return await add(User(name="Ada Admin", email="admin@ev.test", role=ROLE_ADMIN))


@pytest_asyncio.fixture
async def master(add) -> User:
    return await add(
        User(name="Max Master", email="master@ev.test", role=ROLE_STATION_MASTER)
    )


@pytest_asyncio.fixture
async def other_master(add) -> User:
    return await add(
        User(name="Olga Other", email="other@ev.test", role=ROLE_STATION_MASTER)
    )


@pytest_asyncio.fixture
async def driver(add) -> User:
    return await add(User(name="Dan Driver", email="dan@ev.test", role=ROLE_USER))


@pytest.fixture
def make_station(add):
    async def _make(owner: User, name: str = "Central Plaza", **kwargs) -> Station:
        return await add(Station(name=name, owner_id=owner.id, **kwargs))

    return _make


@pytest.fixture
def make_review(add):
    async def _make(user_id: int, station_id: int, rating: int, comment: str = "") -> Review:
        return await add(
            Review(user_id=user_id, station_id=station_id, rating=rating, comment=comment)
        )

    return _make


@pytest.fixture
def make_booking(add):
    async def _make(station: Station, user: User | None = None, **kwargs) -> Booking:
        return await add(
            Booking(
                station_id=station.id,
                user_id=user.id if user is not None else None,
                **kwargs,
            )
        )

    return _make


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def headers():
    return auth_headers


# ── Broken persistence ────────────────────────────────────────────────────────

class FailingReviewStore(AbstractReviewStore):
    async def list_with_user_and_station(self):
        raise RuntimeError("database unavailable")

    async def list_by_station(self, station_id):
        raise RuntimeError("database unavailable")

    async def create_review(self, user_id, review):
        raise RuntimeError("database unavailable")


class FailingStationStore(AbstractStationStore):
    async def _fail(self, *args):
        raise RuntimeError("database unavailable")

    list_stations = _fail
    list_by_owner = _fail
    list_by_approval_status = _fail
    get_station = _fail
    create_station = _fail
    update_station = _fail
    set_approval_status = _fail
    set_operational_status = _fail


@pytest.fixture
def failing_reviews(client):
    """Route every review listing through stores that always raise."""
    app.dependency_overrides[get_review_service] = lambda: ReviewService(
        FailingReviewStore(), FailingStationStore()
    )
    yield
    app.dependency_overrides.pop(get_review_service, None)
