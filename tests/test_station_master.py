from httpx import AsyncClient
from sqlalchemy import func, select

from evcharge.models.booking import Booking
from evcharge.models.station import Station


async def booking_status(session, booking_id: int) -> str:
    result = await session.execute(
        select(Booking.status).where(Booking.id == booking_id)
    )
    return result.scalar_one()


# ── Aggregate review listing ──────────────────────────────────────────────────

async def test_master_reviews_across_stations(client: AsyncClient, master, other_master, driver, headers, make_station, make_review):
    s1 = await make_station(master, name="S1")
    s2 = await make_station(master, name="S2")
    foreign = await make_station(other_master, name="Elsewhere")
    await make_review(driver.id, s1.id, 4)
    await make_review(driver.id, s1.id, 1)
    await make_review(driver.id, s2.id, 3)
    await make_review(driver.id, foreign.id, 2)

    resp = await client.get("/api/station-master/reviews", headers=headers(master))
    assert resp.status_code == 200
    data = resp.json()
    assert [(r["rating"], r["station"]["name"]) for r in data] == [
        (1, "S1"),
        (3, "S2"),
        (4, "S1"),
    ]
    assert data[0]["user"] == {"name": "Dan Driver", "email": "dan@ev.test"}


async def test_master_without_stations_has_no_reviews(client: AsyncClient, master, headers):
    resp = await client.get("/api/station-master/reviews", headers=headers(master))
    assert resp.status_code == 200
    assert resp.json() == []


async def test_master_reviews_empty_when_store_fails(client: AsyncClient, master, headers, failing_reviews):
    resp = await client.get("/api/station-master/reviews", headers=headers(master))
    assert resp.status_code == 200
    assert resp.json() == []


async def test_master_routes_reject_other_roles(client: AsyncClient, admin_user, driver, headers):
    for user in (admin_user, driver):
        resp = await client.get("/api/station-master/reviews", headers=headers(user))
        assert resp.status_code == 403


# ── Per-station review listing ────────────────────────────────────────────────

async def test_owned_station_reviews(client: AsyncClient, master, driver, headers, make_station, make_review):
    station = await make_station(master)
    await make_review(driver.id, station.id, 5)
    await make_review(9999, station.id, 2)

    resp = await client.get(f"/api/station-master/stations/{station.id}/reviews", headers=headers(master))
    assert resp.status_code == 200
    data = resp.json()
    assert [r["rating"] for r in data] == [2, 5]
    assert data[0]["user"]["name"] == "Unknown"
    assert data[1]["station"]["name"] == "Central Plaza"


async def test_foreign_station_reviews_not_found(client: AsyncClient, master, other_master, driver, headers, make_station, make_review):
    station = await make_station(other_master)
    await make_review(driver.id, station.id, 5)

    resp = await client.get(f"/api/station-master/stations/{station.id}/reviews", headers=headers(master))
    assert resp.status_code == 404
    assert resp.json() == {"message": "Station not found or not owned by you"}


async def test_missing_station_reviews_not_found(client: AsyncClient, master, headers):
    resp = await client.get("/api/station-master/stations/777/reviews", headers=headers(master))
    assert resp.status_code == 404


async def test_station_reviews_store_failure_is_404(client: AsyncClient, master, headers, failing_reviews):
    resp = await client.get("/api/station-master/stations/1/reviews", headers=headers(master))
    assert resp.status_code == 404


# ── Stations ──────────────────────────────────────────────────────────────────

async def test_my_stations_bare_list(client: AsyncClient, master, other_master, headers, make_station):
    mine = await make_station(master)
    await make_station(other_master, name="Elsewhere")

    resp = await client.get("/api/station-master/stations", headers=headers(master))
    assert resp.status_code == 200
    data = resp.json()
    assert [s["id"] for s in data] == [mine.id]


async def test_create_station_starts_pending(client: AsyncClient, session, master, headers):
    resp = await client.post(
        "/api/station-master/stations",
        json={
            "name": "Harbour Point",
            "address": "12 Dock Road, Portside",
            "latitude": 51.5,
            "longitude": -0.12,
            "pricePerKwh": 12.5,
            "status": "Active",
        },
        headers=headers(master),
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["ownerId"] == master.id
    assert data["approvalStatus"] == "Pending"
    assert data["pricePerKwh"] == 12.5

    row = await session.get(Station, data["id"])
    assert row.owner_id == master.id


async def test_create_station_validates_name(client: AsyncClient, master, headers):
    resp = await client.post("/api/station-master/stations", json={"name": "ab"}, headers=headers(master))
    assert resp.status_code == 400


async def test_update_own_station(client: AsyncClient, master, headers, make_station):
    station = await make_station(master)
    resp = await client.put(
        f"/api/station-master/stations/{station.id}",
        json={"name": "Central Plaza North", "pricePerKwh": 9.0},
        headers=headers(master),
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Central Plaza North"
    assert data["pricePerKwh"] == 9.0
    assert data["approvalStatus"] == "Pending"


async def test_update_foreign_station_not_found(client: AsyncClient, master, other_master, headers, make_station):
    station = await make_station(other_master)
    resp = await client.put(
        f"/api/station-master/stations/{station.id}",
        json={"name": "Hijacked"},
        headers=headers(master),
    )
    assert resp.status_code == 404


async def test_operational_status_update(client: AsyncClient, session, master, headers, make_station):
    station = await make_station(master)
    resp = await client.put(
        f"/api/station-master/stations/{station.id}/status",
        json={"status": "Electricity Shortage"},
        headers=headers(master),
    )
    assert resp.status_code == 200
    assert resp.json() == {"message": "Station status updated successfully"}

    row = await session.get(Station, station.id)
    assert row.operational_status == "Electricity Shortage"
    assert row.approval_status == "Pending"


# ── Bookings ──────────────────────────────────────────────────────────────────

async def test_station_bookings_scoped_to_owner(client: AsyncClient, master, other_master, driver, headers, make_station, make_booking):
    mine = await make_station(master)
    foreign = await make_station(other_master, name="Elsewhere")
    booking = await make_booking(mine, driver)
    await make_booking(foreign, driver)

    resp = await client.get(f"/api/station-master/stations/{mine.id}/bookings", headers=headers(master))
    assert resp.status_code == 200
    assert [b["id"] for b in resp.json()] == [booking.id]

    resp = await client.get(f"/api/station-master/stations/{foreign.id}/bookings", headers=headers(master))
    assert resp.status_code == 404


async def test_booking_transitions(client: AsyncClient, session, master, driver, headers, make_station, make_booking):
    station = await make_station(master)
    booking = await make_booking(station, driver)

    resp = await client.put(f"/api/station-master/bookings/{booking.id}/confirm", headers=headers(master))
    assert resp.status_code == 200
    assert resp.json() == {"message": "Booking confirmed successfully"}
    assert await booking_status(session, booking.id) == "Confirmed"

    resp = await client.put(f"/api/station-master/bookings/{booking.id}/complete", headers=headers(master))
    assert resp.status_code == 200
    assert resp.json() == {"message": "Booking completed successfully", "bookingId": booking.id}
    assert await booking_status(session, booking.id) == "Completed"

    # no from-state check: a completed booking can still be cancelled
    resp = await client.put(f"/api/station-master/bookings/{booking.id}/cancel", headers=headers(master))
    assert resp.status_code == 200
    assert resp.json() == {"message": "Booking cancelled successfully"}
    assert await booking_status(session, booking.id) == "Cancelled"


async def test_missing_booking_fails_without_creating(client: AsyncClient, session, master, headers):
    for action in ("confirm", "cancel", "complete"):
        resp = await client.put(f"/api/station-master/bookings/999/{action}", headers=headers(master))
        assert resp.status_code == 500
        assert resp.json()["error"] == "Booking not found with id: 999"

    count = (await session.execute(select(func.count(Booking.id)))).scalar_one()
    assert count == 0


async def test_foreign_booking_cannot_be_changed(client: AsyncClient, session, master, other_master, driver, headers, make_station, make_booking):
    station = await make_station(other_master)
    booking = await make_booking(station, driver)

    resp = await client.put(f"/api/station-master/bookings/{booking.id}/confirm", headers=headers(master))
    assert resp.status_code == 500
    assert resp.json()["message"] == "Error confirming booking"
    assert await booking_status(session, booking.id) == "Pending"


# ── Input bounds ──────────────────────────────────────────────────────────────

async def test_oversized_booking_id_rejected(client: AsyncClient, session, master, headers):
    for action in ("confirm", "cancel", "complete"):
        resp = await client.put(
            f"/api/station-master/bookings/{2**70}/{action}", headers=headers(master)
        )
        assert resp.status_code == 400

    count = (await session.execute(select(func.count(Booking.id)))).scalar_one()
    assert count == 0


async def test_oversized_station_id_rejected(client: AsyncClient, master, headers):
    for path in ("reviews", "bookings"):
        resp = await client.get(
            f"/api/station-master/stations/{2**70}/{path}", headers=headers(master)
        )
        assert resp.status_code == 400

    resp = await client.put(
        f"/api/station-master/stations/{2**70}/status",
        json={"status": "Active"},
        headers=headers(master),
    )
    assert resp.status_code == 400


async def test_update_station_null_name_rejected(client: AsyncClient, session, master, headers, make_station):
    station = await make_station(master)
    for body in ({"name": None}, {"name": "   "}, {"status": None}):
        resp = await client.put(
            f"/api/station-master/stations/{station.id}", json=body, headers=headers(master)
        )
        assert resp.status_code == 400

    row = await session.get(Station, station.id)
    assert row.name == "Central Plaza"
    assert row.operational_status == "Active"


async def test_create_station_blank_status_rejected(client: AsyncClient, session, master, headers):
    resp = await client.post(
        "/api/station-master/stations",
        json={"name": "Harbour Point", "status": ""},
        headers=headers(master),
    )
    assert resp.status_code == 400

    count = (await session.execute(select(func.count(Station.id)))).scalar_one()
    assert count == 0
