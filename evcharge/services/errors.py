class MarketplaceError(Exception):
    """Base class for domain failures raised by the service layer."""


class StationNotFoundError(MarketplaceError):
    def __init__(self, station_id: int) -> None:
        super().__init__(f"Station not found with id: {station_id}")
        self.station_id = station_id


class BookingNotFoundError(MarketplaceError):
    def __init__(self, booking_id: int) -> None:
        super().__init__(f"Booking not found with id: {booking_id}")
        self.booking_id = booking_id


class NotOwnedError(MarketplaceError):
    """The caller is not the station master owning the station involved."""


class InvalidTransitionError(MarketplaceError):
    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"Cannot change status from {current} to {target}")
        self.current = current
        self.target = target
