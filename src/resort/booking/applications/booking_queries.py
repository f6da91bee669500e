from resort.booking.domain.entity import Booking
from resort.booking.domain.repository import BookingQuery, BookingRepository
from resort.booking.domain.value_object import BookingId
from resort.shared.domain import ResourceNotFoundException


class BookingQueryService:
    """予約の参照ユースケース"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def get(self, booking_id: BookingId) -> Booking:
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        return booking

    def list(self, query: BookingQuery | None = None) -> list[Booking]:
        return self._repository.find(query or BookingQuery())
