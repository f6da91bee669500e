from datetime import date

from resort.accommodation.domain.value_object import AccommodationId
from resort.booking.domain.entity import Booking
from resort.booking.domain.enum import TurnoverPolicy
from resort.booking.domain.repository import BookingRepository
from resort.booking.domain.value_object import BookingId, StayPeriod


class AvailabilityChecker:
    """施設の日程の空き状況を判定する（副作用なし）

    書き込みの前提として使う場合は、書き込みと同じ
    BookingRepository.transactionally のスコープ内で呼び出すこと。
    """

    def __init__(
        self,
        repository: BookingRepository,
        policy: TurnoverPolicy = TurnoverPolicy.CLOSED,
    ) -> None:
        self._repository = repository
        self._policy = policy

    @property
    def policy(self) -> TurnoverPolicy:
        return self._policy

    def has_conflict(
        self,
        accommodation_id: AccommodationId,
        check_in: date,
        check_out: date,
        exclude_booking_id: BookingId | None = None,
    ) -> bool:
        """候補期間が施設の有効な予約と重なるかどうか"""
        stay_period = StayPeriod(check_in=check_in, check_out=check_out)
        return bool(
            self.find_conflicts(accommodation_id, stay_period, exclude_booking_id)
        )

    def find_conflicts(
        self,
        accommodation_id: AccommodationId,
        stay_period: StayPeriod,
        exclude_booking_id: BookingId | None = None,
    ) -> list[Booking]:
        """候補期間と重なる有効な予約を返す"""
        bookings = self._repository.find_non_terminal_by_accommodation(
            accommodation_id, exclude_id=exclude_booking_id
        )
        return [
            booking
            for booking in bookings
            if booking.is_occupying()
            and booking.id != exclude_booking_id
            and stay_period.overlaps(booking.stay_period, self._policy)
        ]
