from dataclasses import dataclass
from datetime import date

from resort.accommodation.domain.value_object import AccommodationId
from resort.booking.domain.entity.booking import Booking
from resort.booking.domain.enum import BookingStatus


@dataclass(frozen=True)
class BookingQuery:
    """予約一覧の検索条件（指定された条件のみ AND で適用）

    start_date と end_date は両方指定された場合のみ有効で、
    期間内に収まる予約 (check_in >= start_date かつ check_out <= end_date) を対象とする。
    """

    status: BookingStatus | None = None
    accommodation_id: AccommodationId | None = None
    start_date: date | None = None
    end_date: date | None = None

    @property
    def has_period(self) -> bool:
        return self.start_date is not None and self.end_date is not None

    def matches(self, booking: Booking) -> bool:
        if self.status is not None and booking.status != self.status:
            return False
        if (
            self.accommodation_id is not None
            and booking.accommodation_id != self.accommodation_id
        ):
            return False
        if self.has_period:
            if booking.stay_period.check_in < self.start_date:
                return False
            if booking.stay_period.check_out > self.end_date:
                return False
        return True
