from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel

from resort.booking.domain.entity.booking import Booking


class BookingSnapshot(BaseModel):
    """ライフサイクルイベントに添付する予約のスナップショット"""

    booking_id: str
    accommodation_id: str
    accommodation_name: str | None = None
    guest_name: str
    guest_email: str
    guest_phone: str
    number_of_guests: int
    check_in_date: date
    check_out_date: date
    nights: int
    total_amount: str
    currency: str
    status: str
    source: str
    special_requests: str | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None

    @classmethod
    def from_booking(
        cls, booking: Booking, accommodation_name: str | None = None
    ) -> BookingSnapshot:
        return cls(
            booking_id=str(booking.id),
            accommodation_id=str(booking.accommodation_id),
            accommodation_name=accommodation_name,
            guest_name=booking.guest.name,
            guest_email=booking.guest.email,
            guest_phone=booking.guest.phone,
            number_of_guests=booking.number_of_guests,
            check_in_date=booking.stay_period.check_in,
            check_out_date=booking.stay_period.check_out,
            nights=booking.stay_period.nights(),
            total_amount=str(booking.total_amount.amount),
            currency=str(booking.total_amount.currency),
            status=booking.status.value,
            source=booking.source.value,
            special_requests=booking.special_requests,
            cancelled_at=booking.cancelled_at,
            cancellation_reason=booking.cancellation_reason,
        )
