from datetime import date
from decimal import Decimal
from typing import NotRequired, TypedDict

from resort.accommodation.domain.value_object import AccommodationId
from resort.booking.domain.entity.booking import Booking
from resort.booking.domain.enum import BookingSource
from resort.booking.domain.value_object import GuestContact, StayPeriod
from resort.shared.domain import Currency, Money


class BookingDetails(TypedDict):
    """予約の入力データ構造（TypedDict）"""

    accommodation_id: str
    guest_name: str
    guest_email: str
    guest_phone: str
    number_of_guests: int
    check_in_date: date
    check_out_date: date
    total_amount: Decimal
    currency: str
    source: BookingSource
    special_requests: NotRequired[str | None]
    notes: NotRequired[str | None]
    external_reference: NotRequired[str | None]


class BookingFactory:
    """予約情報を生成するFactory"""

    def create(self, booking_details: BookingDetails) -> Booking:
        """新規予約のエンティティを作成する"""
        return Booking.create(
            accommodation_id=AccommodationId(booking_details["accommodation_id"]),
            guest=GuestContact(
                name=booking_details["guest_name"],
                email=booking_details["guest_email"],
                phone=booking_details["guest_phone"],
            ),
            number_of_guests=booking_details["number_of_guests"],
            stay_period=StayPeriod(
                check_in=booking_details["check_in_date"],
                check_out=booking_details["check_out_date"],
            ),
            total_amount=Money(
                amount=booking_details["total_amount"],
                currency=Currency(booking_details["currency"]),
            ),
            source=booking_details["source"],
            special_requests=booking_details.get("special_requests"),
            notes=booking_details.get("notes"),
            external_reference=booking_details.get("external_reference"),
        )
