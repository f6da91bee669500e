from .booking_id import BookingId
from .guest_contact import GuestContact
from .stay_period import StayPeriod

__all__ = ["BookingId", "GuestContact", "StayPeriod"]
