from .booking_query import BookingQuery
from .booking_repository import BookingRepository

__all__ = ["BookingQuery", "BookingRepository"]
