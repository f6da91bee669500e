from .booking_snapshot import BookingSnapshot
from .notifier import Notifier

__all__ = ["BookingSnapshot", "Notifier"]
