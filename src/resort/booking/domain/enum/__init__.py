from .booking_source import BookingSource
from .booking_status import NON_TERMINAL_STATUSES, TERMINAL_STATUSES, BookingStatus
from .lifecycle_event_kind import LifecycleEventKind
from .turnover_policy import TurnoverPolicy

__all__ = [
    "BookingSource",
    "BookingStatus",
    "LifecycleEventKind",
    "NON_TERMINAL_STATUSES",
    "TERMINAL_STATUSES",
    "TurnoverPolicy",
]
