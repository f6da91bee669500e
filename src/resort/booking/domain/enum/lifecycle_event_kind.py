from enum import Enum


class LifecycleEventKind(str, Enum):
    """予約のライフサイクルイベント種別"""

    CREATED = "created"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    UPDATED = "updated"
