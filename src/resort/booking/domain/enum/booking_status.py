from __future__ import annotations

from enum import Enum


class BookingStatus(str, Enum):
    """予約ステータス"""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """終了状態（施設を占有しない）かどうか"""
        return self in TERMINAL_STATUSES

    def can_transition_to(self, target: BookingStatus) -> bool:
        return target in _ALLOWED_TRANSITIONS[self]


TERMINAL_STATUSES = frozenset({BookingStatus.CHECKED_OUT, BookingStatus.CANCELLED})

NON_TERMINAL_STATUSES = frozenset(
    status for status in BookingStatus if status not in TERMINAL_STATUSES
)

_ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.CONFIRMED, BookingStatus.CANCELLED}
    ),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.CHECKED_IN, BookingStatus.CANCELLED}
    ),
    BookingStatus.CHECKED_IN: frozenset(
        {BookingStatus.CHECKED_OUT, BookingStatus.CANCELLED}
    ),
    BookingStatus.CHECKED_OUT: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}
