import copy
import threading
from collections.abc import Callable
from typing import TypeVar

from resort.accommodation.domain.value_object import AccommodationId
from resort.booking.domain.entity import Booking
from resort.booking.domain.enum import BookingStatus
from resort.booking.domain.repository import BookingQuery, BookingRepository
from resort.booking.domain.value_object import BookingId
from resort.shared.domain import (
    DuplicateResourceException,
    OptimisticLockException,
    ResourceNotFoundException,
)

T = TypeVar("T")


class InMemoryBookingRepository(BookingRepository):
    """プロセス内メモリを使用した BookingRepository の実装（ローカル実行・テスト用）

    トランザクション分離を持たないため、transactionally は施設ごとのロックで
    確認から書き込みまでを直列化し、例外時はスコープ開始時点の状態に戻す。
    """

    def __init__(self) -> None:
        self._items: dict[BookingId, Booking] = {}
        self._write_lock = threading.RLock()
        self._registry_lock = threading.Lock()
        self._accommodation_locks: dict[AccommodationId, threading.RLock] = {}

    def save(self, booking: Booking) -> None:
        with self._write_lock:
            if booking.id in self._items:
                raise DuplicateResourceException(
                    f"Booking already exists: {booking.id}"
                )
            self._items[booking.id] = self._copy(booking)

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        with self._write_lock:
            item = self._items.get(booking_id)
            return self._copy(item) if item is not None else None

    def find_non_terminal_by_accommodation(
        self,
        accommodation_id: AccommodationId,
        exclude_id: BookingId | None = None,
    ) -> list[Booking]:
        with self._write_lock:
            return [
                self._copy(item)
                for item in self._items.values()
                if item.accommodation_id == accommodation_id
                and item.is_occupying()
                and item.id != exclude_id
            ]

    def find(self, query: BookingQuery) -> list[Booking]:
        with self._write_lock:
            matched = [item for item in self._items.values() if query.matches(item)]
            matched.sort(key=lambda item: item.created_at, reverse=True)
            return [self._copy(item) for item in matched]

    def update(
        self, booking: Booking, expected_status: BookingStatus | None = None
    ) -> None:
        with self._write_lock:
            current = self._items.get(booking.id)
            if current is None:
                raise ResourceNotFoundException(f"Booking not found: {booking.id}")
            if expected_status is not None and current.status != expected_status:
                raise OptimisticLockException(
                    f"Booking status conflict: "
                    f"expected {expected_status}, "
                    f"booking_id={booking.id}"
                )
            self._items[booking.id] = self._copy(booking)

    def transactionally(
        self, accommodation_id: AccommodationId, fn: Callable[[], T]
    ) -> T:
        with self._lock_for(accommodation_id):
            with self._write_lock:
                snapshot = {
                    booking_id: item
                    for booking_id, item in self._items.items()
                    if item.accommodation_id == accommodation_id
                }
            try:
                return fn()
            except Exception:
                self._restore(accommodation_id, snapshot)
                raise

    def _restore(
        self, accommodation_id: AccommodationId, snapshot: dict[BookingId, Booking]
    ) -> None:
        with self._write_lock:
            for booking_id, item in list(self._items.items()):
                if item.accommodation_id == accommodation_id:
                    del self._items[booking_id]
            self._items.update(snapshot)

    def _lock_for(self, accommodation_id: AccommodationId) -> threading.RLock:
        with self._registry_lock:
            lock = self._accommodation_locks.get(accommodation_id)
            if lock is None:
                lock = threading.RLock()
                self._accommodation_locks[accommodation_id] = lock
            return lock

    @staticmethod
    def _copy(booking: Booking) -> Booking:
        stored = copy.deepcopy(booking)
        stored.flush_domain_events()
        return stored
