import copy
import threading

from resort.booking.domain.value_object import BookingId
from resort.payment.domain.entity import Payment
from resort.payment.domain.repository import PaymentQuery, PaymentRepository
from resort.payment.domain.value_object import PaymentId
from resort.shared.domain import DuplicateResourceException, ResourceNotFoundException


class InMemoryPaymentRepository(PaymentRepository):
    """プロセス内メモリを使用した PaymentRepository の実装（ローカル実行・テスト用）"""

    def __init__(self) -> None:
        self._items: dict[PaymentId, Payment] = {}
        self._lock = threading.Lock()

    def save(self, payment: Payment) -> None:
        with self._lock:
            if payment.id in self._items:
                raise DuplicateResourceException(
                    f"Payment already exists: {payment.id}"
                )
            self._items[payment.id] = copy.deepcopy(payment)

    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        with self._lock:
            item = self._items.get(payment_id)
            return copy.deepcopy(item) if item is not None else None

    def find_by_booking_id(self, booking_id: BookingId) -> list[Payment]:
        return self.find(PaymentQuery(booking_id=booking_id))

    def find(self, query: PaymentQuery) -> list[Payment]:
        with self._lock:
            matched = [item for item in self._items.values() if query.matches(item)]
            matched.sort(key=lambda item: item.payment_date, reverse=True)
            return [copy.deepcopy(item) for item in matched]

    def update(self, payment: Payment) -> None:
        with self._lock:
            if payment.id not in self._items:
                raise ResourceNotFoundException(f"Payment not found: {payment.id}")
            self._items[payment.id] = copy.deepcopy(payment)
