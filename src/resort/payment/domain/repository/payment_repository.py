from abc import abstractmethod

from resort.booking.domain.value_object import BookingId
from resort.payment.domain.entity.payment import Payment
from resort.payment.domain.repository.payment_query import PaymentQuery
from resort.payment.domain.value_object.payment_id import PaymentId
from resort.shared.domain import Repository


class PaymentRepository(Repository[Payment, PaymentId]):
    """決済リポジトリのインターフェース"""

    @abstractmethod
    def save(self, payment: Payment) -> None:
        """決済を保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        """決済IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_booking_id(self, booking_id: BookingId) -> list[Payment]:
        """予約IDで検索する（支払日の新しい順）"""
        raise NotImplementedError

    @abstractmethod
    def find(self, query: PaymentQuery) -> list[Payment]:
        """条件に一致する決済を支払日の新しい順で返す"""
        raise NotImplementedError

    @abstractmethod
    def update(self, payment: Payment) -> None:
        """決済を更新する"""
        raise NotImplementedError
