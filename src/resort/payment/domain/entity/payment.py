from datetime import datetime, timezone

from resort.booking.domain.value_object import BookingId
from resort.payment.domain.enum import PaymentMethod, PaymentStatus, PaymentType
from resort.payment.domain.value_object import PaymentId
from resort.shared.domain import Entity, Money
from resort.shared.domain.exception import BusinessRuleViolationException


class Payment(Entity[PaymentId]):
    """決済エンティティ（予約の残高計算のために参照する）"""

    def __init__(
        self,
        id: PaymentId,
        booking_id: BookingId,
        amount: Money,
        payment_method: PaymentMethod,
        payment_type: PaymentType,
        status: PaymentStatus = PaymentStatus.PENDING,
        transaction_id: str | None = None,
        payment_date: datetime | None = None,
        notes: str | None = None,
    ) -> None:
        super().__init__(id)
        self._booking_id = booking_id
        self._amount = amount
        self._payment_method = payment_method
        self._payment_type = payment_type
        self._status = status
        self._transaction_id = transaction_id
        self._payment_date = payment_date or datetime.now(timezone.utc)
        self._notes = notes

    @property
    def booking_id(self) -> BookingId:
        return self._booking_id

    @property
    def amount(self) -> Money:
        return self._amount

    @property
    def payment_method(self) -> PaymentMethod:
        return self._payment_method

    @property
    def payment_type(self) -> PaymentType:
        return self._payment_type

    @property
    def status(self) -> PaymentStatus:
        return self._status

    @property
    def transaction_id(self) -> str | None:
        return self._transaction_id

    @property
    def payment_date(self) -> datetime:
        return self._payment_date

    @property
    def notes(self) -> str | None:
        return self._notes

    def complete(self) -> None:
        """決済を完了する"""
        if self._status != PaymentStatus.PENDING:
            raise BusinessRuleViolationException(
                f"Cannot complete payment in {self._status} status"
            )
        self._status = PaymentStatus.COMPLETED

    def fail(self) -> None:
        """決済を失敗として記録する"""
        if self._status != PaymentStatus.PENDING:
            raise BusinessRuleViolationException(
                f"Cannot fail payment in {self._status} status"
            )
        self._status = PaymentStatus.FAILED

    def refund(self) -> None:
        """払い戻しを行う"""
        if self._status == PaymentStatus.REFUNDED:
            return
        if self._status != PaymentStatus.COMPLETED:
            raise BusinessRuleViolationException("Can only refund completed payments")
        self._status = PaymentStatus.REFUNDED
