from dataclasses import dataclass
from decimal import Decimal

from resort.booking.domain.repository import BookingRepository
from resort.booking.domain.value_object import BookingId
from resort.payment.domain.entity import Payment
from resort.payment.domain.enum import PaymentStatus
from resort.payment.domain.repository import PaymentRepository
from resort.shared.domain import Money, ResourceNotFoundException


@dataclass(frozen=True)
class PaymentSummary:
    """予約の支払状況

    balance = 請求総額 - 支払済み + 払い戻し済み（過払いの場合は負）
    """

    total_paid: Decimal
    total_refunded: Decimal
    balance: Decimal
    currency: str


class PaymentBalanceService:
    """予約ごとの支払残高を集計する（読み取りのみ）"""

    def __init__(
        self,
        repository: PaymentRepository,
        booking_repository: BookingRepository,
    ) -> None:
        self._repository = repository
        self._booking_repository = booking_repository

    def summarize(self, booking_id: BookingId) -> PaymentSummary:
        booking = self._booking_repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")

        payments = self._repository.find_by_booking_id(booking_id)
        currency = booking.total_amount.currency
        total_paid = self._sum(payments, PaymentStatus.COMPLETED, Money.zero(currency))
        total_refunded = self._sum(
            payments, PaymentStatus.REFUNDED, Money.zero(currency)
        )

        return PaymentSummary(
            total_paid=total_paid.amount,
            total_refunded=total_refunded.amount,
            balance=booking.total_amount.amount
            - total_paid.amount
            + total_refunded.amount,
            currency=str(currency),
        )

    @staticmethod
    def _sum(payments: list[Payment], status: PaymentStatus, initial: Money) -> Money:
        total = initial
        for payment in payments:
            if payment.status == status:
                total = total.add(payment.amount)
        return total
