from dataclasses import dataclass

from resort.booking.domain.value_object import BookingId
from resort.payment.domain.entity.payment import Payment
from resort.payment.domain.enum import PaymentStatus, PaymentType


@dataclass(frozen=True)
class PaymentQuery:
    """決済一覧の検索条件（指定された条件のみ AND で適用）"""

    status: PaymentStatus | None = None
    booking_id: BookingId | None = None
    payment_type: PaymentType | None = None

    def matches(self, payment: Payment) -> bool:
        if self.status is not None and payment.status != self.status:
            return False
        if self.booking_id is not None and payment.booking_id != self.booking_id:
            return False
        if self.payment_type is not None and payment.payment_type != self.payment_type:
            return False
        return True
