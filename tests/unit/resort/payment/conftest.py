from decimal import Decimal

import pytest

from resort.booking.domain.value_object import BookingId
from resort.payment.domain.entity import Payment
from resort.payment.domain.enum import PaymentMethod, PaymentStatus, PaymentType
from resort.payment.domain.value_object import PaymentId
from resort.shared.domain import Money


@pytest.fixture
def create_payment():
    """Payment を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        status: PaymentStatus = PaymentStatus.PENDING,
        payment_id: str = "payment-123",
        booking_id: str = "booking-123",
        amount: Decimal = Decimal("500"),
        payment_type: PaymentType = PaymentType.DEPOSIT,
    ) -> Payment:
        return Payment(
            id=PaymentId(value=payment_id),
            booking_id=BookingId(value=booking_id),
            amount=Money.usd(amount),
            payment_method=PaymentMethod.CREDIT_CARD,
            payment_type=payment_type,
            status=status,
        )

    return _factory
