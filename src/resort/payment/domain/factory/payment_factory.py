from datetime import datetime
from decimal import Decimal
from typing import NotRequired, TypedDict

from resort.booking.domain.value_object import BookingId
from resort.payment.domain.entity.payment import Payment
from resort.payment.domain.enum import PaymentMethod, PaymentStatus, PaymentType
from resort.payment.domain.value_object.payment_id import PaymentId
from resort.shared.domain import Currency, Money


class PaymentDetails(TypedDict):
    """決済の入力データ構造（TypedDict）"""

    amount: Decimal
    currency_code: str
    payment_method: PaymentMethod
    payment_type: PaymentType
    transaction_id: NotRequired[str | None]
    payment_date: NotRequired[datetime | None]
    notes: NotRequired[str | None]


class PaymentFactory:
    """決済ファクトリ"""

    def create(
        self,
        booking_id: BookingId,
        payment_details: PaymentDetails,
    ) -> Payment:
        """新規決済エンティティを生成する"""
        money = Money(
            amount=payment_details["amount"],
            currency=Currency(payment_details["currency_code"]),
        )

        return Payment(
            id=PaymentId.generate(),
            booking_id=booking_id,
            amount=money,
            payment_method=payment_details["payment_method"],
            payment_type=payment_details["payment_type"],
            status=PaymentStatus.PENDING,
            transaction_id=payment_details.get("transaction_id"),
            payment_date=payment_details.get("payment_date"),
            notes=payment_details.get("notes"),
        )
