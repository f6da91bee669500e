from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from resort.payment.domain.enum import PaymentMethod, PaymentStatus, PaymentType
from resort.shared.utils import to_decimal


class RecordPaymentCommand(BaseModel):
    """決済記録コマンド"""

    booking_id: str = Field(..., min_length=1)
    amount: Decimal = Field(
        ...,
        gt=0,
        description="決済金額（0より大きい値）",
    )
    payment_method: PaymentMethod
    payment_type: PaymentType
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: str | None = Field(default=None, max_length=255)
    payment_date: datetime | None = None
    notes: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v: object) -> Decimal:
        return to_decimal(v)

    @field_validator("status")
    @classmethod
    def validate_initial_status(cls, v: PaymentStatus) -> PaymentStatus:
        if v == PaymentStatus.REFUNDED:
            raise ValueError("A new payment cannot be recorded as refunded")
        return v
