from datetime import date
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field, field_validator

from resort.booking.domain.enum import BookingSource, BookingStatus
from resort.shared.utils import to_decimal


class CreateBookingCommand(BaseModel):
    """予約作成コマンド

    日付の前後関係はここでは検証しない（定員超過を日付より先に判定するため）。
    """

    accommodation_id: str = Field(..., min_length=1)
    guest_name: str = Field(..., min_length=1, max_length=200)
    guest_email: EmailStr
    guest_phone: str = Field(..., min_length=1, max_length=50)
    number_of_guests: int = Field(..., ge=1, description="宿泊人数")
    check_in_date: date = Field(..., description="チェックイン日（YYYY-MM-DD形式）")
    check_out_date: date = Field(..., description="チェックアウト日（YYYY-MM-DD形式）")
    total_amount: Decimal = Field(..., ge=0, description="請求総額")
    currency: str = Field(
        default="USD",
        pattern="^[A-Z]{3}$",
        description="通貨コード（ISO 4217）",
    )
    source: BookingSource = BookingSource.MANUAL
    special_requests: str | None = None
    notes: str | None = None
    external_reference: str | None = Field(default=None, max_length=100)

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v: object) -> Decimal:
        return to_decimal(v)


class UpdateBookingCommand(BaseModel):
    """予約更新コマンド（未指定の項目は変更しない）"""

    guest_name: str | None = Field(default=None, min_length=1, max_length=200)
    guest_email: EmailStr | None = None
    guest_phone: str | None = Field(default=None, min_length=1, max_length=50)
    number_of_guests: int | None = Field(default=None, ge=1)
    check_in_date: date | None = None
    check_out_date: date | None = None
    total_amount: Decimal | None = Field(default=None, ge=0)
    special_requests: str | None = None
    notes: str | None = None
    status: BookingStatus | None = None
    cancellation_reason: str | None = None

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v: object) -> Decimal | None:
        if v is None:
            return None
        return to_decimal(v)

    @property
    def changes_dates(self) -> bool:
        return self.check_in_date is not None or self.check_out_date is not None

    @property
    def changes_guest(self) -> bool:
        return any(
            value is not None
            for value in (self.guest_name, self.guest_email, self.guest_phone)
        )
