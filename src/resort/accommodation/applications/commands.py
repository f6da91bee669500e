from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from resort.accommodation.domain.enum import AccommodationCategory
from resort.shared.utils import to_decimal


class RegisterAccommodationCommand(BaseModel):
    """宿泊施設登録コマンド"""

    name: str = Field(..., min_length=1, max_length=200)
    category: AccommodationCategory
    max_guests: int = Field(..., ge=1, description="最大宿泊人数")
    base_price: Decimal = Field(..., ge=0, description="1泊あたりの基本料金")
    currency: str = Field(default="USD", pattern="^[A-Z]{3}$")
    description: str | None = None
    amenities: list[str] = Field(default_factory=list)

    @field_validator("base_price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v: object) -> Decimal:
        return to_decimal(v)


class UpdateAccommodationCommand(BaseModel):
    """宿泊施設更新コマンド（未指定の項目は変更しない）

    種別と定員は既存の予約を無効にしうるため更新対象に含めない。
    """

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    base_price: Decimal | None = Field(default=None, ge=0)
    amenities: list[str] | None = None
    is_active: bool | None = None

    @field_validator("base_price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v: object) -> Decimal | None:
        if v is None:
            return None
        return to_decimal(v)
