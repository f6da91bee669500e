from datetime import date

from pydantic import BaseModel, EmailStr, Field

from resort.accommodation.applications.accommodation_registry import (
    AccommodationRegistry,
)
from resort.booking.applications.booking_lifecycle import BookingLifecycleService
from resort.booking.applications.commands import CreateBookingCommand
from resort.booking.domain.entity import Booking
from resort.booking.domain.enum import BookingSource
from resort.shared.utils import get_logger

logger = get_logger()

PHONE_NOT_PROVIDED = "Not provided"


class ExternalFormSubmission(BaseModel):
    """外部予約フォームの送信内容"""

    submission_id: str | None = Field(default=None, max_length=100)
    guest_name: str = Field(..., min_length=1, max_length=200)
    guest_email: EmailStr
    guest_phone: str | None = Field(default=None, max_length=50)
    accommodation_name: str = Field(..., min_length=1, max_length=200)
    check_in_date: date
    check_out_date: date
    number_of_guests: int = Field(default=1, ge=1)
    special_requests: str | None = None


class ExternalFormIntakeService:
    """外部フォームからの予約受付

    施設名から公開中の施設を解決し、基本料金 × 泊数で請求額を算出して
    通常の予約作成と同じルールで仮予約を作成する。
    """

    def __init__(
        self, registry: AccommodationRegistry, lifecycle: BookingLifecycleService
    ) -> None:
        self._registry = registry
        self._lifecycle = lifecycle

    def submit(self, submission: ExternalFormSubmission) -> Booking:
        logger.info(
            "Received external form submission",
            extra={"submission_id": submission.submission_id},
        )
        accommodation = self._registry.find_active_by_name(
            submission.accommodation_name
        )
        # 日付の妥当性は予約作成側で定員チェックの後に検証する
        nights = max((submission.check_out_date - submission.check_in_date).days, 0)
        total = accommodation.base_price.multiply(nights)

        command = CreateBookingCommand(
            accommodation_id=str(accommodation.id),
            guest_name=submission.guest_name,
            guest_email=submission.guest_email,
            guest_phone=submission.guest_phone or PHONE_NOT_PROVIDED,
            number_of_guests=submission.number_of_guests,
            check_in_date=submission.check_in_date,
            check_out_date=submission.check_out_date,
            total_amount=total.amount,
            currency=str(total.currency),
            source=BookingSource.EXTERNAL_FORM,
            special_requests=submission.special_requests,
            external_reference=submission.submission_id,
        )
        return self._lifecycle.create(command)
