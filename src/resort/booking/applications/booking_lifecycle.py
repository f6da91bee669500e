from collections.abc import Callable
from typing import TypeVar

from resort.accommodation.applications.accommodation_registry import (
    AccommodationRegistry,
)
from resort.accommodation.domain.entity import Accommodation
from resort.accommodation.domain.value_object import AccommodationId
from resort.booking.applications.availability_checker import AvailabilityChecker
from resort.booking.applications.commands import (
    CreateBookingCommand,
    UpdateBookingCommand,
)
from resort.booking.domain.entity import Booking
from resort.booking.domain.event import BookingSnapshot, Notifier
from resort.booking.domain.factory import BookingDetails, BookingFactory
from resort.booking.domain.repository import BookingRepository
from resort.booking.domain.value_object import BookingId, GuestContact, StayPeriod
from resort.shared.domain import (
    BookingConflictException,
    CapacityExceededException,
    InvalidStateException,
    Money,
    OptimisticLockException,
    ResourceNotFoundException,
)
from resort.shared.utils import get_logger

logger = get_logger()

T = TypeVar("T")


class BookingLifecycleService:
    """予約のライフサイクル（作成・更新・確定・キャンセル・チェックイン/アウト）のユースケース

    - 空き確認と書き込みは施設単位の transactionally スコープで原子的に実行する
    - 同時書き込みの競合は同じ入力で1回だけ再試行し、再度失敗したら日程の競合として扱う
    - 通知はコミット後にベストエフォートで行い、失敗しても状態遷移は取り消さない
    """

    def __init__(
        self,
        repository: BookingRepository,
        registry: AccommodationRegistry,
        availability: AvailabilityChecker,
        notifier: Notifier,
        factory: BookingFactory | None = None,
    ) -> None:
        self._repository = repository
        self._registry = registry
        self._availability = availability
        self._notifier = notifier
        self._factory = factory or BookingFactory()

    def create(self, command: CreateBookingCommand) -> Booking:
        """予約を作成する（ステータスは常に pending）"""
        accommodation_id = AccommodationId(command.accommodation_id)
        accommodation = self._registry.get(accommodation_id)
        if not accommodation.is_active:
            raise InvalidStateException(
                f"Accommodation is not active: {accommodation_id}"
            )
        self._ensure_capacity(accommodation, command.number_of_guests)
        stay_period = StayPeriod(
            check_in=command.check_in_date, check_out=command.check_out_date
        )

        booking_details: BookingDetails = {
            "accommodation_id": command.accommodation_id,
            "guest_name": command.guest_name,
            "guest_email": command.guest_email,
            "guest_phone": command.guest_phone,
            "number_of_guests": command.number_of_guests,
            "check_in_date": command.check_in_date,
            "check_out_date": command.check_out_date,
            "total_amount": command.total_amount,
            "currency": command.currency,
            "source": command.source,
            "special_requests": command.special_requests,
            "notes": command.notes,
            "external_reference": command.external_reference,
        }

        def _create() -> Booking:
            self._ensure_available(accommodation_id, stay_period)
            booking = self._factory.create(booking_details)
            self._repository.save(booking)
            return booking

        booking = self._run_atomically(accommodation_id, _create)
        logger.info(
            "Booking created",
            extra={
                "booking_id": str(booking.id),
                "accommodation_id": str(accommodation_id),
            },
        )
        self._publish(booking, accommodation)
        return booking

    def update(self, booking_id: BookingId, command: UpdateBookingCommand) -> Booking:
        """予約を部分更新する

        日付が変わる場合は自身を除いた有効な予約と重複がないか再確認する。
        status が指定された場合は通常の遷移ルールに従って変更する。
        """
        booking = self._get(booking_id)
        booking.ensure_modifiable()
        accommodation = self._registry.get(booking.accommodation_id)

        def _update() -> Booking:
            current = self._get(booking_id)
            expected_status = current.status
            current.ensure_modifiable()

            if command.number_of_guests is not None:
                self._ensure_capacity(accommodation, command.number_of_guests)
                current.change_number_of_guests(command.number_of_guests)

            if command.changes_dates:
                stay_period = current.stay_period.with_dates(
                    check_in=command.check_in_date,
                    check_out=command.check_out_date,
                )
                if stay_period != current.stay_period:
                    self._ensure_available(
                        current.accommodation_id, stay_period, exclude=current.id
                    )
                    current.reschedule(stay_period)

            if command.changes_guest:
                current.change_guest(
                    GuestContact(
                        name=command.guest_name or current.guest.name,
                        email=command.guest_email or current.guest.email,
                        phone=command.guest_phone or current.guest.phone,
                    )
                )
            if command.total_amount is not None:
                current.change_total_amount(
                    Money(
                        amount=command.total_amount,
                        currency=current.total_amount.currency,
                    )
                )
            if command.special_requests is not None:
                current.change_special_requests(command.special_requests)
            if command.notes is not None:
                current.change_notes(command.notes)

            if command.status is not None and command.status != current.status:
                current.change_status(command.status, command.cancellation_reason)
            else:
                current.record_update()

            self._repository.update(current, expected_status=expected_status)
            return current

        updated = self._run_atomically(booking.accommodation_id, _update)
        logger.info(
            "Booking updated",
            extra={"booking_id": str(updated.id), "status": updated.status.value},
        )
        self._publish(updated, accommodation)
        return updated

    def confirm(self, booking_id: BookingId) -> Booking:
        """予約を確定する（pending のみ）"""
        return self._transition(booking_id, lambda booking: booking.confirm())

    def cancel(self, booking_id: BookingId, reason: str | None = None) -> Booking:
        """予約をキャンセルする（キャンセル済みの予約はエラー）"""
        return self._transition(booking_id, lambda booking: booking.cancel(reason))

    def check_in(self, booking_id: BookingId) -> Booking:
        """チェックインする（confirmed のみ）"""
        return self._transition(booking_id, lambda booking: booking.check_in())

    def check_out(self, booking_id: BookingId) -> Booking:
        """チェックアウトする（checked_in のみ）"""
        return self._transition(booking_id, lambda booking: booking.check_out())

    def _transition(
        self, booking_id: BookingId, apply: Callable[[Booking], None]
    ) -> Booking:
        booking = self._get(booking_id)

        def _apply() -> Booking:
            current = self._get(booking_id)
            expected_status = current.status
            apply(current)
            self._repository.update(current, expected_status=expected_status)
            return current

        updated = self._run_atomically(booking.accommodation_id, _apply)
        logger.info(
            "Booking status changed",
            extra={"booking_id": str(updated.id), "status": updated.status.value},
        )
        self._publish(updated)
        return updated

    def _get(self, booking_id: BookingId) -> Booking:
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        return booking

    def _ensure_capacity(
        self, accommodation: Accommodation, number_of_guests: int
    ) -> None:
        if not accommodation.can_host(number_of_guests):
            raise CapacityExceededException(
                f"Maximum {accommodation.max_guests} guests allowed "
                f"for this accommodation"
            )

    def _ensure_available(
        self,
        accommodation_id: AccommodationId,
        stay_period: StayPeriod,
        exclude: BookingId | None = None,
    ) -> None:
        conflicts = self._availability.find_conflicts(
            accommodation_id, stay_period, exclude
        )
        if conflicts:
            raise BookingConflictException(
                "Accommodation is not available for the selected dates"
            )

    def _run_atomically(
        self, accommodation_id: AccommodationId, fn: Callable[[], T]
    ) -> T:
        try:
            return self._repository.transactionally(accommodation_id, fn)
        except OptimisticLockException:
            logger.warning(
                "Concurrent write detected, retrying once",
                extra={"accommodation_id": str(accommodation_id)},
            )

        try:
            return self._repository.transactionally(accommodation_id, fn)
        except OptimisticLockException as e:
            raise BookingConflictException(
                "Accommodation is not available for the selected dates"
            ) from e

    def _publish(
        self, booking: Booking, accommodation: Accommodation | None = None
    ) -> None:
        """記録されたイベントを通知する（失敗はログのみ）"""
        events = booking.flush_domain_events()
        if not events:
            return
        try:
            if accommodation is None:
                accommodation = self._registry.get(booking.accommodation_id)
            snapshot = BookingSnapshot.from_booking(booking, str(accommodation.name))
            for kind in events:
                self._notifier.emit(kind, snapshot)
        except Exception:
            logger.exception(
                "Failed to emit booking lifecycle event",
                extra={"booking_id": str(booking.id)},
            )
