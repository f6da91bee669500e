from __future__ import annotations

from datetime import datetime, timezone

from resort.accommodation.domain.value_object import AccommodationId
from resort.booking.domain.enum import (
    BookingSource,
    BookingStatus,
    LifecycleEventKind,
)
from resort.booking.domain.value_object import BookingId, GuestContact, StayPeriod
from resort.shared.domain import AggregateRoot, InvalidTransitionException, Money


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Booking(AggregateRoot[BookingId, LifecycleEventKind]):
    """予約エンティティ

    ステータスは遷移メソッドでのみ変更する。成功した操作ごとに
    ライフサイクルイベントを1件記録し、永続化後にサービスが取り出して通知する。
    """

    def __init__(
        self,
        id: BookingId,
        accommodation_id: AccommodationId,
        guest: GuestContact,
        number_of_guests: int,
        stay_period: StayPeriod,
        total_amount: Money,
        source: BookingSource = BookingSource.MANUAL,
        status: BookingStatus = BookingStatus.PENDING,
        special_requests: str | None = None,
        notes: str | None = None,
        external_reference: str | None = None,
        cancelled_at: datetime | None = None,
        cancellation_reason: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        super().__init__(id)
        if number_of_guests < 1:
            raise ValueError("Number of guests must be a positive integer")
        self._accommodation_id = accommodation_id
        self._guest = guest
        self._number_of_guests = number_of_guests
        self._stay_period = stay_period
        self._total_amount = total_amount
        self._source = source
        self._status = status
        self._special_requests = special_requests
        self._notes = notes
        self._external_reference = external_reference
        self._cancelled_at = cancelled_at
        self._cancellation_reason = cancellation_reason
        self._created_at = created_at or _now()
        self._updated_at = updated_at or self._created_at

    @classmethod
    def create(
        cls,
        accommodation_id: AccommodationId,
        guest: GuestContact,
        number_of_guests: int,
        stay_period: StayPeriod,
        total_amount: Money,
        source: BookingSource = BookingSource.MANUAL,
        special_requests: str | None = None,
        notes: str | None = None,
        external_reference: str | None = None,
    ) -> Booking:
        """新規予約を仮予約 (pending) として生成する"""
        booking = cls(
            id=BookingId.generate(),
            accommodation_id=accommodation_id,
            guest=guest,
            number_of_guests=number_of_guests,
            stay_period=stay_period,
            total_amount=total_amount,
            source=source,
            status=BookingStatus.PENDING,
            special_requests=special_requests,
            notes=notes,
            external_reference=external_reference,
        )
        booking.add_domain_event(LifecycleEventKind.CREATED)
        return booking

    @property
    def accommodation_id(self) -> AccommodationId:
        return self._accommodation_id

    @property
    def guest(self) -> GuestContact:
        return self._guest

    @property
    def number_of_guests(self) -> int:
        return self._number_of_guests

    @property
    def stay_period(self) -> StayPeriod:
        return self._stay_period

    @property
    def total_amount(self) -> Money:
        return self._total_amount

    @property
    def source(self) -> BookingSource:
        return self._source

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def special_requests(self) -> str | None:
        return self._special_requests

    @property
    def notes(self) -> str | None:
        return self._notes

    @property
    def external_reference(self) -> str | None:
        return self._external_reference

    @property
    def cancelled_at(self) -> datetime | None:
        return self._cancelled_at

    @property
    def cancellation_reason(self) -> str | None:
        return self._cancellation_reason

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def is_occupying(self) -> bool:
        """施設の日程を占有している（終了状態でない）かどうか"""
        return not self._status.is_terminal

    def confirm(self) -> None:
        """予約を確定する"""
        self._transition(BookingStatus.CONFIRMED, "confirm")
        self.add_domain_event(LifecycleEventKind.CONFIRMED)

    def cancel(self, reason: str | None = None) -> None:
        """予約をキャンセルする（キャンセル済みの場合はエラー）"""
        self._transition(BookingStatus.CANCELLED, "cancel")
        self._cancelled_at = self._updated_at
        self._cancellation_reason = reason
        self.add_domain_event(LifecycleEventKind.CANCELLED)

    def check_in(self) -> None:
        """チェックインする"""
        self._transition(BookingStatus.CHECKED_IN, "check in")
        self.add_domain_event(LifecycleEventKind.CHECKED_IN)

    def check_out(self) -> None:
        """チェックアウトする"""
        self._transition(BookingStatus.CHECKED_OUT, "check out")
        self.add_domain_event(LifecycleEventKind.CHECKED_OUT)

    def change_status(self, target: BookingStatus, reason: str | None = None) -> None:
        """更新操作で指定されたステータスへ、対応する遷移メソッド経由で変更する"""
        if target is BookingStatus.CONFIRMED:
            self.confirm()
        elif target is BookingStatus.CANCELLED:
            self.cancel(reason)
        elif target is BookingStatus.CHECKED_IN:
            self.check_in()
        elif target is BookingStatus.CHECKED_OUT:
            self.check_out()
        else:
            raise InvalidTransitionException(
                self._status.value, f"move to {target.value}"
            )

    def ensure_modifiable(self) -> None:
        if self._status.is_terminal:
            raise InvalidTransitionException(self._status.value, "update")

    def reschedule(self, stay_period: StayPeriod) -> None:
        self.ensure_modifiable()
        self._stay_period = stay_period

    def change_guest(self, guest: GuestContact) -> None:
        self.ensure_modifiable()
        self._guest = guest

    def change_number_of_guests(self, number_of_guests: int) -> None:
        self.ensure_modifiable()
        if number_of_guests < 1:
            raise ValueError("Number of guests must be a positive integer")
        self._number_of_guests = number_of_guests

    def change_total_amount(self, total_amount: Money) -> None:
        self.ensure_modifiable()
        self._total_amount = total_amount

    def change_special_requests(self, special_requests: str | None) -> None:
        self.ensure_modifiable()
        self._special_requests = special_requests

    def change_notes(self, notes: str | None) -> None:
        self.ensure_modifiable()
        self._notes = notes

    def record_update(self) -> None:
        """ステータス以外の項目の更新を記録する"""
        self.ensure_modifiable()
        self._updated_at = _now()
        self.add_domain_event(LifecycleEventKind.UPDATED)

    def _transition(self, target: BookingStatus, operation: str) -> None:
        if not self._status.can_transition_to(target):
            raise InvalidTransitionException(self._status.value, operation)
        self._status = target
        self._updated_at = _now()
