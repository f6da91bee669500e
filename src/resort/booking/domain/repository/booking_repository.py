from abc import abstractmethod
from collections.abc import Callable
from typing import TypeVar

from resort.accommodation.domain.value_object import AccommodationId
from resort.booking.domain.entity.booking import Booking
from resort.booking.domain.enum import BookingStatus
from resort.booking.domain.repository.booking_query import BookingQuery
from resort.booking.domain.value_object.booking_id import BookingId
from resort.shared.domain import Repository

T = TypeVar("T")


class BookingRepository(Repository[Booking, BookingId]):
    """予約レポジトリのインターフェース

    空き状況の確認と書き込みは transactionally のスコープ内で1つの単位として実行する。
    同時書き込みを検出した実装は OptimisticLockException を送出する。
    """

    @abstractmethod
    def save(self, booking: Booking) -> None:
        """予約を新規保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_non_terminal_by_accommodation(
        self,
        accommodation_id: AccommodationId,
        exclude_id: BookingId | None = None,
    ) -> list[Booking]:
        """施設を占有している予約（pending, confirmed, checked_in）を返す"""
        raise NotImplementedError

    @abstractmethod
    def find(self, query: BookingQuery) -> list[Booking]:
        """条件に一致する予約を作成日時の新しい順で返す"""
        raise NotImplementedError

    @abstractmethod
    def update(
        self, booking: Booking, expected_status: BookingStatus | None = None
    ) -> None:
        """予約を更新する（expected_status 指定時は条件付き更新）"""
        raise NotImplementedError

    @abstractmethod
    def transactionally(
        self, accommodation_id: AccommodationId, fn: Callable[[], T]
    ) -> T:
        """施設単位の原子的なスコープで fn を実行する

        fn 内の読み取りと書き込みの間に他の書き込みがコミットされた場合、
        書き込みは拒否される（インメモリ実装は fn の例外時にスコープ内の変更を戻す）。
        """
        raise NotImplementedError
