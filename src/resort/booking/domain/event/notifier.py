from abc import ABC, abstractmethod

from resort.booking.domain.enum import LifecycleEventKind
from resort.booking.domain.event.booking_snapshot import BookingSnapshot


class Notifier(ABC):
    """ライフサイクルイベントの通知先のインターフェース

    配信の保証は通知先の責務。呼び出し側は結果を待たない。
    """

    @abstractmethod
    def emit(self, kind: LifecycleEventKind, snapshot: BookingSnapshot) -> None:
        """イベントを送出する"""
        raise NotImplementedError
