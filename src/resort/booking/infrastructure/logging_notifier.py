from aws_lambda_powertools import Logger

from resort.booking.domain.enum import LifecycleEventKind
from resort.booking.domain.event import BookingSnapshot, Notifier
from resort.shared.utils import get_logger


class LoggingNotifier(Notifier):
    """ライフサイクルイベントを構造化ログとして出力する Notifier"""

    def __init__(self, logger: Logger | None = None) -> None:
        self._logger = logger or get_logger()

    def emit(self, kind: LifecycleEventKind, snapshot: BookingSnapshot) -> None:
        self._logger.info(
            f"Booking {kind.value}",
            extra={
                "event_kind": kind.value,
                "booking": snapshot.model_dump(mode="json"),
            },
        )
