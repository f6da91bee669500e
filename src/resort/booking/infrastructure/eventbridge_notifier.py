import json
import os

import boto3

from resort.booking.domain.enum import LifecycleEventKind
from resort.booking.domain.event import BookingSnapshot, Notifier

DETAIL_TYPES: dict[LifecycleEventKind, str] = {
    LifecycleEventKind.CREATED: "BookingCreated",
    LifecycleEventKind.CONFIRMED: "BookingConfirmed",
    LifecycleEventKind.CANCELLED: "BookingCancelled",
    LifecycleEventKind.CHECKED_IN: "GuestCheckedIn",
    LifecycleEventKind.CHECKED_OUT: "GuestCheckedOut",
    LifecycleEventKind.UPDATED: "BookingUpdated",
}


class EventBridgeNotifier(Notifier):
    """EventBridge のイベントバスにライフサイクルイベントを送る Notifier

    メール送信などの配信は購読側のルールが担当する。
    """

    def __init__(
        self,
        event_bus_name: str | None = None,
        source: str = "resort.booking",
        client=None,
    ) -> None:
        self.event_bus_name = event_bus_name or os.getenv("EVENT_BUS_NAME")
        self.source = source
        self.client = client or boto3.client("events")

    def emit(self, kind: LifecycleEventKind, snapshot: BookingSnapshot) -> None:
        """イベントを1件送信する（失敗したエントリがあれば例外）"""
        response = self.client.put_events(
            Entries=[
                {
                    "EventBusName": self.event_bus_name,
                    "Source": self.source,
                    "DetailType": DETAIL_TYPES[kind],
                    "Detail": json.dumps(
                        {
                            "kind": kind.value,
                            "booking": snapshot.model_dump(mode="json"),
                        }
                    ),
                }
            ]
        )
        if response.get("FailedEntryCount", 0):
            entry = response["Entries"][0]
            raise RuntimeError(
                f"Failed to put event: {entry.get('ErrorCode')} "
                f"{entry.get('ErrorMessage')}"
            )
