import os
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import TypeVar

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from resort.accommodation.domain.value_object import AccommodationId
from resort.booking.domain.entity import Booking
from resort.booking.domain.enum import (
    NON_TERMINAL_STATUSES,
    BookingSource,
    BookingStatus,
)
from resort.booking.domain.repository import BookingQuery, BookingRepository
from resort.booking.domain.value_object import BookingId, GuestContact, StayPeriod
from resort.shared.domain import Currency, Money
from resort.shared.domain.exception.exceptions import (
    DuplicateResourceException,
    OptimisticLockException,
)
from resort.shared.infrastructure import (
    cancellation_codes,
    error_code,
    paginate,
    to_attribute_values,
)

T = TypeVar("T")


@dataclass
class _LockScope:
    accommodation_id: AccommodationId
    version: int


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用したBookingRepository の具象実装

    - 予約は施設のパーティション (ACCOMMODATION#id) に置き、空き確認を強い整合性の query で行う
    - transactionally は施設ごとの LOCK アイテムの version を読み、スコープ内の書き込みを
      version の条件付き更新と同じ TransactWriteItems で行う（楽観ロック）
    - 他の書き込みが先にコミットされた場合は OptimisticLockException を送出する
    - 予約IDからパーティションを引く LOCATOR アイテム (BOOKING#id) を同時に書き、
      find_by_id を GSI を使わず強い整合性の get_item だけで行う
    """

    def __init__(self, table_name: str | None = None, dynamodb=None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = dynamodb or boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.client = self.dynamodb.meta.client
        self._local = threading.local()

    def save(self, booking: Booking) -> None:
        """予約と LOCATOR アイテムを同時に保存する"""
        actions = [
            {
                "Put": {
                    "TableName": self.table_name,
                    "Item": to_attribute_values(self._to_item(booking)),
                    "ConditionExpression": "attribute_not_exists(PK)",
                }
            },
            {
                "Put": {
                    "TableName": self.table_name,
                    "Item": to_attribute_values(self._to_locator(booking)),
                    "ConditionExpression": "attribute_not_exists(PK)",
                }
            },
        ]
        duplicate = DuplicateResourceException(
            f"Booking already exists: {booking.id}"
        )
        scope = self._current_scope(booking.accommodation_id)
        if scope is not None:
            self._write_in_scope(scope, actions, duplicate)
            return

        try:
            self.client.transact_write_items(TransactItems=actions)
        except ClientError as e:
            if error_code(e) == "TransactionCanceledException":
                raise duplicate from e
            raise

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索（LOCATOR から施設を特定し、どちらも強い整合性で読む）"""
        response = self.table.get_item(
            Key={"PK": f"BOOKING#{booking_id}", "SK": "LOCATOR"},
            ConsistentRead=True,
        )
        locator = response.get("Item")
        if not locator:
            return None

        response = self.table.get_item(
            Key={
                "PK": f"ACCOMMODATION#{locator['accommodation_id']}",
                "SK": f"BOOKING#{booking_id}",
            },
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_non_terminal_by_accommodation(
        self,
        accommodation_id: AccommodationId,
        exclude_id: BookingId | None = None,
    ) -> list[Booking]:
        """施設を占有している予約を検索する"""
        items = paginate(
            self.table.query,
            KeyConditionExpression=Key("PK").eq(f"ACCOMMODATION#{accommodation_id}")
            & Key("SK").begins_with("BOOKING#"),
            FilterExpression=Attr("status").is_in(
                sorted(status.value for status in NON_TERMINAL_STATUSES)
            ),
            ConsistentRead=True,
        )
        return [
            booking
            for booking in map(self._to_entity, items)
            if booking.id != exclude_id
        ]

    def find(self, query: BookingQuery) -> list[Booking]:
        """条件に一致する予約を作成日時の新しい順で返す"""
        condition = Attr("entity_type").eq("BOOKING")
        if query.status is not None:
            condition = condition & Attr("status").eq(query.status.value)
        if query.has_period:
            condition = (
                condition
                & Attr("check_in_date").gte(query.start_date.isoformat())
                & Attr("check_out_date").lte(query.end_date.isoformat())
            )

        if query.accommodation_id is not None:
            items = paginate(
                self.table.query,
                KeyConditionExpression=Key("PK").eq(
                    f"ACCOMMODATION#{query.accommodation_id}"
                )
                & Key("SK").begins_with("BOOKING#"),
                FilterExpression=condition,
            )
        else:
            items = paginate(self.table.scan, FilterExpression=condition)

        bookings = [self._to_entity(item) for item in items]
        bookings.sort(key=lambda booking: booking.created_at, reverse=True)
        return bookings

    def update(
        self, booking: Booking, expected_status: BookingStatus | None = None
    ) -> None:
        """予約を更新する（expected_status 指定時はステータスが一致する場合のみ）"""
        item = self._to_item(booking)
        scope = self._current_scope(booking.accommodation_id)
        if scope is None:
            condition = Attr("PK").exists()
            if expected_status is not None:
                condition = condition & Attr("status").eq(expected_status.value)
            try:
                self.table.put_item(Item=item, ConditionExpression=condition)
            except ClientError as e:
                if error_code(e) == "ConditionalCheckFailedException":
                    raise OptimisticLockException(
                        f"Booking status conflict: "
                        f"expected {expected_status}, "
                        f"booking_id={booking.id}"
                    )
                raise
            return

        put: dict = {
            "TableName": self.table_name,
            "Item": to_attribute_values(item),
            "ConditionExpression": "attribute_exists(PK)",
        }
        if expected_status is not None:
            put["ConditionExpression"] = "attribute_exists(PK) AND #status = :expected"
            put["ExpressionAttributeNames"] = {"#status": "status"}
            put["ExpressionAttributeValues"] = {
                ":expected": {"S": expected_status.value}
            }
        self._write_in_scope(
            scope,
            [{"Put": put}],
            OptimisticLockException(
                f"Booking status conflict: "
                f"expected {expected_status}, "
                f"booking_id={booking.id}"
            ),
        )

    def transactionally(
        self, accommodation_id: AccommodationId, fn: Callable[[], T]
    ) -> T:
        """施設の LOCK version を読み、fn 内の書き込みをその version に条件付けする"""
        if getattr(self._local, "scope", None) is not None:
            return fn()

        self._local.scope = _LockScope(
            accommodation_id=accommodation_id,
            version=self._read_lock_version(accommodation_id),
        )
        try:
            return fn()
        finally:
            self._local.scope = None

    def _current_scope(self, accommodation_id: AccommodationId) -> _LockScope | None:
        scope = getattr(self._local, "scope", None)
        if scope is None or scope.accommodation_id != accommodation_id:
            return None
        return scope

    def _read_lock_version(self, accommodation_id: AccommodationId) -> int:
        response = self.table.get_item(
            Key={"PK": f"ACCOMMODATION#{accommodation_id}", "SK": "LOCK"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return 0
        return int(item.get("version", 0))

    def _write_in_scope(
        self, scope: _LockScope, actions: list[dict], item_conflict: Exception
    ) -> None:
        try:
            self.client.transact_write_items(
                TransactItems=[*actions, self._bump_lock(scope)]
            )
        except ClientError as e:
            if error_code(e) != "TransactionCanceledException":
                raise
            codes = cancellation_codes(e)
            if "ConditionalCheckFailed" in codes[: len(actions)]:
                raise item_conflict from e
            raise OptimisticLockException(
                f"Concurrent booking write detected: "
                f"accommodation_id={scope.accommodation_id}"
            ) from e
        scope.version += 1

    def _bump_lock(self, scope: _LockScope) -> dict:
        update: dict = {
            "TableName": self.table_name,
            "Key": to_attribute_values(
                {"PK": f"ACCOMMODATION#{scope.accommodation_id}", "SK": "LOCK"}
            ),
            "UpdateExpression": "SET #version = :next",
            "ExpressionAttributeNames": {"#version": "version"},
            "ExpressionAttributeValues": {":next": {"N": str(scope.version + 1)}},
        }
        if scope.version == 0:
            update["ConditionExpression"] = "attribute_not_exists(#version)"
        else:
            update["ConditionExpression"] = "#version = :expected"
            update["ExpressionAttributeValues"][":expected"] = {
                "N": str(scope.version)
            }
        return {"Update": update}

    def _to_item(self, booking: Booking) -> dict:
        item = {
            "PK": f"ACCOMMODATION#{booking.accommodation_id}",
            "SK": f"BOOKING#{booking.id}",
            "entity_type": "BOOKING",
            "booking_id": str(booking.id),
            "accommodation_id": str(booking.accommodation_id),
            "guest_name": booking.guest.name,
            "guest_email": booking.guest.email,
            "guest_phone": booking.guest.phone,
            "number_of_guests": booking.number_of_guests,
            "check_in_date": booking.stay_period.check_in.isoformat(),
            "check_out_date": booking.stay_period.check_out.isoformat(),
            "total_amount": str(booking.total_amount.amount),
            "currency": str(booking.total_amount.currency),
            "status": booking.status.value,
            "source": booking.source.value,
            "special_requests": booking.special_requests,
            "notes": booking.notes,
            "external_reference": booking.external_reference,
            "cancelled_at": (
                booking.cancelled_at.isoformat() if booking.cancelled_at else None
            ),
            "cancellation_reason": booking.cancellation_reason,
            "created_at": booking.created_at.isoformat(),
            "updated_at": booking.updated_at.isoformat(),
        }
        return {key: value for key, value in item.items() if value is not None}

    def _to_locator(self, booking: Booking) -> dict:
        return {
            "PK": f"BOOKING#{booking.id}",
            "SK": "LOCATOR",
            "entity_type": "BOOKING_LOCATOR",
            "accommodation_id": str(booking.accommodation_id),
        }

    def _to_entity(self, item: dict) -> Booking:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        cancelled_at = item.get("cancelled_at")
        return Booking(
            id=BookingId(value=item["booking_id"]),
            accommodation_id=AccommodationId(value=item["accommodation_id"]),
            guest=GuestContact(
                name=item["guest_name"],
                email=item["guest_email"],
                phone=item["guest_phone"],
            ),
            number_of_guests=int(item["number_of_guests"]),
            stay_period=StayPeriod(
                check_in=date.fromisoformat(item["check_in_date"]),
                check_out=date.fromisoformat(item["check_out_date"]),
            ),
            total_amount=Money(
                amount=Decimal(item["total_amount"]),
                currency=Currency(item["currency"]),
            ),
            source=BookingSource(item["source"]),
            status=BookingStatus(item["status"]),
            special_requests=item.get("special_requests"),
            notes=item.get("notes"),
            external_reference=item.get("external_reference"),
            cancelled_at=datetime.fromisoformat(cancelled_at) if cancelled_at else None,
            cancellation_reason=item.get("cancellation_reason"),
            created_at=datetime.fromisoformat(item["created_at"]),
            updated_at=datetime.fromisoformat(item["updated_at"]),
        )
