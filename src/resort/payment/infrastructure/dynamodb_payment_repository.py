import os
from datetime import datetime
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from resort.booking.domain.value_object import BookingId
from resort.payment.domain.entity import Payment
from resort.payment.domain.enum import PaymentMethod, PaymentStatus, PaymentType
from resort.payment.domain.repository import PaymentQuery, PaymentRepository
from resort.payment.domain.value_object import PaymentId
from resort.shared.domain import Currency, Money
from resort.shared.domain.exception.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from resort.shared.infrastructure import error_code, paginate


class DynamoDBPaymentRepository(PaymentRepository):
    """DynamoDBを使用したPaymentRepository の具象実装

    決済は予約のパーティション (BOOKING#id) に置き、予約ごとの集計を query 1回で行う。
    """

    def __init__(self, table_name: str | None = None, dynamodb=None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = dynamodb or boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, payment: Payment) -> None:
        """決済をDBに保存する"""
        try:
            self.table.put_item(
                Item=self._to_item(payment),
                ConditionExpression=Attr("PK").not_exists(),
            )
        except ClientError as e:
            if error_code(e) == "ConditionalCheckFailedException":
                raise DuplicateResourceException(
                    f"Payment already exists: {payment.id}"
                )
            raise

    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        """決済IDで検索（GSI 経由）"""
        response = self.table.query(
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"PAYMENT#{payment_id}"),
        )
        items = response.get("Items", [])
        if not items:
            return None
        return self._to_entity(items[0])

    def find_by_booking_id(self, booking_id: BookingId) -> list[Payment]:
        """予約IDで検索"""
        items = paginate(
            self.table.query,
            KeyConditionExpression=Key("PK").eq(f"BOOKING#{booking_id}")
            & Key("SK").begins_with("PAYMENT#"),
            ConsistentRead=True,
        )
        return self._sorted([self._to_entity(item) for item in items])

    def find(self, query: PaymentQuery) -> list[Payment]:
        """条件に一致する決済を支払日の新しい順で返す"""
        condition = Attr("entity_type").eq("PAYMENT")
        if query.status is not None:
            condition = condition & Attr("status").eq(query.status.value)
        if query.payment_type is not None:
            condition = condition & Attr("payment_type").eq(query.payment_type.value)

        if query.booking_id is not None:
            items = paginate(
                self.table.query,
                KeyConditionExpression=Key("PK").eq(f"BOOKING#{query.booking_id}")
                & Key("SK").begins_with("PAYMENT#"),
                FilterExpression=condition,
            )
        else:
            items = paginate(self.table.scan, FilterExpression=condition)
        return self._sorted([self._to_entity(item) for item in items])

    def update(self, payment: Payment) -> None:
        """決済を更新する"""
        try:
            self.table.put_item(
                Item=self._to_item(payment),
                ConditionExpression=Attr("PK").exists(),
            )
        except ClientError as e:
            if error_code(e) == "ConditionalCheckFailedException":
                raise ResourceNotFoundException(f"Payment not found: {payment.id}")
            raise

    @staticmethod
    def _sorted(payments: list[Payment]) -> list[Payment]:
        return sorted(payments, key=lambda p: p.payment_date, reverse=True)

    def _to_item(self, payment: Payment) -> dict:
        item = {
            "PK": f"BOOKING#{payment.booking_id}",
            "SK": f"PAYMENT#{payment.id}",
            "entity_type": "PAYMENT",
            "payment_id": str(payment.id),
            "booking_id": str(payment.booking_id),
            "amount": str(payment.amount.amount),
            "currency": str(payment.amount.currency),
            "payment_method": payment.payment_method.value,
            "payment_type": payment.payment_type.value,
            "status": payment.status.value,
            "transaction_id": payment.transaction_id,
            "payment_date": payment.payment_date.isoformat(),
            "notes": payment.notes,
            "GSI1PK": f"PAYMENT#{payment.id}",
            "GSI1SK": "PAYMENT",
        }
        return {key: value for key, value in item.items() if value is not None}

    def _to_entity(self, item: dict) -> Payment:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Payment(
            id=PaymentId(value=item["payment_id"]),
            booking_id=BookingId(value=item["booking_id"]),
            amount=Money(
                amount=Decimal(item["amount"]),
                currency=Currency(item["currency"]),
            ),
            payment_method=PaymentMethod(item["payment_method"]),
            payment_type=PaymentType(item["payment_type"]),
            status=PaymentStatus(item["status"]),
            transaction_id=item.get("transaction_id"),
            payment_date=datetime.fromisoformat(item["payment_date"]),
            notes=item.get("notes"),
        )
