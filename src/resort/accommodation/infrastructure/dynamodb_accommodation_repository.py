import os
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from resort.accommodation.domain.entity import Accommodation
from resort.accommodation.domain.enum import AccommodationCategory
from resort.accommodation.domain.repository import (
    AccommodationQuery,
    AccommodationRepository,
)
from resort.accommodation.domain.value_object import (
    AccommodationId,
    AccommodationName,
)
from resort.shared.domain import Currency, Money
from resort.shared.domain.exception.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from resort.shared.infrastructure import error_code, paginate, to_attribute_values


class DynamoDBAccommodationRepository(AccommodationRepository):
    """DynamoDBを使用したAccommodationRepository の具象実装

    名前の一意性は ACCOMMODATION_NAME# アイテムとの同時書き込みで保証する。
    """

    def __init__(self, table_name: str | None = None, dynamodb=None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = dynamodb or boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.client = self.dynamodb.meta.client

    def save(self, accommodation: Accommodation) -> None:
        """宿泊施設と名前ガードを同時に保存する"""
        try:
            self.client.transact_write_items(
                TransactItems=[
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": to_attribute_values(self._to_item(accommodation)),
                            "ConditionExpression": "attribute_not_exists(PK)",
                        }
                    },
                    self._put_name_guard(accommodation),
                ]
            )
        except ClientError as e:
            if error_code(e) == "TransactionCanceledException":
                raise DuplicateResourceException(
                    f"Accommodation already exists: {accommodation.name}"
                )
            raise

    def find_by_id(self, accommodation_id: AccommodationId) -> Accommodation | None:
        """宿泊施設IDで検索"""
        response = self.table.get_item(
            Key={"PK": f"ACCOMMODATION#{accommodation_id}", "SK": "METADATA"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_name(self, name: AccommodationName) -> Accommodation | None:
        """名前ガード経由で宿泊施設を検索"""
        response = self.table.get_item(
            Key={"PK": f"ACCOMMODATION_NAME#{name.normalized()}", "SK": "NAME"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self.find_by_id(AccommodationId(value=item["accommodation_id"]))

    def find(self, query: AccommodationQuery) -> list[Accommodation]:
        """条件に一致する宿泊施設を名前順で返す"""
        condition = Attr("entity_type").eq("ACCOMMODATION")
        if query.is_active is not None:
            condition = condition & Attr("is_active").eq(query.is_active)
        if query.category is not None:
            condition = condition & Attr("category").eq(query.category.value)

        accommodations = [
            self._to_entity(item)
            for item in paginate(self.table.scan, FilterExpression=condition)
        ]
        accommodations.sort(key=lambda a: a.name.normalized())
        return accommodations

    def update(self, accommodation: Accommodation) -> None:
        """宿泊施設を更新する（名前が変わった場合は名前ガードも付け替える）"""
        current = self.find_by_id(accommodation.id)
        if current is None:
            raise ResourceNotFoundException(
                f"Accommodation not found: {accommodation.id}"
            )

        put_metadata = {
            "Put": {
                "TableName": self.table_name,
                "Item": to_attribute_values(self._to_item(accommodation)),
                "ConditionExpression": "attribute_exists(PK)",
            }
        }
        if current.name.normalized() == accommodation.name.normalized():
            self.client.transact_write_items(TransactItems=[put_metadata])
            return

        try:
            self.client.transact_write_items(
                TransactItems=[
                    put_metadata,
                    {
                        "Delete": {
                            "TableName": self.table_name,
                            "Key": to_attribute_values(
                                {
                                    "PK": "ACCOMMODATION_NAME#"
                                    f"{current.name.normalized()}",
                                    "SK": "NAME",
                                }
                            ),
                        }
                    },
                    self._put_name_guard(accommodation),
                ]
            )
        except ClientError as e:
            if error_code(e) == "TransactionCanceledException":
                raise DuplicateResourceException(
                    f"Accommodation name already exists: {accommodation.name}"
                )
            raise

    def _put_name_guard(self, accommodation: Accommodation) -> dict:
        return {
            "Put": {
                "TableName": self.table_name,
                "Item": to_attribute_values(
                    {
                        "PK": f"ACCOMMODATION_NAME#{accommodation.name.normalized()}",
                        "SK": "NAME",
                        "entity_type": "ACCOMMODATION_NAME",
                        "accommodation_id": str(accommodation.id),
                    }
                ),
                "ConditionExpression": "attribute_not_exists(PK)",
            }
        }

    def _to_item(self, accommodation: Accommodation) -> dict:
        return {
            "PK": f"ACCOMMODATION#{accommodation.id}",
            "SK": "METADATA",
            "entity_type": "ACCOMMODATION",
            "accommodation_id": str(accommodation.id),
            "name": str(accommodation.name),
            "category": accommodation.category.value,
            "max_guests": accommodation.max_guests,
            "base_price_amount": str(accommodation.base_price.amount),
            "base_price_currency": str(accommodation.base_price.currency),
            "description": accommodation.description,
            "amenities": accommodation.amenities,
            "is_active": accommodation.is_active,
        }

    def _to_entity(self, item: dict) -> Accommodation:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Accommodation(
            id=AccommodationId(value=item["accommodation_id"]),
            name=AccommodationName(value=item["name"]),
            category=AccommodationCategory(item["category"]),
            max_guests=int(item["max_guests"]),
            base_price=Money(
                amount=Decimal(item["base_price_amount"]),
                currency=Currency(item["base_price_currency"]),
            ),
            description=item.get("description"),
            amenities=list(item.get("amenities", [])),
            is_active=bool(item.get("is_active", True)),
        )
