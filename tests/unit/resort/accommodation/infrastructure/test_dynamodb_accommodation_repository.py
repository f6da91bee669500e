from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from resort.accommodation.domain.value_object import AccommodationName
from resort.accommodation.infrastructure.dynamodb_accommodation_repository import (
    DynamoDBAccommodationRepository,
)
from resort.shared.domain import DuplicateResourceException


@pytest.fixture
def dynamodb():
    return MagicMock()


@pytest.fixture
def repository(dynamodb):
    return DynamoDBAccommodationRepository(table_name="resort-table", dynamodb=dynamodb)


class TestDynamoDBAccommodationRepository:
    def test_save_writes_item_and_name_guard(
        self, repository, dynamodb, create_accommodation
    ):
        repository.save(create_accommodation())

        items = dynamodb.meta.client.transact_write_items.call_args.kwargs[
            "TransactItems"
        ]
        assert items[0]["Put"]["Item"]["PK"] == {"S": "ACCOMMODATION#acc-123"}
        assert items[1]["Put"]["Item"]["PK"] == {
            "S": "ACCOMMODATION_NAME#ocean villa"
        }

    def test_save_duplicate_name_raises_error(
        self, repository, dynamodb, create_accommodation
    ):
        dynamodb.meta.client.transact_write_items.side_effect = ClientError(
            {"Error": {"Code": "TransactionCanceledException", "Message": "x"}},
            "TransactWriteItems",
        )
        with pytest.raises(DuplicateResourceException):
            repository.save(create_accommodation())

    def test_round_trip_through_item(self, repository, dynamodb, create_accommodation):
        accommodation = create_accommodation()
        dynamodb.Table.return_value.get_item.return_value = {
            "Item": repository._to_item(accommodation)
        }

        found = repository.find_by_id(accommodation.id)

        assert found == accommodation
        assert found.max_guests == 4
        assert found.base_price == accommodation.base_price

    def test_find_by_name_returns_none_without_guard(self, repository, dynamodb):
        dynamodb.Table.return_value.get_item.return_value = {}
        assert repository.find_by_name(AccommodationName(value="Nowhere")) is None
