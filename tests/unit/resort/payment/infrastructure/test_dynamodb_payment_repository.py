from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from resort.booking.domain.value_object import BookingId
from resort.payment.domain.enum import PaymentStatus
from resort.payment.infrastructure.dynamodb_payment_repository import (
    DynamoDBPaymentRepository,
)
from resort.shared.domain import DuplicateResourceException


@pytest.fixture
def table():
    return MagicMock()


@pytest.fixture
def repository(table):
    dynamodb = MagicMock()
    dynamodb.Table.return_value = table
    return DynamoDBPaymentRepository(table_name="resort-table", dynamodb=dynamodb)


class TestDynamoDBPaymentRepository:
    def test_save_puts_item_in_booking_partition(
        self, repository, table, create_payment
    ):
        repository.save(create_payment())

        item = table.put_item.call_args.kwargs["Item"]
        assert item["PK"] == "BOOKING#booking-123"
        assert item["SK"] == "PAYMENT#payment-123"
        assert item["amount"] == "500"

    def test_save_duplicate_raises_error(self, repository, table, create_payment):
        table.put_item.side_effect = ClientError(
            {"Error": {"Code": "ConditionalCheckFailedException", "Message": "x"}},
            "PutItem",
        )
        with pytest.raises(DuplicateResourceException):
            repository.save(create_payment())

    def test_find_by_booking_id(self, repository, table, create_payment):
        completed = create_payment(status=PaymentStatus.COMPLETED)
        table.query.return_value = {"Items": [repository._to_item(completed)]}

        payments = repository.find_by_booking_id(BookingId(value="booking-123"))

        assert payments == [completed]
        assert payments[0].status == PaymentStatus.COMPLETED
        assert payments[0].amount == completed.amount
