from decimal import Decimal
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from resort.shared.infrastructure import (
    cancellation_codes,
    error_code,
    paginate,
    to_attribute_values,
)


class TestToAttributeValues:
    def test_serializes_and_skips_none(self):
        result = to_attribute_values(
            {"PK": "BOOKING#1", "count": 2, "amount": Decimal("1.5"), "notes": None}
        )
        assert result == {
            "PK": {"S": "BOOKING#1"},
            "count": {"N": "2"},
            "amount": {"N": "1.5"},
        }


class TestClientErrorHelpers:
    def test_error_code_and_cancellation_codes(self):
        error = ClientError(
            {
                "Error": {"Code": "TransactionCanceledException", "Message": "x"},
                "CancellationReasons": [
                    {"Code": "None"},
                    {"Code": "ConditionalCheckFailed"},
                ],
            },
            "TransactWriteItems",
        )
        assert error_code(error) == "TransactionCanceledException"
        assert cancellation_codes(error) == ["None", "ConditionalCheckFailed"]


class TestPaginate:
    def test_follows_last_evaluated_key(self):
        operation = MagicMock(
            side_effect=[
                {"Items": [{"id": 1}], "LastEvaluatedKey": {"PK": "a"}},
                {"Items": [{"id": 2}]},
            ]
        )

        items = list(paginate(operation, TableName="t"))

        assert items == [{"id": 1}, {"id": 2}]
        assert operation.call_count == 2
        assert operation.call_args.kwargs["ExclusiveStartKey"] == {"PK": "a"}
