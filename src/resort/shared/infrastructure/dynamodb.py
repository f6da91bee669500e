from collections.abc import Callable, Iterator
from typing import Any

from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

_serializer = TypeSerializer()


def to_attribute_values(item: dict[str, Any]) -> dict[str, dict]:
    """resource 形式のアイテムを client (TransactWriteItems) 形式に変換する

    値が None の属性は書き込まない。
    """
    return {
        key: _serializer.serialize(value)
        for key, value in item.items()
        if value is not None
    }


def error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def cancellation_codes(error: ClientError) -> list[str]:
    """TransactionCanceledException の各アクションの失敗理由を返す"""
    reasons = error.response.get("CancellationReasons", [])
    return [reason.get("Code", "None") for reason in reasons]


def paginate(operation: Callable[..., dict], **kwargs: Any) -> Iterator[dict]:
    """query / scan の全ページのアイテムを順に返す"""
    while True:
        response = operation(**kwargs)
        yield from response.get("Items", [])
        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return
        kwargs["ExclusiveStartKey"] = last_key
