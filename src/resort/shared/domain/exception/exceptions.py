from enum import Enum


class ErrorKind(str, Enum):
    """呼び出し側が区別して扱うエラー種別"""

    NOT_FOUND = "NOT_FOUND"
    INVALID_RANGE = "INVALID_RANGE"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    CONFLICT = "CONFLICT"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    INVALID_STATE = "INVALID_STATE"


class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    kind: ErrorKind | None = None


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    kind = ErrorKind.NOT_FOUND


class InvalidDateRangeException(DomainException):
    """チェックイン日がチェックアウト日以降の場合"""

    kind = ErrorKind.INVALID_RANGE


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    pass


class CapacityExceededException(BusinessRuleViolationException):
    """宿泊人数が施設の定員を超える場合"""

    kind = ErrorKind.CAPACITY_EXCEEDED


class BookingConflictException(BusinessRuleViolationException):
    """同じ施設の有効な予約と日程が重なる場合"""

    kind = ErrorKind.CONFLICT


class InvalidTransitionException(BusinessRuleViolationException):
    """予約ステータスの不正な遷移"""

    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, current: str, operation: str) -> None:
        super().__init__(f"Cannot {operation} a booking in {current} status")
        self.current = current
        self.operation = operation


class InvalidStateException(BusinessRuleViolationException):
    """現在の状態では許可されない操作（キャンセル済み予約への入金など）"""

    kind = ErrorKind.INVALID_STATE


class DuplicateResourceException(DomainException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（同時書き込みでトランザクションが取り消された場合）"""

    pass
