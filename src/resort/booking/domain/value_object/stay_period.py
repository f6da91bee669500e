from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from resort.booking.domain.enum.turnover_policy import TurnoverPolicy
from resort.shared.domain import InvalidDateRangeException


@dataclass(frozen=True)
class StayPeriod:
    """滞在期間(チェックイン日 + チェックアウト日)"""

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if self.check_out <= self.check_in:
            raise InvalidDateRangeException(
                "Check-out date must be after check-in date"
            )

    def nights(self) -> int:
        """宿泊数を計算する"""
        return (self.check_out - self.check_in).days

    def with_dates(
        self, check_in: date | None = None, check_out: date | None = None
    ) -> StayPeriod:
        """指定された側の日付だけを置き換えた期間を返す"""
        return StayPeriod(
            check_in=check_in or self.check_in,
            check_out=check_out or self.check_out,
        )

    def overlaps(
        self, other: StayPeriod, policy: TurnoverPolicy = TurnoverPolicy.CLOSED
    ) -> bool:
        """他の滞在期間と日程が重なるかどうか

        CLOSED はチェックアウト日も占有日として扱うため、
        チェックアウト日に次の予約がチェックインすると重複になる。
        """
        if policy is TurnoverPolicy.SAME_DAY_TURNOVER:
            return self.check_in < other.check_out and self.check_out > other.check_in
        return self.check_in <= other.check_out and self.check_out >= other.check_in
