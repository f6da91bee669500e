from datetime import date

import pytest

from resort.booking.domain.enum import TurnoverPolicy
from resort.booking.domain.value_object import StayPeriod
from resort.shared.domain import ErrorKind, InvalidDateRangeException


def _period(check_in: str, check_out: str) -> StayPeriod:
    return StayPeriod(
        check_in=date.fromisoformat(check_in), check_out=date.fromisoformat(check_out)
    )


class TestStayPeriod:
    def test_nights_calculation(self):
        assert _period("2025-03-01", "2025-03-05").nights() == 4

    def test_checkout_before_checkin_raises_error(self):
        with pytest.raises(
            InvalidDateRangeException, match="Check-out date must be after"
        ) as exc_info:
            StayPeriod(check_in=date(2025, 3, 5), check_out=date(2025, 3, 1))
        assert exc_info.value.kind == ErrorKind.INVALID_RANGE

    def test_same_date_raises_error(self):
        with pytest.raises(InvalidDateRangeException):
            StayPeriod(check_in=date(2025, 3, 1), check_out=date(2025, 3, 1))

    def test_with_dates_replaces_one_side(self):
        period = _period("2025-03-01", "2025-03-05")
        assert period.with_dates(check_out=date(2025, 3, 7)) == _period(
            "2025-03-01", "2025-03-07"
        )

    def test_with_dates_validates_merged_range(self):
        period = _period("2025-03-01", "2025-03-05")
        with pytest.raises(InvalidDateRangeException):
            period.with_dates(check_in=date(2025, 3, 6))


class TestStayPeriodOverlaps:
    @pytest.mark.parametrize(
        ("other", "expected"),
        [
            (("2025-03-05", "2025-03-08"), True),
            (("2025-02-25", "2025-03-01"), True),
            (("2025-03-02", "2025-03-03"), True),
            (("2025-02-20", "2025-03-10"), True),
            (("2025-03-06", "2025-03-08"), False),
            (("2025-02-20", "2025-02-28"), False),
        ],
    )
    def test_closed_policy_shares_boundary_day(self, other, expected):
        period = _period("2025-03-01", "2025-03-05")
        assert period.overlaps(_period(*other)) is expected
        assert _period(*other).overlaps(period) is expected

    @pytest.mark.parametrize(
        ("other", "expected"),
        [
            (("2025-03-05", "2025-03-08"), False),
            (("2025-02-25", "2025-03-01"), False),
            (("2025-03-04", "2025-03-08"), True),
            (("2025-03-02", "2025-03-03"), True),
        ],
    )
    def test_same_day_turnover_policy(self, other, expected):
        period = _period("2025-03-01", "2025-03-05")
        policy = TurnoverPolicy.SAME_DAY_TURNOVER
        assert period.overlaps(_period(*other), policy) is expected
