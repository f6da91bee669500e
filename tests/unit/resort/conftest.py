from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from resort.accommodation.domain.entity import Accommodation
from resort.accommodation.domain.enum import AccommodationCategory
from resort.accommodation.domain.value_object import (
    AccommodationId,
    AccommodationName,
)
from resort.booking.domain.entity import Booking
from resort.booking.domain.enum import BookingSource, BookingStatus
from resort.booking.domain.value_object import BookingId, GuestContact, StayPeriod
from resort.shared.domain import Currency, Money


@pytest.fixture
def accommodation_id():
    return AccommodationId(value="acc-123")


@pytest.fixture
def create_accommodation():
    """Accommodation を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        accommodation_id: str = "acc-123",
        name: str = "Ocean Villa",
        category: AccommodationCategory = AccommodationCategory.VILLA,
        max_guests: int = 4,
        base_price: Decimal = Decimal("250"),
        is_active: bool = True,
    ) -> Accommodation:
        return Accommodation(
            id=AccommodationId(value=accommodation_id),
            name=AccommodationName(value=name),
            category=category,
            max_guests=max_guests,
            base_price=Money(amount=base_price, currency=Currency.usd()),
            is_active=is_active,
        )

    return _factory


@pytest.fixture
def create_booking():
    """Booking を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        status: BookingStatus = BookingStatus.PENDING,
        booking_id: str = "booking-123",
        accommodation_id: str = "acc-123",
        check_in: date = date(2025, 3, 1),
        check_out: date = date(2025, 3, 5),
        number_of_guests: int = 2,
        total_amount: Decimal = Decimal("1000"),
    ) -> Booking:
        return Booking(
            id=BookingId(value=booking_id),
            accommodation_id=AccommodationId(value=accommodation_id),
            guest=GuestContact(
                name="Taro Yamada",
                email="taro@example.com",
                phone="+81-90-0000-0000",
            ),
            number_of_guests=number_of_guests,
            stay_period=StayPeriod(check_in=check_in, check_out=check_out),
            total_amount=Money(amount=total_amount, currency=Currency.usd()),
            source=BookingSource.MANUAL,
            status=status,
        )

    return _factory


@pytest.fixture
def mock_booking_repository():
    """transactionally は渡された関数をそのまま実行する"""
    repository = MagicMock()
    repository.transactionally.side_effect = lambda _accommodation_id, fn: fn()
    repository.find_non_terminal_by_accommodation.return_value = []
    return repository


@pytest.fixture
def mock_notifier():
    return MagicMock()
