from datetime import date

import pytest

from resort.accommodation.applications.commands import RegisterAccommodationCommand
from resort.accommodation.domain.enum import AccommodationCategory
from resort.booking.applications.commands import CreateBookingCommand
from resort.bootstrap import create_in_memory_app


@pytest.fixture
def create_command():
    """CreateBookingCommand を生成する Factory fixture"""

    def _factory(
        accommodation_id: str = "acc-123",
        check_in: date = date(2025, 3, 1),
        check_out: date = date(2025, 3, 5),
        number_of_guests: int = 2,
        **kwargs,
    ) -> CreateBookingCommand:
        return CreateBookingCommand(
            accommodation_id=accommodation_id,
            guest_name="Taro Yamada",
            guest_email="taro@example.com",
            guest_phone="+81-90-0000-0000",
            number_of_guests=number_of_guests,
            check_in_date=check_in,
            check_out_date=check_out,
            total_amount="1000",
            **kwargs,
        )

    return _factory


@pytest.fixture
def app(mock_notifier):
    """インメモリ構成のアプリケーション（通知はモック）"""
    resort_app = create_in_memory_app(notifier=mock_notifier)
    yield resort_app
    resort_app.close()


@pytest.fixture
def villa(app):
    return app.registry.register(
        RegisterAccommodationCommand(
            name="Ocean Villa",
            category=AccommodationCategory.VILLA,
            max_guests=4,
            base_price="250",
        )
    )
