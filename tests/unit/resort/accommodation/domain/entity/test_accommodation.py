from decimal import Decimal

import pytest

from resort.accommodation.domain.entity import Accommodation
from resort.accommodation.domain.enum import AccommodationCategory
from resort.accommodation.domain.value_object import (
    AccommodationId,
    AccommodationName,
)
from resort.shared.domain import Money


class TestAccommodation:
    def test_can_host_up_to_max_guests(self, create_accommodation):
        accommodation = create_accommodation(max_guests=4)
        assert accommodation.can_host(4)
        assert not accommodation.can_host(5)

    def test_max_guests_must_be_positive(self):
        with pytest.raises(ValueError, match="Max guests"):
            Accommodation(
                id=AccommodationId(value="acc-1"),
                name=AccommodationName(value="Suite"),
                category=AccommodationCategory.SUITE,
                max_guests=0,
                base_price=Money.usd(Decimal("100")),
            )

    def test_deactivate_and_activate(self, create_accommodation):
        accommodation = create_accommodation()
        accommodation.deactivate()
        assert not accommodation.is_active
        accommodation.activate()
        assert accommodation.is_active

    def test_amenities_are_copied(self, create_accommodation):
        accommodation = create_accommodation()
        accommodation.replace_amenities(["pool"])
        accommodation.amenities.append("spa")
        assert accommodation.amenities == ["pool"]
