from datetime import date
from decimal import Decimal

import pytest

from resort.booking.applications.external_form_intake import ExternalFormSubmission
from resort.booking.domain.enum import BookingSource, BookingStatus
from resort.shared.domain import InvalidDateRangeException, ResourceNotFoundException


def _submission(**overrides) -> ExternalFormSubmission:
    values = {
        "submission_id": "form-42",
        "guest_name": "Hanako Suzuki",
        "guest_email": "hanako@example.com",
        "accommodation_name": "ocean villa",
        "check_in_date": date(2025, 3, 1),
        "check_out_date": date(2025, 3, 4),
        "number_of_guests": 2,
    }
    values.update(overrides)
    return ExternalFormSubmission(**values)


class TestExternalFormIntakeService:
    def test_submit_creates_pending_booking(self, app, villa):
        booking = app.external_forms.submit(_submission())

        assert booking.status == BookingStatus.PENDING
        assert booking.source == BookingSource.EXTERNAL_FORM
        assert booking.accommodation_id == villa.id
        assert booking.external_reference == "form-42"
        assert booking.guest.phone == "Not provided"
        assert booking.total_amount.amount == Decimal("750")

    def test_unknown_accommodation_raises_not_found(self, app, villa):
        with pytest.raises(ResourceNotFoundException):
            app.external_forms.submit(_submission(accommodation_name="Mountain Lodge"))

    def test_invalid_dates_raise_invalid_range(self, app, villa):
        with pytest.raises(InvalidDateRangeException):
            app.external_forms.submit(_submission(check_out_date=date(2025, 2, 27)))
