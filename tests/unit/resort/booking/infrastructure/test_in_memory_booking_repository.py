import pytest

from resort.booking.domain.enum import BookingStatus
from resort.booking.infrastructure.in_memory_booking_repository import (
    InMemoryBookingRepository,
)
from resort.shared.domain import DuplicateResourceException, OptimisticLockException


@pytest.fixture
def repository():
    return InMemoryBookingRepository()


class TestInMemoryBookingRepository:
    def test_save_and_find_returns_copy(self, repository, create_booking):
        booking = create_booking()
        repository.save(booking)

        found = repository.find_by_id(booking.id)
        found.confirm()

        assert repository.find_by_id(booking.id).status == BookingStatus.PENDING

    def test_save_duplicate_raises_error(self, repository, create_booking):
        repository.save(create_booking())
        with pytest.raises(DuplicateResourceException):
            repository.save(create_booking())

    def test_update_with_stale_status_raises_lock_error(
        self, repository, create_booking
    ):
        repository.save(create_booking(status=BookingStatus.CONFIRMED))

        with pytest.raises(OptimisticLockException):
            repository.update(
                create_booking(status=BookingStatus.CANCELLED),
                expected_status=BookingStatus.PENDING,
            )

    def test_find_non_terminal_skips_terminal_and_excluded(
        self, repository, create_booking, accommodation_id
    ):
        repository.save(create_booking(booking_id="b-1"))
        repository.save(create_booking(booking_id="b-2"))
        repository.save(
            create_booking(booking_id="b-3", status=BookingStatus.CANCELLED)
        )
        repository.save(create_booking(booking_id="b-4", accommodation_id="acc-999"))

        excluded = create_booking(booking_id="b-2").id
        found = repository.find_non_terminal_by_accommodation(
            accommodation_id, exclude_id=excluded
        )

        assert [str(b.id) for b in found] == ["b-1"]

    def test_transactionally_rolls_back_on_error(
        self, repository, create_booking, accommodation_id
    ):
        repository.save(create_booking(booking_id="b-1"))
        repository.save(create_booking(booking_id="other", accommodation_id="acc-999"))

        def _fail():
            repository.save(create_booking(booking_id="b-2"))
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            repository.transactionally(accommodation_id, _fail)

        remaining = repository.find_non_terminal_by_accommodation(accommodation_id)
        assert [str(b.id) for b in remaining] == ["b-1"]
        assert repository.find_by_id(create_booking(booking_id="other").id) is not None

    def test_stored_bookings_carry_no_pending_events(self, repository, create_booking):
        booking = create_booking()
        booking.confirm()
        repository.save(booking)

        assert repository.find_by_id(booking.id).flush_domain_events() == []
