from datetime import date
from unittest.mock import MagicMock

import pytest

from resort.booking.applications.availability_checker import AvailabilityChecker
from resort.booking.applications.booking_lifecycle import BookingLifecycleService
from resort.booking.applications.commands import UpdateBookingCommand
from resort.booking.domain.enum import BookingStatus, LifecycleEventKind
from resort.shared.domain import (
    BookingConflictException,
    CapacityExceededException,
    ErrorKind,
    InvalidDateRangeException,
    InvalidStateException,
    InvalidTransitionException,
    OptimisticLockException,
    ResourceNotFoundException,
)


@pytest.fixture
def mock_registry(create_accommodation):
    registry = MagicMock()
    registry.get.return_value = create_accommodation(max_guests=4)
    return registry


@pytest.fixture
def service(mock_booking_repository, mock_registry, mock_notifier):
    return BookingLifecycleService(
        repository=mock_booking_repository,
        registry=mock_registry,
        availability=AvailabilityChecker(mock_booking_repository),
        notifier=mock_notifier,
    )


class TestCreateBooking:
    def test_create_saves_pending_booking_and_emits_created(
        self, service, mock_booking_repository, mock_notifier, create_command
    ):
        booking = service.create(create_command())

        assert booking.status == BookingStatus.PENDING
        mock_booking_repository.save.assert_called_once_with(booking)
        mock_notifier.emit.assert_called_once()
        kind, snapshot = mock_notifier.emit.call_args.args
        assert kind == LifecycleEventKind.CREATED
        assert snapshot.accommodation_name == "Ocean Villa"
        assert snapshot.nights == 4

    def test_unknown_accommodation_raises_not_found(
        self, service, mock_registry, mock_booking_repository, create_command
    ):
        mock_registry.get.side_effect = ResourceNotFoundException("missing")

        with pytest.raises(ResourceNotFoundException) as exc_info:
            service.create(create_command())

        assert exc_info.value.kind == ErrorKind.NOT_FOUND
        mock_booking_repository.save.assert_not_called()

    def test_inactive_accommodation_raises_invalid_state(
        self, service, mock_registry, create_accommodation, create_command
    ):
        mock_registry.get.return_value = create_accommodation(is_active=False)
        with pytest.raises(InvalidStateException):
            service.create(create_command())

    def test_capacity_is_checked_before_dates(
        self, service, mock_booking_repository, mock_notifier, create_command
    ):
        command = create_command(
            number_of_guests=5,
            check_in=date(2025, 3, 5),
            check_out=date(2025, 3, 1),
        )

        with pytest.raises(CapacityExceededException) as exc_info:
            service.create(command)

        assert str(exc_info.value) == (
            "Maximum 4 guests allowed for this accommodation"
        )
        mock_booking_repository.save.assert_not_called()
        mock_notifier.emit.assert_not_called()

    def test_invalid_range_raises_error(
        self, service, mock_booking_repository, create_command
    ):
        with pytest.raises(InvalidDateRangeException):
            service.create(
                create_command(check_in=date(2025, 3, 5), check_out=date(2025, 3, 5))
            )
        mock_booking_repository.save.assert_not_called()

    def test_overlap_raises_conflict(
        self, service, mock_booking_repository, create_booking, create_command
    ):
        mock_booking_repository.find_non_terminal_by_accommodation.return_value = [
            create_booking()
        ]

        with pytest.raises(BookingConflictException) as exc_info:
            service.create(
                create_command(check_in=date(2025, 3, 5), check_out=date(2025, 3, 8))
            )

        assert exc_info.value.kind == ErrorKind.CONFLICT
        mock_booking_repository.save.assert_not_called()

    def test_notifier_failure_does_not_propagate(
        self, service, mock_booking_repository, mock_notifier, create_command
    ):
        mock_notifier.emit.side_effect = RuntimeError("bus unavailable")

        booking = service.create(create_command())

        assert booking.status == BookingStatus.PENDING
        mock_booking_repository.save.assert_called_once()


class TestOptimisticLockRetry:
    def test_retries_once_after_lock_conflict(
        self, service, mock_booking_repository, create_command
    ):
        calls = []

        def _transactionally(_accommodation_id, fn):
            calls.append(fn)
            if len(calls) == 1:
                raise OptimisticLockException("version changed")
            return fn()

        mock_booking_repository.transactionally.side_effect = _transactionally

        booking = service.create(create_command())

        assert len(calls) == 2
        assert booking.status == BookingStatus.PENDING

    def test_second_lock_conflict_becomes_booking_conflict(
        self, service, mock_booking_repository, mock_notifier, create_command
    ):
        mock_booking_repository.transactionally.side_effect = OptimisticLockException(
            "version changed"
        )

        with pytest.raises(BookingConflictException):
            service.create(create_command())

        assert mock_booking_repository.transactionally.call_count == 2
        mock_notifier.emit.assert_not_called()


class TestTransitions:
    def test_confirm_updates_with_expected_status(
        self, service, mock_booking_repository, mock_notifier, create_booking
    ):
        mock_booking_repository.find_by_id.side_effect = lambda _id: create_booking()

        booking = service.confirm(create_booking().id)

        assert booking.status == BookingStatus.CONFIRMED
        mock_booking_repository.update.assert_called_once_with(
            booking, expected_status=BookingStatus.PENDING
        )
        assert mock_notifier.emit.call_args.args[0] == LifecycleEventKind.CONFIRMED

    def test_cancel_cancelled_booking_raises_error(
        self, service, mock_booking_repository, mock_notifier, create_booking
    ):
        mock_booking_repository.find_by_id.side_effect = lambda _id: create_booking(
            status=BookingStatus.CANCELLED
        )

        with pytest.raises(InvalidTransitionException):
            service.cancel(create_booking().id)

        mock_booking_repository.update.assert_not_called()
        mock_notifier.emit.assert_not_called()

    def test_unknown_booking_raises_not_found(
        self, service, mock_booking_repository, create_booking
    ):
        mock_booking_repository.find_by_id.return_value = None
        with pytest.raises(ResourceNotFoundException):
            service.check_in(create_booking().id)


class TestUpdateBooking:
    def test_rescheduling_excludes_itself(
        self, service, mock_booking_repository, create_booking
    ):
        mock_booking_repository.find_by_id.side_effect = lambda _id: create_booking()

        updated = service.update(
            create_booking().id, UpdateBookingCommand(check_out_date=date(2025, 3, 6))
        )

        assert updated.stay_period.check_out == date(2025, 3, 6)
        assert updated.stay_period.check_in == date(2025, 3, 1)
        call = mock_booking_repository.find_non_terminal_by_accommodation.call_args
        assert call.kwargs["exclude_id"] == updated.id

    def test_guest_count_over_capacity_raises_error(
        self, service, mock_booking_repository, create_booking
    ):
        mock_booking_repository.find_by_id.side_effect = lambda _id: create_booking()

        with pytest.raises(CapacityExceededException):
            service.update(
                create_booking().id, UpdateBookingCommand(number_of_guests=5)
            )
        mock_booking_repository.update.assert_not_called()

    def test_terminal_booking_raises_invalid_transition(
        self, service, mock_booking_repository, create_booking
    ):
        mock_booking_repository.find_by_id.side_effect = lambda _id: create_booking(
            status=BookingStatus.CHECKED_OUT
        )

        with pytest.raises(InvalidTransitionException):
            service.update(create_booking().id, UpdateBookingCommand(notes="late"))

    def test_non_status_update_emits_updated(
        self, service, mock_booking_repository, mock_notifier, create_booking
    ):
        mock_booking_repository.find_by_id.side_effect = lambda _id: create_booking()

        updated = service.update(
            create_booking().id, UpdateBookingCommand(notes="late arrival")
        )

        assert updated.notes == "late arrival"
        assert mock_notifier.emit.call_args.args[0] == LifecycleEventKind.UPDATED

    def test_status_update_goes_through_transition(
        self, service, mock_booking_repository, mock_notifier, create_booking
    ):
        mock_booking_repository.find_by_id.side_effect = lambda _id: create_booking()

        updated = service.update(
            create_booking().id,
            UpdateBookingCommand(
                status=BookingStatus.CANCELLED, cancellation_reason="no show"
            ),
        )

        assert updated.status == BookingStatus.CANCELLED
        assert updated.cancellation_reason == "no show"
        assert mock_notifier.emit.call_args.args[0] == LifecycleEventKind.CANCELLED
