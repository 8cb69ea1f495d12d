"""
Unit tests for DeleteBookingUseCase

Test Focus:
1. Deleting a live booking returns its seats, deleting a cancelled one does not
2. A second or concurrent delete finds nothing and releases nothing
"""

import asyncio

import pytest

from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.service.event_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.event_booking.app.command.delete_booking_use_case import DeleteBookingUseCase
from src.service.event_booking.app.command.update_booking_use_case import UpdateBookingUseCase


@pytest.mark.unit
class TestDeleteBooking:
    @pytest.fixture
    def use_case(self, event_repo, booking_repo, lifecycle_sweeper) -> DeleteBookingUseCase:
        return DeleteBookingUseCase(
            booking_query_repo=booking_repo,
            booking_command_repo=booking_repo,
            event_command_repo=event_repo,
            lifecycle_sweeper=lifecycle_sweeper,
        )

    @pytest.fixture
    async def event_and_booking(self, event_repo, booking_repo, lifecycle_sweeper, make_event):
        event = await event_repo.create(make_event())
        booking = await CreateBookingUseCase(
            event_query_repo=event_repo,
            event_command_repo=event_repo,
            booking_command_repo=booking_repo,
            lifecycle_sweeper=lifecycle_sweeper,
        ).create_booking(user_id=7, event_id=event.id, seats_booked=30, ticket_type='General')
        return event, booking

    @pytest.mark.asyncio
    async def test_delete_confirmed_booking_releases_seats(
        self, use_case, event_repo, booking_repo, event_and_booking
    ) -> None:
        event, booking = event_and_booking

        assert await use_case.delete_booking(user_id=7, booking_id=booking.id) is True

        assert booking.id not in booking_repo.bookings
        assert event_repo.events[event.id].available_seats == 100

    @pytest.mark.asyncio
    async def test_delete_cancelled_booking_keeps_seat_count(
        self, use_case, event_repo, booking_repo, lifecycle_sweeper, event_and_booking
    ) -> None:
        # Arrange
        event, booking = event_and_booking
        await UpdateBookingUseCase(
            booking_query_repo=booking_repo,
            booking_command_repo=booking_repo,
            event_command_repo=event_repo,
            lifecycle_sweeper=lifecycle_sweeper,
        ).update_booking(user_id=7, booking_id=booking.id, changes={'status': 'cancelled'})
        assert event_repo.events[event.id].available_seats == 100

        # Act
        await use_case.delete_booking(user_id=7, booking_id=booking.id)

        # Assert
        assert event_repo.events[event.id].available_seats == 100

    @pytest.mark.asyncio
    async def test_delete_twice_fails_with_not_found(
        self, use_case, event_repo, event_and_booking
    ) -> None:
        event, booking = event_and_booking
        await use_case.delete_booking(user_id=7, booking_id=booking.id)

        with pytest.raises(NotFoundError):
            await use_case.delete_booking(user_id=7, booking_id=booking.id)

        assert event_repo.events[event.id].available_seats == 100

    @pytest.mark.asyncio
    async def test_concurrent_deletes_release_seats_once(
        self, use_case, event_repo, event_and_booking
    ) -> None:
        event, booking = event_and_booking

        results = await asyncio.gather(
            use_case.delete_booking(user_id=7, booking_id=booking.id),
            use_case.delete_booking(user_id=7, booking_id=booking.id),
            return_exceptions=True,
        )

        assert results.count(True) == 1
        assert sum(isinstance(r, NotFoundError) for r in results) == 1
        assert event_repo.events[event.id].available_seats == 100

    @pytest.mark.asyncio
    async def test_fail_when_not_booking_owner(
        self, use_case, booking_repo, event_and_booking
    ) -> None:
        _, booking = event_and_booking

        with pytest.raises(ForbiddenError):
            await use_case.delete_booking(user_id=8, booking_id=booking.id)

        assert booking.id in booking_repo.bookings
