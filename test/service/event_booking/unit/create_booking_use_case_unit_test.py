"""
Unit tests for CreateBookingUseCase

Test Focus:
1. Pricing: total = price x tier multiplier x seats, deadline = start - 24h
2. Inventory: seats are taken with one guarded decrement, never oversold
3. Compensation: a failed insert gives the reserved seats back
4. Fail Fast: missing event, unpublished event, unknown tier, too few seats
"""

import asyncio
from datetime import datetime, timedelta, timezone
import re
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.service.event_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.event_booking.domain.entity.booking_entity import BookingStatus
from src.service.event_booking.domain.entity.event_entity import TicketTier
from src.service.event_booking.domain.enum.event_status import EventStatus
from test.util_constant import BOOKING_REFERENCE_REGEX


@pytest.mark.unit
class TestCreateBooking:
    @pytest.fixture
    def use_case(self, event_repo, booking_repo, lifecycle_sweeper) -> CreateBookingUseCase:
        return CreateBookingUseCase(
            event_query_repo=event_repo,
            event_command_repo=event_repo,
            booking_command_repo=booking_repo,
            lifecycle_sweeper=lifecycle_sweeper,
        )

    @pytest.mark.asyncio
    async def test_create_booking_prices_seats_and_sets_deadline(
        self, use_case, event_repo, make_event
    ) -> None:
        # Arrange
        event = await event_repo.create(
            make_event(
                price=40.0,
                ticket_tiers=[
                    TicketTier(type='General'),
                    TicketTier(type='VIP', price_multiplier=2.5),
                ],
            )
        )

        # Act
        booking = await use_case.create_booking(
            user_id=7, event_id=event.id, seats_booked=3, ticket_type='VIP'
        )

        # Assert
        assert booking.id is not None
        assert booking.total_amount == 300.0
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.cancellation_deadline == event.start_date_time - timedelta(hours=24)
        assert booking.cancellation_allowed is True
        assert re.match(BOOKING_REFERENCE_REGEX, booking.booking_reference)
        assert event_repo.events[event.id].available_seats == 97

    @pytest.mark.asyncio
    async def test_general_ticket_is_offered_when_event_has_no_tiers(
        self, use_case, event_repo, make_event
    ) -> None:
        event = await event_repo.create(make_event(price=19.99))

        booking = await use_case.create_booking(
            user_id=7, event_id=event.id, seats_booked=3, ticket_type='General'
        )

        assert booking.total_amount == 59.97

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'price, capacity, seats, expected_total, expected_left',
        [
            (50.0, 10, 3, 150.0, 7),
            (20.0, 5, 2, 40.0, 3),
        ],
    )
    async def test_total_and_remaining_seats(
        self,
        use_case,
        event_repo,
        make_event,
        price,
        capacity,
        seats,
        expected_total,
        expected_left,
    ) -> None:
        # Arrange
        event = await event_repo.create(make_event(price=price, total_capacity=capacity))

        # Act
        booking = await use_case.create_booking(
            user_id=7, event_id=event.id, seats_booked=seats, ticket_type='General'
        )

        # Assert
        assert booking.total_amount == expected_total
        assert event_repo.events[event.id].available_seats == expected_left

    @pytest.mark.asyncio
    async def test_fail_when_ticket_type_not_offered_and_seats_untouched(
        self, use_case, event_repo, make_event
    ) -> None:
        event = await event_repo.create(make_event(ticket_tiers=[TicketTier(type='VIP')]))

        with pytest.raises(DomainError, match="Ticket type 'General' is not available"):
            await use_case.create_booking(
                user_id=7, event_id=event.id, seats_booked=2, ticket_type='General'
            )

        assert event_repo.events[event.id].available_seats == 100

    @pytest.mark.asyncio
    async def test_fail_when_event_not_found(self, use_case) -> None:
        with pytest.raises(NotFoundError):
            await use_case.create_booking(
                user_id=7, event_id=999, seats_booked=1, ticket_type='General'
            )

    @pytest.mark.asyncio
    async def test_fail_when_event_not_published(self, use_case, event_repo, make_event) -> None:
        event = await event_repo.create(make_event(status=EventStatus.DRAFT))

        with pytest.raises(DomainError, match='not available for booking'):
            await use_case.create_booking(
                user_id=7, event_id=event.id, seats_booked=1, ticket_type='General'
            )

    @pytest.mark.asyncio
    async def test_fail_when_event_has_ended(self, use_case, event_repo, make_event) -> None:
        """The sweep completes the ended event first, so it is no longer bookable"""
        event = await event_repo.create(
            make_event(start_date_time=datetime.now(timezone.utc) - timedelta(days=2))
        )

        with pytest.raises(DomainError, match='not available for booking'):
            await use_case.create_booking(
                user_id=7, event_id=event.id, seats_booked=1, ticket_type='General'
            )

        assert event_repo.events[event.id].status == EventStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_fail_when_seats_booked_below_one(
        self, use_case, event_repo, make_event
    ) -> None:
        event = await event_repo.create(make_event())

        with pytest.raises(DomainError):
            await use_case.create_booking(
                user_id=7, event_id=event.id, seats_booked=0, ticket_type='General'
            )

        assert event_repo.events[event.id].available_seats == 100

    @pytest.mark.asyncio
    async def test_fail_when_not_enough_seats_reports_available(
        self, use_case, event_repo, make_event
    ) -> None:
        event = await event_repo.create(make_event(total_capacity=5))

        with pytest.raises(DomainError) as exc_info:
            await use_case.create_booking(
                user_id=7, event_id=event.id, seats_booked=6, ticket_type='General'
            )

        assert exc_info.value.message == 'Not enough seats available'
        assert exc_info.value.details == {'available': 5}
        assert event_repo.events[event.id].available_seats == 5

    @pytest.mark.asyncio
    async def test_booking_within_a_day_of_start_cannot_be_cancelled(
        self, use_case, event_repo, make_event
    ) -> None:
        event = await event_repo.create(
            make_event(start_date_time=datetime.now(timezone.utc) + timedelta(hours=5))
        )

        booking = await use_case.create_booking(
            user_id=7, event_id=event.id, seats_booked=1, ticket_type='General'
        )

        assert booking.cancellation_allowed is False

    @pytest.mark.asyncio
    async def test_release_seats_when_booking_insert_fails(
        self, use_case, event_repo, booking_repo, make_event
    ) -> None:
        # Arrange
        event = await event_repo.create(make_event())
        booking_repo.create = AsyncMock(side_effect=RuntimeError('insert failed'))

        # Act
        with pytest.raises(RuntimeError, match='insert failed'):
            await use_case.create_booking(
                user_id=7, event_id=event.id, seats_booked=10, ticket_type='General'
            )

        # Assert
        assert event_repo.events[event.id].available_seats == 100


@pytest.mark.unit
class TestCreateBookingConcurrency:
    @pytest.fixture
    def use_case(self, event_repo, booking_repo, lifecycle_sweeper) -> CreateBookingUseCase:
        return CreateBookingUseCase(
            event_query_repo=event_repo,
            event_command_repo=event_repo,
            booking_command_repo=booking_repo,
            lifecycle_sweeper=lifecycle_sweeper,
        )

    @pytest.mark.asyncio
    async def test_three_requests_of_fifty_on_hundred_seats_never_oversell(
        self, use_case, event_repo, booking_repo, make_event
    ) -> None:
        # Arrange
        event = await event_repo.create(make_event(total_capacity=100))

        # Act
        results = await asyncio.gather(
            *(
                use_case.create_booking(
                    user_id=user_id, event_id=event.id, seats_booked=50, ticket_type='General'
                )
                for user_id in (1, 2, 3)
            ),
            return_exceptions=True,
        )

        # Assert
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], DomainError)
        assert failures[0].details == {'available': 0}
        assert len(booking_repo.bookings) == 2
        assert event_repo.events[event.id].available_seats == 0

    @pytest.mark.asyncio
    async def test_two_requests_of_twenty_both_succeed_with_distinct_references(
        self, use_case, event_repo, make_event
    ) -> None:
        event = await event_repo.create(make_event(total_capacity=100))

        first, second = await asyncio.gather(
            use_case.create_booking(
                user_id=1, event_id=event.id, seats_booked=20, ticket_type='General'
            ),
            use_case.create_booking(
                user_id=2, event_id=event.id, seats_booked=20, ticket_type='General'
            ),
        )

        assert event_repo.events[event.id].available_seats == 60
        assert first.booking_reference != second.booking_reference
        for booking in (first, second):
            assert re.match(BOOKING_REFERENCE_REGEX, booking.booking_reference)
