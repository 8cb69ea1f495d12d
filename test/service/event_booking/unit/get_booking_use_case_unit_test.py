from datetime import timedelta

import pytest

from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.service.event_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.event_booking.domain.entity.booking_entity import Booking
from src.service.event_booking.domain.entity.user_entity import UserEntity, UserRole


@pytest.mark.unit
class TestGetBooking:
    @pytest.fixture
    def use_case(self, booking_repo, lifecycle_sweeper) -> GetBookingUseCase:
        return GetBookingUseCase(booking_repo, lifecycle_sweeper)

    @pytest.fixture
    async def booking(self, event_repo, booking_repo, make_event) -> Booking:
        event = await event_repo.create(make_event())
        return await booking_repo.create(
            Booking(
                user_id=7,
                event_id=event.id,
                ticket_type='General',
                seats_booked=2,
                total_amount=100.0,
                cancellation_deadline=event.start_date_time - timedelta(hours=24),
            )
        )

    @pytest.mark.asyncio
    async def test_owner_can_read_booking(self, use_case, booking: Booking) -> None:
        result = await use_case.get_booking(
            booking_id=booking.id, requester=UserEntity(id=7, email='owner@test.com')
        )

        assert result.booking_reference == booking.booking_reference
        assert result.event is not None

    @pytest.mark.asyncio
    async def test_admin_can_read_any_booking(self, use_case, booking: Booking) -> None:
        admin = UserEntity(id=1, email='admin@test.com', role=UserRole.ADMIN)

        result = await use_case.get_booking(booking_id=booking.id, requester=admin)

        assert result.id == booking.id

    @pytest.mark.asyncio
    async def test_fail_when_other_user_reads_booking(self, use_case, booking: Booking) -> None:
        with pytest.raises(ForbiddenError):
            await use_case.get_booking(
                booking_id=booking.id, requester=UserEntity(id=8, email='other@test.com')
            )

    @pytest.mark.asyncio
    async def test_lookup_by_reference_is_case_insensitive(
        self, use_case, booking: Booking
    ) -> None:
        result = await use_case.get_by_reference(
            booking_reference=booking.booking_reference.lower(),
            requester=UserEntity(id=7, email='owner@test.com'),
        )

        assert result.id == booking.id

    @pytest.mark.asyncio
    async def test_fail_when_reference_unknown(self, use_case) -> None:
        with pytest.raises(NotFoundError):
            await use_case.get_by_reference(
                booking_reference='BR-FFFFFFFF', requester=UserEntity(id=7, email='x@test.com')
            )
