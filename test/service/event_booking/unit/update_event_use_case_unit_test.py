from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.service.event_booking.app.command.update_event_use_case import UpdateEventUseCase


@pytest.mark.unit
class TestUpdateEvent:
    @pytest.fixture
    def venue_repo(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def category_repo(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def use_case(self, event_repo, venue_repo, category_repo) -> UpdateEventUseCase:
        return UpdateEventUseCase(
            event_query_repo=event_repo,
            event_command_repo=event_repo,
            venue_repo=venue_repo,
            category_repo=category_repo,
        )

    @pytest.mark.asyncio
    async def test_growing_capacity_adds_available_seats(
        self, use_case, event_repo, make_event
    ) -> None:
        # Arrange: 30 of 100 seats are booked
        event = await event_repo.create(make_event())
        await event_repo.reserve_seats(event.id, 30)

        # Act
        updated = await use_case.update(event.id, {'total_capacity': 150, 'price': 60})

        # Assert
        assert updated.total_capacity == 150
        assert updated.available_seats == 120
        assert updated.price == 60.0

    @pytest.mark.asyncio
    async def test_fail_when_shrinking_below_booked_seats(
        self, use_case, event_repo, make_event
    ) -> None:
        event = await event_repo.create(make_event())
        await event_repo.reserve_seats(event.id, 30)

        with pytest.raises(DomainError) as exc_info:
            await use_case.update(event.id, {'total_capacity': 20})

        assert exc_info.value.details == {'booked': 30}
        assert event_repo.events[event.id].total_capacity == 100
        assert event_repo.events[event.id].available_seats == 70

    @pytest.mark.asyncio
    async def test_invalid_edit_leaves_capacity_untouched(
        self, use_case, event_repo, make_event
    ) -> None:
        event = await event_repo.create(make_event())

        with pytest.raises(DomainError):
            await use_case.update(
                event.id,
                {'total_capacity': 200, 'end_date_time': event.start_date_time},
            )

        assert event_repo.events[event.id].total_capacity == 100

    @pytest.mark.asyncio
    async def test_fail_when_new_venue_missing(
        self, use_case, event_repo, venue_repo, make_event
    ) -> None:
        event = await event_repo.create(make_event())
        venue_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match='Venue not found'):
            await use_case.update(event.id, {'venue_id': 42})

    @pytest.mark.asyncio
    async def test_fail_when_event_missing(self, use_case) -> None:
        with pytest.raises(NotFoundError):
            await use_case.update(999, {'price': 10})
