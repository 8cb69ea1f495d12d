from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from src.service.event_booking.app.command.sweep_lifecycle_use_case import SweepLifecycleUseCase
from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.domain.enum.event_status import EventStatus
from test.service.event_booking.in_memory_repo import InMemoryBookingRepo, InMemoryEventRepo


@pytest.fixture
def event_repo() -> InMemoryEventRepo:
    return InMemoryEventRepo()


@pytest.fixture
def booking_repo(event_repo: InMemoryEventRepo) -> InMemoryBookingRepo:
    return InMemoryBookingRepo(event_repo)


@pytest.fixture
def lifecycle_sweeper(
    event_repo: InMemoryEventRepo, booking_repo: InMemoryBookingRepo
) -> SweepLifecycleUseCase:
    return SweepLifecycleUseCase(event_command_repo=event_repo, booking_command_repo=booking_repo)


@pytest.fixture
def make_event() -> Callable[..., EventEntity]:
    """Build a published event starting in 30 days unless overridden"""

    def _make(**overrides) -> EventEntity:
        start = overrides.pop('start_date_time', datetime.now(timezone.utc) + timedelta(days=30))
        fields = {
            'title': 'Summer Jazz Night',
            'description': 'An evening of live jazz',
            'start_date_time': start,
            'end_date_time': start + timedelta(hours=3),
            'venue_id': 1,
            'category_id': 1,
            'total_capacity': 100,
            'price': 50.0,
            'created_by': 1,
            'status': EventStatus.PUBLISHED,
        }
        fields.update(overrides)
        return EventEntity(**fields)

    return _make
