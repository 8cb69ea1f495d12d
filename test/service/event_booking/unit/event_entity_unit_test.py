from datetime import datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.event_booking.domain.entity.event_entity import EventEntity, TicketTier
from src.service.event_booking.domain.enum.event_status import EventStatus


@pytest.mark.unit
class TestEventEntity:
    def test_create_starts_with_all_seats_available(self) -> None:
        start = datetime(2030, 7, 1, 19, 0, tzinfo=timezone.utc)

        event = EventEntity.create(
            title='  Summer Jazz Night ',
            description='An evening of live jazz',
            start_date_time=start,
            end_date_time=start + timedelta(hours=3),
            venue_id=1,
            category_id=1,
            total_capacity=250,
            price=40,
            created_by=1,
        )

        assert event.title == 'summer jazz night'
        assert event.available_seats == 250
        assert event.status == EventStatus.DRAFT

    def test_create_rejects_terminal_status(self) -> None:
        start = datetime(2030, 7, 1, 19, 0, tzinfo=timezone.utc)

        with pytest.raises(DomainError):
            EventEntity.create(
                title='Jazz',
                description='Jazz',
                start_date_time=start,
                end_date_time=start + timedelta(hours=3),
                venue_id=1,
                category_id=1,
                total_capacity=10,
                price=10,
                created_by=1,
                status=EventStatus.COMPLETED,
            )

    def test_fail_when_end_not_after_start(self, make_event) -> None:
        start = datetime(2030, 7, 1, 19, 0, tzinfo=timezone.utc)

        with pytest.raises(DomainError, match='start time must be before'):
            make_event(start_date_time=start, end_date_time=start)

    def test_naive_datetimes_are_treated_as_utc(self, make_event) -> None:
        event = make_event(
            start_date_time=datetime(2030, 7, 1, 19, 0),
            end_date_time=datetime(2030, 7, 1, 22, 0),
        )

        assert event.start_date_time.tzinfo == timezone.utc

    def test_fail_on_duplicate_ticket_tiers(self, make_event) -> None:
        with pytest.raises(DomainError, match='unique'):
            make_event(ticket_tiers=[{'type': 'VIP'}, {'type': 'VIP', 'price_multiplier': 2}])

    def test_fail_on_unknown_ticket_tier(self, make_event) -> None:
        with pytest.raises(DomainError, match='Invalid ticket type'):
            make_event(ticket_tiers=[{'type': 'Backstage'}])

    def test_resolve_multiplier_from_tiers(self, make_event) -> None:
        event = make_event(
            ticket_tiers=[
                TicketTier(type='General'),
                TicketTier(type='VIP Platinum', price_multiplier=5),
            ]
        )

        assert event.resolve_ticket_multiplier('General') == 1.0
        assert event.resolve_ticket_multiplier('VIP Platinum') == 5.0
        with pytest.raises(DomainError):
            event.resolve_ticket_multiplier('VIP')

    def test_only_general_without_tiers(self, make_event) -> None:
        event = make_event()

        assert event.resolve_ticket_multiplier('General') == 1.0
        with pytest.raises(DomainError):
            event.resolve_ticket_multiplier('VIP')

    def test_apply_changes_ignores_protected_fields(self, make_event) -> None:
        event = make_event(id=3, created_by=1)

        updated = event.apply_changes(
            {
                'price': 75,
                'description': 'Moved indoors',
                'available_seats': 0,
                'created_by': 99,
                'status': EventStatus.CANCELLED,
            }
        )

        assert updated.price == 75.0
        assert updated.description == 'Moved indoors'
        assert updated.available_seats == 100
        assert updated.created_by == 1
        assert updated.status == EventStatus.PUBLISHED

    def test_apply_changes_validates_result(self, make_event) -> None:
        event = make_event()

        with pytest.raises(DomainError):
            event.apply_changes({'end_date_time': event.start_date_time - timedelta(hours=1)})
