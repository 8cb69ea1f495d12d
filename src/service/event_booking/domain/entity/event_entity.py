from datetime import datetime, timezone
from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.domain.entity.category_entity import CategorySummary
from src.service.event_booking.domain.entity.user_entity import UserSummary
from src.service.event_booking.domain.entity.venue_entity import VenueSummary
from src.service.event_booking.domain.enum.event_status import EventStatus
from src.service.event_booking.domain.enum.event_type import EventType
from src.service.event_booking.domain.enum.ticket_type import TicketType

# Offered when an event defines no tiers of its own
DEFAULT_TICKET_TIER_MULTIPLIER = 1.0

# Fields an update may never touch
IMMUTABLE_EVENT_FIELDS = frozenset(
    {
        'id',
        'created_by',
        'available_seats',
        'created_at',
        'updated_at',
        'status',
        'venue',
        'category',
        'creator',
    }
)


def _to_ticket_type(value: Any) -> TicketType:
    try:
        return TicketType(value)
    except ValueError:
        valid = ', '.join(t.value for t in TicketType)
        raise DomainError(f'Invalid ticket type: {value}. Must be one of: {valid}')


def _validate_multiplier(instance: Any, attribute: Any, value: float) -> None:
    if value < 0:
        raise DomainError('Price multiplier must not be negative')


@attrs.define(frozen=True)
class TicketTier:
    type: TicketType = attrs.field(converter=_to_ticket_type)
    price_multiplier: float = attrs.field(
        default=DEFAULT_TICKET_TIER_MULTIPLIER, converter=float, validator=_validate_multiplier
    )
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'TicketTier':
        return cls(
            type=data['type'],
            price_multiplier=data.get('price_multiplier', DEFAULT_TICKET_TIER_MULTIPLIER),
            description=data.get('description'),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'type': self.type.value,
            'price_multiplier': self.price_multiplier,
            'description': self.description,
        }


def _to_tiers(value: Any) -> list[TicketTier]:
    tiers = [t if isinstance(t, TicketTier) else TicketTier.from_dict(t) for t in value or []]
    names = [t.type for t in tiers]
    if len(names) != len(set(names)):
        raise DomainError('Ticket tier types must be unique within an event')
    return tiers


def _normalize_title(value: str) -> str:
    return (value or '').strip().lower()


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@attrs.define
class EventEntity:
    title: str = attrs.field(converter=_normalize_title)
    description: str
    start_date_time: datetime = attrs.field(converter=_to_utc)
    end_date_time: datetime = attrs.field(converter=_to_utc)
    venue_id: int
    category_id: int
    total_capacity: int
    price: float = attrs.field(converter=float)
    created_by: Optional[int] = None
    available_seats: Optional[int] = None
    event_type: EventType = attrs.field(default=EventType.IN_PERSON, converter=EventType)
    status: EventStatus = attrs.field(default=EventStatus.DRAFT, converter=EventStatus)
    is_featured: bool = False
    images: list[str] = attrs.field(factory=list)
    ticket_tiers: list[TicketTier] = attrs.field(factory=list, converter=_to_tiers)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # Related records, filled in on reads only
    venue: Optional[VenueSummary] = None
    category: Optional[CategorySummary] = None
    creator: Optional[UserSummary] = None

    def __attrs_post_init__(self) -> None:
        if self.available_seats is None:
            self.available_seats = self.total_capacity
        self.validate()

    def validate(self) -> None:
        if not self.title:
            raise DomainError('Event title is required')
        if self.start_date_time >= self.end_date_time:
            raise DomainError('Event start time must be before its end time')
        if self.total_capacity < 0:
            raise DomainError('Total capacity must not be negative')
        if self.price < 0:
            raise DomainError('Price must not be negative')
        if not 0 <= (self.available_seats or 0) <= self.total_capacity:
            raise DomainError('Available seats must be between 0 and total capacity')

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        title: str,
        description: str,
        start_date_time: datetime,
        end_date_time: datetime,
        venue_id: int,
        category_id: int,
        total_capacity: int,
        price: float,
        created_by: int,
        event_type: EventType = EventType.IN_PERSON,
        status: EventStatus = EventStatus.DRAFT,
        is_featured: bool = False,
        images: Optional[list[str]] = None,
        ticket_tiers: Optional[list[Any]] = None,
    ) -> 'EventEntity':
        if status not in (EventStatus.DRAFT, EventStatus.PUBLISHED):
            raise DomainError('A new event must be draft or published')

        return cls(
            title=title,
            description=description,
            start_date_time=start_date_time,
            end_date_time=end_date_time,
            venue_id=venue_id,
            category_id=category_id,
            total_capacity=total_capacity,
            available_seats=total_capacity,
            price=price,
            created_by=created_by,
            event_type=event_type,
            status=status,
            is_featured=is_featured,
            images=images or [],
            ticket_tiers=ticket_tiers or [],
        )

    def apply_changes(self, changes: dict[str, Any]) -> 'EventEntity':
        """
        Return a copy with the mutable fields in `changes` applied.

        created_by, status and the seat counters are dropped silently; capacity
        changes go through the inventory store so that the seat counter shifts
        atomically.
        """
        allowed = {a.name for a in attrs.fields(EventEntity)} - IMMUTABLE_EVENT_FIELDS
        return attrs.evolve(self, **{k: v for k, v in changes.items() if k in allowed})

    def resolve_ticket_multiplier(self, ticket_type: str) -> float:
        if not self.ticket_tiers:
            if ticket_type == TicketType.GENERAL:
                return DEFAULT_TICKET_TIER_MULTIPLIER
        else:
            for tier in self.ticket_tiers:
                if tier.type == ticket_type:
                    return tier.price_multiplier
        raise DomainError(f"Ticket type '{ticket_type}' is not available for this event")

    @property
    def is_bookable(self) -> bool:
        return self.status == EventStatus.PUBLISHED

    def has_ended(self, now: datetime) -> bool:
        return self.end_date_time < now

    def summary(self) -> 'EventSummary':
        return EventSummary(
            id=self.id,  # type: ignore[arg-type]
            title=self.title,
            start_date_time=self.start_date_time,
            end_date_time=self.end_date_time,
            venue_id=self.venue_id,
            description=self.description,
            images=list(self.images),
            venue=self.venue,
        )


@attrs.define(frozen=True)
class EventSummary:
    """Slice of an event shown alongside a booking."""

    id: int
    title: str
    start_date_time: datetime
    end_date_time: datetime
    venue_id: int
    description: str = ''
    images: list[str] = attrs.field(factory=list)
    venue: Optional[VenueSummary] = None
