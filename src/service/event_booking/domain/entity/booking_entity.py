from datetime import datetime, timedelta, timezone
from enum import StrEnum
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError, ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.event_booking.domain.entity.event_entity import EventEntity, EventSummary
from src.service.event_booking.domain.entity.user_entity import UserSummary
from src.service.event_booking.domain.value_object.booking_reference import (
    generate_booking_reference,
)


class BookingStatus(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'  # event ended, set by the lifecycle sweep


CANCELLATION_WINDOW = timedelta(hours=24)

# Stripped from every update payload
IMMUTABLE_BOOKING_FIELDS = frozenset(
    {'total_amount', 'booking_reference', 'user_id', 'event_id', 'seats_booked'}
)


@attrs.define
class Booking:
    user_id: int
    event_id: int
    ticket_type: str
    seats_booked: int
    total_amount: float
    cancellation_deadline: datetime
    cancellation_allowed: bool = True
    booking_reference: str = attrs.field(factory=generate_booking_reference)
    status: BookingStatus = attrs.field(default=BookingStatus.CONFIRMED, converter=BookingStatus)
    booking_date: Optional[datetime] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    event: Optional[EventSummary] = None
    user: Optional[UserSummary] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        event: EventEntity,
        ticket_type: str,
        seats_booked: int,
        now: Optional[datetime] = None,
    ) -> 'Booking':
        """
        Build a confirmed booking against `event`.

        Pricing and the cancellation deadline are fixed here and never
        recomputed afterwards.
        """
        if seats_booked < 1:
            raise DomainError('At least one seat must be booked')

        now = now or datetime.now(timezone.utc)
        multiplier = event.resolve_ticket_multiplier(ticket_type)
        deadline = cls.compute_cancellation_deadline(event.start_date_time)

        return cls(
            user_id=user_id,
            event_id=event.id,  # type: ignore[arg-type]
            ticket_type=ticket_type,
            seats_booked=seats_booked,
            total_amount=round(event.price * multiplier * seats_booked, 2),
            cancellation_deadline=deadline,
            cancellation_allowed=now < deadline,
            status=BookingStatus.CONFIRMED,
            booking_date=now,
        )

    @staticmethod
    def compute_cancellation_deadline(event_start: datetime) -> datetime:
        return event_start - CANCELLATION_WINDOW

    def validate_owner(self, user_id: int) -> None:
        if self.user_id != user_id:
            raise ForbiddenError('Not authorized to modify this booking')

    def ensure_cancellable(self, now: datetime) -> None:
        if self.status == BookingStatus.COMPLETED:
            raise DomainError('Completed bookings cannot be cancelled')
        if not self.cancellation_allowed:
            raise DomainError('Cancellation is not allowed for this booking')
        if now >= self.cancellation_deadline:
            raise DomainError('Cancellation deadline has passed')

    @property
    def holds_seats(self) -> bool:
        return self.status != BookingStatus.CANCELLED
