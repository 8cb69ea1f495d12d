"""
In-memory repositories for unit tests

Every method yields to the event loop once before doing its check-and-set, so
`asyncio.gather` interleaves concurrent use cases the way separate requests
would, while each individual operation stays atomic like its SQL counterpart.
"""

import asyncio
from datetime import date, datetime, timezone
from typing import List, Optional

import attrs

from src.service.event_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.event_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.event_booking.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.domain.enum.event_status import EventStatus
from src.service.event_booking.domain.enum.ticket_type import TicketType


class InMemoryEventRepo(IEventCommandRepo, IEventQueryRepo):
    def __init__(self) -> None:
        self.events: dict[int, EventEntity] = {}
        self._next_id = 1

    async def create(self, event: EventEntity) -> EventEntity:
        await asyncio.sleep(0)
        stored = attrs.evolve(event, id=self._next_id, created_at=datetime.now(timezone.utc))
        self.events[self._next_id] = stored
        self._next_id += 1
        return attrs.evolve(stored)

    async def update(self, event: EventEntity) -> Optional[EventEntity]:
        await asyncio.sleep(0)
        current = self.events.get(event.id)  # type: ignore[arg-type]
        if current is None:
            return None
        self.events[current.id] = attrs.evolve(  # type: ignore[index]
            event, status=current.status, available_seats=current.available_seats
        )
        return attrs.evolve(self.events[current.id])  # type: ignore[index]

    async def update_status(self, event_id: int, status: EventStatus) -> Optional[EventEntity]:
        await asyncio.sleep(0)
        if event_id not in self.events:
            return None
        self.events[event_id].status = status
        return attrs.evolve(self.events[event_id])

    async def delete(self, event_id: int) -> bool:
        await asyncio.sleep(0)
        return self.events.pop(event_id, None) is not None

    async def reserve_seats(self, event_id: int, seats: int) -> Optional[int]:
        await asyncio.sleep(0)
        event = self.events.get(event_id)
        if event is None or (event.available_seats or 0) < seats:
            return None
        event.available_seats = (event.available_seats or 0) - seats
        return event.available_seats

    async def release_seats(self, event_id: int, seats: int) -> Optional[int]:
        await asyncio.sleep(0)
        event = self.events.get(event_id)
        if event is None:
            return None
        event.available_seats = min((event.available_seats or 0) + seats, event.total_capacity)
        return event.available_seats

    async def resize_capacity(self, event_id: int, total_capacity: int) -> Optional[EventEntity]:
        await asyncio.sleep(0)
        event = self.events.get(event_id)
        if event is None:
            return None
        available = (event.available_seats or 0) + total_capacity - event.total_capacity
        if available < 0:
            return None
        event.total_capacity = total_capacity
        event.available_seats = available
        return attrs.evolve(event)

    async def complete_ended_events(self, now: datetime) -> List[int]:
        await asyncio.sleep(0)
        completed = []
        for event in self.events.values():
            if event.status == EventStatus.PUBLISHED and event.end_date_time < now:
                event.status = EventStatus.COMPLETED
                completed.append(event.id)
        return completed  # type: ignore[return-value]

    async def get_by_id(self, event_id: int) -> Optional[EventEntity]:
        await asyncio.sleep(0)
        event = self.events.get(event_id)
        return attrs.evolve(event) if event else None

    async def list_events(
        self,
        *,
        venue_id: Optional[int] = None,
        category_id: Optional[int] = None,
        is_featured: Optional[bool] = None,
        ticket_type: Optional[str] = None,
        status: Optional[EventStatus] = None,
    ) -> List[EventEntity]:
        await asyncio.sleep(0)
        return [
            attrs.evolve(e)
            for e in self.events.values()
            if (venue_id is None or e.venue_id == venue_id)
            and (category_id is None or e.category_id == category_id)
            and (is_featured is None or e.is_featured == is_featured)
            and (status is None or e.status == status)
            and (ticket_type is None or self._offers(e, ticket_type))
        ]

    async def list_by_venue(
        self, venue_id: int, on_date: Optional[date] = None
    ) -> List[EventEntity]:
        await asyncio.sleep(0)
        return [
            attrs.evolve(e)
            for e in self.events.values()
            if e.venue_id == venue_id
            and (on_date is None or e.start_date_time.date() == on_date)
        ]

    @staticmethod
    def _offers(event: EventEntity, ticket_type: str) -> bool:
        if not event.ticket_tiers:
            return ticket_type == TicketType.GENERAL
        return any(t.type == ticket_type for t in event.ticket_tiers)


class InMemoryBookingRepo(IBookingCommandRepo, IBookingQueryRepo):
    def __init__(self, event_repo: InMemoryEventRepo) -> None:
        self.event_repo = event_repo
        self.bookings: dict[int, Booking] = {}
        self._next_id = 1

    async def create(self, booking: Booking) -> Booking:
        await asyncio.sleep(0)
        if any(b.booking_reference == booking.booking_reference for b in self.bookings.values()):
            raise ValueError(f'Duplicate booking reference {booking.booking_reference}')
        event = self.event_repo.events.get(booking.event_id)
        stored = attrs.evolve(
            booking,
            id=self._next_id,
            created_at=datetime.now(timezone.utc),
            event=event.summary() if event else None,
        )
        self.bookings[self._next_id] = stored
        self._next_id += 1
        return attrs.evolve(stored)

    async def transition_status(
        self,
        *,
        booking_id: int,
        to_status: BookingStatus,
        from_status: Optional[BookingStatus] = None,
    ) -> Optional[Booking]:
        await asyncio.sleep(0)
        booking = self.bookings.get(booking_id)
        if booking is None or (from_status is not None and booking.status != from_status):
            return None
        booking.status = to_status
        return attrs.evolve(booking)

    async def delete(self, booking_id: int) -> Optional[Booking]:
        await asyncio.sleep(0)
        return self.bookings.pop(booking_id, None)

    async def complete_bookings_for_ended_events(self, now: datetime) -> int:
        await asyncio.sleep(0)
        ended = {
            e.id
            for e in self.event_repo.events.values()
            if e.status == EventStatus.COMPLETED and e.end_date_time < now
        }
        count = 0
        for booking in self.bookings.values():
            if booking.status == BookingStatus.CONFIRMED and booking.event_id in ended:
                booking.status = BookingStatus.COMPLETED
                count += 1
        return count

    async def get_by_id(self, booking_id: int) -> Optional[Booking]:
        await asyncio.sleep(0)
        booking = self.bookings.get(booking_id)
        return attrs.evolve(booking) if booking else None

    async def get_by_reference(self, booking_reference: str) -> Optional[Booking]:
        await asyncio.sleep(0)
        for booking in self.bookings.values():
            if booking.booking_reference == booking_reference:
                return attrs.evolve(booking)
        return None

    async def list_bookings(
        self, *, status: Optional[BookingStatus] = None, on_date: Optional[date] = None
    ) -> List[Booking]:
        await asyncio.sleep(0)
        return [
            attrs.evolve(b)
            for b in self.bookings.values()
            if (status is None or b.status == status)
            and (on_date is None or (b.booking_date and b.booking_date.date() == on_date))
        ]

    async def list_by_user(self, user_id: int) -> List[Booking]:
        await asyncio.sleep(0)
        return [attrs.evolve(b) for b in self.bookings.values() if b.user_id == user_id]

    async def list_by_event(self, event_id: int) -> List[Booking]:
        await asyncio.sleep(0)
        return [attrs.evolve(b) for b in self.bookings.values() if b.event_id == event_id]
